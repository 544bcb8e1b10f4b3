from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from django.db import transaction
from django.utils.html import escape
from django.utils.text import slugify

from apps.catalog.access import ENABLE_SHOPPING_CART, ENABLE_WISHLIST
from apps.catalog.models import AttributeValueType
from apps.catalog.pricing import round_price
from apps.common import get_logger
from apps.common.dates import DateTimeHelper, ensure_aware_utc
from apps.common.i18n import LocalizationService
from .commands import AddToCartCommand, UpdateCartItemCommand
from .conf import ShoppingCartSettings
from .dtos import RecurringCycleInfo, ShoppingCartDTO
from .exceptions import ProductNotFoundError
from .models import ShoppingCartItem, ShoppingCartType
from .protocols import (
    CheckoutAttributeRepositoryProtocol,
    CustomerServiceProtocol,
    DateRangeServiceProtocol,
    EventPublisherProtocol,
    ProductAttributeServiceProtocol,
    ProductServiceProtocol,
    ShoppingCartItemRepositoryProtocol,
    ShoppingCartMapperProtocol,
)
from .validators import CheckoutAttributeValidator, ItemRuleValidator, get_recurring_cycle_info

logger = get_logger(__name__).bind(component="carts", layer="service")

DateLike = Optional[Union[date, datetime]]

# Required products are always demanded one per unit of the requiring product
REQUIRED_PRODUCT_QUANTITY = 1


def _item_product(item: Any) -> Any:
    # Django raises RelatedObjectDoesNotExist (an AttributeError) for dangling FKs
    return getattr(item, "product", None)


class ShoppingCartService:
    def __init__(
        self,
        *,
        items: ShoppingCartItemRepositoryProtocol,
        customer_service: CustomerServiceProtocol,
        product_service: ProductServiceProtocol,
        attribute_service: ProductAttributeServiceProtocol,
        attribute_parser,
        checkout_parser,
        checkout_attributes: CheckoutAttributeRepositoryProtocol,
        date_ranges: DateRangeServiceProtocol,
        acl,
        store_mapping,
        permissions,
        currency,
        price_formatter,
        events: EventPublisherProtocol,
        cart_mapper: ShoppingCartMapperProtocol,
        cart_settings: ShoppingCartSettings,
        work_context,
        localization: Optional[LocalizationService] = None,
        dates: Optional[DateTimeHelper] = None,
    ):
        self.items = items
        self.customer_service = customer_service
        self.product_service = product_service
        self.attribute_service = attribute_service
        self.attribute_parser = attribute_parser
        self.checkout_parser = checkout_parser
        self.checkout_attributes = checkout_attributes
        self.permissions = permissions
        self.events = events
        self.cart_mapper = cart_mapper
        self.cart_settings = cart_settings
        self.work_context = work_context
        self.localization = localization or LocalizationService(
            language=getattr(work_context, "language", None)
        )
        self.dates = dates or DateTimeHelper(cart_settings.store_time_zone)
        self.rules = ItemRuleValidator(
            localization=self.localization,
            product_service=product_service,
            attribute_service=attribute_service,
            attribute_parser=attribute_parser,
            acl=acl,
            store_mapping=store_mapping,
            date_ranges=date_ranges,
            currency=currency,
            price_formatter=price_formatter,
            dates=self.dates,
            cart_settings=cart_settings,
            work_context=work_context,
        )
        self.checkout_rules = CheckoutAttributeValidator(
            localization=self.localization,
            checkout_parser=checkout_parser,
            checkout_attributes=checkout_attributes,
        )
        self.logger = logger.bind(service="ShoppingCartService")

    def _to_utc(self, value: DateLike) -> Optional[datetime]:
        return self.dates.to_utc(value) if value is not None else None

    def _customer_cart(
        self, customer: Any, cart_type: Optional[int] = None, store_id: Optional[int] = None
    ) -> List[ShoppingCartItem]:
        return list(self.items.list_for_customer(customer.id, cart_type, store_id))

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------
    def delete_item(
        self,
        item: ShoppingCartItem,
        reset_checkout_data: bool = True,
        ensure_only_active_checkout_attributes: bool = False,
    ) -> None:
        if item is None:
            raise ValueError("item is required")

        customer = item.customer
        store_id = item.store_id
        self.logger.info(
            "Deleting cart item",
            item_id=item.id,
            customer_id=customer.id,
            product_id=item.product_id,
        )
        with transaction.atomic():
            if reset_checkout_data:
                self.customer_service.reset_checkout_data(customer, store_id)

            item_id = item.id
            self.items.delete(item)
            # Model.delete() clears the pk; subscribers need the removed row id
            item.id = item_id

            customer.has_shopping_cart_items = self.items.exists_for_customer(customer.id)
            self.customer_service.update_customer(
                customer, fields=["has_shopping_cart_items"]
            )

            # Wishlist removals never touch checkout attributes
            if (
                ensure_only_active_checkout_attributes
                and item.cart_type == ShoppingCartType.SHOPPING_CART
            ):
                cart = self._customer_cart(customer, ShoppingCartType.SHOPPING_CART, store_id)
                raw = self.customer_service.get_checkout_attributes(customer, store_id)
                raw = self.checkout_parser.ensure_only_active_attributes(
                    raw, self.requires_shipping(cart)
                )
                self.customer_service.save_checkout_attributes(customer, store_id, raw)

        self.events.entity_deleted(item)

        if not self.cart_settings.remove_required_products:
            return
        product = self.product_service.get_product_by_id(item.product_id)
        if product is None or not product.require_other_products:
            return

        required_ids = self.product_service.parse_required_product_ids(product)
        for cart_item in self._customer_cart(customer, item.cart_type):
            if cart_item.product_id not in required_ids:
                continue
            self.update_item(
                customer,
                cart_item.id,
                cart_item.attributes,
                cart_item.customer_entered_price,
                rental_start=cart_item.rental_start_date_utc,
                rental_end=cart_item.rental_end_date_utc,
                quantity=cart_item.quantity - item.quantity * REQUIRED_PRODUCT_QUANTITY,
                reset_checkout_data=False,
            )

    def delete_item_by_id(
        self,
        item_id: int,
        reset_checkout_data: bool = True,
        ensure_only_active_checkout_attributes: bool = False,
    ) -> None:
        item = self.items.get(id=item_id)
        if item is None:
            self.logger.debug("Cart item already gone", item_id=item_id)
            return
        self.delete_item(item, reset_checkout_data, ensure_only_active_checkout_attributes)

    def delete_expired_items(self, older_than: datetime) -> int:
        cutoff = ensure_aware_utc(older_than)
        expired = self.items.list_updated_before(cutoff)
        with transaction.atomic():
            for item in expired:
                self.items.delete(item)
        self.logger.info("Expired cart items deleted", cutoff=cutoff.isoformat(), count=len(expired))
        return len(expired)

    # ------------------------------------------------------------------
    # Item rules
    # ------------------------------------------------------------------
    def get_required_product_warnings(
        self,
        customer: Any,
        cart_type: int,
        product: Any,
        store_id: int,
        quantity: int,
        add_required_products: bool,
        item_id: int = 0,
    ) -> List[str]:
        if customer is None:
            raise ValueError("customer is required")
        if product is None:
            raise ValueError("product is required")

        warnings: List[str] = []
        cart = self._customer_cart(customer, cart_type, store_id)

        def demanded(target_id: int, exclude_item_id: Optional[int] = None) -> int:
            total = 0
            for cart_item in cart:
                if exclude_item_id is not None and cart_item.id == exclude_item_id:
                    continue
                requiring = _item_product(cart_item)
                if requiring is None or not requiring.require_other_products:
                    continue
                if target_id in self.product_service.parse_required_product_ids(requiring):
                    total += cart_item.quantity * REQUIRED_PRODUCT_QUANTITY
            return total

        required_by_others = demanded(product.id)
        if required_by_others > quantity:
            warnings.append(
                self.localization.format(
                    "ShoppingCart.RequiredProductUpdateWarning", required_by_others
                )
            )

        if not product.require_other_products:
            return warnings

        required_products = self.product_service.get_products_by_ids(
            self.product_service.parse_required_product_ids(product)
        )
        for required in required_products:
            required_quantity = quantity * REQUIRED_PRODUCT_QUANTITY + demanded(
                required.id, exclude_item_id=item_id
            )
            in_cart = next(
                (i.quantity for i in cart if i.product_id == required.id), 0
            )
            quantity_to_add = required_quantity - in_cart
            if quantity_to_add <= 0:
                continue

            warning = self.localization.format(
                "ShoppingCart.RequiredProductWarning",
                self._required_product_label(required),
                required_quantity,
            )
            if add_required_products and product.automatically_add_required_products:
                # Nested adds never pull in further required products
                add_warnings = self.add_to_cart(
                    customer,
                    required,
                    cart_type,
                    store_id,
                    quantity=quantity_to_add,
                    add_required_products=False,
                )
                if add_warnings:
                    warnings.append(warning)
            else:
                warnings.append(warning)
        return warnings

    def _required_product_label(self, product: Any) -> str:
        name = escape(self.localization.get_localized(product, "name"))
        if not self.cart_settings.use_links_in_required_product_warnings:
            return name
        url = self.cart_settings.product_url_template.format(
            slug=slugify(product.name), id=product.id
        )
        return f'<a href="{escape(url)}">{name}</a>'

    def get_standard_warnings(
        self,
        customer: Any,
        cart_type: int,
        product: Any,
        attributes: str,
        customer_entered_price: Decimal,
        quantity: int,
    ) -> List[str]:
        return self.rules.standard_warnings(
            customer, cart_type, product, attributes, customer_entered_price, quantity
        )

    def get_attribute_warnings(
        self,
        customer: Any,
        cart_type: int,
        product: Any,
        quantity: int = 1,
        attributes: str = "",
        ignore_non_combinable: bool = False,
        ignore_condition_met: bool = False,
    ) -> List[str]:
        warnings = self.rules.attribute_warnings(
            product, attributes, ignore_non_combinable, ignore_condition_met
        )
        if warnings:
            return warnings

        for value in self.attribute_parser.parse_product_attribute_values(attributes):
            if value.attribute_value_type != AttributeValueType.ASSOCIATED_TO_PRODUCT:
                continue
            mapping = self.attribute_service.get_mapping_by_id(
                value.product_attribute_mapping_id
            )
            if ignore_non_combinable and mapping is not None and mapping.is_non_combinable():
                continue

            associated = self.product_service.get_product_by_id(value.associated_product_id)
            if associated is None:
                warnings.append(
                    self.localization.format(
                        "ShoppingCart.AssociatedProductMissing", value.associated_product_id
                    )
                )
                continue

            nested = self.get_item_warnings(
                customer,
                cart_type,
                associated,
                self.work_context.current_store_id,
                "",
                Decimal("0"),
                quantity=quantity * value.quantity,
                add_required_products=False,
            )
            attribute_name = self.localization.get_localized(
                getattr(mapping, "product_attribute", None), "name"
            )
            value_name = self.localization.get_localized(value, "name")
            for warning in nested:
                warnings.append(
                    self.localization.format(
                        "ShoppingCart.AssociatedAttributeWarning",
                        attribute_name,
                        value_name,
                        warning,
                    )
                )
        return warnings

    def get_gift_card_warnings(self, cart_type: int, product: Any, attributes: str) -> List[str]:
        return self.rules.gift_card_warnings(cart_type, product, attributes)

    def get_rental_warnings(
        self, product: Any, rental_start: DateLike = None, rental_end: DateLike = None
    ) -> List[str]:
        return self.rules.rental_warnings(
            product, self._to_utc(rental_start), self._to_utc(rental_end)
        )

    def get_item_warnings(
        self,
        customer: Any,
        cart_type: int,
        product: Any,
        store_id: int,
        attributes: str,
        customer_entered_price: Decimal,
        rental_start: DateLike = None,
        rental_end: DateLike = None,
        quantity: int = 1,
        add_required_products: bool = True,
        item_id: int = 0,
        get_standard_warnings: bool = True,
        get_attributes_warnings: bool = True,
        get_gift_card_warnings: bool = True,
        get_required_product_warnings: bool = True,
        get_rental_warnings: bool = True,
    ) -> List[str]:
        if product is None:
            raise ValueError("product is required")

        warnings: List[str] = []
        if get_standard_warnings:
            warnings.extend(
                self.get_standard_warnings(
                    customer, cart_type, product, attributes, customer_entered_price, quantity
                )
            )
        if get_attributes_warnings:
            warnings.extend(
                self.get_attribute_warnings(customer, cart_type, product, quantity, attributes)
            )
        if get_gift_card_warnings:
            warnings.extend(self.get_gift_card_warnings(cart_type, product, attributes))
        if get_required_product_warnings:
            warnings.extend(
                self.get_required_product_warnings(
                    customer,
                    cart_type,
                    product,
                    store_id,
                    quantity,
                    add_required_products,
                    item_id,
                )
            )
        if get_rental_warnings:
            warnings.extend(self.get_rental_warnings(product, rental_start, rental_end))
        return warnings

    # ------------------------------------------------------------------
    # Cart rules
    # ------------------------------------------------------------------
    def get_cart_warnings(
        self,
        cart: List[ShoppingCartItem],
        checkout_attributes: str,
        validate_checkout_attributes: bool,
    ) -> List[str]:
        warnings: List[str] = []
        has_standard = has_recurring = False

        for item in cart:
            product = _item_product(item)
            if product is None:
                warnings.append(
                    self.localization.format("ShoppingCart.CannotLoadProduct", item.product_id)
                )
                return warnings
            if product.is_recurring:
                has_recurring = True
            else:
                has_standard = True

        if has_standard and has_recurring:
            warnings.append(
                self.localization.get_resource("ShoppingCart.CannotMixStandardAndAutoshipProducts")
            )

        if has_recurring:
            info = self.get_recurring_cycle_info(cart)
            if info.error:
                warnings.append(info.error)
                return warnings

        if validate_checkout_attributes:
            warnings.extend(
                self.checkout_rules.warnings(
                    checkout_attributes,
                    self.work_context.current_store_id,
                    self.requires_shipping(cart),
                )
            )
        return warnings

    def find_item_in_cart(
        self,
        cart: List[ShoppingCartItem],
        cart_type: int,
        product: Any,
        attributes: str = "",
        customer_entered_price: Decimal = Decimal("0"),
        rental_start: DateLike = None,
        rental_end: DateLike = None,
    ) -> Optional[ShoppingCartItem]:
        if cart is None:
            raise ValueError("cart is required")
        if product is None:
            raise ValueError("product is required")

        start_utc = self._to_utc(rental_start)
        end_utc = self._to_utc(rental_end)
        for item in cart:
            if item.cart_type != cart_type or item.product_id != product.id:
                continue
            item_product = _item_product(item) or product

            if not self.attribute_parser.are_attributes_equal(item.attributes, attributes):
                continue

            if item_product.is_gift_card:
                wanted = self.attribute_parser.get_gift_card(attributes)
                existing = self.attribute_parser.get_gift_card(item.attributes)
                if (
                    wanted.recipient_name.lower() != existing.recipient_name.lower()
                    or wanted.sender_name.lower() != existing.sender_name.lower()
                ):
                    continue

            if item_product.customer_enters_price and round_price(
                item.customer_entered_price or 0
            ) != round_price(customer_entered_price or 0):
                continue

            if item_product.is_rental and (
                ensure_aware_utc(item.rental_start_date_utc) != start_utc
                or ensure_aware_utc(item.rental_end_date_utc) != end_utc
            ):
                continue

            return item
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_to_cart(
        self,
        customer: Any,
        product: Any,
        cart_type: int,
        store_id: int,
        attributes: Optional[str] = None,
        customer_entered_price: Decimal = Decimal("0"),
        rental_start: DateLike = None,
        rental_end: DateLike = None,
        quantity: int = 1,
        add_required_products: bool = True,
    ) -> List[str]:
        if customer is None:
            raise ValueError("customer is required")
        if product is None:
            raise ValueError("product is required")

        res = self.localization
        log_ctx: Dict[str, Any] = {
            "customer_id": customer.id,
            "product_id": product.id,
            "cart_type": int(cart_type),
            "store_id": store_id,
            "quantity": quantity,
        }
        self.logger.debug("Adding to cart", **log_ctx)

        if cart_type == ShoppingCartType.SHOPPING_CART and not self.permissions.authorize(
            ENABLE_SHOPPING_CART, customer
        ):
            return [res.get_resource("ShoppingCart.CartDisabled")]
        if cart_type == ShoppingCartType.WISHLIST and not self.permissions.authorize(
            ENABLE_WISHLIST, customer
        ):
            return [res.get_resource("ShoppingCart.WishlistDisabledForCustomer")]
        if getattr(customer, "is_search_engine_account", False):
            return [res.get_resource("ShoppingCart.SearchEngineCannotAdd")]
        if quantity <= 0:
            return [res.get_resource("ShoppingCart.QuantityShouldPositive")]

        attributes = attributes or ""
        customer_entered_price = Decimal(str(customer_entered_price or 0))
        rental_start = self._to_utc(rental_start)
        rental_end = self._to_utc(rental_end)

        self.customer_service.reset_checkout_data(customer, store_id)

        cart = self._customer_cart(customer, cart_type, store_id)
        existing = self.find_item_in_cart(
            cart,
            cart_type,
            product,
            attributes,
            customer_entered_price,
            rental_start,
            rental_end,
        )

        if existing is not None:
            new_quantity = existing.quantity + quantity
            warnings = self.get_item_warnings(
                customer,
                cart_type,
                product,
                store_id,
                attributes,
                customer_entered_price,
                rental_start,
                rental_end,
                new_quantity,
                add_required_products,
                existing.id,
            )
            if warnings:
                self.logger.rejected("Add to cart rejected", warnings, **log_ctx)
                return warnings
            existing.attributes = attributes
            existing.quantity = new_quantity
            existing.updated_on_utc = self.dates.utcnow()
            self.items.save(existing, update_fields=["attributes", "quantity", "updated_on_utc"])
            self.logger.info("Cart item quantity increased", item_id=existing.id, **log_ctx)
            self.events.entity_updated(existing)
            return []

        warnings = self.get_item_warnings(
            customer,
            cart_type,
            product,
            store_id,
            attributes,
            customer_entered_price,
            rental_start,
            rental_end,
            quantity,
            add_required_products,
        )
        if warnings:
            self.logger.rejected("Add to cart rejected", warnings, **log_ctx)
            return warnings

        if cart_type == ShoppingCartType.SHOPPING_CART:
            limit = self.cart_settings.maximum_shopping_cart_items
            limit_key = "ShoppingCart.MaximumShoppingCartItems"
        else:
            limit = self.cart_settings.maximum_wishlist_items
            limit_key = "ShoppingCart.MaximumWishlistItems"
        if len(cart) >= limit:
            warnings = [res.format(limit_key, limit)]
            self.logger.rejected("Add to cart rejected", warnings, **log_ctx)
            return warnings

        now = self.dates.utcnow()
        with transaction.atomic():
            item = self.items.create(
                customer=customer,
                product=product,
                store_id=store_id,
                cart_type=cart_type,
                attributes=attributes,
                customer_entered_price=customer_entered_price,
                quantity=quantity,
                rental_start_date_utc=rental_start,
                rental_end_date_utc=rental_end,
                created_on_utc=now,
                updated_on_utc=now,
            )
            customer.has_shopping_cart_items = True
            self.customer_service.update_customer(customer, fields=["has_shopping_cart_items"])
        self.logger.info("Cart item added", item_id=item.id, **log_ctx)
        self.events.entity_inserted(item)
        return []

    def update_item(
        self,
        customer: Any,
        item_id: int,
        attributes: str,
        customer_entered_price: Decimal,
        rental_start: DateLike = None,
        rental_end: DateLike = None,
        quantity: int = 1,
        reset_checkout_data: bool = True,
    ) -> List[str]:
        if customer is None:
            raise ValueError("customer is required")

        item = self.items.get(id=item_id, customer_id=customer.id)
        if item is None:
            self.logger.debug("Cart item not found for update", item_id=item_id, customer_id=customer.id)
            return []

        if reset_checkout_data:
            self.customer_service.reset_checkout_data(customer, item.store_id)

        log_ctx = {"customer_id": customer.id, "item_id": item.id, "quantity": quantity}
        if quantity > 0:
            attributes = attributes or ""
            customer_entered_price = Decimal(str(customer_entered_price or 0))
            rental_start = self._to_utc(rental_start)
            rental_end = self._to_utc(rental_end)
            warnings = self.get_item_warnings(
                customer,
                item.cart_type,
                item.product,
                item.store_id,
                attributes,
                customer_entered_price,
                rental_start,
                rental_end,
                quantity,
                False,
                item.id,
            )
            if warnings:
                self.logger.rejected("Cart item update rejected", warnings, **log_ctx)
                return warnings

            item.quantity = quantity
            item.attributes = attributes
            item.customer_entered_price = customer_entered_price
            item.rental_start_date_utc = rental_start
            item.rental_end_date_utc = rental_end
            item.updated_on_utc = self.dates.utcnow()
            self.items.save(item)
            self.logger.info("Cart item updated", **log_ctx)
            self.events.entity_updated(item)
            return []

        warnings = self.get_required_product_warnings(
            customer, item.cart_type, item.product, item.store_id, quantity, False, item.id
        )
        if warnings:
            self.logger.rejected("Cart item removal rejected", warnings, **log_ctx)
            return warnings
        self.delete_item(item, reset_checkout_data, ensure_only_active_checkout_attributes=True)
        return []

    def migrate_cart(self, from_customer: Any, to_customer: Any, include_coupon_codes: bool) -> None:
        """Move every item (all cart types and stores) from one customer to another, e.g. guest to registered."""
        if from_customer is None:
            raise ValueError("from_customer is required")
        if to_customer is None:
            raise ValueError("to_customer is required")
        if from_customer.id == to_customer.id:
            return

        from_cart = self._customer_cart(from_customer)
        self.logger.info(
            "Migrating cart",
            from_customer_id=from_customer.id,
            to_customer_id=to_customer.id,
            items=len(from_cart),
        )
        with transaction.atomic():
            for item in from_cart:
                warnings = self.add_to_cart(
                    to_customer,
                    item.product,
                    item.cart_type,
                    item.store_id,
                    item.attributes,
                    item.customer_entered_price,
                    item.rental_start_date_utc,
                    item.rental_end_date_utc,
                    item.quantity,
                    False,
                )
                if warnings:
                    self.logger.rejected(
                        "Migrated item not accepted", warnings, item_id=item.id
                    )
            # Snapshot items may already be gone with the item that required them
            for item in from_cart:
                self.delete_item_by_id(item.id)

            if include_coupon_codes:
                for code in self.customer_service.parse_applied_discount_coupon_codes(from_customer):
                    self.customer_service.apply_discount_coupon_code(to_customer, code)
                for code in self.customer_service.parse_applied_gift_card_coupon_codes(from_customer):
                    self.customer_service.apply_gift_card_coupon_code(to_customer, code)
                self.customer_service.update_customer(
                    to_customer, fields=["discount_coupon_codes", "gift_card_coupon_codes"]
                )

            store_id = self.work_context.current_store_id
            self.customer_service.save_checkout_attributes(
                to_customer,
                store_id,
                self.customer_service.get_checkout_attributes(from_customer, store_id),
            )

    # ------------------------------------------------------------------
    # Cart facts
    # ------------------------------------------------------------------
    def _is_ship_enabled(self, item: ShoppingCartItem) -> bool:
        product = _item_product(item)
        if product is None:
            return False
        if product.is_ship_enabled:
            return True
        if not item.attributes:
            return False
        # A bundle ships when any associated product ships
        for value in self.attribute_parser.parse_product_attribute_values(item.attributes):
            if value.attribute_value_type != AttributeValueType.ASSOCIATED_TO_PRODUCT:
                continue
            associated = self.product_service.get_product_by_id(value.associated_product_id)
            if associated is not None and associated.is_ship_enabled:
                return True
        return False

    def requires_shipping(self, cart: List[ShoppingCartItem]) -> bool:
        return any(self._is_ship_enabled(item) for item in cart)

    def is_recurring(self, cart: List[ShoppingCartItem]) -> bool:
        return any(getattr(_item_product(item), "is_recurring", False) for item in cart)

    def get_recurring_cycle_info(self, cart: List[ShoppingCartItem]) -> RecurringCycleInfo:
        return get_recurring_cycle_info(cart, self.localization)

    # ------------------------------------------------------------------
    # Raw payload entry points
    # ------------------------------------------------------------------
    def get_cart(
        self,
        customer: Any,
        cart_type: int = ShoppingCartType.SHOPPING_CART,
        store_id: Optional[int] = None,
    ) -> ShoppingCartDTO:
        self.logger.debug(
            "Fetching cart", customer_id=customer.id, cart_type=int(cart_type), store_id=store_id
        )
        items = self._customer_cart(customer, cart_type, store_id)
        return self.cart_mapper.to_dto(
            customer.id,
            cart_type,
            store_id,
            items,
            language=getattr(self.work_context, "language", None),
        )

    def add_to_cart_from_raw(self, customer: Any, payload: Dict[str, Any]) -> List[str]:
        command = AddToCartCommand.from_raw(payload)
        product = self.product_service.get_product_by_id(command.product_id)
        if product is None:
            self.logger.warning("Add to cart for unknown product", product_id=command.product_id)
            raise ProductNotFoundError(f"Product {command.product_id} not found")
        return self.add_to_cart(
            customer,
            product,
            command.cart_type,
            command.store_id or self.work_context.current_store_id,
            command.attributes,
            command.customer_entered_price,
            command.rental_start,
            command.rental_end,
            command.quantity,
        )

    def update_item_from_raw(self, customer: Any, item_id: int, payload: Dict[str, Any]) -> List[str]:
        command = UpdateCartItemCommand.from_raw(item_id, payload)
        return self.update_item(
            customer,
            command.item_id,
            command.attributes,
            command.customer_entered_price,
            command.rental_start,
            command.rental_end,
            command.quantity,
        )
