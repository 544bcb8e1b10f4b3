"""Warning-producing rule checks for cart items and whole carts.

Every check returns a list of user-facing strings; an empty list means the
item (or cart) passes. Checks never mutate anything.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from apps.catalog.attributes import first_text_length
from apps.catalog.models import (
    AttributeControlType,
    BackorderMode,
    GiftCardType,
    ManageInventoryMethod,
    ProductType,
    TEXT_CONTROL_TYPES,
)
from apps.common.dates import ensure_aware_utc
from .dtos import RecurringCycleInfo
from .exceptions import CartItemProductMissingError
from .models import ShoppingCartType


def is_valid_email(value: Optional[str]) -> bool:
    if not value:
        return False
    try:
        validate_email(value)
    except ValidationError:
        return False
    return True


class ItemRuleValidator:
    def __init__(
        self,
        *,
        localization,
        product_service,
        attribute_service,
        attribute_parser,
        acl,
        store_mapping,
        date_ranges,
        currency,
        price_formatter,
        dates,
        cart_settings,
        work_context,
    ):
        self.localization = localization
        self.product_service = product_service
        self.attribute_service = attribute_service
        self.attribute_parser = attribute_parser
        self.acl = acl
        self.store_mapping = store_mapping
        self.date_ranges = date_ranges
        self.currency = currency
        self.price_formatter = price_formatter
        self.dates = dates
        self.cart_settings = cart_settings
        self.work_context = work_context

    def _out_of_stock_warning(self, product) -> str:
        availability_range = self.date_ranges.get_availability_range_by_id(
            getattr(product, "availability_range_id", None)
        )
        if availability_range is None:
            return self.localization.get_resource("ShoppingCart.OutOfStock")
        return self.localization.format(
            "ShoppingCart.AvailabilityRange",
            self.localization.get_localized(availability_range, "name"),
        )

    def _stock_warning(self, available: int, product) -> str:
        if available <= 0:
            return self._out_of_stock_warning(product)
        return self.localization.format("ShoppingCart.QuantityExceedsStock", available)

    def standard_warnings(
        self,
        customer,
        cart_type: int,
        product,
        attributes: str,
        customer_entered_price: Decimal,
        quantity: int,
    ) -> List[str]:
        if customer is None:
            raise ValueError("customer is required")
        if product is None:
            raise ValueError("product is required")

        res = self.localization
        warnings: List[str] = []

        if product.deleted:
            warnings.append(res.get_resource("ShoppingCart.ProductDeleted"))
            return warnings

        if not product.published:
            warnings.append(res.get_resource("ShoppingCart.ProductUnpublished"))

        if product.product_type != ProductType.SIMPLE:
            warnings.append(res.get_resource("ShoppingCart.NotSimpleProduct"))

        if not self.acl.authorize(product, customer):
            warnings.append(res.get_resource("ShoppingCart.ProductUnpublished"))

        if not self.store_mapping.authorize(product, self.work_context.current_store_id):
            warnings.append(res.get_resource("ShoppingCart.ProductUnpublished"))

        if cart_type == ShoppingCartType.SHOPPING_CART and product.disable_buy_button:
            warnings.append(res.get_resource("ShoppingCart.BuyingDisabled"))

        if cart_type == ShoppingCartType.WISHLIST and product.disable_wishlist_button:
            warnings.append(res.get_resource("ShoppingCart.WishlistDisabled"))

        # Admins impersonating a customer may still buy call-for-price products
        if (
            cart_type == ShoppingCartType.SHOPPING_CART
            and product.call_for_price
            and (
                not self.cart_settings.allow_admins_to_buy_call_for_price_products
                or self.work_context.original_customer_if_impersonated is None
            )
        ):
            warnings.append(res.get_resource("Products.CallForPrice"))

        if product.customer_enters_price:
            price = Decimal(str(customer_entered_price or 0))
            minimum = Decimal(str(product.minimum_customer_entered_price))
            maximum = Decimal(str(product.maximum_customer_entered_price))
            if price < minimum or price > maximum:
                warnings.append(
                    res.format(
                        "ShoppingCart.CustomerEnteredPrice.RangeError",
                        self.price_formatter.format_price(
                            self.currency.convert_from_primary_store_currency(minimum)
                        ),
                        self.price_formatter.format_price(
                            self.currency.convert_from_primary_store_currency(maximum)
                        ),
                    )
                )

        has_quantity_warnings = False
        if quantity < product.order_minimum_quantity:
            warnings.append(
                res.format("ShoppingCart.MinimumQuantity", product.order_minimum_quantity)
            )
            has_quantity_warnings = True
        if quantity > product.order_maximum_quantity:
            warnings.append(
                res.format("ShoppingCart.MaximumQuantity", product.order_maximum_quantity)
            )
            has_quantity_warnings = True

        allowed_quantities = self.product_service.parse_allowed_quantities(product)
        if allowed_quantities and quantity not in allowed_quantities:
            warnings.append(
                res.format(
                    "ShoppingCart.AllowedQuantities",
                    ", ".join(str(q) for q in allowed_quantities),
                )
            )

        validate_out_of_stock = (
            cart_type == ShoppingCartType.SHOPPING_CART
            or not self.cart_settings.allow_out_of_stock_items_to_be_added_to_wishlist
        )
        if validate_out_of_stock and not has_quantity_warnings:
            warnings.extend(self._inventory_warnings(product, attributes, quantity))

        warnings.extend(self._availability_warnings(product))
        return warnings

    def _inventory_warnings(self, product, attributes: str, quantity: int) -> List[str]:
        method = product.manage_inventory_method
        if method == ManageInventoryMethod.MANAGE_STOCK:
            if product.backorder_mode != BackorderMode.NO_BACKORDERS:
                return []
            available = self.product_service.get_total_stock_quantity(product)
            if available < quantity:
                return [self._stock_warning(available, product)]
            return []
        if method == ManageInventoryMethod.MANAGE_STOCK_BY_ATTRIBUTES:
            combination = self.attribute_parser.find_combination(product, attributes)
            if combination is not None:
                if (
                    not combination.allow_out_of_stock_orders
                    and combination.stock_quantity < quantity
                ):
                    return [self._stock_warning(combination.stock_quantity, product)]
                return []
            if product.allow_adding_only_existing_attribute_combinations:
                return [self._out_of_stock_warning(product)]
        return []

    def _availability_warnings(self, product) -> List[str]:
        now = self.dates.utcnow()
        start = ensure_aware_utc(product.available_start_date_time_utc)
        if start is not None and start > now:
            return [self.localization.get_resource("ShoppingCart.NotAvailable")]
        end = ensure_aware_utc(product.available_end_date_time_utc)
        if end is not None and end < now:
            return [self.localization.get_resource("ShoppingCart.NotAvailable")]
        return []

    def attribute_warnings(
        self,
        product,
        attributes: str = "",
        ignore_non_combinable: bool = False,
        ignore_condition_met: bool = False,
    ) -> List[str]:
        """Ownership, required, read-only and length rules; bundled products are checked by the caller.

        A selected mapping that cannot be loaded yields a single "Attribute error"
        and ends validation; no required, read-only or length warnings follow it.
        """
        if product is None:
            raise ValueError("product is required")

        res = self.localization
        parser = self.attribute_parser
        warnings: List[str] = []

        selected_ids = []
        for mapping_id in parser.parse_ids(attributes):
            mapping = self.attribute_service.get_mapping_by_id(mapping_id)
            if mapping is None:
                warnings.append(res.get_resource("ShoppingCart.AttributeError"))
                return warnings
            if ignore_non_combinable and mapping.is_non_combinable():
                continue
            if mapping.product_id != product.id:
                warnings.append(res.get_resource("ShoppingCart.AttributeError"))
            selected_ids.append(mapping.id)

        product_mappings = self.attribute_service.get_mappings_by_product_id(product.id)
        if ignore_non_combinable:
            product_mappings = [m for m in product_mappings if not m.is_non_combinable()]
        if not ignore_condition_met:
            product_mappings = [
                m
                for m in product_mappings
                if parser.is_condition_met(m, attributes) in (None, True)
            ]

        for mapping in product_mappings:
            if mapping.is_required:
                found = mapping.id in selected_ids and any(
                    value.strip() for value in parser.parse_values(attributes, mapping.id)
                )
                if not found:
                    prompt = res.get_localized(mapping, "text_prompt")
                    warnings.append(
                        prompt
                        or res.format(
                            "ShoppingCart.SelectAttribute",
                            res.get_localized(mapping.product_attribute, "name"),
                        )
                    )

            if mapping.attribute_control_type == AttributeControlType.READONLY_CHECKBOXES:
                allowed = sorted(
                    v.id
                    for v in self.attribute_service.get_values(mapping.id)
                    if v.is_pre_selected
                )
                chosen = sorted(
                    v.id
                    for v in parser.parse_product_attribute_values(attributes, mapping.id)
                )
                if allowed != chosen:
                    warnings.append(res.get_resource("ShoppingCart.ReadOnlyValuesChanged"))

        for mapping in product_mappings:
            if not mapping.validation_rules_allowed():
                continue
            if mapping.attribute_control_type not in TEXT_CONTROL_TYPES:
                continue
            entered = first_text_length(parser.parse_values(attributes, mapping.id))
            name = res.get_localized(mapping.product_attribute, "name")
            if (
                mapping.validation_min_length is not None
                and mapping.validation_min_length > entered
            ):
                warnings.append(
                    res.format(
                        "ShoppingCart.TextboxMinimumLength",
                        name,
                        mapping.validation_min_length,
                    )
                )
            if (
                mapping.validation_max_length is not None
                and mapping.validation_max_length < entered
            ):
                warnings.append(
                    res.format(
                        "ShoppingCart.TextboxMaximumLength",
                        name,
                        mapping.validation_max_length,
                    )
                )
        return warnings

    def gift_card_warnings(self, cart_type: int, product, attributes: str) -> List[str]:
        if product is None:
            raise ValueError("product is required")
        warnings: List[str] = []
        if not product.is_gift_card:
            return warnings

        res = self.localization
        info = self.attribute_parser.get_gift_card(attributes)
        is_virtual = product.gift_card_type == GiftCardType.VIRTUAL

        if not info.recipient_name:
            warnings.append(res.get_resource("ShoppingCart.RecipientNameError"))
        if is_virtual and not is_valid_email(info.recipient_email):
            warnings.append(res.get_resource("ShoppingCart.RecipientEmailError"))
        if not info.sender_name:
            warnings.append(res.get_resource("ShoppingCart.SenderNameError"))
        if is_virtual and not is_valid_email(info.sender_email):
            warnings.append(res.get_resource("ShoppingCart.SenderEmailError"))
        return warnings

    def rental_warnings(
        self,
        product,
        rental_start: Optional[datetime] = None,
        rental_end: Optional[datetime] = None,
    ) -> List[str]:
        if product is None:
            raise ValueError("product is required")
        res = self.localization
        if not product.is_rental:
            return []
        if rental_start is None:
            return [res.get_resource("ShoppingCart.Rental.EnterStartDate")]
        if rental_end is None:
            return [res.get_resource("ShoppingCart.Rental.EnterEndDate")]
        start_utc = self.dates.to_utc(rental_start)
        if start_utc > self.dates.to_utc(rental_end):
            return [res.get_resource("ShoppingCart.Rental.StartDateLessEndDate")]
        # Hours are ignored: any start on the current store-local day is accepted
        if self.dates.store_today_utc() > start_utc:
            return [res.get_resource("ShoppingCart.Rental.StartDateShouldBeFuture")]
        return []


class CheckoutAttributeValidator:
    def __init__(self, *, localization, checkout_parser, checkout_attributes):
        self.localization = localization
        self.checkout_parser = checkout_parser
        self.checkout_attributes = checkout_attributes

    def warnings(self, checkout_attributes: str, store_id: int, requires_shipping: bool) -> List[str]:
        res = self.localization
        parser = self.checkout_parser
        warnings: List[str] = []

        selected_ids = {a.id for a in parser.parse_checkout_attributes(checkout_attributes)}
        candidates = [
            a
            for a in self.checkout_attributes.list_for_store(
                store_id, exclude_shippable=not requires_shipping
            )
            if parser.is_condition_met(a, checkout_attributes) in (None, True)
        ]

        for attribute in candidates:
            if not attribute.is_required:
                continue
            found = attribute.id in selected_ids and any(
                value.strip() for value in parser.parse_values(checkout_attributes, attribute.id)
            )
            if found:
                continue
            prompt = res.get_localized(attribute, "text_prompt")
            warnings.append(
                prompt
                or res.format(
                    "ShoppingCart.SelectAttribute", res.get_localized(attribute, "name")
                )
            )

        for attribute in candidates:
            if attribute.attribute_control_type not in TEXT_CONTROL_TYPES:
                continue
            entered = first_text_length(parser.parse_values(checkout_attributes, attribute.id))
            name = res.get_localized(attribute, "name")
            if (
                attribute.validation_min_length is not None
                and attribute.validation_min_length > entered
            ):
                warnings.append(
                    res.format(
                        "ShoppingCart.TextboxMinimumLength",
                        name,
                        attribute.validation_min_length,
                    )
                )
            if (
                attribute.validation_max_length is not None
                and attribute.validation_max_length < entered
            ):
                warnings.append(
                    res.format(
                        "ShoppingCart.TextboxMaximumLength",
                        name,
                        attribute.validation_max_length,
                    )
                )
        return warnings


def get_recurring_cycle_info(cart: Iterable[Any], localization) -> RecurringCycleInfo:
    """
    All recurring items in a cart must share one schedule. The first conflict
    short-circuits with an error; non-recurring items are ignored.
    """
    cycle_length = cycle_period = total_cycles = None
    for item in cart:
        product = getattr(item, "product", None)
        if product is None:
            raise CartItemProductMissingError(getattr(item, "product_id", None))
        if not product.is_recurring:
            continue
        conflict = localization.get_resource("ShoppingCart.ConflictingShipmentSchedules")
        if cycle_length is not None and cycle_length != product.recurring_cycle_length:
            return RecurringCycleInfo(error=conflict)
        cycle_length = product.recurring_cycle_length
        if cycle_period is not None and cycle_period != product.recurring_cycle_period:
            return RecurringCycleInfo(error=conflict)
        cycle_period = product.recurring_cycle_period
        if total_cycles is not None and total_cycles != product.recurring_total_cycles:
            return RecurringCycleInfo(error=conflict)
        total_cycles = product.recurring_total_cycles

    if cycle_length is None:
        return RecurringCycleInfo()
    return RecurringCycleInfo(
        cycle_length=cycle_length,
        cycle_period=int(cycle_period),
        total_cycles=total_cycles,
    )
