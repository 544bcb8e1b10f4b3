"""In-memory collaborators for cart service unit tests."""
import unittest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from unittest.mock import patch

from apps.carts.conf import ShoppingCartSettings
from apps.carts.mappers import ShoppingCartItemMapper, ShoppingCartMapper
from apps.carts.services import ShoppingCartService
from apps.catalog.access import AclService, PermissionService, StoreMappingService
from apps.catalog.attributes import CheckoutAttributeParser, ProductAttributeParser, dump_blob
from apps.catalog.mappers import ProductMapper
from apps.catalog.models import (
    AttributeControlType,
    AttributeValueType,
    BackorderMode,
    GiftCardType,
    ManageInventoryMethod,
    ProductAttributeMapping,
    ProductType,
    RecurringCyclePeriod,
)
from apps.catalog.pricing import CurrencyService, PriceFormatter
from apps.catalog.services import DateRangeService, ProductService
from apps.common.dates import DateTimeHelper
from apps.common.i18n import LocalizationService
from apps.stores.context import WorkContext
from apps.users.services import CustomerService

UTC = dt_timezone.utc
NOW = datetime(2024, 5, 10, 12, 0, tzinfo=UTC)


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class StubManager:
    def __init__(self, rows=None):
        self._rows = list(rows or [])

    def all(self):
        return list(self._rows)


class StubTranslation:
    def __init__(self, language, name):
        self.language = language
        self.name = name


class StubProduct:
    DEFAULTS = dict(
        price=Decimal("10.00"),
        product_type=ProductType.SIMPLE,
        published=True,
        deleted=False,
        disable_buy_button=False,
        disable_wishlist_button=False,
        call_for_price=False,
        customer_enters_price=False,
        minimum_customer_entered_price=Decimal("0"),
        maximum_customer_entered_price=Decimal("1000"),
        order_minimum_quantity=1,
        order_maximum_quantity=10000,
        allowed_quantities="",
        manage_inventory_method=ManageInventoryMethod.DONT_MANAGE_STOCK,
        backorder_mode=BackorderMode.NO_BACKORDERS,
        stock_quantity=0,
        use_multiple_warehouses=False,
        availability_range_id=None,
        allow_adding_only_existing_attribute_combinations=False,
        available_start_date_time_utc=None,
        available_end_date_time_utc=None,
        is_gift_card=False,
        gift_card_type=GiftCardType.VIRTUAL,
        is_rental=False,
        is_recurring=False,
        recurring_cycle_length=100,
        recurring_cycle_period=RecurringCyclePeriod.DAYS,
        recurring_total_cycles=10,
        require_other_products=False,
        required_product_ids="",
        automatically_add_required_products=False,
        is_ship_enabled=True,
        subject_to_acl=False,
        limited_to_stores=False,
    )

    def __init__(self, product_id, name="Product", translations=(), **overrides):
        self.id = product_id
        self.pk = product_id
        self.name = name
        self.translations = StubManager(translations)
        self.group_ids = set()
        self.store_ids = set()
        self.warehouses = []
        for key, value in {**self.DEFAULTS, **overrides}.items():
            setattr(self, key, value)


class StubGroup:
    def __init__(self, group_id):
        self.id = group_id


class StubCustomer:
    def __init__(self, customer_id, *, perms=(), groups=(), is_search_engine_account=False):
        self.id = customer_id
        self.pk = customer_id
        self.is_active = True
        self.is_search_engine_account = is_search_engine_account
        self.has_shopping_cart_items = False
        self.discount_coupon_codes = []
        self.gift_card_coupon_codes = []
        self.groups = [StubGroup(g) for g in groups]
        self._perms = set(perms)

    def has_perm(self, perm):
        return perm in self._perms


class StubCartItem:
    def __init__(self, item_id, **data):
        self.id = item_id
        self.pk = item_id
        self.customer = data["customer"]
        self.customer_id = self.customer.id
        self.product = data["product"]
        self.product_id = data.get("product_id", getattr(self.product, "id", None))
        self.store_id = data.get("store_id", 1)
        self.cart_type = data.get("cart_type", 1)
        self.attributes = data.get("attributes", "")
        self.customer_entered_price = data.get("customer_entered_price", Decimal("0"))
        self.quantity = data.get("quantity", 1)
        self.rental_start_date_utc = data.get("rental_start_date_utc")
        self.rental_end_date_utc = data.get("rental_end_date_utc")
        self.created_on_utc = data.get("created_on_utc", NOW)
        self.updated_on_utc = data.get("updated_on_utc", NOW)


class FakeCartItemRepository:
    def __init__(self):
        self._storage = {}
        self._pk = 1
        self.saved = []

    def create(self, **data):
        item = StubCartItem(self._pk, **data)
        self._storage[item.id] = item
        self._pk += 1
        return item

    def get(self, **filters):
        for item in self._storage.values():
            if all(getattr(item, key, None) == value for key, value in filters.items()):
                return item
        return None

    def save(self, item, update_fields=None):
        self.saved.append((item.id, tuple(update_fields or ())))
        return item

    def delete(self, item):
        self._storage.pop(item.id, None)
        item.id = None

    def list_for_customer(self, customer_id, cart_type=None, store_id=None):
        items = [i for i in self._storage.values() if i.customer_id == customer_id]
        if cart_type is not None:
            items = [i for i in items if i.cart_type == cart_type]
        if store_id:
            items = [i for i in items if i.store_id == store_id]
        return sorted(items, key=lambda i: i.id)

    def exists_for_customer(self, customer_id):
        return any(i.customer_id == customer_id for i in self._storage.values())

    def list_updated_before(self, older_than_utc):
        return [i for i in self._storage.values() if i.updated_on_utc < older_than_utc]

    def all(self):
        return sorted(self._storage.values(), key=lambda i: i.id)


class FakeProductRepository:
    def __init__(self, products=()):
        self._products = {p.id: p for p in products}

    def add(self, product):
        self._products[product.id] = product
        return product

    def get(self, **filters):
        return self._products.get(filters.get("id"))

    def list_by_ids(self, ids):
        return [self._products[i] for i in ids if i in self._products]

    def warehouse_inventory(self, product):
        return list(product.warehouses)

    def allowed_group_ids(self, product):
        return set(product.group_ids)

    def store_ids(self, product):
        return set(product.store_ids)


class StubAttribute:
    def __init__(self, name, translations=()):
        self.name = name
        self.translations = StubManager(translations)


class StubMapping:
    is_non_combinable = ProductAttributeMapping.is_non_combinable
    validation_rules_allowed = ProductAttributeMapping.validation_rules_allowed
    should_have_values = ProductAttributeMapping.should_have_values

    def __init__(
        self,
        mapping_id,
        product_id,
        name,
        control=AttributeControlType.DROPDOWN,
        *,
        is_required=False,
        text_prompt="",
        validation_min_length=None,
        validation_max_length=None,
        condition_attributes="",
    ):
        self.id = mapping_id
        self.pk = mapping_id
        self.product_id = product_id
        self.product_attribute = StubAttribute(name)
        self.attribute_control_type = control
        self.is_required = is_required
        self.text_prompt = text_prompt
        self.validation_min_length = validation_min_length
        self.validation_max_length = validation_max_length
        self.condition_attributes = condition_attributes


class StubValue:
    def __init__(
        self,
        value_id,
        mapping_id,
        name,
        *,
        is_pre_selected=False,
        associated_product_id=None,
        quantity=1,
    ):
        self.id = value_id
        self.pk = value_id
        self.product_attribute_mapping_id = mapping_id
        self.name = name
        self.is_pre_selected = is_pre_selected
        self.associated_product_id = associated_product_id
        self.attribute_value_type = (
            AttributeValueType.ASSOCIATED_TO_PRODUCT
            if associated_product_id is not None
            else AttributeValueType.SIMPLE
        )
        self.quantity = quantity


class StubCombination:
    def __init__(self, product_id, attributes, stock_quantity=0, allow_out_of_stock_orders=False):
        self.product_id = product_id
        self.attributes = attributes
        self.stock_quantity = stock_quantity
        self.allow_out_of_stock_orders = allow_out_of_stock_orders


class FakeAttributeService:
    """Stands in for ProductAttributeService with plain dicts."""

    def __init__(self):
        self.mappings = {}
        self.values = {}
        self.combinations = []

    def add_mapping(self, mapping):
        self.mappings[mapping.id] = mapping
        return mapping

    def add_value(self, value):
        self.values[value.id] = value
        return value

    def get_mapping_by_id(self, mapping_id):
        return self.mappings.get(mapping_id)

    def get_mappings_by_product_id(self, product_id):
        return [m for m in self.mappings.values() if m.product_id == product_id]

    def get_value_by_id(self, value_id):
        return self.values.get(value_id)

    def get_values(self, mapping_id):
        return [v for v in self.values.values() if v.product_attribute_mapping_id == mapping_id]

    def get_combinations(self, product_id):
        return [c for c in self.combinations if c.product_id == product_id]


class StubCheckoutAttribute:
    def __init__(
        self,
        attribute_id,
        name,
        control=AttributeControlType.DROPDOWN,
        *,
        is_required=False,
        text_prompt="",
        shippable_product_required=False,
        validation_min_length=None,
        validation_max_length=None,
        condition_attributes="",
    ):
        self.id = attribute_id
        self.pk = attribute_id
        self.name = name
        self.attribute_control_type = control
        self.is_required = is_required
        self.text_prompt = text_prompt
        self.shippable_product_required = shippable_product_required
        self.validation_min_length = validation_min_length
        self.validation_max_length = validation_max_length
        self.condition_attributes = condition_attributes


class FakeCheckoutAttributeRepository:
    def __init__(self, attributes=()):
        self._attributes = {a.id: a for a in attributes}

    def add(self, attribute):
        self._attributes[attribute.id] = attribute
        return attribute

    def get(self, **filters):
        return self._attributes.get(filters.get("id"))

    def list_for_store(self, store_id, exclude_shippable=False):
        return [
            a
            for a in self._attributes.values()
            if not (exclude_shippable and a.shippable_product_required)
        ]


class StubRange:
    def __init__(self, range_id, name):
        self.id = range_id
        self.name = name


class FakeRangeRepository:
    def __init__(self, ranges=()):
        self._ranges = {r.id: r for r in ranges}

    def get(self, **filters):
        return self._ranges.get(filters.get("id"))


class DictCache:
    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, timeout=None):
        self.data[key] = value


class FakeUserRepository:
    def __init__(self):
        self.saved = []

    def save(self, obj, update_fields=None):
        self.saved.append((obj.id, tuple(update_fields or ())))
        return obj


class StubCheckoutState:
    def __init__(self, user_id, store_id):
        self.user_id = user_id
        self.store_id = store_id
        self.checkout_attributes = ""
        self.selected_shipping_option = ""
        self.selected_payment_method = ""
        self.use_reward_points = False


class FakeCheckoutStateRepository:
    def __init__(self):
        self.states = {}
        self.saved = []

    def get_for(self, user_id, store_id):
        return self.states.get((user_id, store_id))

    def get_or_create_for(self, user_id, store_id):
        return self.states.setdefault((user_id, store_id), StubCheckoutState(user_id, store_id))

    def save(self, state, update_fields=None):
        self.saved.append((state.user_id, state.store_id, tuple(update_fields or ())))
        return state


class RecordingPublisher:
    def __init__(self):
        self.events = []

    def entity_inserted(self, entity):
        self.events.append(("inserted", entity))

    def entity_updated(self, entity):
        self.events.append(("updated", entity))

    def entity_deleted(self, entity):
        self.events.append(("deleted", entity))

    def actions(self):
        return [action for action, _ in self.events]


class FixedDateTimeHelper(DateTimeHelper):
    def __init__(self, now, store_time_zone="UTC"):
        super().__init__(store_time_zone)
        self.now = now

    def utcnow(self):
        return self.now


def blob(selections=(), gift_card=None):
    """Build an attribute blob from ``[(mapping_id, [values...]), ...]``."""
    data = {
        "attributes": [
            {"id": mapping_id, "values": [str(v) for v in values]}
            for mapping_id, values in selections
        ]
    }
    if gift_card:
        data["gift_card"] = gift_card
    return dump_blob(data)


class CartHarness:
    """Wires a ShoppingCartService over in-memory fakes."""

    def __init__(
        self,
        products=(),
        *,
        settings_overrides=None,
        impersonated_by=None,
        now=NOW,
        store_time_zone="UTC",
        ranges=(),
    ):
        self.products = FakeProductRepository(products)
        self.items = FakeCartItemRepository()
        self.users = FakeUserRepository()
        self.checkout_states = FakeCheckoutStateRepository()
        self.attributes = FakeAttributeService()
        self.checkout_attributes = FakeCheckoutAttributeRepository()
        self.events = RecordingPublisher()
        self.cache = DictCache()
        self.cart_settings = ShoppingCartSettings(
            **{"store_time_zone": store_time_zone, **(settings_overrides or {})}
        )
        self.work_context = WorkContext(
            current_store_id=1, original_customer_if_impersonated=impersonated_by
        )
        self.dates = FixedDateTimeHelper(now, store_time_zone)
        self.customer_service = CustomerService(self.users, self.checkout_states)
        self.product_service = ProductService(self.products)
        self.attribute_parser = ProductAttributeParser(self.attributes)
        self.checkout_parser = CheckoutAttributeParser(self.checkout_attributes)
        self.service = ShoppingCartService(
            items=self.items,
            customer_service=self.customer_service,
            product_service=self.product_service,
            attribute_service=self.attributes,
            attribute_parser=self.attribute_parser,
            checkout_parser=self.checkout_parser,
            checkout_attributes=self.checkout_attributes,
            date_ranges=DateRangeService(FakeRangeRepository(ranges), self.cache),
            acl=AclService(self.products),
            store_mapping=StoreMappingService(self.products),
            permissions=PermissionService(self.cart_settings.public_permissions),
            currency=CurrencyService(),
            price_formatter=PriceFormatter(self.cart_settings.currency_symbol),
            events=self.events,
            cart_mapper=ShoppingCartMapper(ShoppingCartItemMapper(ProductMapper())),
            cart_settings=self.cart_settings,
            work_context=self.work_context,
            localization=LocalizationService(),
            dates=self.dates,
        )

    def add_item(self, customer, product, **data):
        return self.items.create(customer=customer, product=product, **data)


class CartServiceTestCase(unittest.TestCase):
    def setUp(self):
        self.atomic_patcher = patch("apps.carts.services.transaction.atomic", DummyAtomic())
        self.atomic_patcher.start()
        self.addCleanup(self.atomic_patcher.stop)
