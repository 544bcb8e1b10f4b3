import types
import unittest
from decimal import Decimal

from apps.catalog.access import AclService, PermissionService, StoreMappingService
from apps.catalog.pricing import CurrencyService, PriceFormatter, round_price


class FakeProductRepository:
    def __init__(self, groups=None, stores=None):
        self.groups = groups or {}
        self.stores = stores or {}

    def allowed_group_ids(self, product):
        return set(self.groups.get(product.id, ()))

    def store_ids(self, product):
        return set(self.stores.get(product.id, ()))


class StubCustomer:
    def __init__(self, groups=(), perms=(), is_active=True):
        self.id = 1
        self.groups = [types.SimpleNamespace(id=g) for g in groups]
        self.is_active = is_active
        self._perms = set(perms)

    def has_perm(self, perm):
        return perm in self._perms


def product(**data):
    defaults = dict(id=1, subject_to_acl=False, limited_to_stores=False)
    defaults.update(data)
    return types.SimpleNamespace(**defaults)


class AclServiceTests(unittest.TestCase):
    def test_open_products_are_visible(self):
        acl = AclService(FakeProductRepository())
        self.assertTrue(acl.authorize(product(), StubCustomer()))
        self.assertFalse(acl.authorize(None, StubCustomer()))

    def test_restricted_products_need_a_shared_group(self):
        acl = AclService(FakeProductRepository(groups={1: [2, 3]}))
        restricted = product(subject_to_acl=True)
        self.assertTrue(acl.authorize(restricted, StubCustomer(groups=[3])))
        self.assertFalse(acl.authorize(restricted, StubCustomer(groups=[4])))
        self.assertFalse(acl.authorize(restricted, StubCustomer()))


class StoreMappingServiceTests(unittest.TestCase):
    def test_limited_products(self):
        mapping = StoreMappingService(FakeProductRepository(stores={1: [2]}))
        self.assertTrue(mapping.authorize(product(), 5))
        self.assertTrue(mapping.authorize(product(limited_to_stores=True), 2))
        self.assertFalse(mapping.authorize(product(limited_to_stores=True), 5))
        self.assertTrue(mapping.authorize(product(limited_to_stores=True), None))


class PermissionServiceTests(unittest.TestCase):
    def test_public_permissions_apply_to_everyone(self):
        service = PermissionService(["enable_wishlist"])
        self.assertTrue(service.authorize("enable_wishlist", None))

    def test_other_permissions_use_django_perms(self):
        service = PermissionService()
        self.assertTrue(
            service.authorize("enable_shopping_cart", StubCustomer(perms=["carts.enable_shopping_cart"]))
        )
        self.assertFalse(service.authorize("enable_shopping_cart", StubCustomer()))
        self.assertFalse(
            service.authorize(
                "enable_shopping_cart",
                StubCustomer(perms=["carts.enable_shopping_cart"], is_active=False),
            )
        )


class PricingTests(unittest.TestCase):
    def test_round_price(self):
        self.assertEqual(round_price("2.345"), Decimal("2.35"))
        self.assertEqual(round_price(3), Decimal("3.00"))

    def test_currency_conversion(self):
        self.assertEqual(CurrencyService().convert_from_primary_store_currency("4.5"), Decimal("4.5"))
        self.assertEqual(
            CurrencyService(rate="2").convert_from_primary_store_currency(Decimal("1.25")),
            Decimal("2.50"),
        )
        euro = types.SimpleNamespace(rate=Decimal("0.5"))
        self.assertEqual(
            CurrencyService().convert_from_primary_store_currency(10, euro), Decimal("5.0")
        )

    def test_format_price(self):
        self.assertEqual(PriceFormatter().format_price(1234.5), "$1,234.50")
        self.assertEqual(PriceFormatter("€").format_price("0.005"), "€0.01")
