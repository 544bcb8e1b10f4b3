import unittest
from datetime import date, datetime, timezone
from decimal import Decimal

from apps.carts.commands import AddToCartCommand, UpdateCartItemCommand
from apps.carts.models import ShoppingCartType


class AddToCartCommandTests(unittest.TestCase):
    def test_normalization(self):
        cmd = AddToCartCommand.from_raw(
            {
                "product_id": "5",
                "quantity": "3",
                "cart_type": "wishlist",
                "store_id": "2",
                "attributes": {"attributes": [{"id": 1, "values": ["7"]}]},
                "customer_entered_price": "12.50",
                "rental_start": "2025-01-02",
                "rental_end": "2025-01-05T10:00:00Z",
            }
        )
        self.assertEqual(cmd.product_id, 5)
        self.assertEqual(cmd.quantity, 3)
        self.assertEqual(cmd.cart_type, ShoppingCartType.WISHLIST)
        self.assertEqual(cmd.store_id, 2)
        self.assertEqual(cmd.attributes, '{"attributes": [{"id": 1, "values": ["7"]}]}')
        self.assertEqual(cmd.customer_entered_price, Decimal("12.50"))
        self.assertEqual(cmd.rental_start, datetime(2025, 1, 2))
        self.assertEqual(cmd.rental_end, datetime(2025, 1, 5, 10, tzinfo=timezone.utc))

    def test_defaults(self):
        cmd = AddToCartCommand.from_raw({"product_id": 9})
        self.assertEqual(cmd.quantity, 1)
        self.assertEqual(cmd.cart_type, ShoppingCartType.SHOPPING_CART)
        self.assertIsNone(cmd.store_id)
        self.assertEqual(cmd.attributes, "")
        self.assertEqual(cmd.customer_entered_price, Decimal("0"))
        self.assertIsNone(cmd.rental_start)

    def test_non_positive_quantity_is_kept(self):
        self.assertEqual(AddToCartCommand.from_raw({"product_id": 1, "quantity": 0}).quantity, 0)
        self.assertEqual(AddToCartCommand.from_raw({"product_id": 1, "quantity": "-2"}).quantity, -2)

    def test_cart_type_variants(self):
        def cart_type(raw):
            return AddToCartCommand.from_raw({"product_id": 1, "cart_type": raw}).cart_type

        self.assertEqual(cart_type(2), ShoppingCartType.WISHLIST)
        self.assertEqual(cart_type("ShoppingCart"), ShoppingCartType.SHOPPING_CART)
        self.assertEqual(cart_type("99"), ShoppingCartType.SHOPPING_CART)

    def test_invalid_values_are_dropped(self):
        cmd = AddToCartCommand.from_raw(
            {
                "product_id": 1,
                "customer_entered_price": "abc",
                "rental_start": "not-a-date",
                "attributes": ["unexpected"],
            }
        )
        self.assertEqual(cmd.customer_entered_price, Decimal("0"))
        self.assertIsNone(cmd.rental_start)
        self.assertEqual(cmd.attributes, "")

    def test_product_is_required(self):
        with self.assertRaises(ValueError):
            AddToCartCommand.from_raw({"quantity": 1})
        with self.assertRaises(ValueError):
            AddToCartCommand.from_raw({"product_id": "bad"})
        with self.assertRaises(ValueError):
            AddToCartCommand.from_raw(["not", "a", "dict"])


class UpdateCartItemCommandTests(unittest.TestCase):
    def test_normalization(self):
        cmd = UpdateCartItemCommand.from_raw(
            "4", {"quantity": "6", "rental_start": date(2025, 3, 1)}
        )
        self.assertEqual(cmd.item_id, 4)
        self.assertEqual(cmd.quantity, 6)
        self.assertEqual(cmd.rental_start, date(2025, 3, 1))
        self.assertIsNone(cmd.rental_end)

    def test_missing_quantity_means_removal(self):
        self.assertEqual(UpdateCartItemCommand.from_raw(4, {}).quantity, 0)

    def test_payload_must_be_dict(self):
        with self.assertRaises(ValueError):
            UpdateCartItemCommand.from_raw(4, None)
