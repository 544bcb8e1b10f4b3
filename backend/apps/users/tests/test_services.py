import unittest

from apps.users.services import CustomerService


class StubCustomer:
    def __init__(self, customer_id, discount_codes=None, gift_card_codes=None):
        self.id = customer_id
        self.discount_coupon_codes = list(discount_codes or [])
        self.gift_card_coupon_codes = list(gift_card_codes or [])


class StubCheckoutState:
    def __init__(self, user_id, store_id):
        self.user_id = user_id
        self.store_id = store_id
        self.checkout_attributes = ""
        self.selected_shipping_option = "Ground"
        self.selected_payment_method = "Card"
        self.use_reward_points = True


class FakeUserRepository:
    def __init__(self):
        self.saved = []

    def save(self, obj, update_fields=None):
        self.saved.append((obj.id, list(update_fields or [])))
        return obj


class FakeCheckoutStateRepository:
    def __init__(self):
        self.states = {}
        self.saved = []

    def get_for(self, user_id, store_id):
        return self.states.get((user_id, store_id))

    def get_or_create_for(self, user_id, store_id):
        return self.states.setdefault((user_id, store_id), StubCheckoutState(user_id, store_id))

    def save(self, state, update_fields=None):
        self.saved.append(((state.user_id, state.store_id), list(update_fields or [])))
        return state


class CustomerServiceTests(unittest.TestCase):
    def setUp(self):
        self.users = FakeUserRepository()
        self.states = FakeCheckoutStateRepository()
        self.service = CustomerService(self.users, self.states)
        self.customer = StubCustomer(5, ["SAVE10"], ["GC-1"])

    def test_update_customer_passes_fields(self):
        self.service.update_customer(self.customer, fields=["has_shopping_cart_items"])
        self.assertEqual(self.users.saved, [(5, ["has_shopping_cart_items"])])
        with self.assertRaises(ValueError):
            self.service.update_customer(None)

    def test_reset_clears_selections_for_store_only(self):
        state = self.states.get_or_create_for(5, 1)
        state.checkout_attributes = "attrs"
        other = self.states.get_or_create_for(5, 2)

        self.service.reset_checkout_data(self.customer, 1)

        self.assertEqual(state.selected_shipping_option, "")
        self.assertEqual(state.selected_payment_method, "")
        self.assertFalse(state.use_reward_points)
        self.assertEqual(state.checkout_attributes, "attrs")
        self.assertEqual(other.selected_shipping_option, "Ground")
        self.assertEqual(self.customer.discount_coupon_codes, ["SAVE10"])
        self.assertEqual(self.users.saved, [])

    def test_reset_can_clear_coupons_and_attributes(self):
        state = self.states.get_or_create_for(5, 1)
        state.checkout_attributes = "attrs"

        self.service.reset_checkout_data(
            self.customer, 1, clear_coupon_codes=True, clear_checkout_attributes=True
        )

        self.assertEqual(state.checkout_attributes, "")
        self.assertEqual(self.customer.discount_coupon_codes, [])
        self.assertEqual(self.customer.gift_card_coupon_codes, [])
        self.assertEqual(
            self.users.saved, [(5, ["discount_coupon_codes", "gift_card_coupon_codes"])]
        )
        self.assertIn("checkout_attributes", self.states.saved[-1][1])

    def test_reset_without_state_is_noop(self):
        self.service.reset_checkout_data(self.customer, 3)
        self.assertEqual(self.states.saved, [])

    def test_checkout_attributes_round_trip(self):
        self.assertEqual(self.service.get_checkout_attributes(self.customer, 1), "")
        self.service.save_checkout_attributes(self.customer, 1, "attrs")
        self.assertEqual(self.service.get_checkout_attributes(self.customer, 1), "attrs")
        self.service.save_checkout_attributes(self.customer, 1, None)
        self.assertEqual(self.service.get_checkout_attributes(self.customer, 1), "")

    def test_coupon_codes_are_deduplicated_case_insensitively(self):
        self.service.apply_discount_coupon_code(self.customer, "save10 ")
        self.service.apply_discount_coupon_code(self.customer, " WELCOME")
        self.service.apply_gift_card_coupon_code(self.customer, "gc-1")
        self.service.apply_gift_card_coupon_code(self.customer, "GC-2")

        self.assertEqual(
            self.service.parse_applied_discount_coupon_codes(self.customer), ["SAVE10", "WELCOME"]
        )
        self.assertEqual(
            self.service.parse_applied_gift_card_coupon_codes(self.customer), ["GC-1", "GC-2"]
        )
