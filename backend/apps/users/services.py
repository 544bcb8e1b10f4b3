from __future__ import annotations

from typing import Iterable, List, Optional

from apps.common import get_logger
from .models import User
from .protocols import CheckoutStateRepositoryProtocol, UserRepositoryProtocol

logger = get_logger(__name__).bind(component="users", layer="service")


class CustomerService:
    def __init__(
        self,
        users: UserRepositoryProtocol,
        checkout_states: CheckoutStateRepositoryProtocol,
    ):
        self.users = users
        self.checkout_states = checkout_states
        self.logger = logger.bind(service="CustomerService")

    def update_customer(self, customer: User, fields: Optional[Iterable[str]] = None) -> User:
        if customer is None:
            raise ValueError("customer is required")
        self.logger.debug("Updating customer", customer_id=customer.id)
        return self.users.save(customer, update_fields=fields)

    def reset_checkout_data(
        self,
        customer: User,
        store_id: int,
        *,
        clear_coupon_codes: bool = False,
        clear_checkout_attributes: bool = False,
    ) -> None:
        """
        Forget shipping/payment selections for the store after the cart changed.
        Coupon codes and checkout attributes survive unless explicitly cleared.
        """
        if customer is None:
            raise ValueError("customer is required")
        self.logger.debug(
            "Resetting checkout data", customer_id=customer.id, store_id=store_id
        )
        if clear_coupon_codes:
            customer.discount_coupon_codes = []
            customer.gift_card_coupon_codes = []
            self.users.save(
                customer,
                update_fields=["discount_coupon_codes", "gift_card_coupon_codes"],
            )
        state = self.checkout_states.get_for(customer.id, store_id)
        if state is None:
            return
        state.selected_shipping_option = ""
        state.selected_payment_method = ""
        state.use_reward_points = False
        update_fields = [
            "selected_shipping_option",
            "selected_payment_method",
            "use_reward_points",
        ]
        if clear_checkout_attributes:
            state.checkout_attributes = ""
            update_fields.append("checkout_attributes")
        self.checkout_states.save(state, update_fields=update_fields)

    def get_checkout_attributes(self, customer: User, store_id: int) -> str:
        state = self.checkout_states.get_for(customer.id, store_id)
        return state.checkout_attributes if state else ""

    def save_checkout_attributes(self, customer: User, store_id: int, attributes: str) -> None:
        state = self.checkout_states.get_or_create_for(customer.id, store_id)
        state.checkout_attributes = attributes or ""
        self.checkout_states.save(state, update_fields=["checkout_attributes"])

    def parse_applied_discount_coupon_codes(self, customer: User) -> List[str]:
        return [c for c in (customer.discount_coupon_codes or []) if c]

    def parse_applied_gift_card_coupon_codes(self, customer: User) -> List[str]:
        return [c for c in (customer.gift_card_coupon_codes or []) if c]

    def apply_discount_coupon_code(self, customer: User, code: str) -> None:
        codes = list(customer.discount_coupon_codes or [])
        if _contains_code(codes, code):
            return
        codes.append(code.strip())
        customer.discount_coupon_codes = codes

    def apply_gift_card_coupon_code(self, customer: User, code: str) -> None:
        codes = list(customer.gift_card_coupon_codes or [])
        if _contains_code(codes, code):
            return
        codes.append(code.strip())
        customer.gift_card_coupon_codes = codes


def _contains_code(codes: List[str], code: str) -> bool:
    needle = (code or "").strip().lower()
    return any((c or "").strip().lower() == needle for c in codes)
