from __future__ import annotations

from .repositories import CheckoutStateRepository, UserRepository
from .services import CustomerService


def build_customer_service() -> CustomerService:
    return CustomerService(
        users=UserRepository(),
        checkout_states=CheckoutStateRepository(),
    )
