from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.users.models import User, CustomerCheckoutState


class UserRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["User"]: ...

    def save(self, user: "User", update_fields: Optional[Iterable[str]] = None) -> "User": ...


class CheckoutStateRepositoryProtocol(Protocol):
    def get_for(self, user_id: int, store_id: int) -> Optional["CustomerCheckoutState"]: ...

    def get_or_create_for(self, user_id: int, store_id: int) -> "CustomerCheckoutState": ...

    def save(self, state: "CustomerCheckoutState", update_fields: Optional[Iterable[str]] = None) -> "CustomerCheckoutState": ...
