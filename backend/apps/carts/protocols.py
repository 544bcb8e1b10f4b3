from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List, Optional, Protocol, TYPE_CHECKING

from .models import ShoppingCartItem

if TYPE_CHECKING:
    from apps.carts.dtos import ShoppingCartDTO
    from apps.catalog.models import Product
    from apps.users.models import User


class ShoppingCartItemRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[ShoppingCartItem]:
        ...

    def create(self, **data) -> ShoppingCartItem:
        ...

    def save(self, item: ShoppingCartItem, update_fields: Optional[Iterable[str]] = None) -> ShoppingCartItem:
        ...

    def delete(self, item: ShoppingCartItem) -> None:
        ...

    def list_for_customer(
        self,
        customer_id: int,
        cart_type: Optional[int] = None,
        store_id: Optional[int] = None,
    ) -> List[ShoppingCartItem]:
        ...

    def exists_for_customer(self, customer_id: int) -> bool:
        ...

    def list_updated_before(self, older_than_utc: datetime) -> List[ShoppingCartItem]:
        ...


class CustomerServiceProtocol(Protocol):
    def update_customer(self, customer: "User", fields: Optional[Iterable[str]] = None) -> "User":
        ...

    def reset_checkout_data(self, customer: "User", store_id: int) -> None:
        ...

    def get_checkout_attributes(self, customer: "User", store_id: int) -> str:
        ...

    def save_checkout_attributes(self, customer: "User", store_id: int, attributes: str) -> None:
        ...

    def parse_applied_discount_coupon_codes(self, customer: "User") -> List[str]:
        ...

    def parse_applied_gift_card_coupon_codes(self, customer: "User") -> List[str]:
        ...

    def apply_discount_coupon_code(self, customer: "User", code: str) -> None:
        ...

    def apply_gift_card_coupon_code(self, customer: "User", code: str) -> None:
        ...


class ProductServiceProtocol(Protocol):
    def get_product_by_id(self, product_id: Optional[int]) -> Optional["Product"]:
        ...

    def get_products_by_ids(self, product_ids: List[int]) -> List["Product"]:
        ...

    def parse_required_product_ids(self, product: "Product") -> List[int]:
        ...

    def parse_allowed_quantities(self, product: "Product") -> List[int]:
        ...

    def get_total_stock_quantity(self, product: "Product", use_reserved_quantity: bool = True) -> int:
        ...


class ProductAttributeServiceProtocol(Protocol):
    def get_mapping_by_id(self, mapping_id: int) -> Any:
        ...

    def get_mappings_by_product_id(self, product_id: int) -> List[Any]:
        ...

    def get_value_by_id(self, value_id: int) -> Any:
        ...

    def get_values(self, mapping_id: int) -> List[Any]:
        ...

    def get_combinations(self, product_id: int) -> List[Any]:
        ...


class DateRangeServiceProtocol(Protocol):
    def get_availability_range_by_id(self, range_id: Optional[int]) -> Any:
        ...


class CheckoutAttributeRepositoryProtocol(Protocol):
    def get(self, **filters) -> Any:
        ...

    def list_for_store(self, store_id: int, exclude_shippable: bool = False) -> Iterable[Any]:
        ...


class EventPublisherProtocol(Protocol):
    def entity_inserted(self, entity: Any) -> Any:
        ...

    def entity_updated(self, entity: Any) -> Any:
        ...

    def entity_deleted(self, entity: Any) -> Any:
        ...


class ShoppingCartMapperProtocol(Protocol):
    def to_dto(
        self,
        customer_id: int,
        cart_type: int,
        store_id: Optional[int],
        items: Iterable[ShoppingCartItem],
        *,
        language: Optional[str] = None,
    ) -> "ShoppingCartDTO":
        ...
