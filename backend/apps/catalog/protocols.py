from __future__ import annotations

from typing import Any, Iterable, List, Optional, Protocol, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import (
        CheckoutAttribute,
        Product,
        ProductAttributeCombination,
        ProductAttributeMapping,
        ProductAttributeValue,
        ProductAvailabilityRange,
        ProductWarehouseInventory,
    )


class CacheBackendProtocol(Protocol):
    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...

    def list_by_ids(self, ids: Iterable[int]) -> List["Product"]:
        ...

    def warehouse_inventory(self, product: "Product") -> List["ProductWarehouseInventory"]:
        ...

    def allowed_group_ids(self, product: "Product") -> Set[int]:
        ...

    def store_ids(self, product: "Product") -> Set[int]:
        ...


class AttributeMappingRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["ProductAttributeMapping"]:
        ...

    def list_for_product(self, product_id: int) -> Iterable["ProductAttributeMapping"]:
        ...


class AttributeValueRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["ProductAttributeValue"]:
        ...

    def list_for_mapping(self, mapping_id: int) -> Iterable["ProductAttributeValue"]:
        ...


class CombinationRepositoryProtocol(Protocol):
    def list_for_product(self, product_id: int) -> Iterable["ProductAttributeCombination"]:
        ...


class AvailabilityRangeRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["ProductAvailabilityRange"]:
        ...


class CheckoutAttributeRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["CheckoutAttribute"]:
        ...

    def list_for_store(
        self, store_id: int, exclude_shippable: bool = False
    ) -> Iterable["CheckoutAttribute"]:
        ...
