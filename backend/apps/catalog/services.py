from __future__ import annotations

from typing import Any, List, Optional

from apps.common import get_logger
from .models import Product
from .protocols import (
    AttributeMappingRepositoryProtocol,
    AttributeValueRepositoryProtocol,
    AvailabilityRangeRepositoryProtocol,
    CacheBackendProtocol,
    CombinationRepositoryProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="catalog", layer="service")


def _parse_int_list(raw: Optional[str]) -> List[int]:
    result: List[int] = []
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            result.append(int(part))
        except ValueError:
            continue
    return result


class ProductService:
    def __init__(self, products: ProductRepositoryProtocol):
        self.products = products
        self.logger = logger.bind(service="ProductService")

    def get_product_by_id(self, product_id: Optional[int]) -> Optional[Product]:
        if not product_id:
            return None
        return self.products.get(id=product_id)

    def get_products_by_ids(self, product_ids: List[int]) -> List[Product]:
        if not product_ids:
            return []
        return list(self.products.list_by_ids(product_ids))

    def parse_required_product_ids(self, product: Product) -> List[int]:
        if product is None:
            raise ValueError("product is required")
        return _parse_int_list(product.required_product_ids)

    def parse_allowed_quantities(self, product: Product) -> List[int]:
        if product is None:
            raise ValueError("product is required")
        return _parse_int_list(product.allowed_quantities)

    def get_total_stock_quantity(
        self, product: Product, use_reserved_quantity: bool = True
    ) -> int:
        """Stock on hand, summed over warehouses when the product uses several."""
        if product is None:
            raise ValueError("product is required")
        if not product.use_multiple_warehouses:
            return product.stock_quantity
        total = 0
        for inventory in self.products.warehouse_inventory(product):
            total += inventory.stock_quantity
            if use_reserved_quantity:
                total -= inventory.reserved_quantity
        return total


class ProductAttributeService:
    def __init__(
        self,
        mappings: AttributeMappingRepositoryProtocol,
        values: AttributeValueRepositoryProtocol,
        combinations: CombinationRepositoryProtocol,
    ):
        self.mappings = mappings
        self.values = values
        self.combinations = combinations

    def get_mapping_by_id(self, mapping_id: int):
        return self.mappings.get(id=mapping_id) if mapping_id else None

    def get_mappings_by_product_id(self, product_id: int) -> List[Any]:
        return list(self.mappings.list_for_product(product_id))

    def get_value_by_id(self, value_id: int):
        return self.values.get(id=value_id) if value_id else None

    def get_values(self, mapping_id: int) -> List[Any]:
        return list(self.values.list_for_mapping(mapping_id))

    def get_combinations(self, product_id: int) -> List[Any]:
        return list(self.combinations.list_for_product(product_id))


class DateRangeService:
    def __init__(
        self,
        ranges: AvailabilityRangeRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.ranges = ranges
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="DateRangeService")
        self._cache_prefix = "availability-range"

    def get_availability_range_by_id(self, range_id: Optional[int]):
        if not range_id:
            return None
        if self.disable_cache:
            return self.ranges.get(id=range_id)
        key = f"{self._cache_prefix}:{range_id}"
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Availability range cache hit", cache_key=key)
            return cached
        found = self.ranges.get(id=range_id)
        if found is not None:
            self.cache.set(key, found)
        return found
