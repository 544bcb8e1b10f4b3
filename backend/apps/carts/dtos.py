from dataclasses import dataclass, field
from typing import List, Optional

from apps.catalog.dtos import ProductDTO


@dataclass
class ShoppingCartItemDTO:
    id: int
    product: ProductDTO
    cart_type: int
    store_id: int
    quantity: int
    attributes: str
    customer_entered_price: str
    rental_start_date_utc: Optional[str]
    rental_end_date_utc: Optional[str]
    updated_on_utc: str


@dataclass
class ShoppingCartDTO:
    customer_id: int
    cart_type: int
    store_id: Optional[int]
    items: List[ShoppingCartItemDTO] = field(default_factory=list)

    @property
    def total_quantity(self) -> int:
        return sum(i.quantity for i in self.items)


@dataclass
class RecurringCycleInfo:
    """Shared schedule of the recurring items in a cart; ``error`` is empty when consistent."""

    error: str = ""
    cycle_length: int = 0
    cycle_period: int = 0
    total_cycles: int = 0
