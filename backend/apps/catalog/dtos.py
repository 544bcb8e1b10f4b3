from dataclasses import dataclass


@dataclass
class ProductDTO:
    id: int
    name: str
    price: str
    is_gift_card: bool
    is_rental: bool
    is_recurring: bool
    is_ship_enabled: bool
