from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

from apps.catalog.attributes import dump_blob

from .models import ShoppingCartType

_CART_TYPE_ALIASES = {
    "cart": ShoppingCartType.SHOPPING_CART,
    "shopping_cart": ShoppingCartType.SHOPPING_CART,
    "shoppingcart": ShoppingCartType.SHOPPING_CART,
    "wishlist": ShoppingCartType.WISHLIST,
}


def _to_int(raw: Any) -> Optional[int]:
    try:
        return int(raw) if raw is not None and raw != "" else None
    except (ValueError, TypeError):
        return None


def _to_decimal(raw: Any) -> Decimal:
    if raw is None or raw == "":
        return Decimal("0")
    try:
        return Decimal(str(raw))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def _to_cart_type(raw: Any) -> int:
    if isinstance(raw, str):
        alias = _CART_TYPE_ALIASES.get(raw.strip().lower())
        if alias is not None:
            return int(alias)
    value = _to_int(raw)
    if value in ShoppingCartType.values:
        return value
    return int(ShoppingCartType.SHOPPING_CART)


def _to_datetime(raw: Any) -> Optional[Union[date, datetime]]:
    """Accept ISO date or datetime strings; rental dates are entered in store time."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, (date, datetime)):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            pass
        try:
            return datetime.strptime(text.split("T")[0], "%Y-%m-%d")
        except ValueError:
            return None
    return None


def _attributes_blob(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict):
        return dump_blob(raw)
    return ""


@dataclass
class AddToCartCommand:
    product_id: int
    quantity: int
    cart_type: int
    store_id: Optional[int]
    attributes: str = ""
    customer_entered_price: Decimal = Decimal("0")
    rental_start: Optional[Union[date, datetime]] = None
    rental_end: Optional[Union[date, datetime]] = None

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "AddToCartCommand":
        if not isinstance(payload, dict):
            raise ValueError("Payload must be a dict")
        product_id = _to_int(payload.get("product_id"))
        if not product_id:
            raise ValueError("product_id is required")
        quantity = _to_int(payload.get("quantity"))
        return AddToCartCommand(
            product_id=product_id,
            # Non-positive quantities are kept so the rules can report them
            quantity=1 if quantity is None else quantity,
            cart_type=_to_cart_type(payload.get("cart_type")),
            store_id=_to_int(payload.get("store_id")),
            attributes=_attributes_blob(payload.get("attributes")),
            customer_entered_price=_to_decimal(payload.get("customer_entered_price")),
            rental_start=_to_datetime(payload.get("rental_start")),
            rental_end=_to_datetime(payload.get("rental_end")),
        )


@dataclass
class UpdateCartItemCommand:
    item_id: int
    quantity: int
    attributes: str = ""
    customer_entered_price: Decimal = Decimal("0")
    rental_start: Optional[Union[date, datetime]] = None
    rental_end: Optional[Union[date, datetime]] = None

    @staticmethod
    def from_raw(item_id: int, payload: Dict[str, Any]) -> "UpdateCartItemCommand":
        if not isinstance(payload, dict):
            raise ValueError("Payload must be a dict")
        quantity = _to_int(payload.get("quantity"))
        return UpdateCartItemCommand(
            item_id=int(item_id),
            quantity=0 if quantity is None else quantity,
            attributes=_attributes_blob(payload.get("attributes")),
            customer_entered_price=_to_decimal(payload.get("customer_entered_price")),
            rental_start=_to_datetime(payload.get("rental_start")),
            rental_end=_to_datetime(payload.get("rental_end")),
        )
