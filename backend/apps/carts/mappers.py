from typing import Iterable, List, Optional

from apps.catalog.mappers import ProductMapper

from .dtos import ShoppingCartDTO, ShoppingCartItemDTO
from .models import ShoppingCartItem


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class ShoppingCartItemMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, item: ShoppingCartItem, *, language: Optional[str] = None) -> ShoppingCartItemDTO:
        return ShoppingCartItemDTO(
            id=item.id,
            product=self.product_mapper.to_dto(item.product, language=language),
            cart_type=int(item.cart_type),
            store_id=item.store_id,
            quantity=item.quantity,
            attributes=item.attributes or "",
            customer_entered_price=str(item.customer_entered_price),
            rental_start_date_utc=_iso(item.rental_start_date_utc),
            rental_end_date_utc=_iso(item.rental_end_date_utc),
            updated_on_utc=_iso(item.updated_on_utc) or "",
        )

    def many_to_dto(
        self, items: Iterable[ShoppingCartItem], *, language: Optional[str] = None
    ) -> List[ShoppingCartItemDTO]:
        return [self.to_dto(i, language=language) for i in items]


class ShoppingCartMapper:
    def __init__(self, item_mapper: Optional[ShoppingCartItemMapper] = None) -> None:
        self.item_mapper = item_mapper or ShoppingCartItemMapper()

    def to_dto(
        self,
        customer_id: int,
        cart_type: int,
        store_id: Optional[int],
        items: Iterable[ShoppingCartItem],
        *,
        language: Optional[str] = None,
    ) -> ShoppingCartDTO:
        return ShoppingCartDTO(
            customer_id=customer_id,
            cart_type=int(cart_type),
            store_id=store_id,
            items=self.item_mapper.many_to_dto(items, language=language),
        )
