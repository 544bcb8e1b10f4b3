"""Mapping from catalog entities to DTOs."""
from typing import Iterable, List, Optional

from apps.common.i18n import select_translation

from .dtos import ProductDTO
from .models import Product


class ProductMapper:
    @staticmethod
    def to_dto(product: Product, *, language: Optional[str] = None) -> ProductDTO:
        name = product.name
        translations = getattr(product, "translations", None)
        if translations is not None:
            translation = select_translation(
                getattr(translations, "all", lambda: translations)(), language
            )
            if translation is not None:
                name = getattr(translation, "name", name) or name
        return ProductDTO(
            id=product.id,
            name=name,
            price=str(product.price),
            is_gift_card=bool(product.is_gift_card),
            is_rental=bool(product.is_rental),
            is_recurring=bool(product.is_recurring),
            is_ship_enabled=bool(product.is_ship_enabled),
        )

    @staticmethod
    def many_to_dto(
        products: Iterable[Product], *, language: Optional[str] = None
    ) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p, language=language) for p in products]
