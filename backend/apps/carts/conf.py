from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from django.conf import settings


@dataclass(frozen=True)
class ShoppingCartSettings:
    store_time_zone: str = "UTC"
    maximum_shopping_cart_items: int = 1000
    maximum_wishlist_items: int = 1000
    allow_out_of_stock_items_to_be_added_to_wishlist: bool = False
    allow_admins_to_buy_call_for_price_products: bool = True
    remove_required_products: bool = False
    use_links_in_required_product_warnings: bool = True
    product_url_template: str = "/{slug}"
    public_permissions: Tuple[str, ...] = field(
        default=("enable_shopping_cart", "enable_wishlist")
    )
    currency_symbol: str = "$"
    expired_items_days: int = 30

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "ShoppingCartSettings":
        """Build settings from an upper-case keyed dict; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in (raw or {}).items():
            name = str(key).lower()
            if name not in known:
                continue
            if name == "public_permissions":
                value = tuple(value or ())
            kwargs[name] = value
        return cls(**kwargs)


def get_cart_settings() -> ShoppingCartSettings:
    raw = dict(getattr(settings, "SHOPPING_CART", {}) or {})
    raw.setdefault("STORE_TIME_ZONE", getattr(settings, "TIME_ZONE", "UTC"))
    return ShoppingCartSettings.from_mapping(raw)
