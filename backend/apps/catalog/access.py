from __future__ import annotations

from typing import Any, Iterable, Optional

from apps.common import get_logger
from .protocols import ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="access")

ENABLE_SHOPPING_CART = "enable_shopping_cart"
ENABLE_WISHLIST = "enable_wishlist"


class AclService:
    """Products flagged ``subject_to_acl`` are visible only to their allowed customer groups."""

    def __init__(self, products: ProductRepositoryProtocol):
        self.products = products

    def authorize(self, product: Any, customer: Any) -> bool:
        if product is None or customer is None:
            return False
        if not product.subject_to_acl:
            return True
        allowed = self.products.allowed_group_ids(product)
        customer_groups = _customer_group_ids(customer)
        return bool(allowed & customer_groups)


class StoreMappingService:
    def __init__(self, products: ProductRepositoryProtocol):
        self.products = products

    def authorize(self, product: Any, store_id: Optional[int]) -> bool:
        if product is None:
            return False
        if not store_id or not product.limited_to_stores:
            return True
        return store_id in self.products.store_ids(product)


class PermissionService:
    """
    Cart permissions are Django permissions on the carts app.

    Codenames listed in ``public_permissions`` are granted to every customer,
    including guests without any group membership.
    """

    app_label = "carts"

    def __init__(self, public_permissions: Iterable[str] = ()):
        self.public_permissions = frozenset(public_permissions)

    def authorize(self, codename: str, customer: Any) -> bool:
        if codename in self.public_permissions:
            return True
        if customer is None or not getattr(customer, "is_active", True):
            return False
        has_perm = getattr(customer, "has_perm", None)
        if has_perm is None:
            return False
        allowed = has_perm(f"{self.app_label}.{codename}")
        if not allowed:
            logger.debug(
                "Permission denied",
                codename=codename,
                customer_id=getattr(customer, "id", None),
            )
        return allowed


def _customer_group_ids(customer: Any) -> set:
    groups = getattr(customer, "groups", None)
    if groups is None:
        return set()
    values_list = getattr(groups, "values_list", None)
    if values_list is not None:
        return set(values_list("id", flat=True))
    return {g.id for g in groups}
