from typing import Optional

from apps.common.repository import GenericRepository
from .models import ShoppingCartItem


class ShoppingCartItemRepository(GenericRepository[ShoppingCartItem]):
    def __init__(self):
        super().__init__(ShoppingCartItem)

    def _base_queryset(self):
        return self.model.objects.select_related("product", "customer").prefetch_related(
            "product__translations"
        )

    def get(self, **filters):
        return self._base_queryset().filter(**filters).first()

    def list_for_customer(
        self,
        customer_id: int,
        cart_type: Optional[int] = None,
        store_id: Optional[int] = None,
    ):
        qs = self._base_queryset().filter(customer_id=customer_id)
        if cart_type is not None:
            qs = qs.filter(cart_type=cart_type)
        if store_id:
            qs = qs.filter(store_id=store_id)
        return list(qs.order_by("id"))

    def exists_for_customer(self, customer_id: int) -> bool:
        return self.model.objects.filter(customer_id=customer_id).exists()

    def list_updated_before(self, older_than_utc):
        return list(self.model.objects.filter(updated_on_utc__lt=older_than_utc))
