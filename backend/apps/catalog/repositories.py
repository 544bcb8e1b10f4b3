from django.db.models import Q

from apps.common.repository import GenericRepository
from .models import (
    CheckoutAttribute,
    Product,
    ProductAttributeCombination,
    ProductAttributeMapping,
    ProductAttributeValue,
    ProductAvailabilityRange,
)


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def get(self, **filters):
        return (
            self.model.objects.filter(**filters)
            .prefetch_related("translations")
            .first()
        )

    def list_by_ids(self, ids):
        """Products for ``ids`` in the order the ids were given; missing ids are skipped."""
        ids = [int(i) for i in ids]
        if not ids:
            return []
        found = {
            p.id: p
            for p in self.model.objects.filter(id__in=ids).prefetch_related(
                "translations"
            )
        }
        return [found[i] for i in ids if i in found]

    def warehouse_inventory(self, product: Product):
        return list(product.warehouse_inventory.all())

    def allowed_group_ids(self, product: Product):
        return set(product.allowed_groups.values_list("id", flat=True))

    def store_ids(self, product: Product):
        return set(product.stores.values_list("id", flat=True))


class ProductAttributeMappingRepository(GenericRepository[ProductAttributeMapping]):
    def __init__(self):
        super().__init__(ProductAttributeMapping)

    def get(self, **filters):
        return (
            self.model.objects.filter(**filters)
            .select_related("product_attribute")
            .first()
        )

    def list_for_product(self, product_id: int):
        return (
            self.model.objects.filter(product_id=product_id)
            .select_related("product_attribute")
            .order_by("display_order", "id")
        )


class ProductAttributeValueRepository(GenericRepository[ProductAttributeValue]):
    def __init__(self):
        super().__init__(ProductAttributeValue)

    def get(self, **filters):
        return (
            self.model.objects.filter(**filters)
            .select_related("product_attribute_mapping__product_attribute")
            .first()
        )

    def list_for_mapping(self, mapping_id: int):
        return self.model.objects.filter(product_attribute_mapping_id=mapping_id)


class ProductAttributeCombinationRepository(
    GenericRepository[ProductAttributeCombination]
):
    def __init__(self):
        super().__init__(ProductAttributeCombination)

    def list_for_product(self, product_id: int):
        return self.model.objects.filter(product_id=product_id)


class AvailabilityRangeRepository(GenericRepository[ProductAvailabilityRange]):
    def __init__(self):
        super().__init__(ProductAvailabilityRange)


class CheckoutAttributeRepository(GenericRepository[CheckoutAttribute]):
    def __init__(self):
        super().__init__(CheckoutAttribute)

    def list_for_store(self, store_id: int, exclude_shippable: bool = False):
        qs = self.model.objects.filter(
            Q(limited_to_stores=False) | Q(stores__id=store_id)
        ).distinct()
        if exclude_shippable:
            qs = qs.filter(shippable_product_required=False)
        return qs.order_by("display_order", "id")
