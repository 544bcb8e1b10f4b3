from __future__ import annotations

from django.core.cache import cache

from apps.carts.conf import get_cart_settings

from .access import AclService, PermissionService, StoreMappingService
from .attributes import CheckoutAttributeParser, ProductAttributeParser
from .pricing import CurrencyService, PriceFormatter
from .repositories import (
    AvailabilityRangeRepository,
    CheckoutAttributeRepository,
    ProductAttributeCombinationRepository,
    ProductAttributeMappingRepository,
    ProductAttributeValueRepository,
    ProductRepository,
)
from .services import DateRangeService, ProductAttributeService, ProductService


def build_product_service() -> ProductService:
    return ProductService(products=ProductRepository())


def build_product_attribute_service() -> ProductAttributeService:
    return ProductAttributeService(
        mappings=ProductAttributeMappingRepository(),
        values=ProductAttributeValueRepository(),
        combinations=ProductAttributeCombinationRepository(),
    )


def build_date_range_service(*, disable_cache: bool = False) -> DateRangeService:
    return DateRangeService(
        ranges=AvailabilityRangeRepository(),
        cache_backend=cache,
        disable_cache=disable_cache,
    )


def build_product_attribute_parser(attribute_service=None) -> ProductAttributeParser:
    return ProductAttributeParser(attribute_service or build_product_attribute_service())


def build_checkout_attribute_parser() -> CheckoutAttributeParser:
    return CheckoutAttributeParser(CheckoutAttributeRepository())


def build_acl_service() -> AclService:
    return AclService(products=ProductRepository())


def build_store_mapping_service() -> StoreMappingService:
    return StoreMappingService(products=ProductRepository())


def build_permission_service() -> PermissionService:
    return PermissionService(get_cart_settings().public_permissions)


def build_price_formatter() -> PriceFormatter:
    return PriceFormatter(get_cart_settings().currency_symbol)


def build_currency_service() -> CurrencyService:
    return CurrencyService()
