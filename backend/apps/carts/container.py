from __future__ import annotations

from typing import Any, Optional

from apps.catalog.container import (
    build_acl_service,
    build_checkout_attribute_parser,
    build_currency_service,
    build_date_range_service,
    build_permission_service,
    build_price_formatter,
    build_product_attribute_parser,
    build_product_attribute_service,
    build_product_service,
    build_store_mapping_service,
)
from apps.catalog.mappers import ProductMapper
from apps.catalog.repositories import CheckoutAttributeRepository
from apps.common.dates import DateTimeHelper
from apps.common.events import EventPublisher
from apps.common.i18n import LocalizationService
from apps.stores.context import WorkContext
from apps.users.container import build_customer_service

from .conf import get_cart_settings
from .mappers import ShoppingCartItemMapper, ShoppingCartMapper
from .repositories import ShoppingCartItemRepository
from .services import ShoppingCartService


def build_shopping_cart_service(
    *,
    store_id: Optional[int] = None,
    impersonated_by: Optional[Any] = None,
    language: Optional[str] = None,
) -> ShoppingCartService:
    cart_settings = get_cart_settings()
    work_context = WorkContext.default(
        current_store_id=store_id,
        original_customer_if_impersonated=impersonated_by,
        language=language,
    )
    attribute_service = build_product_attribute_service()
    checkout_parser = build_checkout_attribute_parser()
    return ShoppingCartService(
        items=ShoppingCartItemRepository(),
        customer_service=build_customer_service(),
        product_service=build_product_service(),
        attribute_service=attribute_service,
        attribute_parser=build_product_attribute_parser(attribute_service),
        checkout_parser=checkout_parser,
        checkout_attributes=CheckoutAttributeRepository(),
        date_ranges=build_date_range_service(),
        acl=build_acl_service(),
        store_mapping=build_store_mapping_service(),
        permissions=build_permission_service(),
        currency=build_currency_service(),
        price_formatter=build_price_formatter(),
        events=EventPublisher(sender=ShoppingCartService),
        cart_mapper=ShoppingCartMapper(ShoppingCartItemMapper(ProductMapper())),
        cart_settings=cart_settings,
        work_context=work_context,
        localization=LocalizationService(language=language),
        dates=DateTimeHelper(cart_settings.store_time_zone),
    )
