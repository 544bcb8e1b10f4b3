from __future__ import annotations

from typing import Any, Mapping, Optional

from django.conf import settings
from django.utils import translation
from django.utils.translation import gettext_lazy as _

_DEFAULT_LANGUAGE = (
    (getattr(settings, "LANGUAGE_CODE", "en") or "en").split("-")[0].lower()
)
_SUPPORTED_LANGUAGES = {
    (code or "en").split("-")[0].lower()
    for code, _name in getattr(settings, "LANGUAGES", [("en", "English")])
} or {_DEFAULT_LANGUAGE}


def normalize_language_code(language_code: Optional[str]) -> str:
    """
    Normalize a language code to lowercase without region (~ RFC 5646 style).
    Unknown languages fall back to the project default.
    """

    if not language_code:
        language_code = translation.get_language()
    if not language_code:
        return _DEFAULT_LANGUAGE
    normalized = language_code.split("-")[0].lower()
    return normalized if normalized in _SUPPORTED_LANGUAGES else _DEFAULT_LANGUAGE


def is_supported_language(language_code: Optional[str]) -> bool:
    if not language_code:
        return False
    normalized = language_code.split("-")[0].lower()
    return normalized in _SUPPORTED_LANGUAGES


def get_default_language() -> str:
    return _DEFAULT_LANGUAGE


# Central catalogue of user-visible cart warnings keyed by resource name so
# makemessages can extract them even though they are looked up dynamically.
# Placeholders use str.format positions.
CART_RESOURCES: Mapping[str, Any] = {
    "ShoppingCart.ProductDeleted": _("Product is deleted"),
    "ShoppingCart.ProductUnpublished": _("Product is not published"),
    "ShoppingCart.NotSimpleProduct": _("This is not simple product"),
    "ShoppingCart.BuyingDisabled": _("Buying is disabled for this product"),
    "ShoppingCart.WishlistDisabled": _("Wishlist is disabled for this product"),
    "Products.CallForPrice": _("Call for price"),
    "ShoppingCart.CustomerEnteredPrice.RangeError": _(
        "The price must be from {0} to {1}"
    ),
    "ShoppingCart.MinimumQuantity": _(
        "The minimum quantity allowed for purchase is {0}."
    ),
    "ShoppingCart.MaximumQuantity": _(
        "The maximum quantity allowed for purchase is {0}."
    ),
    "ShoppingCart.AllowedQuantities": _("Allowed quantities for this product: {0}"),
    "ShoppingCart.OutOfStock": _("Out of stock"),
    "ShoppingCart.AvailabilityRange": _("Available in {0}"),
    "ShoppingCart.QuantityExceedsStock": _(
        "Your quantity exceeds stock on hand. The maximum quantity that can be added is {0}."
    ),
    "ShoppingCart.NotAvailable": _("Product is not available"),
    "ShoppingCart.AttributeError": _("Attribute error"),
    "ShoppingCart.SelectAttribute": _("Please select {0}"),
    "ShoppingCart.ReadOnlyValuesChanged": _("You cannot change read-only values"),
    "ShoppingCart.TextboxMinimumLength": _("{0} : minimum length is {1} chars"),
    "ShoppingCart.TextboxMaximumLength": _("{0} : maximum length is {1} chars"),
    "ShoppingCart.AssociatedAttributeWarning": _("{0}. {1}. {2}"),
    "ShoppingCart.AssociatedProductMissing": _(
        "Associated product cannot be loaded - {0}"
    ),
    "ShoppingCart.RecipientNameError": _("Enter valid recipient name"),
    "ShoppingCart.RecipientEmailError": _("Enter valid recipient email"),
    "ShoppingCart.SenderNameError": _("Enter valid sender name"),
    "ShoppingCart.SenderEmailError": _("Enter valid sender email"),
    "ShoppingCart.Rental.EnterStartDate": _("Enter rental start date"),
    "ShoppingCart.Rental.EnterEndDate": _("Enter rental end date"),
    "ShoppingCart.Rental.StartDateLessEndDate": _(
        "Rental start date should be less than end date"
    ),
    "ShoppingCart.Rental.StartDateShouldBeFuture": _(
        "Rental start date should be the future date"
    ),
    "ShoppingCart.RequiredProductWarning": _(
        "This product requires the following product is added to the cart in the quantity of {1}: {0}"
    ),
    "ShoppingCart.RequiredProductUpdateWarning": _(
        "This product is required in the quantity of {0}"
    ),
    "ShoppingCart.CannotLoadProduct": _("Product (Id={0}) cannot be loaded"),
    "ShoppingCart.CannotMixStandardAndAutoshipProducts": _(
        "Your cart has standard and auto-ship (recurring) items. Only one product type is allowed per order."
    ),
    "ShoppingCart.ConflictingShipmentSchedules": _(
        "Your cart has auto-ship (recurring) items with conflicting shipment schedules. Only one auto-ship schedule is allowed per order."
    ),
    "ShoppingCart.QuantityShouldPositive": _("Quantity should be positive"),
    "ShoppingCart.MaximumShoppingCartItems": _(
        "The maximum number of distinct products allowed in the cart is {0}."
    ),
    "ShoppingCart.MaximumWishlistItems": _(
        "The maximum number of distinct products allowed in the wishlist is {0}."
    ),
    "ShoppingCart.CartDisabled": _("Shopping cart is disabled"),
    "ShoppingCart.WishlistDisabledForCustomer": _("Wishlist is disabled"),
    "ShoppingCart.SearchEngineCannotAdd": _("Search engine can't add to cart"),
}


def select_translation(translations, language: Optional[str]):
    """Pick the translation row for ``language``, falling back to the default language."""
    if not translations:
        return None
    normalized_target = normalize_language_code(language)
    default_language = get_default_language()
    fallback = None
    for row in translations:
        lang = normalize_language_code(getattr(row, "language", None))
        if lang == normalized_target:
            return row
        if fallback is None and lang == default_language:
            fallback = row
    return fallback


class LocalizationService:
    """Resolves resource strings and localized entity fields for the active language."""

    def __init__(
        self,
        resources: Optional[Mapping[str, Any]] = None,
        language: Optional[str] = None,
    ):
        self.resources = resources if resources is not None else CART_RESOURCES
        self.language = language

    def get_resource(self, key: str) -> str:
        # Unknown keys render as the key itself so a missing entry stays visible.
        value = self.resources.get(key)
        if value is None:
            return key
        if self.language:
            with translation.override(normalize_language_code(self.language)):
                return str(value)
        return str(value)

    def format(self, key: str, *args: Any) -> str:
        return self.get_resource(key).format(*args)

    def get_localized(self, entity: Any, field: str, default: str = "") -> str:
        if entity is None:
            return default
        value = getattr(entity, field, default)
        translations = getattr(entity, "translations", None)
        if translations is not None:
            rows = getattr(translations, "all", lambda: translations)()
            row = select_translation(rows, self.language)
            if row is not None:
                translated = getattr(row, field, None)
                if translated:
                    value = translated
        return value if value is not None else default


__all__ = [
    "CART_RESOURCES",
    "LocalizationService",
    "normalize_language_code",
    "is_supported_language",
    "get_default_language",
    "select_translation",
]
