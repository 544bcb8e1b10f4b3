from django.conf import settings
from django.contrib.auth.models import Group
from django.db import models
from django.utils import timezone

from apps.stores.models import Store

LANGUAGE_CHOICES = getattr(settings, "LANGUAGES", [("en", "English")])


class ProductType(models.IntegerChoices):
    SIMPLE = 5, "Simple product"
    GROUPED = 10, "Grouped product"


class ManageInventoryMethod(models.IntegerChoices):
    DONT_MANAGE_STOCK = 0, "Don't track inventory"
    MANAGE_STOCK = 1, "Track inventory"
    MANAGE_STOCK_BY_ATTRIBUTES = 2, "Track inventory by attributes"


class BackorderMode(models.IntegerChoices):
    NO_BACKORDERS = 0, "No backorders"
    ALLOW_QTY_BELOW_ZERO = 1, "Allow quantity below 0"
    ALLOW_QTY_BELOW_ZERO_AND_NOTIFY = 2, "Allow quantity below 0 and notify customer"


class GiftCardType(models.IntegerChoices):
    VIRTUAL = 0, "Virtual"
    PHYSICAL = 1, "Physical"


class RecurringCyclePeriod(models.IntegerChoices):
    DAYS = 0, "Days"
    WEEKS = 10, "Weeks"
    MONTHS = 20, "Months"
    YEARS = 30, "Years"


class AttributeControlType(models.IntegerChoices):
    DROPDOWN = 1, "Drop-down list"
    RADIO = 2, "Radio list"
    CHECKBOXES = 3, "Checkboxes"
    TEXTBOX = 4, "Textbox"
    MULTILINE_TEXTBOX = 10, "Multiline textbox"
    DATEPICKER = 20, "Date picker"
    FILE_UPLOAD = 30, "File upload"
    COLOR_SQUARES = 40, "Color squares"
    IMAGE_SQUARES = 45, "Image squares"
    READONLY_CHECKBOXES = 50, "Read-only checkboxes"


# Controls whose selections are attribute value ids rather than free text
SELECTABLE_CONTROL_TYPES = frozenset(
    {
        AttributeControlType.DROPDOWN,
        AttributeControlType.RADIO,
        AttributeControlType.CHECKBOXES,
        AttributeControlType.COLOR_SQUARES,
        AttributeControlType.IMAGE_SQUARES,
        AttributeControlType.READONLY_CHECKBOXES,
    }
)

TEXT_CONTROL_TYPES = frozenset(
    {AttributeControlType.TEXTBOX, AttributeControlType.MULTILINE_TEXTBOX}
)


class AttributeValueType(models.IntegerChoices):
    SIMPLE = 0, "Simple"
    ASSOCIATED_TO_PRODUCT = 10, "Associated to product"


class ProductAvailabilityRange(models.Model):
    name = models.CharField(max_length=400)
    display_order = models.IntegerField(default=0)

    class Meta:
        db_table = "product_availability_ranges"

    def __str__(self):
        return self.name


class Product(models.Model):
    name = models.CharField(max_length=400)
    price = models.DecimalField(max_digits=18, decimal_places=4, default=0)
    product_type = models.IntegerField(
        choices=ProductType.choices, default=ProductType.SIMPLE
    )
    published = models.BooleanField(default=True)
    deleted = models.BooleanField(default=False)
    disable_buy_button = models.BooleanField(default=False)
    disable_wishlist_button = models.BooleanField(default=False)
    call_for_price = models.BooleanField(default=False)

    customer_enters_price = models.BooleanField(default=False)
    minimum_customer_entered_price = models.DecimalField(
        max_digits=18, decimal_places=4, default=0
    )
    maximum_customer_entered_price = models.DecimalField(
        max_digits=18, decimal_places=4, default=1000
    )

    order_minimum_quantity = models.IntegerField(default=1)
    order_maximum_quantity = models.IntegerField(default=10000)
    # Comma separated list, e.g. "1, 5, 10"; empty means any quantity
    allowed_quantities = models.CharField(max_length=1000, blank=True, default="")

    manage_inventory_method = models.IntegerField(
        choices=ManageInventoryMethod.choices,
        default=ManageInventoryMethod.DONT_MANAGE_STOCK,
    )
    backorder_mode = models.IntegerField(
        choices=BackorderMode.choices, default=BackorderMode.NO_BACKORDERS
    )
    stock_quantity = models.IntegerField(default=0)
    use_multiple_warehouses = models.BooleanField(default=False)
    availability_range = models.ForeignKey(
        ProductAvailabilityRange,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="products",
    )
    allow_adding_only_existing_attribute_combinations = models.BooleanField(
        default=False
    )
    available_start_date_time_utc = models.DateTimeField(null=True, blank=True)
    available_end_date_time_utc = models.DateTimeField(null=True, blank=True)

    is_gift_card = models.BooleanField(default=False)
    gift_card_type = models.IntegerField(
        choices=GiftCardType.choices, default=GiftCardType.VIRTUAL
    )

    is_rental = models.BooleanField(default=False)

    is_recurring = models.BooleanField(default=False)
    recurring_cycle_length = models.IntegerField(default=100)
    recurring_cycle_period = models.IntegerField(
        choices=RecurringCyclePeriod.choices, default=RecurringCyclePeriod.DAYS
    )
    recurring_total_cycles = models.IntegerField(default=10)

    require_other_products = models.BooleanField(default=False)
    # Comma separated product ids
    required_product_ids = models.CharField(max_length=1000, blank=True, default="")
    automatically_add_required_products = models.BooleanField(default=False)

    is_ship_enabled = models.BooleanField(default=True)

    subject_to_acl = models.BooleanField(default=False)
    allowed_groups = models.ManyToManyField(
        Group, blank=True, related_name="acl_products"
    )
    limited_to_stores = models.BooleanField(default=False)
    stores = models.ManyToManyField(Store, blank=True, related_name="products")

    created_on_utc = models.DateTimeField(default=timezone.now)
    updated_on_utc = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
            models.Index(fields=["published", "deleted"], name="product_visible_idx"),
        ]

    def __str__(self):
        return self.name


class ProductTranslation(models.Model):
    product = models.ForeignKey(
        Product, related_name="translations", on_delete=models.CASCADE
    )
    language = models.CharField(max_length=10, choices=LANGUAGE_CHOICES)
    name = models.CharField(max_length=400)

    class Meta:
        unique_together = ("product", "language")
        db_table = "product_translations"
        indexes = [
            models.Index(fields=["language"], name="product_translation_lang_idx"),
        ]

    def __str__(self):
        return f"{self.product_id}:{self.language}"


class ProductWarehouseInventory(models.Model):
    product = models.ForeignKey(
        Product, related_name="warehouse_inventory", on_delete=models.CASCADE
    )
    warehouse_name = models.CharField(max_length=255)
    stock_quantity = models.IntegerField(default=0)
    reserved_quantity = models.IntegerField(default=0)

    class Meta:
        db_table = "product_warehouse_inventory"

    def __str__(self):
        return f"{self.product_id}@{self.warehouse_name}"


class ProductAttribute(models.Model):
    name = models.CharField(max_length=400)
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "product_attributes"

    def __str__(self):
        return self.name


class ProductAttributeMapping(models.Model):
    product = models.ForeignKey(
        Product, related_name="attribute_mappings", on_delete=models.CASCADE
    )
    product_attribute = models.ForeignKey(ProductAttribute, on_delete=models.CASCADE)
    text_prompt = models.CharField(max_length=400, blank=True, default="")
    is_required = models.BooleanField(default=False)
    attribute_control_type = models.IntegerField(
        choices=AttributeControlType.choices, default=AttributeControlType.DROPDOWN
    )
    display_order = models.IntegerField(default=0)
    validation_min_length = models.IntegerField(null=True, blank=True)
    validation_max_length = models.IntegerField(null=True, blank=True)
    # Serialized attribute blob naming the controlling mapping and its enabling values
    condition_attributes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "product_attribute_mappings"
        ordering = ["display_order", "id"]

    def __str__(self):
        return f"{self.product_id}:{self.product_attribute_id}"

    def is_non_combinable(self) -> bool:
        """Free-text style attributes never take part in stock combinations."""
        return self.attribute_control_type not in SELECTABLE_CONTROL_TYPES

    def validation_rules_allowed(self) -> bool:
        return self.attribute_control_type in TEXT_CONTROL_TYPES or (
            self.attribute_control_type == AttributeControlType.FILE_UPLOAD
        )

    def should_have_values(self) -> bool:
        return self.attribute_control_type in SELECTABLE_CONTROL_TYPES


class ProductAttributeValue(models.Model):
    product_attribute_mapping = models.ForeignKey(
        ProductAttributeMapping, related_name="values", on_delete=models.CASCADE
    )
    attribute_value_type = models.IntegerField(
        choices=AttributeValueType.choices, default=AttributeValueType.SIMPLE
    )
    associated_product = models.ForeignKey(
        Product,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="bundled_in_values",
    )
    name = models.CharField(max_length=400)
    quantity = models.IntegerField(default=1)
    is_pre_selected = models.BooleanField(default=False)
    display_order = models.IntegerField(default=0)

    class Meta:
        db_table = "product_attribute_values"
        ordering = ["display_order", "id"]

    def __str__(self):
        return self.name


class ProductAttributeCombination(models.Model):
    product = models.ForeignKey(
        Product, related_name="attribute_combinations", on_delete=models.CASCADE
    )
    attributes = models.TextField()
    stock_quantity = models.IntegerField(default=0)
    allow_out_of_stock_orders = models.BooleanField(default=False)
    sku = models.CharField(max_length=400, blank=True, default="")

    class Meta:
        db_table = "product_attribute_combinations"

    def __str__(self):
        return f"{self.product_id}:{self.sku or self.pk}"


class CheckoutAttribute(models.Model):
    name = models.CharField(max_length=400)
    text_prompt = models.CharField(max_length=400, blank=True, default="")
    is_required = models.BooleanField(default=False)
    shippable_product_required = models.BooleanField(default=False)
    attribute_control_type = models.IntegerField(
        choices=AttributeControlType.choices, default=AttributeControlType.DROPDOWN
    )
    display_order = models.IntegerField(default=0)
    validation_min_length = models.IntegerField(null=True, blank=True)
    validation_max_length = models.IntegerField(null=True, blank=True)
    condition_attributes = models.TextField(blank=True, default="")
    limited_to_stores = models.BooleanField(default=False)
    stores = models.ManyToManyField(Store, blank=True, related_name="checkout_attributes")

    class Meta:
        db_table = "checkout_attributes"
        ordering = ["display_order", "id"]

    def __str__(self):
        return self.name

    def should_have_values(self) -> bool:
        return self.attribute_control_type in SELECTABLE_CONTROL_TYPES


class CheckoutAttributeValue(models.Model):
    checkout_attribute = models.ForeignKey(
        CheckoutAttribute, related_name="values", on_delete=models.CASCADE
    )
    name = models.CharField(max_length=400)
    is_pre_selected = models.BooleanField(default=False)
    display_order = models.IntegerField(default=0)

    class Meta:
        db_table = "checkout_attribute_values"
        ordering = ["display_order", "id"]

    def __str__(self):
        return self.name
