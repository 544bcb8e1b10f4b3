import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
        ("stores", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ProductAvailabilityRange",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=400)),
                ("display_order", models.IntegerField(default=0)),
            ],
            options={"db_table": "product_availability_ranges"},
        ),
        migrations.CreateModel(
            name="ProductAttribute",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=400)),
                ("description", models.TextField(blank=True, default="")),
            ],
            options={"db_table": "product_attributes"},
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=400)),
                ("price", models.DecimalField(decimal_places=4, default=0, max_digits=18)),
                ("product_type", models.IntegerField(choices=[(5, "Simple product"), (10, "Grouped product")], default=5)),
                ("published", models.BooleanField(default=True)),
                ("deleted", models.BooleanField(default=False)),
                ("disable_buy_button", models.BooleanField(default=False)),
                ("disable_wishlist_button", models.BooleanField(default=False)),
                ("call_for_price", models.BooleanField(default=False)),
                ("customer_enters_price", models.BooleanField(default=False)),
                ("minimum_customer_entered_price", models.DecimalField(decimal_places=4, default=0, max_digits=18)),
                ("maximum_customer_entered_price", models.DecimalField(decimal_places=4, default=1000, max_digits=18)),
                ("order_minimum_quantity", models.IntegerField(default=1)),
                ("order_maximum_quantity", models.IntegerField(default=10000)),
                ("allowed_quantities", models.CharField(blank=True, default="", max_length=1000)),
                (
                    "manage_inventory_method",
                    models.IntegerField(
                        choices=[
                            (0, "Don't track inventory"),
                            (1, "Track inventory"),
                            (2, "Track inventory by attributes"),
                        ],
                        default=0,
                    ),
                ),
                (
                    "backorder_mode",
                    models.IntegerField(
                        choices=[
                            (0, "No backorders"),
                            (1, "Allow quantity below 0"),
                            (2, "Allow quantity below 0 and notify customer"),
                        ],
                        default=0,
                    ),
                ),
                ("stock_quantity", models.IntegerField(default=0)),
                ("use_multiple_warehouses", models.BooleanField(default=False)),
                ("allow_adding_only_existing_attribute_combinations", models.BooleanField(default=False)),
                ("available_start_date_time_utc", models.DateTimeField(blank=True, null=True)),
                ("available_end_date_time_utc", models.DateTimeField(blank=True, null=True)),
                ("is_gift_card", models.BooleanField(default=False)),
                ("gift_card_type", models.IntegerField(choices=[(0, "Virtual"), (1, "Physical")], default=0)),
                ("is_rental", models.BooleanField(default=False)),
                ("is_recurring", models.BooleanField(default=False)),
                ("recurring_cycle_length", models.IntegerField(default=100)),
                (
                    "recurring_cycle_period",
                    models.IntegerField(
                        choices=[(0, "Days"), (10, "Weeks"), (20, "Months"), (30, "Years")],
                        default=0,
                    ),
                ),
                ("recurring_total_cycles", models.IntegerField(default=10)),
                ("require_other_products", models.BooleanField(default=False)),
                ("required_product_ids", models.CharField(blank=True, default="", max_length=1000)),
                ("automatically_add_required_products", models.BooleanField(default=False)),
                ("is_ship_enabled", models.BooleanField(default=True)),
                ("subject_to_acl", models.BooleanField(default=False)),
                ("limited_to_stores", models.BooleanField(default=False)),
                ("created_on_utc", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_on_utc", models.DateTimeField(auto_now=True)),
                (
                    "allowed_groups",
                    models.ManyToManyField(blank=True, related_name="acl_products", to="auth.group"),
                ),
                (
                    "availability_range",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="products",
                        to="catalog.productavailabilityrange",
                    ),
                ),
                (
                    "stores",
                    models.ManyToManyField(blank=True, related_name="products", to="stores.store"),
                ),
            ],
            options={
                "db_table": "products",
                "indexes": [
                    models.Index(fields=["name"], name="product_name_idx"),
                    models.Index(fields=["published", "deleted"], name="product_visible_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductTranslation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "language",
                    models.CharField(
                        choices=[("en", "English"), ("de", "German"), ("tr", "Turkish")],
                        max_length=10,
                    ),
                ),
                ("name", models.CharField(max_length=400)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "db_table": "product_translations",
                "indexes": [models.Index(fields=["language"], name="product_translation_lang_idx")],
                "unique_together": {("product", "language")},
            },
        ),
        migrations.CreateModel(
            name="ProductWarehouseInventory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("warehouse_name", models.CharField(max_length=255)),
                ("stock_quantity", models.IntegerField(default=0)),
                ("reserved_quantity", models.IntegerField(default=0)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="warehouse_inventory",
                        to="catalog.product",
                    ),
                ),
            ],
            options={"db_table": "product_warehouse_inventory"},
        ),
        migrations.CreateModel(
            name="ProductAttributeMapping",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("text_prompt", models.CharField(blank=True, default="", max_length=400)),
                ("is_required", models.BooleanField(default=False)),
                (
                    "attribute_control_type",
                    models.IntegerField(
                        choices=[
                            (1, "Drop-down list"),
                            (2, "Radio list"),
                            (3, "Checkboxes"),
                            (4, "Textbox"),
                            (10, "Multiline textbox"),
                            (20, "Date picker"),
                            (30, "File upload"),
                            (40, "Color squares"),
                            (45, "Image squares"),
                            (50, "Read-only checkboxes"),
                        ],
                        default=1,
                    ),
                ),
                ("display_order", models.IntegerField(default=0)),
                ("validation_min_length", models.IntegerField(blank=True, null=True)),
                ("validation_max_length", models.IntegerField(blank=True, null=True)),
                ("condition_attributes", models.TextField(blank=True, default="")),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attribute_mappings",
                        to="catalog.product",
                    ),
                ),
                (
                    "product_attribute",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="catalog.productattribute",
                    ),
                ),
            ],
            options={
                "db_table": "product_attribute_mappings",
                "ordering": ["display_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="ProductAttributeValue",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "attribute_value_type",
                    models.IntegerField(choices=[(0, "Simple"), (10, "Associated to product")], default=0),
                ),
                ("name", models.CharField(max_length=400)),
                ("quantity", models.IntegerField(default=1)),
                ("is_pre_selected", models.BooleanField(default=False)),
                ("display_order", models.IntegerField(default=0)),
                (
                    "associated_product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bundled_in_values",
                        to="catalog.product",
                    ),
                ),
                (
                    "product_attribute_mapping",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="values",
                        to="catalog.productattributemapping",
                    ),
                ),
            ],
            options={
                "db_table": "product_attribute_values",
                "ordering": ["display_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="ProductAttributeCombination",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("attributes", models.TextField()),
                ("stock_quantity", models.IntegerField(default=0)),
                ("allow_out_of_stock_orders", models.BooleanField(default=False)),
                ("sku", models.CharField(blank=True, default="", max_length=400)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attribute_combinations",
                        to="catalog.product",
                    ),
                ),
            ],
            options={"db_table": "product_attribute_combinations"},
        ),
        migrations.CreateModel(
            name="CheckoutAttribute",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=400)),
                ("text_prompt", models.CharField(blank=True, default="", max_length=400)),
                ("is_required", models.BooleanField(default=False)),
                ("shippable_product_required", models.BooleanField(default=False)),
                (
                    "attribute_control_type",
                    models.IntegerField(
                        choices=[
                            (1, "Drop-down list"),
                            (2, "Radio list"),
                            (3, "Checkboxes"),
                            (4, "Textbox"),
                            (10, "Multiline textbox"),
                            (20, "Date picker"),
                            (30, "File upload"),
                            (40, "Color squares"),
                            (45, "Image squares"),
                            (50, "Read-only checkboxes"),
                        ],
                        default=1,
                    ),
                ),
                ("display_order", models.IntegerField(default=0)),
                ("validation_min_length", models.IntegerField(blank=True, null=True)),
                ("validation_max_length", models.IntegerField(blank=True, null=True)),
                ("condition_attributes", models.TextField(blank=True, default="")),
                ("limited_to_stores", models.BooleanField(default=False)),
                (
                    "stores",
                    models.ManyToManyField(blank=True, related_name="checkout_attributes", to="stores.store"),
                ),
            ],
            options={
                "db_table": "checkout_attributes",
                "ordering": ["display_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="CheckoutAttributeValue",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=400)),
                ("is_pre_selected", models.BooleanField(default=False)),
                ("display_order", models.IntegerField(default=0)),
                (
                    "checkout_attribute",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="values",
                        to="catalog.checkoutattribute",
                    ),
                ),
            ],
            options={
                "db_table": "checkout_attribute_values",
                "ordering": ["display_order", "id"],
            },
        ),
    ]
