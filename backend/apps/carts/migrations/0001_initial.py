import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("catalog", "0001_initial"),
        ("stores", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ShoppingCartItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("cart_type", models.IntegerField(choices=[(1, "Shopping cart"), (2, "Wishlist")], default=1)),
                ("attributes", models.TextField(blank=True, default="")),
                ("customer_entered_price", models.DecimalField(decimal_places=4, default=0, max_digits=18)),
                ("quantity", models.IntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("rental_start_date_utc", models.DateTimeField(blank=True, null=True)),
                ("rental_end_date_utc", models.DateTimeField(blank=True, null=True)),
                ("created_on_utc", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_on_utc", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="shopping_cart_items",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="catalog.product"),
                ),
                (
                    "store",
                    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="stores.store"),
                ),
            ],
            options={
                "db_table": "shopping_cart_items",
                "permissions": [
                    ("enable_shopping_cart", "Can use the shopping cart"),
                    ("enable_wishlist", "Can use the wishlist"),
                ],
                "indexes": [
                    models.Index(fields=["customer", "cart_type", "store"], name="sci_customer_cart_idx"),
                    models.Index(fields=["updated_on_utc"], name="sci_updated_idx"),
                ],
            },
        ),
    ]
