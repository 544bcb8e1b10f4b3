from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.catalog.models import Product
from apps.stores.models import Store
from apps.users.models import User


class ShoppingCartType(models.IntegerChoices):
    SHOPPING_CART = 1, "Shopping cart"
    WISHLIST = 2, "Wishlist"


class ShoppingCartItem(models.Model):
    customer = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="shopping_cart_items"
    )
    product = models.ForeignKey(Product, on_delete=models.CASCADE)
    store = models.ForeignKey(Store, on_delete=models.CASCADE)
    cart_type = models.IntegerField(
        choices=ShoppingCartType.choices, default=ShoppingCartType.SHOPPING_CART
    )
    # Serialized attribute selection, see apps.catalog.attributes
    attributes = models.TextField(blank=True, default="")
    customer_entered_price = models.DecimalField(
        max_digits=18, decimal_places=4, default=0
    )
    quantity = models.IntegerField(validators=[MinValueValidator(1)])
    rental_start_date_utc = models.DateTimeField(null=True, blank=True)
    rental_end_date_utc = models.DateTimeField(null=True, blank=True)
    created_on_utc = models.DateTimeField(default=timezone.now)
    updated_on_utc = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "shopping_cart_items"
        indexes = [
            models.Index(
                fields=["customer", "cart_type", "store"], name="sci_customer_cart_idx"
            ),
            models.Index(fields=["updated_on_utc"], name="sci_updated_idx"),
        ]
        permissions = [
            ("enable_shopping_cart", "Can use the shopping cart"),
            ("enable_wishlist", "Can use the wishlist"),
        ]

    def __str__(self):
        return f"{self.get_cart_type_display()} item {self.pk} ({self.product_id} x{self.quantity})"
