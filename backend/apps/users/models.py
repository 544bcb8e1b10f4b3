from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    # id, username, email, password, is_active, is_staff, is_superuser, groups, user_permissions are inherited
    # Groups double as customer roles for product ACL.
    email = models.EmailField(unique=True)
    is_search_engine_account = models.BooleanField(default=False)
    # Denormalized flag kept in sync by the cart service
    has_shopping_cart_items = models.BooleanField(default=False)
    discount_coupon_codes = models.JSONField(default=list, blank=True)
    gift_card_coupon_codes = models.JSONField(default=list, blank=True)

    def __str__(self):
        return self.username


class CustomerCheckoutState(models.Model):
    """Per-store checkout selections that become stale whenever the cart changes."""

    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="checkout_states"
    )
    store = models.ForeignKey("stores.Store", on_delete=models.CASCADE)
    checkout_attributes = models.TextField(blank=True, default="")
    selected_shipping_option = models.CharField(max_length=255, blank=True, default="")
    selected_payment_method = models.CharField(max_length=255, blank=True, default="")
    use_reward_points = models.BooleanField(default=False)

    class Meta:
        unique_together = ("user", "store")
        db_table = "customer_checkout_states"

    def __str__(self):
        return f"{self.user_id}@{self.store_id}"
