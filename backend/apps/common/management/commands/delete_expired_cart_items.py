from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.carts.conf import get_cart_settings
from apps.carts.container import build_shopping_cart_service


class Command(BaseCommand):
    help = "Delete shopping cart and wishlist items not updated for the given number of days."

    def add_arguments(self, parser):
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Age in days after which an untouched item expires (defaults to SHOPPING_CART['EXPIRED_ITEMS_DAYS'])",
        )

    def handle(self, *args, **options):
        days = options["days"]
        if days is None:
            days = get_cart_settings().expired_items_days
        if days < 0:
            raise CommandError("--days must not be negative")

        older_than = timezone.now() - timedelta(days=days)
        self.stdout.write(f"Deleting cart items last updated before {older_than.isoformat()}...")
        deleted = build_shopping_cart_service().delete_expired_items(older_than)
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} expired cart item(s)."))
