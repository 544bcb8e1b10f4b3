from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Union
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone


class DateTimeHelper:
    """Time zone conversions between UTC and the store's local time."""

    def __init__(self, store_time_zone: Optional[str] = None):
        name = store_time_zone or getattr(settings, "TIME_ZONE", "UTC") or "UTC"
        self.store_time_zone = ZoneInfo(name)

    def utcnow(self) -> datetime:
        return timezone.now()

    def to_store_time(self, value: datetime) -> datetime:
        if timezone.is_naive(value):
            value = timezone.make_aware(value, ZoneInfo("UTC"))
        return value.astimezone(self.store_time_zone)

    def to_utc(self, value: Union[date, datetime]) -> datetime:
        """Interpret naive values (and plain dates) as store-local time."""
        if not isinstance(value, datetime):
            value = datetime.combine(value, time.min)
        if timezone.is_naive(value):
            value = value.replace(tzinfo=self.store_time_zone)
        return value.astimezone(ZoneInfo("UTC"))

    def store_today_utc(self) -> datetime:
        """Midnight of the current store-local day, expressed in UTC."""
        local_now = self.to_store_time(self.utcnow())
        return self.to_utc(local_now.date())


def ensure_aware_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if timezone.is_naive(value):
        return timezone.make_aware(value, ZoneInfo("UTC"))
    return value.astimezone(ZoneInfo("UTC"))
