"""
Timezone-aware datetime helpers.
- Store and compute instants in UTC in DB.
- Calendar days ("today", work dates, due dates) come from the business time zone (settings.TZ).
"""
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings

UTC = timezone.utc


def business_tz() -> ZoneInfo:
    return ZoneInfo(settings.TZ)


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware). Use for clock_in_time, clock_out_time, approved_at, etc."""
    return datetime.now(UTC)


def today_local() -> date:
    """Current calendar day in the business time zone."""
    return datetime.now(business_tz()).date()


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """If dt is naive, treat as UTC and return timezone-aware UTC. If already aware, convert to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    else:
        dt = dt.astimezone(UTC)
    return dt


def to_local(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert to the business time zone. Naive datetimes are treated as UTC before converting."""
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(business_tz())


def iso_local(dt: Optional[datetime]) -> Optional[str]:
    """Serialize as ISO-8601 with the business zone offset. Use for API response datetime fields."""
    if dt is None:
        return None
    return to_local(dt).isoformat()


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed hours between two instants, rounded to 2 decimals. Naive values are UTC."""
    delta = ensure_utc(end) - ensure_utc(start)
    return round(delta.total_seconds() / 3600, 2)
