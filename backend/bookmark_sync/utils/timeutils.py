"""
Timestamp helpers

Stored timestamps are naive local datetimes; the wire format is the
JavaScript Date JSON form (UTC, millisecond precision, trailing 'Z').
"""
from datetime import datetime, timedelta, timezone
from typing import Optional


def start_of_day(moment: datetime) -> datetime:
    """Local midnight at the start of the day containing ``moment``."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def next_midnight(moment: datetime) -> datetime:
    """Local midnight at the start of the day following ``moment``."""
    return start_of_day(moment) + timedelta(days=1)


def start_of_week(moment: datetime) -> datetime:
    """Local midnight of the most recent Sunday."""
    days_since_sunday = (moment.weekday() + 1) % 7
    return start_of_day(moment) - timedelta(days=days_since_sunday)


def to_iso_utc(moment: Optional[datetime]) -> Optional[str]:
    """Render a naive local datetime as an ISO-8601 UTC string."""
    if moment is None:
        return None
    if moment.tzinfo is None:
        moment = moment.astimezone()
    utc = moment.astimezone(timezone.utc)
    return utc.strftime('%Y-%m-%dT%H:%M:%S.') + f'{utc.microsecond // 1000:03d}Z'
