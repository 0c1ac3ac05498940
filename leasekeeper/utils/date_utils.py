import math
from datetime import date, datetime, time, tzinfo
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime]

SECONDS_PER_DAY = 24 * 60 * 60


def as_datetime(value: DateLike, tz: Optional[tzinfo] = None) -> datetime:
    """Promote a date to midnight; attach ``tz`` to naive values when given."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None and tz is not None:
        value = value.replace(tzinfo=tz)
    return value


def add_months(value: DateLike, months: int) -> DateLike:
    # relativedelta clamps to the last day of shorter months
    return value + relativedelta(months=months)


def days_until(target: DateLike, now: DateLike) -> int:
    """Whole days from ``now`` to ``target``, rounded up."""
    now_dt = as_datetime(now)
    target_dt = as_datetime(target, now_dt.tzinfo)
    if now_dt.tzinfo is None and target_dt.tzinfo is not None:
        now_dt = now_dt.replace(tzinfo=target_dt.tzinfo)
    delta = target_dt - now_dt
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)
