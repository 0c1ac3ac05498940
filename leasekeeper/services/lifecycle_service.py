"""
Tenancy lifecycle engine.

Pure functions over dates: lease end and next payment computation, expiry
classification and dashboard aggregation. Nothing here touches the database
or the clock; callers pass ``now`` explicitly so a whole listing can be
classified against one snapshot.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Union

from leasekeeper.enums.duration_unit import DurationUnit
from leasekeeper.enums.tenancy_status import TenancyStatus
from leasekeeper.exceptions import InvalidDurationError
from leasekeeper.utils.date_utils import DateLike, add_months, days_until

# Leases ending within this many days (inclusive) are expiring soon
EXPIRING_SOON_DAYS = 30

_UNIT_ALIASES = {
    "month": DurationUnit.MONTH,
    "months": DurationUnit.MONTH,
    "year": DurationUnit.YEAR,
    "years": DurationUnit.YEAR,
}

_DURATION_PATTERN = re.compile(r"^\s*([+-]?\d+)\s*([A-Za-z]+)\s*$")


@dataclass(frozen=True)
class RentDuration:
    amount: int
    unit: Union[DurationUnit, str] = DurationUnit.MONTH

    @property
    def normalized_unit(self) -> DurationUnit:
        key = self.unit.value if isinstance(self.unit, DurationUnit) else str(self.unit).strip().lower()
        if key not in _UNIT_ALIASES:
            raise InvalidDurationError(self, f"unrecognized unit {self.unit!r}")
        return _UNIT_ALIASES[key]

    @property
    def months(self) -> int:
        unit = self.normalized_unit
        if isinstance(self.amount, bool) or not isinstance(self.amount, int) or self.amount <= 0:
            raise InvalidDurationError(self)
        return self.amount * unit.months

    def __str__(self) -> str:
        unit = self.normalized_unit.value
        return f"{self.amount} {unit}{'' if self.amount == 1 else 's'}"


@dataclass(frozen=True)
class Classification:
    status: TenancyStatus
    days_until_expiry: int
    is_active: bool = True


@dataclass(frozen=True)
class TenancySummary:
    total: int = 0
    active: int = 0
    expiring_soon: int = 0
    expired: int = 0
    monthly_income: float = 0.0


def parse_duration(text: str) -> RentDuration:
    """Parse "12 months", "1 year" or "2 years" into a validated ``RentDuration``."""
    match = _DURATION_PATTERN.match(text or "")
    if not match:
        raise InvalidDurationError(text, "expected '<amount> <month|year>'")
    duration = RentDuration(amount=int(match.group(1)), unit=match.group(2))
    duration.months  # validates amount and unit
    return duration


def compute_lease_end(start: DateLike, duration: Union[RentDuration, str]) -> DateLike:
    if isinstance(duration, str):
        duration = parse_duration(duration)
    return add_months(start, duration.months)


def compute_next_payment(last_payment: DateLike) -> DateLike:
    return add_months(last_payment, 1)


def classify(now: DateLike, rent_end: DateLike, active: bool = True) -> Classification:
    days = days_until(rent_end, now)
    if days < 0:
        status = TenancyStatus.EXPIRED
    elif days <= EXPIRING_SOON_DAYS:
        status = TenancyStatus.EXPIRING
    else:
        status = TenancyStatus.ACTIVE
    return Classification(status=status, days_until_expiry=days, is_active=bool(active))


def summarize(tenancies: Iterable, now: DateLike) -> TenancySummary:
    """
    Aggregate dashboard counts over tenancies.

    Every tenancy counts towards ``total``; only active tenancies count towards
    ``active``, ``expiring_soon``, ``expired`` and ``monthly_income``.
    """
    total = active = expiring_soon = expired = 0
    monthly_income = 0.0
    for tenancy in tenancies:
        total += 1
        if not tenancy.is_active:
            continue
        active += 1
        monthly_income += tenancy.rent_amount or 0
        status = classify(now, tenancy.rent_end, tenancy.is_active).status
        if status is TenancyStatus.EXPIRING:
            expiring_soon += 1
        elif status is TenancyStatus.EXPIRED:
            expired += 1
    return TenancySummary(
        total=total,
        active=active,
        expiring_soon=expiring_soon,
        expired=expired,
        monthly_income=monthly_income,
    )
