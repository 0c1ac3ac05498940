from enum import Enum


class DurationUnit(str, Enum):
    MONTH = "month"
    YEAR = "year"

    @property
    def months(self) -> int:
        return 12 if self is DurationUnit.YEAR else 1
