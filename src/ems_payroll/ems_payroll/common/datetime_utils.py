from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterator, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: Optional[str], field_name: str = "Date") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month, the payroll period unit."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValidationError(f"Month out of range: {self.month}")

    @classmethod
    def parse(cls, value: Optional[str], field_name: str = "yearMonth") -> "YearMonth":
        """Parse YYYY-MM."""
        try:
            parsed = datetime.strptime((value or "").strip(), "%Y-%m")
        except ValueError:
            raise ValidationError(f"{field_name} must be in YYYY-MM format")
        return cls(parsed.year, parsed.month)

    @classmethod
    def from_date(cls, value: date) -> "YearMonth":
        return cls(value.year, value.month)

    @classmethod
    def current(cls) -> "YearMonth":
        return cls.from_date(now_utc().date())

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def next(self) -> "YearMonth":
        if self.month == 12:
            return YearMonth(self.year + 1, 1)
        return YearMonth(self.year, self.month + 1)

    def contains(self, value: date) -> bool:
        return value.year == self.year and value.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def iter_months(start: YearMonth, end: YearMonth) -> Iterator[YearMonth]:
    """Yield every month from start to end, both inclusive."""
    if end < start:
        raise ValidationError("End month must not be before start month")
    current = start
    while current <= end:
        yield current
        current = current.next()
