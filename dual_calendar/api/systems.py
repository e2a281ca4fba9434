"""Uniform date arithmetic over the Gregorian and Jalali calendar systems.

Every adapter works on canonical :class:`datetime.date` values and interprets
them through its own calendar fields. Callers pick an adapter once with
:func:`get_adapter` instead of branching on the calendar at every use.
"""
from __future__ import annotations

import re
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Dict, List, Tuple, Union

from . import labels
from .converter import (
    JalaliDate,
    gregorian_month_length,
    gregorian_to_jalali,
    jalali_month_length,
    jalali_to_gregorian,
)

__all__ = [
    "CalendarAdapter",
    "CalendarSystem",
    "GregorianAdapter",
    "JalaliAdapter",
    "get_adapter",
]


class CalendarSystem(str, Enum):
    GREGORIAN = "gregorian"
    JALALI = "jalali"

    @property
    def other(self) -> "CalendarSystem":
        if self is CalendarSystem.GREGORIAN:
            return CalendarSystem.JALALI
        return CalendarSystem.GREGORIAN


_FORMAT_TOKENS = re.compile(r"yyyy|MMMM|MMM|MM|M|dd|d|EEE")


class CalendarAdapter:
    """Calendar arithmetic for one system.

    Subclasses provide the field mapping (:meth:`fields`, :meth:`from_fields`,
    :meth:`days_in_month`), the native representation and the label tables;
    the month, week and formatting operations are derived from those.
    """

    system: CalendarSystem
    # ``date.weekday()`` index of the first column (Monday is 0).
    week_starts_on: int
    month_names: List[str]
    short_month_names: List[str]
    weekday_names: List[str]

    def fields(self, value: date) -> Tuple[int, int, int]:
        raise NotImplementedError

    def from_fields(self, year: int, month: int, day: int) -> date:
        raise NotImplementedError

    def days_in_month(self, year: int, month: int) -> int:
        raise NotImplementedError

    def native(self, value: date):
        raise NotImplementedError

    def to_other_system(self, value):
        raise NotImplementedError

    def month_of(self, value: date) -> Tuple[int, int]:
        year, month, _ = self.fields(value)
        return year, month

    def day_of_month(self, value: date) -> int:
        return self.fields(value)[2]

    def start_of_month(self, value: date) -> date:
        year, month, _ = self.fields(value)
        return self.from_fields(year, month, 1)

    def end_of_month(self, value: date) -> date:
        year, month, _ = self.fields(value)
        return self.from_fields(year, month, self.days_in_month(year, month))

    def start_of_week(self, value: date) -> date:
        return value - timedelta(days=self.column_of(value))

    def end_of_week(self, value: date) -> date:
        return self.start_of_week(value) + timedelta(days=6)

    def column_of(self, value: date) -> int:
        return (value.weekday() - self.week_starts_on) % 7

    def add_days(self, value: date, amount: int) -> date:
        return value + timedelta(days=amount)

    def add_months(self, value: date, amount: int) -> date:
        """Shift by ``amount`` months, clamping the day to the target month."""

        year, month, day = self.fields(value)
        year, month = divmod(year * 12 + month - 1 + amount, 12)
        month += 1
        return self.from_fields(year, month, min(day, self.days_in_month(year, month)))

    def weekday_labels(self) -> List[str]:
        return list(self.weekday_names)

    def format(self, value: date, pattern: str) -> str:
        year, month, day = self.fields(value)
        render: Dict[str, Callable[[], str]] = {
            "yyyy": lambda: f"{year:04d}",
            "MMMM": lambda: self.month_names[month - 1],
            "MMM": lambda: self.short_month_names[month - 1],
            "MM": lambda: f"{month:02d}",
            "M": lambda: str(month),
            "dd": lambda: f"{day:02d}",
            "d": lambda: str(day),
            "EEE": lambda: self.weekday_names[self.column_of(value)],
        }
        return _FORMAT_TOKENS.sub(lambda match: render[match.group(0)](), pattern)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.system.value}>"


class GregorianAdapter(CalendarAdapter):
    system = CalendarSystem.GREGORIAN
    week_starts_on = 6
    month_names = labels.GREGORIAN_MONTHS
    short_month_names = labels.GREGORIAN_MONTHS_SHORT
    weekday_names = labels.GREGORIAN_WEEKDAYS

    def fields(self, value: date) -> Tuple[int, int, int]:
        return value.year, value.month, value.day

    def from_fields(self, year: int, month: int, day: int) -> date:
        return date(year, month, day)

    def days_in_month(self, year: int, month: int) -> int:
        return gregorian_month_length(year, month)

    def native(self, value: date) -> date:
        return value

    def to_other_system(self, value: date) -> JalaliDate:
        return gregorian_to_jalali(value)


class JalaliAdapter(CalendarAdapter):
    system = CalendarSystem.JALALI
    week_starts_on = 5
    month_names = labels.JALALI_MONTHS
    short_month_names = labels.JALALI_MONTHS_SHORT
    weekday_names = labels.JALALI_WEEKDAYS

    def fields(self, value: date) -> Tuple[int, int, int]:
        converted = gregorian_to_jalali(value)
        return converted.year, converted.month, converted.day

    def from_fields(self, year: int, month: int, day: int) -> date:
        return jalali_to_gregorian((year, month, day))

    def days_in_month(self, year: int, month: int) -> int:
        return jalali_month_length(year, month)

    def native(self, value: date) -> JalaliDate:
        return gregorian_to_jalali(value)

    def to_other_system(self, value: JalaliDate) -> date:
        return value.to_gregorian()


_ADAPTERS: Dict[CalendarSystem, CalendarAdapter] = {
    CalendarSystem.GREGORIAN: GregorianAdapter(),
    CalendarSystem.JALALI: JalaliAdapter(),
}


def get_adapter(system: Union[CalendarSystem, str]) -> CalendarAdapter:
    """Return the adapter for ``system`` (an enum member or its string value)."""

    if isinstance(system, str) and not isinstance(system, CalendarSystem):
        system = CalendarSystem(system.strip().lower())
    return _ADAPTERS[system]
