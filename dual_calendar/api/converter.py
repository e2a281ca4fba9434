"""Gregorian ↔ Jalali conversion primitives shared by both calendar systems."""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Tuple, Union

__all__ = [
    "JalaliDate",
    "coerce_gregorian",
    "coerce_jalali",
    "gregorian_month_length",
    "gregorian_to_jalali",
    "is_jalali_leap",
    "jalali_month_length",
    "jalali_to_gregorian",
]

GregorianLike = Union[str, date, datetime, Iterable[int]]

# 1 Farvardin 979 fell on 1600-03-21, day 79 counted from 1600-01-01.
_EPOCH = date(1600, 1, 1)
_EPOCH_OFFSET = 79
_EPOCH_YEAR = 979


@dataclass(frozen=True)
class JalaliDate:
    """Immutable representation of a Jalali (Persian) calendar date."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not (1 <= self.month <= 12):
            raise ValueError("month must be in 1..12 for Jalali calendar")
        max_day = jalali_month_length(self.year, self.month)
        if not (1 <= self.day <= max_day):
            raise ValueError(f"day must be in 1..{max_day} for month {self.month}")

    @classmethod
    def from_gregorian(cls, value: GregorianLike) -> "JalaliDate":
        return gregorian_to_jalali(value)

    def isoformat(self, sep: str = "-") -> str:
        return f"{self.year:04d}{sep}{self.month:02d}{sep}{self.day:02d}"

    def to_gregorian(self) -> date:
        return jalali_to_gregorian((self.year, self.month, self.day))


def _split_parts(value: str, label: str) -> Tuple[int, int, int]:
    tokens = value.strip().replace("/", "-").split("-")
    if len(tokens) != 3:
        raise ValueError(f"Unsupported {label} date string: {value!r}")
    try:
        year, month, day = (int(part) for part in tokens)
    except ValueError as exc:
        raise ValueError(f"Unsupported {label} date string: {value!r}") from exc
    return year, month, day


def _unpack_triple(value, expected: str) -> Tuple[int, int, int]:
    try:
        year, month, day = value
    except (TypeError, ValueError) as exc:
        raise TypeError(f"Expected {expected}, string, or iterable of three integers") from exc
    return int(year), int(month), int(day)


def coerce_gregorian(value: GregorianLike) -> Tuple[int, int, int]:
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.year, value.month, value.day
    if isinstance(value, str):
        return _split_parts(value, "Gregorian")
    return _unpack_triple(value, "a date")


def coerce_jalali(value: Union[str, JalaliDate, Iterable[int]]) -> Tuple[int, int, int]:
    if isinstance(value, JalaliDate):
        return value.year, value.month, value.day
    if isinstance(value, str):
        return _split_parts(value, "Jalali")
    return _unpack_triple(value, "a JalaliDate")


def gregorian_month_length(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def jalali_month_length(year: int, month: int) -> int:
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 30 if is_jalali_leap(year) else 29


def is_jalali_leap(year: int) -> bool:
    return _day_number(year + 1, 1, 1) - _day_number(year, 1, 1) == 366


def _day_number(year: int, month: int, day: int) -> int:
    """Days elapsed since 1 Farvardin 979 (33-year cycle arithmetic)."""
    years = year - _EPOCH_YEAR
    days = 365 * years + years // 33 * 8 + (years % 33 + 3) // 4
    if month <= 7:
        days += 31 * (month - 1)
    else:
        days += 186 + 30 * (month - 7)
    return days + day - 1


def _new_year(year: int) -> date:
    return _EPOCH + timedelta(days=_day_number(year, 1, 1) + _EPOCH_OFFSET)


def gregorian_to_jalali(value: GregorianLike) -> JalaliDate:
    target = date(*coerce_gregorian(value))

    year = target.year - 621
    start_of_year = _new_year(year)
    if target < start_of_year:
        year -= 1
        start_of_year = _new_year(year)

    days = (target - start_of_year).days
    if days < 186:
        month, day = divmod(days, 31)
        return JalaliDate(year, month + 1, day + 1)
    month, day = divmod(days - 186, 30)
    return JalaliDate(year, month + 7, day + 1)


def jalali_to_gregorian(value: Union[str, JalaliDate, Iterable[int]]) -> date:
    year, month, day = coerce_jalali(value)
    if not (1 <= month <= 12) or not (1 <= day <= jalali_month_length(year, month)):
        raise ValueError(f"Invalid Jalali date: {year}/{month}/{day}")
    return _EPOCH + timedelta(days=_day_number(year, month, day) + _EPOCH_OFFSET)
