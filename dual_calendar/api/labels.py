"""Month and weekday names for the two supported calendar systems."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .systems import CalendarSystem

__all__ = [
    "GREGORIAN_MONTHS",
    "GREGORIAN_MONTHS_SHORT",
    "GREGORIAN_WEEKDAYS",
    "JALALI_MONTHS",
    "JALALI_MONTHS_SHORT",
    "JALALI_WEEKDAYS",
    "PERSIAN_DIGITS",
    "localize_digits",
]

GREGORIAN_MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
GREGORIAN_MONTHS_SHORT = [name[:3] for name in GREGORIAN_MONTHS]

# Sunday first.
GREGORIAN_WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

JALALI_MONTHS = [
    "فروردین",
    "اردیبهشت",
    "خرداد",
    "تیر",
    "مرداد",
    "شهریور",
    "مهر",
    "آبان",
    "آذر",
    "دی",
    "بهمن",
    "اسفند",
]
JALALI_MONTHS_SHORT = [
    "فرو",
    "ارد",
    "خرد",
    "تیر",
    "مرد",
    "شهر",
    "مهر",
    "آبا",
    "آذر",
    "دی",
    "بهم",
    "اسف",
]

# Saturday first.
JALALI_WEEKDAYS = [
    "شنبه",
    "یکشنبه",
    "دوشنبه",
    "سه‌شنبه",
    "چهارشنبه",
    "پنج‌شنبه",
    "جمعه",
]

PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
_TO_PERSIAN = str.maketrans("0123456789", PERSIAN_DIGITS)


def localize_digits(text: str, system: "CalendarSystem") -> str:
    """Render Western digits in ``text`` with the numerals of ``system``.

    Only the Jalali system has its own glyphs; Gregorian text is returned
    unchanged.
    """

    if system == "jalali":
        return text.translate(_TO_PERSIAN)
    return text
