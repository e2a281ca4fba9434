from datetime import date, timedelta

import pytest

from dual_calendar.api.converter import JalaliDate
from dual_calendar.api.systems import (
    CalendarSystem,
    GregorianAdapter,
    JalaliAdapter,
    get_adapter,
)

GREGORIAN = get_adapter(CalendarSystem.GREGORIAN)
JALALI = get_adapter(CalendarSystem.JALALI)


def test_get_adapter_accepts_enum_and_string():
    assert isinstance(get_adapter("gregorian"), GregorianAdapter)
    assert isinstance(get_adapter(" Jalali "), JalaliAdapter)
    assert get_adapter(CalendarSystem.JALALI) is JALALI
    with pytest.raises(ValueError):
        get_adapter("hijri")


def test_other_system():
    assert CalendarSystem.GREGORIAN.other is CalendarSystem.JALALI
    assert CalendarSystem.JALALI.other is CalendarSystem.GREGORIAN


def test_gregorian_month_and_week_boundaries():
    anchor = date(2024, 3, 15)
    assert GREGORIAN.start_of_month(anchor) == date(2024, 3, 1)
    assert GREGORIAN.end_of_month(anchor) == date(2024, 3, 31)
    # Weeks start on Sunday.
    assert GREGORIAN.start_of_week(date(2024, 3, 1)) == date(2024, 2, 25)
    assert GREGORIAN.end_of_week(date(2024, 3, 31)) == date(2024, 4, 6)
    assert GREGORIAN.start_of_week(date(2024, 3, 3)) == date(2024, 3, 3)


def test_jalali_month_and_week_boundaries():
    anchor = date(2024, 3, 15)  # 25 Esfand 1402
    assert JALALI.start_of_month(anchor) == date(2024, 2, 20)
    assert JALALI.end_of_month(anchor) == date(2024, 3, 19)
    # Weeks start on Saturday.
    assert JALALI.start_of_week(date(2024, 2, 20)) == date(2024, 2, 17)
    assert JALALI.end_of_week(date(2024, 3, 19)) == date(2024, 3, 22)
    assert JALALI.start_of_week(date(2024, 2, 17)) == date(2024, 2, 17)


def test_add_days_is_the_same_in_both_systems():
    anchor = date(2024, 3, 18)
    assert GREGORIAN.add_days(anchor, 3) == JALALI.add_days(anchor, 3) == date(2024, 3, 21)
    assert GREGORIAN.add_days(anchor, -18) == date(2024, 2, 29)


@pytest.mark.parametrize(
    "anchor,amount,expected",
    [
        (date(2024, 1, 31), 1, date(2024, 2, 29)),
        (date(2023, 1, 31), 1, date(2023, 2, 28)),
        (date(2024, 3, 31), -1, date(2024, 2, 29)),
        (date(2024, 12, 15), 1, date(2025, 1, 15)),
        (date(2024, 1, 15), -1, date(2023, 12, 15)),
        (date(2024, 5, 31), 13, date(2025, 6, 30)),
    ],
)
def test_gregorian_add_months_clamps(anchor, amount, expected):
    assert GREGORIAN.add_months(anchor, amount) == expected


@pytest.mark.parametrize(
    "anchor,amount,expected",
    [
        # 31 Shahrivar 1402 -> 30 Mehr 1402
        (JalaliDate(1402, 6, 31), 1, JalaliDate(1402, 7, 30)),
        # 30 Bahman 1402 -> 29 Esfand 1402 (common year)
        (JalaliDate(1402, 11, 30), 1, JalaliDate(1402, 12, 29)),
        # 30 Esfand 1403 (leap) -> 30 Farvardin 1404
        (JalaliDate(1403, 12, 30), 1, JalaliDate(1404, 1, 30)),
        (JalaliDate(1403, 1, 10), -1, JalaliDate(1402, 12, 10)),
        (JalaliDate(1403, 1, 31), -2, JalaliDate(1402, 11, 30)),
    ],
)
def test_jalali_add_months_clamps(anchor, amount, expected):
    shifted = JALALI.add_months(anchor.to_gregorian(), amount)
    assert JALALI.native(shifted) == expected


def test_format_tokens():
    anchor = date(2024, 3, 5)
    assert GREGORIAN.format(anchor, "d") == "5"
    assert GREGORIAN.format(anchor, "yyyy-MM-dd") == "2024-03-05"
    assert GREGORIAN.format(anchor, "MMMM yyyy") == "March 2024"
    assert GREGORIAN.format(anchor, "MMM") == "Mar"
    assert GREGORIAN.format(anchor, "EEE") == "Tue"
    # 15 Esfand 1402
    assert JALALI.format(anchor, "yyyy/M/d") == "1402/12/15"
    assert JALALI.format(anchor, "MMMM yyyy") == "اسفند 1402"
    assert JALALI.format(anchor, "EEE") == "سه‌شنبه"


def test_to_other_system_round_trip_over_a_year():
    start = date(2024, 1, 1)
    for offset in range(400):
        day = start + timedelta(days=offset)
        jalali = GREGORIAN.to_other_system(day)
        assert isinstance(jalali, JalaliDate)
        assert JALALI.to_other_system(jalali) == day
        assert GREGORIAN.to_other_system(JALALI.to_other_system(jalali)) == jalali


def test_weekday_labels_follow_week_start():
    assert GREGORIAN.weekday_labels()[0] == "Sun"
    assert JALALI.weekday_labels()[0] == "شنبه"
    assert len(JALALI.weekday_labels()) == 7
