"""Month grid construction for the primary calendar system."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple, Union

from .systems import CalendarSystem, get_adapter

__all__ = [
    "Corners",
    "DayCell",
    "MonthWindow",
    "build_grid",
    "month_window",
]


@dataclass(frozen=True)
class MonthWindow:
    """Boundaries of the displayed month and of the whole weeks around it."""

    month_start: date
    month_end: date
    grid_start: date
    grid_end: date

    @property
    def day_count(self) -> int:
        return (self.grid_end - self.grid_start).days + 1

    @property
    def row_count(self) -> int:
        return self.day_count // 7

    def contains(self, value: date) -> bool:
        return self.grid_start <= value <= self.grid_end


@dataclass(frozen=True)
class Corners:
    top_left: bool = False
    top_right: bool = False
    bottom_left: bool = False
    bottom_right: bool = False


@dataclass(frozen=True)
class DayCell:
    date: date
    primary_label: str
    secondary_label: str
    row_index: int
    col_index: int
    is_in_primary_month: bool = False
    is_today: bool = False
    is_first_day_of_primary_month: bool = False
    month_label: Optional[str] = None
    corners: Corners = field(default_factory=Corners)


def month_window(anchor: date, primary: Union[CalendarSystem, str]) -> MonthWindow:
    adapter = get_adapter(primary)
    month_start = adapter.start_of_month(anchor)
    month_end = adapter.end_of_month(month_start)
    return MonthWindow(
        month_start=month_start,
        month_end=month_end,
        grid_start=adapter.start_of_week(month_start),
        grid_end=adapter.end_of_week(month_end),
    )


def build_grid(
    anchor: date, primary: Union[CalendarSystem, str]
) -> Tuple[MonthWindow, List[DayCell]]:
    """Return the window for ``anchor`` and one unclassified cell per day in it.

    Days are stepped with the primary system's arithmetic from the start of
    the first week to the end of the last week, so the sequence always holds
    whole rows of seven.
    """

    adapter = get_adapter(primary)
    secondary = get_adapter(adapter.system.other)
    window = month_window(anchor, adapter.system)

    cells: List[DayCell] = []
    day = window.grid_start
    while day <= window.grid_end:
        row, col = divmod(len(cells), 7)
        cells.append(
            DayCell(
                date=day,
                primary_label=adapter.format(day, "d"),
                secondary_label=secondary.format(day, "d"),
                row_index=row,
                col_index=col,
            )
        )
        day = adapter.add_days(day, 1)
    return window, cells
