"""Per-cell flags derived from a built month grid."""
from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import List, Optional, Sequence, Union

from .grid import Corners, DayCell, MonthWindow
from .systems import CalendarSystem, get_adapter

__all__ = [
    "classify_cells",
    "corner_flags",
]


def corner_flags(index: int, row_count: int, in_month: Sequence[bool]) -> Corners:
    """Return the rounded corners of the cell at ``index``.

    A cell only looks at its own position and at one neighbour: the next day
    for the right-hand corner, the cell one row below for the left-hand one.
    Positions past the end of the grid count as outside the month. Since the
    month always ends in the last row, the neighbour test only fires there and
    exactly the four outer corners of the grid are rounded.
    """

    row, col = divmod(index, 7)
    last_row = row == row_count - 1

    def outside(position: int) -> bool:
        return position >= len(in_month) or not in_month[position]

    return Corners(
        top_left=row == 0 and col == 0,
        top_right=row == 0 and col == 6,
        bottom_left=col == 0 and (last_row or outside(index + 7)),
        bottom_right=col == 6 and (last_row or outside(index + 1)),
    )


def classify_cells(
    window: MonthWindow,
    cells: Sequence[DayCell],
    primary: Union[CalendarSystem, str],
    today: Optional[date] = None,
) -> List[DayCell]:
    """Return ``cells`` annotated with month, today, first-day and corner flags."""

    adapter = get_adapter(primary)
    if today is None:
        today = date.today()

    current = adapter.month_of(window.month_start)
    in_month = [adapter.month_of(cell.date) == current for cell in cells]
    row_count = len(cells) // 7

    classified: List[DayCell] = []
    for index, cell in enumerate(cells):
        first = adapter.day_of_month(cell.date) == 1
        classified.append(
            replace(
                cell,
                is_in_primary_month=in_month[index],
                is_today=cell.date == today,
                is_first_day_of_primary_month=first,
                month_label=adapter.format(cell.date, "MMM") if first else None,
                corners=corner_flags(index, row_count, in_month),
            )
        )
    return classified
