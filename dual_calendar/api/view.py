"""Month view assembly and the endpoint the client calendar talks to."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from . import preferences
from .classifier import classify_cells
from .converter import coerce_gregorian
from .grid import DayCell, MonthWindow, build_grid
from .labels import localize_digits
from .navigation import CalendarViewState, apply_action
from .systems import get_adapter

__all__ = [
    "MonthView",
    "get_month_view",
    "render_month",
]


@dataclass(frozen=True)
class MonthView:
    state: CalendarViewState
    window: MonthWindow
    title: str
    subtitle: str
    weekdays: List[str]
    cells: Tuple[DayCell, ...]

    @property
    def rows(self) -> int:
        return self.window.row_count

    def as_dict(self, localize: bool = False) -> Dict[str, object]:
        """Return a JSON-serialisable payload for the presentation layer.

        With ``localize`` the labels belonging to the Jalali side are rendered
        with Persian digits.
        """

        primary = self.state.primary
        secondary = primary.other

        def primary_text(text: str) -> str:
            return localize_digits(text, primary) if localize else text

        def secondary_text(text: str) -> str:
            return localize_digits(text, secondary) if localize else text

        return {
            "anchor": self.state.anchor.isoformat(),
            "primary": primary.value,
            "secondary": secondary.value,
            "title": primary_text(self.title),
            "subtitle": secondary_text(self.subtitle),
            "weekdays": list(self.weekdays),
            "month_start": self.window.month_start.isoformat(),
            "month_end": self.window.month_end.isoformat(),
            "rows": self.rows,
            "cells": [
                {
                    "date": cell.date.isoformat(),
                    "primary_label": primary_text(cell.primary_label),
                    "secondary_label": secondary_text(cell.secondary_label),
                    "row": cell.row_index,
                    "col": cell.col_index,
                    "in_month": cell.is_in_primary_month,
                    "today": cell.is_today,
                    "first_of_month": cell.is_first_day_of_primary_month,
                    "month_label": cell.month_label,
                    "rounded": {
                        "top_left": cell.corners.top_left,
                        "top_right": cell.corners.top_right,
                        "bottom_left": cell.corners.bottom_left,
                        "bottom_right": cell.corners.bottom_right,
                    },
                }
                for cell in self.cells
            ],
        }


def render_month(state: CalendarViewState, today: Optional[date] = None) -> MonthView:
    """Build and classify the grid for ``state``."""

    primary = get_adapter(state.primary)
    secondary = get_adapter(state.primary.other)
    window, cells = build_grid(state.anchor, primary.system)
    return MonthView(
        state=state,
        window=window,
        title=primary.format(state.anchor, "MMMM yyyy"),
        subtitle=secondary.format(state.anchor, "MMMM yyyy"),
        weekdays=primary.weekday_labels(),
        cells=tuple(classify_cells(window, cells, primary.system, today=today)),
    )


def get_month_view(
    anchor: Optional[str] = None,
    primary: Optional[str] = None,
    action: Optional[str] = None,
    value: Optional[str] = None,
    localize: bool = False,
) -> Dict[str, object]:
    """Apply an optional navigation ``action`` and return the resulting month.

    The endpoint keeps no state: the client sends back the ``anchor`` and
    ``primary`` of the payload it is showing. A missing ``anchor`` means today
    and a missing ``primary`` falls back to the user's preference.
    """

    day = date(*coerce_gregorian(anchor)) if anchor else date.today()
    system = primary or preferences.resolve_calendar().system
    state = CalendarViewState(anchor=day, primary=system)
    if action:
        state = apply_action(state, action, value)
    return render_month(state).as_dict(localize=_truthy(localize))


def _truthy(value) -> bool:
    # Frappe passes form arguments through as strings.
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


get_month_view = preferences._maybe_whitelist(get_month_view)
