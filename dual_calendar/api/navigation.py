"""Calendar view state and the transitions that move it."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import TYPE_CHECKING, Callable, Dict, Optional, Union

from . import preferences
from .converter import coerce_gregorian
from .systems import CalendarSystem, get_adapter

if TYPE_CHECKING:  # pragma: no cover
    from .view import MonthView

__all__ = [
    "ACTIONS",
    "CalendarViewState",
    "NavigationController",
    "apply_action",
    "jump_to_today",
    "next_month",
    "prev_month",
    "select_day",
    "set_primary",
    "toggle_primary",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarViewState:
    """Reference day and primary calendar of one calendar view.

    ``anchor`` is the only stored date; its Jalali fields are always derived
    from it.
    """

    anchor: date
    primary: CalendarSystem = CalendarSystem.GREGORIAN

    def __post_init__(self) -> None:
        object.__setattr__(self, "primary", get_adapter(self.primary).system)

    @classmethod
    def for_today(
        cls, primary: Union[CalendarSystem, str] = CalendarSystem.GREGORIAN
    ) -> "CalendarViewState":
        return cls(anchor=date.today(), primary=get_adapter(primary).system)


def next_month(state: CalendarViewState) -> CalendarViewState:
    adapter = get_adapter(state.primary)
    return replace(state, anchor=adapter.add_months(state.anchor, 1))


def prev_month(state: CalendarViewState) -> CalendarViewState:
    adapter = get_adapter(state.primary)
    return replace(state, anchor=adapter.add_months(state.anchor, -1))


def jump_to_today(state: CalendarViewState, today: Optional[date] = None) -> CalendarViewState:
    return replace(state, anchor=today or date.today())


def toggle_primary(state: CalendarViewState) -> CalendarViewState:
    return replace(state, primary=state.primary.other)


def set_primary(state: CalendarViewState, system: Union[CalendarSystem, str]) -> CalendarViewState:
    system = get_adapter(system).system
    if system is state.primary:
        return state
    return replace(state, primary=system)


def select_day(state: CalendarViewState, day: date) -> CalendarViewState:
    return replace(state, anchor=day)


def _select(state: CalendarViewState, value) -> CalendarViewState:
    if value is None:
        raise ValueError("select requires a date")
    return select_day(state, date(*coerce_gregorian(value)))


def _primary(state: CalendarViewState, value) -> CalendarViewState:
    if value is None:
        raise ValueError("primary requires a calendar system")
    return set_primary(state, value)


ACTIONS: Dict[str, Callable[[CalendarViewState, object], CalendarViewState]] = {
    "next": lambda state, _value: next_month(state),
    "prev": lambda state, _value: prev_month(state),
    "today": lambda state, _value: jump_to_today(state),
    "toggle": lambda state, _value: toggle_primary(state),
    "primary": _primary,
    "select": _select,
}


def apply_action(state: CalendarViewState, action: str, value=None) -> CalendarViewState:
    """Apply a named navigation action, as reported by the client."""

    handler = ACTIONS.get((action or "").strip().lower())
    if handler is None:
        raise ValueError(
            "action must be one of: {}".format(", ".join(sorted(ACTIONS)))
        )
    return handler(state, value)


class NavigationController:
    """Sole owner of a :class:`CalendarViewState`.

    Every operation swaps in a new immutable state; readers holding the
    previous snapshot are unaffected.
    """

    def __init__(self, state: Optional[CalendarViewState] = None, primary=None) -> None:
        if state is None:
            if primary is None:
                primary = preferences.resolve_calendar().system
            state = CalendarViewState.for_today(primary)
        self._state = state

    @property
    def state(self) -> CalendarViewState:
        return self._state

    def _transition(self, name: str, new_state: CalendarViewState) -> CalendarViewState:
        logger.debug(
            "%s: %s/%s -> %s/%s",
            name,
            self._state.anchor.isoformat(),
            self._state.primary.value,
            new_state.anchor.isoformat(),
            new_state.primary.value,
        )
        self._state = new_state
        return new_state

    def next_month(self) -> CalendarViewState:
        return self._transition("next-month", next_month(self._state))

    def prev_month(self) -> CalendarViewState:
        return self._transition("prev-month", prev_month(self._state))

    def jump_to_today(self, today: Optional[date] = None) -> CalendarViewState:
        return self._transition("jump-to-today", jump_to_today(self._state, today))

    def toggle_primary(self) -> CalendarViewState:
        return self._transition("toggle-primary", toggle_primary(self._state))

    def set_primary(self, system: Union[CalendarSystem, str]) -> CalendarViewState:
        return self._transition("set-primary", set_primary(self._state, system))

    def select_day(self, day: date) -> CalendarViewState:
        return self._transition("day-click", select_day(self._state, day))

    def apply(self, action: str, value=None) -> CalendarViewState:
        return self._transition(action, apply_action(self._state, action, value))

    def view(self, today: Optional[date] = None) -> "MonthView":
        from .view import render_month

        return render_month(self._state, today=today)
