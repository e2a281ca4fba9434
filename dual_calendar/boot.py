"""Hook implementations that integrate the dual calendar with Frappe."""
from __future__ import annotations

from .api import preferences
from .api.navigation import CalendarViewState
from .api.view import render_month


def build_boot_context(user=None):
    """Return the preference context and the month view for today."""

    context = preferences.get_preference_context(user)
    state = CalendarViewState.for_today(context["primary_calendar"])
    context["month_view"] = render_month(state).as_dict()
    return context


def boot_session(bootinfo):  # pragma: no cover - executed in Frappe runtime
    """Inject the calendar context into the boot payload."""

    context = build_boot_context()
    if isinstance(bootinfo, dict):
        bootinfo.setdefault("dual_calendar", context)
    else:  # ``bootinfo`` is typically a ``frappe._dict``
        setattr(bootinfo, "dual_calendar", context)
