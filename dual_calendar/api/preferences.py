"""Primary calendar preference shared by the server and the client layers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Literal, Optional

from .systems import CalendarSystem

try:  # pragma: no cover - frappe is unavailable during tests
    import frappe  # type: ignore
except ImportError:  # pragma: no cover - handled via fallback store
    frappe = None  # type: ignore

__all__ = [
    "CalendarSelection",
    "DEFAULT_CALENDAR",
    "VALID_CALENDARS",
    "get_calendar_preference",
    "get_preference_context",
    "get_system_calendar",
    "get_user_calendar",
    "is_jalali_primary",
    "resolve_calendar",
    "set_calendar_preference",
    "set_system_calendar",
    "set_user_calendar",
]

logger = logging.getLogger(__name__)

CalendarSource = Literal["default", "system", "user"]

DEFAULT_CALENDAR = CalendarSystem.GREGORIAN
VALID_CALENDARS = {system.value for system in CalendarSystem}
_PREFERENCE_KEY = "dual_calendar_primary"


@dataclass(frozen=True)
class CalendarSelection:
    """Resolved primary calendar and where the value came from."""

    system: CalendarSystem
    source: CalendarSource

    @property
    def value(self) -> str:
        return self.system.value


_FALLBACK_STORE: Dict[str, Dict[Optional[str], Optional[CalendarSystem]]] = {
    "system": {None: None},
    "user": {},
}


def _normalize_calendar(value) -> Optional[CalendarSystem]:
    if isinstance(value, str):
        try:
            return CalendarSystem(value.strip().lower())
        except ValueError:
            return None
    return None


def _require_calendar(value) -> CalendarSystem:
    normalized = _normalize_calendar(value)
    if normalized is None:
        raise ValueError(
            "calendar must be one of: {}".format(", ".join(sorted(VALID_CALENDARS)))
        )
    return normalized


def _session_user(user: Optional[str]) -> Optional[str]:
    if not user:
        user = getattr(getattr(frappe, "session", None), "user", None)  # type: ignore[attr-defined]
    if not user or user == "Guest":
        return None
    return user


def _read_system_value() -> Optional[CalendarSystem]:
    if frappe:
        return _normalize_calendar(frappe.db.get_default(_PREFERENCE_KEY))  # type: ignore[attr-defined]
    return _FALLBACK_STORE["system"].get(None)


def _write_system_value(calendar: CalendarSystem) -> None:
    logger.debug("storing system primary calendar %s", calendar.value)
    if frappe:
        frappe.db.set_default(_PREFERENCE_KEY, calendar.value)  # type: ignore[attr-defined]
        if hasattr(frappe, "clear_cache"):
            frappe.clear_cache()
        return
    _FALLBACK_STORE["system"][None] = calendar


def _read_user_value(user: Optional[str]) -> Optional[CalendarSystem]:
    if frappe:
        user = _session_user(user)
        if user is None:
            return None
        stored = frappe.db.get_default(_PREFERENCE_KEY, user=user)  # type: ignore[attr-defined]
        return _normalize_calendar(stored)
    if user is None:
        return None
    return _FALLBACK_STORE["user"].get(user)


def _write_user_value(calendar: CalendarSystem, user: Optional[str]) -> None:
    logger.debug("storing primary calendar %s for %s", calendar.value, user or "session user")
    if frappe:
        user = _session_user(user)
        if user is None:
            raise ValueError("Cannot store calendar preference for anonymous sessions")
        frappe.db.set_default(_PREFERENCE_KEY, calendar.value, user=user)  # type: ignore[attr-defined]
        if hasattr(frappe, "defaults") and hasattr(frappe.defaults, "clear_cache"):
            frappe.defaults.clear_cache(user=user)  # type: ignore[attr-defined]
        return
    if user is None:
        raise RuntimeError("user must be provided when frappe is unavailable")
    _FALLBACK_STORE["user"][user] = calendar


def get_system_calendar(*, raw: bool = False) -> str:
    """Return the system-wide primary calendar."""

    stored = _read_system_value()
    if stored is None:
        return "" if raw else DEFAULT_CALENDAR.value
    return stored.value


def set_system_calendar(calendar: str) -> CalendarSelection:
    _write_system_value(_require_calendar(calendar))
    return resolve_calendar()


def get_user_calendar(user: Optional[str] = None) -> Optional[str]:
    stored = _read_user_value(user)
    return stored.value if stored else None


def set_user_calendar(calendar: str, user: Optional[str] = None) -> CalendarSelection:
    _write_user_value(_require_calendar(calendar), user)
    return resolve_calendar(user)


def resolve_calendar(user: Optional[str] = None) -> CalendarSelection:
    """Resolve the primary calendar: user value, then system value, then default."""

    user_value = _read_user_value(user)
    if user_value:
        return CalendarSelection(user_value, "user")

    system_value = _read_system_value()
    if system_value:
        return CalendarSelection(system_value, "system")

    return CalendarSelection(DEFAULT_CALENDAR, "default")


def is_jalali_primary(user: Optional[str] = None) -> bool:
    return resolve_calendar(user).system is CalendarSystem.JALALI


def get_preference_context(user: Optional[str] = None) -> Dict[str, object]:
    """Return a serialisable representation of the resolved preference."""

    resolved = resolve_calendar(user)
    context: Dict[str, object] = {
        "primary_calendar": resolved.value,
        "secondary_calendar": resolved.system.other.value,
        "source": resolved.source,
        "is_jalali_primary": resolved.system is CalendarSystem.JALALI,
    }

    system_raw = get_system_calendar(raw=True)
    if system_raw:
        context["system_calendar"] = system_raw

    user_raw = get_user_calendar(user)
    if user_raw:
        context["user_calendar"] = user_raw

    return context


def set_calendar_preference(scope: str, calendar: str, user: Optional[str] = None) -> Dict[str, object]:
    """Update a primary calendar preference and return the resulting context."""

    normalized_scope = (scope or "user").strip().lower()
    if normalized_scope == "system":
        set_system_calendar(calendar)
        return get_preference_context()
    if normalized_scope == "user":
        set_user_calendar(calendar, user)
        return get_preference_context(user)
    raise ValueError("scope must be either 'system' or 'user'")


def get_calendar_preference(user: Optional[str] = None) -> Dict[str, object]:
    return get_preference_context(user)


def _maybe_whitelist(func):
    """Expose ``func`` over Frappe's RPC layer when Frappe is present."""

    if frappe and hasattr(frappe, "whitelist"):
        return frappe.whitelist()(func)  # type: ignore[attr-defined]
    return func


get_calendar_preference = _maybe_whitelist(get_calendar_preference)
set_calendar_preference = _maybe_whitelist(set_calendar_preference)
