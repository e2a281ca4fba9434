import importlib
import logging
from datetime import date, timedelta

import pytest

from dual_calendar.api import navigation
from dual_calendar.api.navigation import (
    CalendarViewState,
    NavigationController,
    apply_action,
    jump_to_today,
    next_month,
    prev_month,
    select_day,
    set_primary,
    toggle_primary,
)
from dual_calendar.api.systems import CalendarSystem, get_adapter
from dual_calendar.api.view import render_month


def grid_signature(state):
    view = render_month(state, today=date(2000, 1, 1))
    return [(cell.date, cell.is_in_primary_month) for cell in view.cells]


def test_state_normalises_primary():
    state = CalendarViewState(date(2024, 3, 15), "jalali")
    assert state.primary is CalendarSystem.JALALI
    assert CalendarViewState(date(2024, 3, 15)).primary is CalendarSystem.GREGORIAN


def test_next_and_prev_month_gregorian():
    state = CalendarViewState(date(2024, 1, 31), CalendarSystem.GREGORIAN)
    forward = next_month(state)
    assert forward.anchor == date(2024, 2, 29)
    assert forward.primary is CalendarSystem.GREGORIAN
    assert prev_month(forward).anchor == date(2024, 1, 29)
    assert state.anchor == date(2024, 1, 31)


def test_next_month_jalali_moves_by_jalali_month():
    # 25 Esfand 1402 -> 25 Farvardin 1403
    state = CalendarViewState(date(2024, 3, 15), CalendarSystem.JALALI)
    assert next_month(state).anchor == date(2024, 4, 13)
    # 25 Bahman 1402
    assert prev_month(state).anchor == date(2024, 2, 14)


@pytest.mark.parametrize("primary", list(CalendarSystem))
def test_next_then_prev_restores_the_month(primary):
    adapter = get_adapter(primary)
    start = date(2023, 12, 20)
    for offset in range(0, 400, 7):
        state = CalendarViewState(start + timedelta(days=offset), primary)
        restored = prev_month(next_month(state))
        assert adapter.month_of(restored.anchor) == adapter.month_of(state.anchor)
        assert render_month(restored).window == render_month(state).window


def test_toggle_keeps_anchor_and_double_toggle_restores_grid():
    state = CalendarViewState(date(2024, 3, 15), CalendarSystem.GREGORIAN)
    toggled = toggle_primary(state)
    assert toggled.anchor == state.anchor
    assert toggled.primary is CalendarSystem.JALALI
    back = toggle_primary(toggled)
    assert back == state
    assert grid_signature(back) == grid_signature(state)


def test_set_primary():
    state = CalendarViewState(date(2024, 3, 15))
    assert set_primary(state, "gregorian") is state
    assert set_primary(state, CalendarSystem.JALALI).primary is CalendarSystem.JALALI


def test_jump_to_today_and_select_day():
    state = CalendarViewState(date(2020, 5, 5), CalendarSystem.JALALI)
    today = jump_to_today(state, today=date(2024, 3, 15))
    assert today == CalendarViewState(date(2024, 3, 15), CalendarSystem.JALALI)
    assert jump_to_today(state).anchor == date.today()
    assert select_day(state, date(2020, 5, 30)).anchor == date(2020, 5, 30)


@pytest.mark.parametrize("primary", list(CalendarSystem))
def test_jump_to_today_marks_exactly_one_cell(primary):
    state = jump_to_today(CalendarViewState(date(2001, 1, 1), primary))
    view = render_month(state)
    flagged = [cell for cell in view.cells if cell.is_today]
    assert len(flagged) == 1
    adapter = get_adapter(primary)
    assert flagged[0].primary_label == str(adapter.day_of_month(date.today()))
    assert flagged[0].is_in_primary_month


def test_apply_action_dispatch():
    state = CalendarViewState(date(2024, 3, 15))
    assert apply_action(state, "next").anchor == date(2024, 4, 15)
    assert apply_action(state, "PREV").anchor == date(2024, 2, 15)
    assert apply_action(state, "toggle").primary is CalendarSystem.JALALI
    assert apply_action(state, "primary", "jalali").primary is CalendarSystem.JALALI
    assert apply_action(state, "select", "2024-03-02").anchor == date(2024, 3, 2)
    assert apply_action(state, "today").anchor == date.today()


@pytest.mark.parametrize(
    "action,value",
    [("sideways", None), ("", None), ("select", None), ("primary", None), ("primary", "lunar")],
)
def test_apply_action_rejects_bad_input(action, value):
    with pytest.raises(ValueError):
        apply_action(CalendarViewState(date(2024, 3, 15)), action, value)


def test_controller_replaces_state_and_logs(caplog):
    controller = NavigationController(CalendarViewState(date(2024, 3, 15)))
    before = controller.state
    with caplog.at_level(logging.DEBUG, logger=navigation.__name__):
        controller.next_month()
        controller.toggle_primary()
        controller.select_day(date(2024, 4, 2))
    assert before == CalendarViewState(date(2024, 3, 15))
    assert controller.state == CalendarViewState(date(2024, 4, 2), CalendarSystem.JALALI)
    assert "next-month: 2024-03-15/gregorian -> 2024-04-15/gregorian" in caplog.text
    assert "toggle-primary" in caplog.text


def test_controller_full_cycle():
    controller = NavigationController(CalendarViewState(date(2024, 3, 15)))
    controller.prev_month()
    controller.set_primary("jalali")
    controller.apply("next")
    controller.jump_to_today(today=date(2024, 6, 1))
    assert controller.state == CalendarViewState(date(2024, 6, 1), CalendarSystem.JALALI)
    view = controller.view(today=date(2024, 6, 1))
    assert [cell.date for cell in view.cells if cell.is_today] == [date(2024, 6, 1)]


def test_controller_defaults_to_preferred_primary():
    preferences = importlib.reload(importlib.import_module("dual_calendar.api.preferences"))
    preferences.frappe = None
    preferences.set_system_calendar("jalali")
    controller = NavigationController()
    assert controller.state == CalendarViewState(date.today(), CalendarSystem.JALALI)
    assert NavigationController(primary="gregorian").state.primary is CalendarSystem.GREGORIAN
