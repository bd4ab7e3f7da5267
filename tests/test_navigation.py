from datetime import date

import pytest

from symera.engine.clock import FixedClock
from symera.engine.navigation import (
    Next,
    Previous,
    SelectDate,
    SetViewMode,
    Today,
    ViewState,
    navigate,
)
from symera.engine.window import ViewMode


def test_initial_state(clock):
    state = ViewState.initial(clock)
    assert state.cursor_date == date(2025, 6, 15)
    assert state.selected_date == date(2025, 6, 15)
    assert state.view_mode is ViewMode.MONTH


@pytest.mark.parametrize("mode", list(ViewMode))
@pytest.mark.parametrize("cursor", [
    date(2025, 6, 15),
    date(2025, 1, 31),
    date(2024, 2, 29),
    date(2025, 12, 31),
    date(2025, 3, 30),
])
def test_next_then_previous_restores_cursor(clock, mode, cursor):
    state = ViewState(cursor_date=cursor, view_mode=mode, selected_date=cursor)
    moved = navigate(navigate(state, Next(), clock), Previous(), clock)
    assert moved.cursor_date == cursor


@pytest.mark.parametrize("mode, expected", [
    (ViewMode.DAY, date(2025, 6, 16)),
    (ViewMode.WEEK, date(2025, 6, 22)),
    (ViewMode.MONTH, date(2025, 7, 15)),
])
def test_next_steps_one_unit(clock, mode, expected):
    state = ViewState(cursor_date=date(2025, 6, 15), view_mode=mode, selected_date=date(2025, 6, 1))
    moved = navigate(state, Next(), clock)
    assert moved.cursor_date == expected
    assert moved.selected_date == date(2025, 6, 1)


def test_month_steps_clamp_and_recover(clock):
    state = ViewState(cursor_date=date(2025, 1, 31), view_mode=ViewMode.MONTH, selected_date=date(2025, 1, 31))

    feb = navigate(state, Next(), clock)
    assert feb.cursor_date == date(2025, 2, 28)
    mar = navigate(feb, Next(), clock)
    assert mar.cursor_date == date(2025, 3, 31)
    dec = navigate(state, Previous(), clock)
    assert dec.cursor_date == date(2024, 12, 31)


def test_today_moves_cursor_and_selection():
    clock = FixedClock(date(2025, 6, 15))
    state = ViewState(cursor_date=date(2024, 1, 3), view_mode=ViewMode.WEEK, selected_date=date(2024, 1, 4))
    moved = navigate(state, Today(), clock)
    assert moved.cursor_date == date(2025, 6, 15)
    assert moved.selected_date == date(2025, 6, 15)
    assert moved.view_mode is ViewMode.WEEK


def test_set_view_mode_keeps_cursor(clock):
    state = ViewState.initial(clock)
    moved = navigate(state, SetViewMode(ViewMode.DAY), clock)
    assert moved.view_mode is ViewMode.DAY
    assert moved.cursor_date == state.cursor_date


def test_select_date_does_not_move_cursor(clock):
    state = ViewState.initial(clock)
    moved = navigate(state, SelectDate(date(2025, 7, 2)), clock)
    assert moved.selected_date == date(2025, 7, 2)
    assert moved.cursor_date == state.cursor_date


def test_navigation_returns_new_state(clock):
    state = ViewState.initial(clock)
    moved = navigate(state, Next(), clock)
    assert state.cursor_date == date(2025, 6, 15)
    assert moved is not state


def test_unknown_command_raises(clock):
    with pytest.raises(TypeError):
        navigate(ViewState.initial(clock), "next", clock)
