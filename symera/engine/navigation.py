"""View state and the navigation commands that move it.

Every transition is a pure function from one ViewState to the next; the
only outside input is the Clock consulted by Today.
"""

import calendar
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from symera.engine.clock import Clock
from symera.engine.days import DateLike, as_day
from symera.engine.window import ViewMode


@dataclass(frozen=True)
class ViewState:
    cursor_date: date
    view_mode: ViewMode
    selected_date: date
    # Day of month that month steps aim for (the cursor's own day when None);
    # keeps Jan 31 -> Feb 28 -> Jan 31 reversible.
    anchor_day: Optional[int] = None

    @classmethod
    def initial(cls, clock: Clock, view_mode: ViewMode = ViewMode.MONTH) -> "ViewState":
        today = clock.today()
        return cls(cursor_date=today, view_mode=view_mode, selected_date=today)


@dataclass(frozen=True)
class Today:
    pass


@dataclass(frozen=True)
class Previous:
    pass


@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class SetViewMode:
    mode: ViewMode


@dataclass(frozen=True)
class SelectDate:
    day: DateLike


Command = Union[Today, Previous, Next, SetViewMode, SelectDate]


def _step(state: ViewState, direction: int) -> ViewState:
    cursor = state.cursor_date

    if state.view_mode is ViewMode.MONTH:
        anchor = state.anchor_day or cursor.day
        first = cursor.replace(day=1) + relativedelta(months=direction)
        last_day = calendar.monthrange(first.year, first.month)[1]
        return replace(state, cursor_date=first.replace(day=min(anchor, last_day)), anchor_day=anchor)

    days = 7 if state.view_mode is ViewMode.WEEK else 1
    moved = cursor + timedelta(days=days * direction)
    return replace(state, cursor_date=moved, anchor_day=None)


def navigate(state: ViewState, command: Command, clock: Clock) -> ViewState:
    """Apply one navigation command and return the new state."""
    if isinstance(command, Today):
        today = clock.today()
        return replace(state, cursor_date=today, selected_date=today, anchor_day=None)

    if isinstance(command, Previous):
        return _step(state, -1)

    if isinstance(command, Next):
        return _step(state, 1)

    if isinstance(command, SetViewMode):
        return replace(state, view_mode=command.mode)

    if isinstance(command, SelectDate):
        return replace(state, selected_date=as_day(command.day))

    raise TypeError(f"unknown navigation command: {command!r}")
