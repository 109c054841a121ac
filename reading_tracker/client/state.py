"""Progress state and the pure reducer that transforms it.

The engine never mutates state in place. Every change, including the
optimistic update and its rollback, is an event passed through ``apply``.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from reading_tracker.utils.plan_calendar import PLAN_LENGTH_DAYS


@dataclass(frozen=True)
class ProgressState:
    completed: FrozenSet[int] = frozenset()
    in_flight: FrozenSet[int] = frozenset()
    is_loading: bool = False

    @property
    def completed_count(self) -> int:
        return len(self.completed)


@dataclass(frozen=True)
class Reset:
    """No signed-in, approved member: empty progress is the valid state."""


@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class LoadSucceeded:
    rows: Tuple[Mapping[str, Any], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LoadFailed:
    error: Optional[str] = None


@dataclass(frozen=True)
class MarkRequested:
    day: int


@dataclass(frozen=True)
class MarkConfirmed:
    day: int


@dataclass(frozen=True)
class MarkFailed:
    day: int


@dataclass(frozen=True)
class UnmarkRequested:
    day: int


@dataclass(frozen=True)
class UnmarkConfirmed:
    day: int


@dataclass(frozen=True)
class UnmarkFailed:
    day: int


def completed_days_from_rows(rows: Iterable[Mapping[str, Any]], plan_length: int = PLAN_LENGTH_DAYS) -> FrozenSet[int]:
    """Distinct in-plan day numbers present in ``rows``."""
    days = set()
    for row in rows:
        day = int(row["day"])
        if 1 <= day <= plan_length:
            days.add(day)
    return frozenset(days)


def apply(state: ProgressState, event: object) -> ProgressState:
    """Return the state that results from ``event``."""
    if isinstance(event, Reset):
        return ProgressState()
    if isinstance(event, LoadStarted):
        return replace(state, is_loading=True)
    if isinstance(event, LoadSucceeded):
        return replace(state, completed=completed_days_from_rows(event.rows), is_loading=False)
    if isinstance(event, LoadFailed):
        # Keep the last known-good set.
        return replace(state, is_loading=False)

    if isinstance(event, MarkRequested):
        return replace(
            state,
            completed=state.completed | {event.day},
            in_flight=state.in_flight | {event.day},
        )
    if isinstance(event, (MarkConfirmed, MarkFailed, UnmarkConfirmed, UnmarkFailed)) and event.day not in state.in_flight:
        # Outcome of a write issued before a reset.
        return state

    if isinstance(event, MarkConfirmed):
        return replace(
            state,
            completed=state.completed | {event.day},
            in_flight=state.in_flight - {event.day},
        )
    if isinstance(event, MarkFailed):
        return replace(
            state,
            completed=state.completed - {event.day},
            in_flight=state.in_flight - {event.day},
        )

    if isinstance(event, UnmarkRequested):
        return replace(
            state,
            completed=state.completed - {event.day},
            in_flight=state.in_flight | {event.day},
        )
    if isinstance(event, UnmarkConfirmed):
        return replace(
            state,
            completed=state.completed - {event.day},
            in_flight=state.in_flight - {event.day},
        )
    if isinstance(event, UnmarkFailed):
        return replace(
            state,
            completed=state.completed | {event.day},
            in_flight=state.in_flight - {event.day},
        )

    raise TypeError(f"Unknown progress event: {event!r}")


def compute_missed_days(
    completed: Iterable[int],
    current_day_number: int,
    plan_length: int = PLAN_LENGTH_DAYS,
) -> List[int]:
    """Days strictly before ``current_day_number`` with no completion, ascending.

    Days from today onward are not yet due. The bound is today's plan day,
    never the highest completed day.
    """
    done = set(completed)
    upper = min(current_day_number, plan_length + 1)
    return [day for day in range(1, upper) if day not in done]


def progress_percentage(completed_count: int, plan_length: int = PLAN_LENGTH_DAYS) -> float:
    """Unrounded share of the plan completed, 0-100."""
    return completed_count / plan_length * 100
