"""Progress reconciliation engine.

Keeps the signed-in member's completion set in step with the record store.
Mutations are applied optimistically, rolled back when the store call fails
and followed by a resync ``load`` when they succeed. At most one mutation per
day is outstanding; a second request for the same day is dropped.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from reading_tracker.client.auth_provider import AuthProvider, AuthSession
from reading_tracker.client.config import ClientSettings
from reading_tracker.client.errors import RecordStoreError
from reading_tracker.client.notifications import NotificationCenter
from reading_tracker.client.record_store import RecordStore
from reading_tracker.client.state import (
    LoadFailed,
    LoadStarted,
    LoadSucceeded,
    MarkConfirmed,
    MarkFailed,
    MarkRequested,
    ProgressState,
    Reset,
    UnmarkConfirmed,
    UnmarkFailed,
    UnmarkRequested,
    apply,
    compute_missed_days,
    progress_percentage,
)
from reading_tracker.services.reading_plan_catalog import DayEntry, entries_for_days, entries_for_month
from reading_tracker.utils.plan_calendar import PLAN_LENGTH_DAYS, day_number_for_date, today_in_timezone

logger = logging.getLogger(__name__)

StateListener = Callable[[ProgressState], None]


class ProgressEngine:
    """Owns one member's completion set for the current session."""

    def __init__(
        self,
        store: RecordStore,
        auth: AuthProvider,
        notifications: Optional[NotificationCenter] = None,
        *,
        clock: Optional[Callable[[], date]] = None,
        plan_start: Optional[date] = None,
        plan_timezone: str = "UTC",
        resync_after_mutation: bool = True,
    ):
        self._store = store
        self._auth = auth
        self.notifications = notifications or NotificationCenter()
        self._clock = clock or (lambda: today_in_timezone(plan_timezone))
        self._plan_start = plan_start
        self._resync_after_mutation = resync_after_mutation
        self._state = ProgressState()
        self._load_generation = 0
        self._listeners: List[StateListener] = []

    @classmethod
    def from_settings(
        cls,
        store: RecordStore,
        auth: AuthProvider,
        settings: ClientSettings,
        notifications: Optional[NotificationCenter] = None,
    ) -> "ProgressEngine":
        return cls(
            store,
            auth,
            notifications,
            plan_start=settings.plan_start_date,
            plan_timezone=settings.plan_timezone,
            resync_after_mutation=settings.resync_after_mutation,
        )

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> ProgressState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with the new state after every transition."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _dispatch(self, event: object) -> None:
        self._state = apply(self._state, event)
        for listener in list(self._listeners):
            listener(self._state)

    def _active_session(self) -> Optional[AuthSession]:
        session = self._auth.current_session()
        if session is None or not session.is_approved:
            return None
        return session

    @staticmethod
    def _check_day(day: int) -> None:
        if not 1 <= day <= PLAN_LENGTH_DAYS:
            raise ValueError(f"day must be between 1 and {PLAN_LENGTH_DAYS}, got {day}")

    # ------------------------------------------------------------- operations

    async def load(self) -> None:
        """Replace the completion set with the store's rows for the member.

        Safe to call repeatedly. Failures keep the previous set.
        """
        session = self._active_session()
        self._load_generation += 1
        if session is None:
            self._dispatch(Reset())
            return

        generation = self._load_generation
        self._dispatch(LoadStarted())

        try:
            rows = await self._store.fetch_progress(session.user_id)
        except RecordStoreError as e:
            if generation != self._load_generation:
                return
            logger.error(f"Fetch progress error: {e}")
            self._dispatch(LoadFailed(str(e)))
            self.notifications.error("Error", "Failed to load reading progress")
            return

        if generation != self._load_generation:
            logger.debug(f"Discarding superseded progress load #{generation}")
            return
        self._dispatch(LoadSucceeded(tuple(rows)))

    async def refresh_progress(self) -> None:
        await self.load()

    async def mark_complete(self, day: int) -> bool:
        """Mark ``day`` complete. Returns True when the store confirmed the write."""
        self._check_day(day)
        session = self._active_session()
        if session is None or day in self._state.completed or day in self._state.in_flight:
            return False

        self._dispatch(MarkRequested(day))
        try:
            await self._store.upsert_progress(session.user_id, day, datetime.now(timezone.utc))
        except RecordStoreError as e:
            logger.error(f"Mark complete error for day {day}: {e}")
            self._dispatch(MarkFailed(day))
            self.notifications.error("Failed to mark complete", f"Day {day}: {e}")
            return False

        self._dispatch(MarkConfirmed(day))
        if self._resync_after_mutation:
            await self.load()
        return True

    async def mark_incomplete(self, day: int) -> bool:
        """Clear ``day``. Returns True when the store confirmed the delete."""
        self._check_day(day)
        session = self._active_session()
        if session is None or day not in self._state.completed or day in self._state.in_flight:
            return False

        self._dispatch(UnmarkRequested(day))
        try:
            await self._store.delete_progress(session.user_id, day)
        except RecordStoreError as e:
            logger.error(f"Mark incomplete error for day {day}: {e}")
            self._dispatch(UnmarkFailed(day))
            self.notifications.error("Failed to undo", f"Day {day}: {e}")
            return False

        self._dispatch(UnmarkConfirmed(day))
        if self._resync_after_mutation:
            await self.load()
        return True

    async def toggle(self, day: int) -> bool:
        if day in self._state.completed:
            return await self.mark_incomplete(day)
        return await self.mark_complete(day)

    # ---------------------------------------------------------------- derived

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def in_flight(self) -> frozenset:
        return self._state.in_flight

    def is_completed(self, day: int) -> bool:
        return day in self._state.completed

    @property
    def completed_count(self) -> int:
        return self._state.completed_count

    @property
    def progress_percentage(self) -> float:
        return progress_percentage(self.completed_count)

    def current_day_number(self) -> int:
        return day_number_for_date(self._clock(), self._plan_start)

    @property
    def missed_days(self) -> List[int]:
        """Overdue days without a completion, recomputed from today's date."""
        return compute_missed_days(self._state.completed, self.current_day_number())

    def visible_entries(self, month: Optional[int] = None, missed_only: bool = False) -> List[DayEntry]:
        """Catalog entries for the dashboard list: one month, or only missed days."""
        if missed_only:
            return entries_for_days(self.missed_days)
        return entries_for_month(month or self._clock().month)
