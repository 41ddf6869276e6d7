"""Wall-clock aligned refresh driver."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta

logger = logging.getLogger(__name__)


def next_boundary(now: datetime, period_minutes: int = 30) -> datetime:
    """Return the first wall-clock boundary strictly after ``now``.

    Boundaries are multiples of ``period_minutes`` past the hour, so the
    default period fires at ``:00`` and ``:30``.
    """
    floor = now.replace(minute=0, second=0, microsecond=0)
    elapsed = now - floor
    period = timedelta(minutes=period_minutes)
    steps = elapsed // period + 1
    return floor + steps * period


class RefreshScheduler:
    """Run ``callback`` on every boundary, or immediately when triggered.

    A failing callback is logged and the schedule carries on.
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[None]],
        period_minutes: int = 30,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if period_minutes <= 0:
            raise ValueError("period_minutes must be positive")
        self.callback = callback
        self.period_minutes = period_minutes
        self._clock = clock or (lambda: datetime.now(tz=UTC))
        self._manual = asyncio.Event()
        self.runs = 0

    def trigger(self) -> None:
        """Request an immediate refresh."""
        self._manual.set()

    def next_run_at(self) -> datetime:
        return next_boundary(self._clock(), self.period_minutes)

    def seconds_until_next(self) -> float:
        now = self._clock()
        return max(0.0, (next_boundary(now, self.period_minutes) - now).total_seconds())

    async def run(self, max_runs: int | None = None, run_immediately: bool = True) -> None:
        if run_immediately:
            await self._refresh()
        while max_runs is None or self.runs < max_runs:
            try:
                await asyncio.wait_for(self._manual.wait(), timeout=self.seconds_until_next())
            except TimeoutError:
                pass
            self._manual.clear()
            await self._refresh()

    async def _refresh(self) -> None:
        self.runs += 1
        try:
            await self.callback()
        except Exception:
            logger.exception("scheduled refresh failed")
