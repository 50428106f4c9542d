"""Gravity timer that drives :meth:`GameSession.tick`.

The timer has no thread or event loop of its own.  Its owner either feeds it
elapsed milliseconds with :meth:`GravityTimer.advance` (e.g. the frame delta
of a render loop) or calls :meth:`GravityTimer.poll`, which reads the
injected clock.  Tests pass a fake clock and step ticks deterministically.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .game_state import GameSession, SessionState


LOGGER = logging.getLogger(__name__)


class GravityTimer:
    """Fire one gravity step per elapsed fall interval.

    ``clock`` returns the current time in seconds and defaults to
    :func:`time.perf_counter`.  Time only accumulates while the session is
    running; time spent paused never turns into ticks after resuming.
    Whenever the session starts, resets or changes speed the pending time
    is discarded and the new interval starts from zero; there is only ever
    one schedule.
    """

    def __init__(
        self,
        session: GameSession,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.session = session
        self._clock = clock or time.perf_counter
        self.last_ts: Optional[float] = None
        self.drop_accum = 0.0
        self.interval_ms = session.drop_interval_ms
        self.schedule_id = session.schedule_id

    def reschedule(self) -> None:
        """Restart the schedule at the session's current interval."""

        self.interval_ms = self.session.drop_interval_ms
        self.schedule_id = self.session.schedule_id
        self.drop_accum = 0.0
        LOGGER.debug("Gravity rescheduled every %dms", self.interval_ms)

    def set_speed(self, level: int) -> int:
        """Change the session speed and restart the schedule."""

        speed = self.session.set_speed(level)
        self.reschedule()
        return speed

    def reset(self) -> None:
        """Forget the last poll time and any pending time."""

        self.last_ts = None
        self.drop_accum = 0.0
        self.interval_ms = self.session.drop_interval_ms
        self.schedule_id = self.session.schedule_id

    def advance(self, elapsed_ms: float) -> int:
        """Account for ``elapsed_ms`` and return how many ticks fired."""

        if self.session.state is not SessionState.RUNNING:
            return 0
        if self.session.schedule_id != self.schedule_id:
            self.reschedule()
        self.drop_accum += max(0.0, elapsed_ms)
        fired = 0
        while (
            self.drop_accum >= self.interval_ms
            and self.session.state is SessionState.RUNNING
        ):
            self.drop_accum -= self.interval_ms
            self.session.tick()
            fired += 1
        if self.session.state is not SessionState.RUNNING:
            self.drop_accum = 0.0
        return fired

    def poll(self) -> int:
        """Advance by the clock time elapsed since the previous poll."""

        now = self._clock()
        if self.last_ts is None:
            self.last_ts = now
            return 0
        elapsed_ms = (now - self.last_ts) * 1000.0
        self.last_ts = now
        return self.advance(elapsed_ms)
