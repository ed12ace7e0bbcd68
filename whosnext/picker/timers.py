# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Scoped timer groups for the picker engine.

A spin runs several timers at once (periodic ticks, a once-per-second
countdown and the settle deadline). They are owned by one TimerGroup so
that they start together and are released together: once a group is
closed, none of its callbacks can run again.

Timers are registered on a clock object exposing ``time()`` and
``call_at(when, callback, *args)``. A running asyncio event loop already
satisfies this, and ManualClock provides the same interface on virtual
time so spins can be fast-forwarded.
"""

import heapq
import itertools
import logging
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


class ManualTimerHandle:
    """Handle returned by ManualClock.call_at, mirroring asyncio.TimerHandle."""

    __slots__ = ('when', '_callback', '_args', '_cancelled')

    def __init__(self, when: float, callback: Callable[..., Any], args: tuple):
        self.when = when
        self._callback = callback
        self._args = args
        self._cancelled = False

    def cancel(self):
        self._cancelled = True
        self._callback = None
        self._args = ()

    def cancelled(self) -> bool:
        return self._cancelled

    def _run(self):
        if not self._cancelled:
            self._callback(*self._args)


class ManualClock:
    """Virtual-time clock that only moves when advance() is called.

    Callbacks due at the same instant run in registration order.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)
        self._queue: List[tuple] = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self._now

    def call_at(self, when: float, callback: Callable[..., Any], *args) -> ManualTimerHandle:
        handle = ManualTimerHandle(when, callback, args)
        heapq.heappush(self._queue, (when, next(self._seq), handle))
        return handle

    def call_later(self, delay: float, callback: Callable[..., Any], *args) -> ManualTimerHandle:
        return self.call_at(self._now + delay, callback, *args)

    def advance(self, seconds: float) -> int:
        """Move time forward, running every callback that falls due.

        Callbacks scheduled while advancing run too if they fall inside
        the window.

        Args:
            seconds: Amount of virtual time to move forward.

        Returns:
            Number of callbacks that ran.
        """
        if seconds < 0:
            raise ValueError("Cannot move a clock backwards")

        target = self._now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled():
                continue
            self._now = max(self._now, when)
            handle._run()
            ran += 1
        self._now = target
        return ran

    def pending(self) -> int:
        """Count of scheduled callbacks that have not been cancelled."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled())


class TimerGroup:
    """A set of timers tied to a single deadline.

    Periodic timers are measured from the moment the group was created and
    are never scheduled at or past the deadline. Closing the group cancels
    every outstanding handle; every callback also checks the closed flag
    before running, so nothing fires after close() returns.
    """

    def __init__(self, clock, duration: float):
        """Create a group whose deadline is ``duration`` seconds from now.

        Args:
            clock: Object with time() and call_at(), e.g. an asyncio loop.
            duration: Seconds until the deadline.
        """
        self._clock = clock
        self.started_at = clock.time()
        self.deadline = self.started_at + duration
        self._handles: List[Optional[Any]] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def every(self, interval: float, callback: Callable[[int], Any]):
        """Run ``callback(n)`` at started_at + n * interval, for n = 1, 2, ...

        Stops before the deadline.
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        slot = len(self._handles)
        self._handles.append(None)
        self._arm_periodic(slot, interval, callback, 1)

    def on_deadline(self, callback: Callable[[], Any]):
        """Run ``callback()`` once, exactly at the deadline."""
        slot = len(self._handles)
        self._handles.append(
            self._clock.call_at(self.deadline, self._fire_once, slot, callback)
        )

    def close(self):
        """Cancel every timer in the group. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for handle in self._handles:
            if handle is not None:
                handle.cancel()
        self._handles = []
        logger.debug("Timer group closed")

    def _arm_periodic(self, slot: int, interval: float, callback, n: int):
        when = self.started_at + n * interval
        if when >= self.deadline:
            self._handles[slot] = None
            return
        self._handles[slot] = self._clock.call_at(
            when, self._fire_periodic, slot, interval, callback, n
        )

    def _fire_periodic(self, slot: int, interval: float, callback, n: int):
        if self._closed:
            return
        self._arm_periodic(slot, interval, callback, n + 1)
        callback(n)

    def _fire_once(self, slot: int, callback):
        if self._closed:
            return
        self._handles[slot] = None
        callback()
