# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Timed draw state machine.

A draw request starts a spin: ticks every tick_interval, a countdown every
countdown_interval, and a single settle deadline ``duration`` seconds
after the request. At the deadline one entry is chosen uniformly from the
eligible set captured at request time, appended to the history, and
announced. The state then returns to idle.

A spin always runs to completion. There is no cancel operation; only
close() (engine teardown) releases the timers without settling.
"""

import asyncio
import logging
import random
from typing import Any, Callable, List, Optional, Sequence, TYPE_CHECKING

from whosnext.picker.models import DrawState
from whosnext.picker.timers import TimerGroup

if TYPE_CHECKING:
    from whosnext.picker.draw.history import SelectionHistory

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 0.1
DEFAULT_COUNTDOWN_INTERVAL = 1.0


class DrawScheduler:
    """Runs one spin at a time and commits its winner to the history.

    Listeners are plain callables:
    - on_tick(ticks): after every tick.
    - on_countdown(remaining): after every countdown step.
    - on_settled(winner): once per spin, while the state is SETTLED.

    A listener that raises is logged and otherwise ignored, so it cannot
    leave the state machine stuck mid-transition.
    """

    def __init__(
        self,
        history: 'SelectionHistory',
        clock=None,
        rng: Optional[random.Random] = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        countdown_interval: float = DEFAULT_COUNTDOWN_INTERVAL,
        on_tick: Optional[Callable[[int], Any]] = None,
        on_countdown: Optional[Callable[[int], Any]] = None,
        on_settled: Optional[Callable[[str], Any]] = None,
    ):
        """Initialize the scheduler.

        Args:
            history: SelectionHistory that receives each winner.
            clock: Object with time() and call_at(). Defaults to the running
                asyncio loop, looked up when a spin starts.
            rng: Random source with randrange(). Defaults to a private
                random.Random instance.
            tick_interval: Seconds between ticks.
            countdown_interval: Seconds between countdown decrements.
            on_tick: Tick listener.
            on_countdown: Countdown listener.
            on_settled: Settle listener.
        """
        self.history = history
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self.tick_interval = tick_interval
        self.countdown_interval = countdown_interval
        self.on_tick = on_tick
        self.on_countdown = on_countdown
        self.on_settled = on_settled

        self._state = DrawState.idle()
        self._timers: Optional[TimerGroup] = None
        self._eligible: List[str] = []
        self._idle_waiters: List[asyncio.Future] = []
        self._closed = False

    @property
    def state(self) -> DrawState:
        return self._state

    @property
    def is_spinning(self) -> bool:
        return self._state.is_spinning

    @property
    def remaining(self) -> int:
        return self._state.remaining

    @property
    def closed(self) -> bool:
        return self._closed

    def request_draw(self, eligible: Sequence[str], duration: int) -> bool:
        """Start a spin over ``eligible`` lasting ``duration`` seconds.

        Args:
            eligible: Non-empty candidates. Copied, so later edits to the
                caller's sequence do not affect this spin.
            duration: Positive whole number of seconds.

        Returns:
            True if the spin started, False if the request was rejected.
        """
        if self._closed:
            logger.debug("Draw requested on a closed scheduler")
            return False
        if self.is_spinning:
            logger.debug("Draw requested while a spin is running")
            return False
        if not eligible:
            logger.debug("Draw requested with no eligible entries")
            return False
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            logger.debug(f"Draw requested with invalid duration {duration!r}")
            return False

        clock = self._clock if self._clock is not None else asyncio.get_running_loop()

        self._eligible = list(eligible)
        self._state = DrawState.spinning(duration=duration, remaining=duration)

        # Deadline registered first: it wins ties on the manual clock
        timers = TimerGroup(clock, duration)
        timers.on_deadline(self._settle)
        timers.every(self.tick_interval, self._tick)
        timers.every(self.countdown_interval, self._countdown)
        self._timers = timers

        logger.debug(f"Spin started: {len(self._eligible)} eligible, {duration}s")
        return True

    async def wait_idle(self):
        """Wait until no spin is running.

        Returns immediately when idle.
        """
        if not self.is_spinning:
            return
        future = asyncio.get_running_loop().create_future()
        self._idle_waiters.append(future)
        await future

    def close(self):
        """Tear down: release the timers without settling and refuse new draws."""
        if self._closed:
            return
        self._closed = True
        self._release_timers()
        if self.is_spinning:
            logger.info("Scheduler closed during a spin, no winner committed")
        self._state = DrawState.idle()
        self._eligible = []
        self._wake_idle_waiters()

    def _tick(self, n: int):
        state = self._state
        self._state = DrawState.spinning(
            duration=state.duration, remaining=state.remaining, ticks=n
        )
        self._notify(self.on_tick, n)

    def _countdown(self, n: int):
        state = self._state
        remaining = max(0, state.duration - n)
        self._state = DrawState.spinning(
            duration=state.duration, remaining=remaining, ticks=state.ticks
        )
        self._notify(self.on_countdown, remaining)

    def _settle(self):
        # Release every timer before anything observable happens, so no
        # tick or countdown can follow the announcement.
        self._release_timers()

        eligible = self._eligible
        self._eligible = []
        index = self._rng.randrange(len(eligible))
        winner = eligible[index]
        self.history.append(winner)

        previous = self._state
        settled = DrawState.settled(winner, duration=previous.duration, ticks=previous.ticks)
        self._state = settled
        logger.info(f"Winner settled: '{winner}' (draw #{len(self.history)})")

        self._notify(self.on_settled, winner)

        # A settle listener may already have started the next spin.
        if self._state is settled:
            self._state = DrawState.idle()
        self._wake_idle_waiters()

    def _release_timers(self):
        if self._timers is not None:
            self._timers.close()
            self._timers = None

    def _wake_idle_waiters(self):
        if self.is_spinning:
            return
        waiters, self._idle_waiters = self._idle_waiters, []
        for future in waiters:
            if not future.done():
                future.set_result(None)

    def _notify(self, listener: Optional[Callable], *args):
        if listener is None:
            return
        try:
            listener(*args)
        except Exception:
            logger.exception(f"Draw listener {listener!r} failed")
