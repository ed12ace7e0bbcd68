# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Random name picker facade.

Composes the draw components into the operations a front end needs:
load a named list, edit it, request a draw, and read snapshots for
rendering.

This is a facade that delegates to focused components:
- PoolStore: the editable candidate list
- SelectionHistory: winners of the current list, in draw order
- DrawScheduler: the timed spin and the uniform final pick
"""

import logging
from typing import Any, Callable, List, Optional, Tuple, TYPE_CHECKING

from whosnext.picker.config import PickerConfig, is_valid_duration
from whosnext.picker.draw.history import SelectionHistory
from whosnext.picker.draw.pool import PoolStore
from whosnext.picker.draw.scheduler import DrawScheduler
from whosnext.picker.models import DisplaySnapshot, DrawState, EntryView
from whosnext.picker.sinks import (
    AudioSink,
    CelebrationBurst,
    CelebrationSink,
    fire_and_forget,
)
from whosnext.picker.sources import SOURCE_CUSTOM, SourceLoadError, parse_entries
from whosnext.picker.statistics import DrawStatistics

if TYPE_CHECKING:
    import random
    from whosnext.picker.sources import SourceLoader

logger = logging.getLogger(__name__)


class NamePicker:
    """Picks names from a list one at a time, never repeating a winner.

    A pick starts a spin and returns at once; the winner arrives later
    through the listeners registered with add_listener(), and through the
    audio and celebration sinks.

    Each instance owns its pool, history, scheduler and random source, so
    several pickers can run side by side without interfering.
    """

    def __init__(
        self,
        loader: Optional['SourceLoader'] = None,
        config: Optional[PickerConfig] = None,
        clock=None,
        rng: Optional['random.Random'] = None,
        audio: Optional[AudioSink] = None,
        celebration: Optional[CelebrationSink] = None,
    ):
        """Initialize the picker with an empty pool.

        Args:
            loader: SourceLoader used by load_from(). Without one, every
                named source loads as an empty list.
            config: PickerConfig. Defaults to PickerConfig().
            clock: Time source for the spin timers (see
                whosnext.picker.timers). Defaults to the running asyncio loop.
            rng: Random source for the final pick.
            audio: AudioSink for tick and win sounds.
            celebration: CelebrationSink for the win celebration.

        Raises:
            ValueError: If the config is invalid.
        """
        self.config = (config if config is not None else PickerConfig()).validate()
        self.loader = loader
        self.audio = audio if audio is not None else AudioSink()
        self.celebration = celebration if celebration is not None else CelebrationSink()
        self.statistics = DrawStatistics()

        self._pool = PoolStore(max_size=self.config.max_pool_size)
        self._history = SelectionHistory()
        self._scheduler = DrawScheduler(
            self._history,
            clock=clock,
            rng=rng,
            tick_interval=self.config.tick_interval,
            countdown_interval=self.config.countdown_interval,
            on_tick=self._on_tick,
            on_settled=self._on_settled,
        )
        self._burst = CelebrationBurst(
            particle_count=self.config.celebration_particles,
            spread=self.config.celebration_spread,
            origin_y=self.config.celebration_origin_y,
        )
        self._spin_duration = self.config.spin_duration
        self._active_source: Optional[str] = None
        self._listeners: List[Callable[[str], Any]] = []

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - release the spin timers."""
        self.close()
        return False

    def close(self):
        """Stop any running spin without a winner and refuse further draws."""
        self._scheduler.close()

    # Read-only views

    @property
    def pool(self) -> Tuple[str, ...]:
        return self._pool.entries()

    @property
    def history(self) -> Tuple[str, ...]:
        return self._history.entries()

    @property
    def state(self) -> DrawState:
        return self._scheduler.state

    @property
    def is_spinning(self) -> bool:
        return self._scheduler.is_spinning

    @property
    def remaining_seconds(self) -> int:
        return self._scheduler.remaining

    @property
    def active_source(self) -> Optional[str]:
        return self._active_source

    @property
    def spin_duration(self) -> int:
        return self._spin_duration

    @property
    def can_pick(self) -> bool:
        """Whether pick() would start a spin right now."""
        if self._scheduler.closed or self._scheduler.is_spinning:
            return False
        return bool(self._pool.eligible_against(self._history))

    def eligible(self) -> List[str]:
        """Entries that the next draw would choose from."""
        return self._pool.eligible_against(self._history)

    def ordinal_label(self, entry: str) -> Optional[str]:
        return self._history.ordinal_label(entry)

    def snapshot(self) -> DisplaySnapshot:
        """Capture everything a renderer needs."""
        rows = []
        for entry in self._pool.entries():
            label = self._history.ordinal_label(entry)
            selected = label is not None
            rows.append(EntryView(
                label=entry,
                selected=selected,
                ordinal_label=label,
                removable=not selected,
            ))
        return DisplaySnapshot(
            pool=self._pool.entries(),
            history=self._history.entries(),
            state=self._scheduler.state,
            remaining_seconds=self._scheduler.remaining,
            spin_duration=self._spin_duration,
            active_source=self._active_source,
            can_pick=self.can_pick,
            is_full=self._pool.is_full(),
            rows=tuple(rows),
        )

    # Configuration

    def set_spin_duration(self, seconds: int):
        """Set the length of future spins.

        A spin already running keeps the duration it started with.

        Raises:
            ValueError: If seconds is not a whole number within the
                configured bounds.
        """
        if not is_valid_duration(seconds,
                                 self.config.min_spin_duration,
                                 self.config.max_spin_duration):
            raise ValueError(
                f"Spin duration must be an integer in "
                f"[{self.config.min_spin_duration}, {self.config.max_spin_duration}], "
                f"got {seconds!r}"
            )
        self._spin_duration = seconds

    def add_listener(self, callback: Callable[[str], Any]):
        """Register ``callback(winner)`` to run after each settled draw."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[str], Any]):
        try:
            self._listeners.remove(callback)
        except ValueError:
            pass

    # Operations

    async def start(self) -> int:
        """Load the configured initial source.

        Returns:
            Number of entries loaded.
        """
        return await self.load_from(self.config.initial_source)

    async def load_from(self, source: str) -> int:
        """Replace the pool with a named source and start a fresh history.

        The 'custom' source always starts empty. A running spin is allowed
        to finish first; its winner is announced before the reset. Loader
        failures are logged and leave an empty pool.

        Args:
            source: Source name, e.g. 'home', 'work', '15' or 'custom'.

        Returns:
            Number of entries loaded.
        """
        entries: List[str] = []
        if source != SOURCE_CUSTOM:
            try:
                if self.loader is None:
                    raise SourceLoadError("No source loader configured")
                text = await self.loader.load(source)
                entries = parse_entries(text)
            except Exception as e:
                logger.warning(f"Could not load source '{source}': {e}")
                entries = []

        # Loop: a pick may slip in between the spin settling and this
        # coroutine resuming.
        while self._scheduler.is_spinning:
            await self._scheduler.wait_idle()

        count = self._pool.load(entries)
        self._history.clear()
        self._active_source = source
        logger.info(f"Loaded source '{source}' with {count} entries")
        return count

    def add_entry(self, text: str) -> bool:
        """Append a name to the pool.

        Returns:
            False if the name is blank or the pool is full.
        """
        return self._pool.add(text)

    def remove_entry(self, entry: str) -> bool:
        """Remove the first matching name. History is left untouched."""
        return self._pool.remove(entry)

    def pick(self) -> bool:
        """Start a draw among the entries not yet picked.

        Returns immediately. The winner is delivered to listeners when the
        spin settles.

        Returns:
            True if a spin started. False if there is nothing to draw or a
            spin is already running.
        """
        eligible = self._pool.eligible_against(self._history)
        if not eligible:
            logger.debug("Nothing to draw")
            return False
        return self._scheduler.request_draw(eligible, self._spin_duration)

    async def wait_idle(self):
        """Wait for the running spin, if any, to settle."""
        await self._scheduler.wait_idle()

    # Scheduler callbacks

    def _on_tick(self, ticks: int):
        fire_and_forget(self.audio.play_tick)

    def _on_settled(self, winner: str):
        self.statistics.record(winner)
        fire_and_forget(self.audio.play_win)
        fire_and_forget(self.celebration.celebrate, winner, self._burst)
        for listener in list(self._listeners):
            fire_and_forget(listener, winner)
