# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Data models for the picker engine.

Defines the draw state machine values and the read-only display
projection handed to rendering code.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class DrawPhase(Enum):
    """Phases of the draw state machine."""
    IDLE = 'idle'
    SPINNING = 'spinning'
    SETTLED = 'settled'


@dataclass(frozen=True)
class DrawState:
    """Immutable view of the draw state machine.

    Attributes:
        phase: Current DrawPhase.
        remaining: Countdown seconds left in the spin (0 outside a spin).
        ticks: Number of tick callbacks fired in the current spin.
        duration: Requested spin length in seconds (0 when idle).
        winner: Committed winner, only set in the SETTLED phase.
    """
    phase: DrawPhase = DrawPhase.IDLE
    remaining: int = 0
    ticks: int = 0
    duration: int = 0
    winner: Optional[str] = None

    @classmethod
    def idle(cls) -> 'DrawState':
        return cls()

    @classmethod
    def spinning(cls, duration: int, remaining: int, ticks: int = 0) -> 'DrawState':
        return cls(
            phase=DrawPhase.SPINNING,
            remaining=remaining,
            ticks=ticks,
            duration=duration,
        )

    @classmethod
    def settled(cls, winner: str, duration: int, ticks: int) -> 'DrawState':
        return cls(
            phase=DrawPhase.SETTLED,
            duration=duration,
            ticks=ticks,
            winner=winner,
        )

    @property
    def is_idle(self) -> bool:
        return self.phase is DrawPhase.IDLE

    @property
    def is_spinning(self) -> bool:
        return self.phase is DrawPhase.SPINNING


@dataclass(frozen=True)
class EntryView:
    """One row of the rendered pool.

    Attributes:
        label: The entry text.
        selected: True if the label has already been drawn.
        ordinal_label: Badge such as '1st' for drawn entries, else None.
        removable: False for drawn entries, which keep their row.
    """
    label: str
    selected: bool = False
    ordinal_label: Optional[str] = None
    removable: bool = True


@dataclass(frozen=True)
class DisplaySnapshot:
    """Everything a renderer needs, captured at one instant.

    The engine never reads anything back from the display layer.
    """
    pool: Tuple[str, ...]
    history: Tuple[str, ...]
    state: DrawState
    remaining_seconds: int
    spin_duration: int
    active_source: Optional[str] = None
    can_pick: bool = False
    is_full: bool = False
    rows: Tuple[EntryView, ...] = field(default_factory=tuple)
