# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Side-effect sinks the picker notifies during a draw.

Audio and celebration are fire-and-forget: a failing sink is logged and
the draw carries on.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CelebrationBurst:
    """Parameters for the particle burst shown on a win.

    Attributes:
        particle_count: Number of particles.
        spread: Spread angle in degrees.
        origin_y: Vertical origin of the burst (0=top, 1=bottom).
    """
    particle_count: int = 100
    spread: int = 70
    origin_y: float = 0.6


class AudioSink:
    """Plays the spin sounds. The base implementation is silent."""

    def play_tick(self):
        pass

    def play_win(self):
        pass


class CelebrationSink:
    """Shows the win celebration. The base implementation does nothing."""

    def celebrate(self, winner: str, burst: CelebrationBurst):
        pass


def fire_and_forget(action: Callable[..., Any], *args) -> bool:
    """Call a sink method, logging instead of raising on failure.

    Returns:
        True if the call completed, False if it raised.
    """
    try:
        action(*args)
    except Exception:
        logger.exception(f"Sink call {getattr(action, '__qualname__', action)!r} failed")
        return False
    return True
