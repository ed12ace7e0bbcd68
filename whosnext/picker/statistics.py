# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Draw statistics for the picker.

Tracks how often each entry has won across every draw since the picker
started, independent of history resets, and produces:
- Win counts and relative frequencies per entry
- A rough uniformity check for the fairness of the draw
- Progress summary text for UI display
"""

import logging
from collections import Counter
from typing import Dict, Iterable, Sequence

logger = logging.getLogger(__name__)


class DrawStatistics:
    """Accumulates settled winners.

    Unlike SelectionHistory this is not cleared when a new list is loaded,
    so it can be used to inspect fairness over many pool epochs.
    """

    def __init__(self):
        self._counts: Counter = Counter()
        self._total = 0

    @property
    def total_draws(self) -> int:
        return self._total

    def record(self, winner: str):
        self._counts[winner] += 1
        self._total += 1

    def reset(self):
        self._counts = Counter()
        self._total = 0
        logger.debug("Draw statistics reset")

    def counts(self) -> Dict[str, int]:
        """Win count per entry, most frequent first."""
        return dict(self._counts.most_common())

    def frequencies(self) -> Dict[str, float]:
        """Share of all draws won by each entry.

        Returns:
            Dict of entry to a fraction in [0, 1]. Empty if nothing was drawn.
        """
        if self._total == 0:
            return {}
        return {entry: count / self._total for entry, count in self._counts.most_common()}

    def is_roughly_uniform(self, entries: Iterable[str],
                           low: float = 0.5, high: float = 2.0) -> bool:
        """Check every entry won between ``low`` and ``high`` times its fair share.

        This is a sanity check, not a statistical test.

        Args:
            entries: The candidates that were drawn from. Duplicates count once.
            low: Lower bound as a multiple of the expected count.
            high: Upper bound as a multiple of the expected count.

        Returns:
            True if all entries fall within the bounds.
        """
        candidates = set(entries)
        if not candidates or self._total == 0:
            return False
        expected = self._total / len(candidates)
        for entry in candidates:
            count = self._counts.get(entry, 0)
            if not low * expected <= count <= high * expected:
                logger.debug(
                    f"'{entry}' won {count} times, expected about {expected:.1f}"
                )
                return False
        return True

    @staticmethod
    def summary(pool: Sequence[str], history: Sequence[str]) -> str:
        """Progress text for the current list.

        Examples:
            - "No names loaded"
            - "0 of 15 picked, 15 remaining"
            - "Everyone has been picked"
        """
        if not pool:
            return "No names loaded"
        drawn = set(history)
        remaining = sum(1 for entry in pool if entry not in drawn)
        if remaining == 0:
            return "Everyone has been picked"
        picked = len(pool) - remaining
        return f"{picked} of {len(pool)} picked, {remaining} remaining"
