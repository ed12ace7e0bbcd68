# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Candidate pool storage.

Holds the entries that can be drawn, in insertion order, and enforces
the size cap and the non-empty label rule on insertion.
"""

import logging
from typing import Iterable, List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from whosnext.picker.draw.history import SelectionHistory

logger = logging.getLogger(__name__)

DEFAULT_MAX_POOL_SIZE = 1000


def clean_entries(lines: Iterable[str]) -> List[str]:
    """Trim each line and drop the empty ones.

    Args:
        lines: Raw lines, e.g. from a list file.

    Returns:
        List of non-empty trimmed labels, in input order.
    """
    return [line.strip() for line in lines if line and line.strip()]


class PoolStore:
    """Ordered pool of entry labels.

    Duplicate labels are kept as separate rows; uniqueness is left to the
    caller.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_POOL_SIZE):
        """Initialize an empty pool.

        Args:
            max_size: Maximum number of entries the pool accepts.
        """
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.max_size = max_size
        self._entries: List[str] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry) -> bool:
        return entry in self._entries

    def __iter__(self):
        return iter(tuple(self._entries))

    def size(self) -> int:
        return len(self._entries)

    def contains(self, entry: str) -> bool:
        return entry in self._entries

    def is_full(self) -> bool:
        return len(self._entries) >= self.max_size

    def entries(self) -> Tuple[str, ...]:
        """Snapshot of the pool in insertion order."""
        return tuple(self._entries)

    def load(self, entries: Iterable[str]) -> int:
        """Replace the whole pool with the cleaned input lines.

        Lines beyond the size cap are dropped.

        Args:
            entries: Raw lines.

        Returns:
            Number of entries now in the pool.
        """
        cleaned = clean_entries(entries)
        if len(cleaned) > self.max_size:
            logger.warning(
                f"Pool source has {len(cleaned)} entries, keeping the first {self.max_size}"
            )
            cleaned = cleaned[:self.max_size]
        self._entries = cleaned
        return len(self._entries)

    def add(self, text: str) -> bool:
        """Append an entry.

        Args:
            text: Label to add. Surrounding whitespace is trimmed.

        Returns:
            True if added, False if the label was empty or the pool is full.
        """
        label = text.strip() if text else ''
        if not label:
            logger.debug("Ignoring empty entry")
            return False
        if self.is_full():
            logger.debug(f"Pool is full ({self.max_size}), ignoring '{label}'")
            return False
        self._entries.append(label)
        return True

    def remove(self, entry: str) -> bool:
        """Remove the first entry equal to ``entry``.

        Returns:
            True if an entry was removed, False if none matched.
        """
        try:
            self._entries.remove(entry)
        except ValueError:
            return False
        return True

    def eligible_against(self, history: 'SelectionHistory') -> List[str]:
        """Pool entries not present in ``history``, in pool order.

        Computed on every call so that pool edits are always reflected.
        """
        drawn = set(history.entries())
        return [entry for entry in self._entries if entry not in drawn]
