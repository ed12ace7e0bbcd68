# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Ordered record of drawn entries."""

from typing import List, Optional, Tuple


def ordinal_suffix(n: int) -> str:
    """Badge text for a 1-based rank.

    Only the first three ranks get their English suffix; every later rank
    uses 'th' (so 21 renders as '21th').
    """
    if n < 1:
        raise ValueError(f"Ordinal rank must be >= 1, got {n}")
    if n == 1:
        return '1st'
    if n == 2:
        return '2nd'
    if n == 3:
        return '3rd'
    return f'{n}th'


class SelectionHistory:
    """Append-only list of winners for the current pool epoch.

    History is a record of past draws, not a live view of the pool: an
    entry stays here even after it is removed from the pool. It does not
    deduplicate; the draw scheduler only ever appends eligible entries.
    """

    def __init__(self):
        self._entries: List[str] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry) -> bool:
        return entry in self._entries

    def __iter__(self):
        return iter(tuple(self._entries))

    def append(self, entry: str):
        self._entries.append(entry)

    def clear(self):
        self._entries = []

    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def last(self) -> Optional[str]:
        return self._entries[-1] if self._entries else None

    def ordinal_of(self, entry: str) -> Optional[int]:
        """1-based rank of the first occurrence of ``entry``, or None."""
        try:
            return self._entries.index(entry) + 1
        except ValueError:
            return None

    def ordinal_label(self, entry: str) -> Optional[str]:
        """Display badge for ``entry`` ('1st', '2nd', ...), or None."""
        rank = self.ordinal_of(entry)
        return ordinal_suffix(rank) if rank is not None else None
