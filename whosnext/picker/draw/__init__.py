# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Draw components for the picker engine.

This package contains the pieces composed by NamePicker:
- PoolStore: Editable candidate list with a size cap
- SelectionHistory: Winners in draw order, with ordinal badges
- DrawScheduler: Timed spin state machine and uniform final pick
"""

from whosnext.picker.draw.pool import (
    DEFAULT_MAX_POOL_SIZE,
    PoolStore,
    clean_entries,
)
from whosnext.picker.draw.history import (
    SelectionHistory,
    ordinal_suffix,
)
from whosnext.picker.draw.scheduler import DrawScheduler

__all__ = [
    'DEFAULT_MAX_POOL_SIZE',
    'PoolStore',
    'clean_entries',
    'SelectionHistory',
    'ordinal_suffix',
    'DrawScheduler',
]
