# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
# Picker engine for Who's next?
# Draws names from a pool without repetition, after a timed spin,
# and keeps the order in which they were picked.

from whosnext.picker.models import (
    DrawPhase,
    DrawState,
    EntryView,
    DisplaySnapshot,
)
from whosnext.picker.config import PickerConfig
from whosnext.picker.timers import ManualClock, TimerGroup
from whosnext.picker.draw import (
    PoolStore,
    SelectionHistory,
    DrawScheduler,
    ordinal_suffix,
)
from whosnext.picker.sources import (
    SOURCE_HOME,
    SOURCE_WORK,
    SOURCE_FIFTEEN,
    SOURCE_CUSTOM,
    KNOWN_SOURCES,
    SourceLoadError,
    UnknownSourceError,
    SourceLoader,
    StaticSourceLoader,
    DirectorySourceLoader,
    HttpSourceLoader,
    parse_entries,
)
from whosnext.picker.sinks import (
    AudioSink,
    CelebrationSink,
    CelebrationBurst,
)
from whosnext.picker.statistics import DrawStatistics
from whosnext.picker.picker import NamePicker

__all__ = [
    # Models
    'DrawPhase',
    'DrawState',
    'EntryView',
    'DisplaySnapshot',
    # Config
    'PickerConfig',
    # Timers
    'ManualClock',
    'TimerGroup',
    # Draw components
    'PoolStore',
    'SelectionHistory',
    'DrawScheduler',
    'ordinal_suffix',
    # Sources
    'SOURCE_HOME',
    'SOURCE_WORK',
    'SOURCE_FIFTEEN',
    'SOURCE_CUSTOM',
    'KNOWN_SOURCES',
    'SourceLoadError',
    'UnknownSourceError',
    'SourceLoader',
    'StaticSourceLoader',
    'DirectorySourceLoader',
    'HttpSourceLoader',
    'parse_entries',
    # Sinks
    'AudioSink',
    'CelebrationSink',
    'CelebrationBurst',
    # Statistics
    'DrawStatistics',
    # Facade
    'NamePicker',
]
