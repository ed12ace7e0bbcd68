# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Who's next? - pick names at random, one at a time, without repeats."""

__version__ = '1.0.0'
