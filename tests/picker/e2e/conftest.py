# tests/picker/e2e/conftest.py
"""Shared fixtures for end-to-end tests."""

import os
import shutil
import tempfile
import pytest

from whosnext.picker.sources import DEFAULT_SOURCE_FILES
from whosnext.picker.timers import ManualClock

HOME_NAMES = ['Ann', 'Bob', 'Cara']
WORK_NAMES = [f'Colleague {i}' for i in range(1, 8)]
FIFTEEN_NAMES = [f'Student {i:02d}' for i in range(1, 16)]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "e2e: end-to-end tests using real loaders and timers"
    )
    config.addinivalue_line(
        "markers", "slow: tests that take more than a couple of seconds"
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory, cleanup after test."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    if os.path.exists(temp_dir):
        shutil.rmtree(temp_dir)


@pytest.fixture
def lists_dir(temp_dir):
    """Directory holding the three shipped list files."""
    lists = {
        'home': HOME_NAMES,
        'work': WORK_NAMES,
        '15': FIFTEEN_NAMES,
    }
    for source, names in lists.items():
        path = os.path.join(temp_dir, DEFAULT_SOURCE_FILES[source])
        with open(path, 'w', encoding='utf-8') as f:
            # Blank and padded lines as found in hand-edited lists
            f.write('\n'.join(f'  {name} ' for name in names) + '\n\n')
    return temp_dir


@pytest.fixture
def clock():
    """Virtual clock for deterministic spins."""
    return ManualClock()


@pytest.fixture
def list_names():
    """Names written to each list file by lists_dir."""
    return {'home': HOME_NAMES, 'work': WORK_NAMES, '15': FIFTEEN_NAMES}
