# tests/picker/benchmarks/conftest.py
"""Shared fixtures for benchmark tests.

Uses module-scoped fixtures to reduce setup overhead for repeated runs.
"""

import pytest


def pytest_configure(config):
    """Register benchmark marker."""
    config.addinivalue_line(
        "markers", "benchmark: performance benchmark tests"
    )


@pytest.fixture(scope='module')
def full_list():
    """A list at the pool size cap (module-scoped)."""
    return [f'Name {i:04d}' for i in range(1000)]


@pytest.fixture(scope='module')
def half_drawn(full_list):
    """History holding every other entry of full_list (module-scoped)."""
    from whosnext.picker.draw.history import SelectionHistory

    history = SelectionHistory()
    for entry in full_list[::2]:
        history.append(entry)
    return history
