# tests/conftest.py
import logging
from collections import deque

import numpy as np
import pytest


def assert_invariants(f):
    """Index maps are inverse permutations and the window reads sorted through them."""
    rank_of, slot_at_rank = f.rank_of, f.slot_at_rank
    n = f.window_size
    assert sorted(rank_of.tolist()) == list(range(n))
    assert sorted(slot_at_rank.tolist()) == list(range(n))
    for slot in range(n):
        assert slot_at_rank[rank_of[slot]] == slot
    for rank in range(n):
        assert rank_of[slot_at_rank[rank]] == rank
    ordered = f.sorted_values()
    assert np.all(ordered[:-1] <= ordered[1:])


class ReferenceWindow:
    """Brute-force window: keeps the last n samples and re-sorts on every query."""

    def __init__(self, window_size, seed):
        self.samples = deque([seed] * window_size, maxlen=window_size)

    def insert(self, value):
        self.samples.append(value)

    def sorted(self):
        return sorted(self.samples)

    def median(self):
        ordered = self.sorted()
        return ordered[len(ordered) // 2]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def reference_window():
    return ReferenceWindow


@pytest.fixture
def check_invariants():
    return assert_invariants


@pytest.fixture
def clean_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    configured = getattr(root_logger, "_project_logging_configured", False)
    if configured:
        delattr(root_logger, "_project_logging_configured")
    yield root_logger
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
    if hasattr(root_logger, "_project_logging_configured"):
        delattr(root_logger, "_project_logging_configured")
    if configured:
        setattr(root_logger, "_project_logging_configured", True)
