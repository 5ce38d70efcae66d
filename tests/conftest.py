import itertools

import numpy as np
import pytest


@pytest.fixture
def id_factory():
    """Deterministic ids: note-1, note-2, ..."""
    counter = itertools.count(1)
    return lambda: f"note-{next(counter)}"


@pytest.fixture
def blank_board():
    """1000x1000 white RGB image"""
    return np.full((1000, 1000, 3), 255, dtype=np.uint8)
