"""Shared test fixtures.

Tests run in mock mode (no FIREBASE_CREDENTIALS), so both stores are the
in-memory implementations and are wiped before every test.
"""

import pytest
import respx

from breeding.api.v1.endpoints.animals import limiter as animals_limiter
from breeding.api.v1.endpoints.breeding import limiter as breeding_limiter
from breeding.api.v1.endpoints.breeding_events import limiter as events_limiter
from breeding.db.event_store import get_event_store
from breeding.db.pedigree_store import get_store
from breeding.db.seed import seed_sample_data


@pytest.fixture(autouse=True)
def _reset_state() -> None:
    """Empty the stores and reset SlowAPI in-memory counters between tests."""
    get_store().clear()
    get_event_store().clear()
    for limiter in (animals_limiter, breeding_limiter, events_limiter):
        storage = getattr(limiter, "_storage", None)
        if storage is not None and hasattr(storage, "reset"):
            storage.reset()


@pytest.fixture
def store():
    return get_store()


@pytest.fixture
def seeded_store(store):
    """Store loaded with ``data/animals.json``.

    IDs: 1 M1 Buck, 2 F1 Daisy, 3 M2 Thumper, 4 F2 Flopsy (foundation stock),
    5 M3 Clover and 6 F3 Bluebell (full siblings out of 1 x 2),
    7 F4 Hazel (out of 3 x 4).
    """
    seed_sample_data(store)
    return store


@pytest.fixture
def mock_remote():
    """Mock the remote compatibility service."""
    with respx.mock(base_url="http://localhost:8000") as mock:
        yield mock

