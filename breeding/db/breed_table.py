"""Data access layer for the breed compatibility table (JSON)."""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from breeding.models.compatibility import BreedCompatibility

logger = logging.getLogger(__name__)

DATA_FILE = Path(__file__).resolve().parent.parent.parent / "data" / "breed_compatibility.json"


@lru_cache(maxsize=1)
def load_breed_table() -> dict[frozenset[int], BreedCompatibility]:
    """Load the breed compatibility table keyed by unordered breed ID pair."""
    try:
        with open(DATA_FILE, "r") as f:
            raw = json.load(f)
        entries = [BreedCompatibility(**item) for item in raw]
    except FileNotFoundError:
        logger.error("Breed compatibility file not found: %s", DATA_FILE)
        return {}
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("Invalid breed compatibility data: %s", e)
        return {}

    table = {frozenset((e.breed_id_a, e.breed_id_b)): e for e in entries}
    logger.info("Loaded %d breed compatibility entries from %s", len(table), DATA_FILE)
    return table


def get_breed_compatibility(breed_id_a: int | None, breed_id_b: int | None) -> BreedCompatibility | None:
    """Return the entry for two distinct known breeds, or *None*."""
    if breed_id_a is None or breed_id_b is None or breed_id_a == breed_id_b:
        return None
    return load_breed_table().get(frozenset((breed_id_a, breed_id_b)))


def clear_cache() -> None:
    """Clear the breed table cache."""
    load_breed_table.cache_clear()
