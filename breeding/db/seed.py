"""Sample pedigree data for local development (mock mode)."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from breeding.db.pedigree_store import PedigreeStore
from breeding.models.animal import AnimalCreate

logger = logging.getLogger(__name__)

DATA_FILE = Path(__file__).resolve().parent.parent.parent / "data" / "animals.json"


def seed_sample_data(store: PedigreeStore) -> int:
    """Load ``data/animals.json`` into an empty store.

    Parent IDs in the file refer to the IDs the store assigns, in file order.
    Returns the number of animals created (0 when the store already has data
    or the file is missing or invalid).
    """
    if store.list_animals():
        logger.info("Sample data already exists, skipping seeding")
        return 0

    try:
        with open(DATA_FILE, "r") as f:
            raw = json.load(f)
        records = [AnimalCreate(**item) for item in raw]
    except FileNotFoundError:
        logger.error("Sample animal data file not found: %s", DATA_FILE)
        return 0
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("Invalid sample animal data: %s", e)
        return 0

    for record in records:
        store.create_animal(record)
    logger.info("Seeded %d sample animals", len(records))
    return len(records)
