"""Business logic for breeding events and litter predictions."""

import logging
import math
from datetime import datetime, timedelta, timezone

from breeding.db.breed_table import get_breed_compatibility
from breeding.db.event_store import get_event_store
from breeding.db.pedigree_store import get_store
from breeding.models.animal import Animal
from breeding.models.breeding_event import BreedingEvent, BreedingEventCreate, BreedingEventUpdate
from breeding.models.compatibility import CompatibilityVerdict
from breeding.services.compatibility import compatibility_score, evaluate

logger = logging.getLogger(__name__)

GESTATION_DAYS = 31
NEST_BOX_LEAD_DAYS = 3
BASE_LITTER_SIZE = 6
BASELINE_SCORE = 85
VALUE_PER_KIT = 30
COST_RATIO = 0.4


class IncompatiblePairError(ValueError):
    """Raised when a breeding event is recorded for a pair that must not be bred."""

    def __init__(self, verdict: CompatibilityVerdict):
        self.verdict = verdict
        super().__init__("incompatible_pair")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def predict_litter_size(male: Animal, female: Animal) -> int:
    """Expected kits: the doe's known litter size (or 6) scaled by her fertility."""
    base = female.litter_size or BASE_LITTER_SIZE
    return _round_half_up(base * female.fertility / BASELINE_SCORE)


def predict_offspring_health(male: Animal, female: Animal, risky: bool) -> int:
    """Mean parent health, -15% for related parents, +5% for a cross-breed, clamped to 60-100."""
    health = (male.health + female.health) / 2
    if risky:
        health *= 0.85
    if male.breed != female.breed:
        health *= 1.05
    return _round_half_up(max(60, min(100, health)))


def predict_roi(litter_size: int, offspring_health: int) -> int:
    revenue = litter_size * VALUE_PER_KIT * offspring_health / BASELINE_SCORE
    cost = litter_size * VALUE_PER_KIT * COST_RATIO
    return _round_half_up(revenue - cost)


def create_breeding_event(data: BreedingEventCreate) -> BreedingEvent:
    """Record a mating, deriving IDs, dates and predictions that were not supplied.

    Raises ``ValueError("animal_not_found")`` for unknown animals and
    :class:`IncompatiblePairError` when the pair fails the compatibility rules.
    """
    store = get_store()
    male = store.get_animal(data.male_id)
    female = store.get_animal(data.female_id)
    if male is None or female is None:
        raise ValueError("animal_not_found")

    verdict = evaluate(male, female)
    if not verdict.compatible:
        logger.info("Refusing breeding event %s x %s: %s", male.id, female.id, verdict.reason)
        raise IncompatiblePairError(verdict)

    now = datetime.now(timezone.utc)
    breeding_date = data.breeding_date or now
    expected_birth = data.expected_birth_date or breeding_date + timedelta(days=GESTATION_DAYS)
    litter = data.predicted_litter_size or predict_litter_size(male, female)
    health = data.predicted_offspring_health or predict_offspring_health(male, female, risky=False)

    fields = data.model_dump()
    fields.update(
        event_id=data.event_id or f"BE-{male.id}-{female.id}-{now:%Y%m%d}",
        pair_id=data.pair_id or f"PAIR-{male.id}-{female.id}",
        breeding_date=breeding_date,
        expected_birth_date=expected_birth,
        nest_box_date=data.nest_box_date or expected_birth - timedelta(days=NEST_BOX_LEAD_DAYS),
        genetic_compatibility_score=data.genetic_compatibility_score or compatibility_score(
            verdict, get_breed_compatibility(male.breed_id, female.breed_id)
        ),
        predicted_litter_size=litter,
        predicted_offspring_health=health,
        predicted_roi=data.predicted_roi if data.predicted_roi is not None else predict_roi(litter, health),
    )
    event = get_event_store().add_event(fields)
    logger.info("Recorded breeding event %s (%s)", event.id, event.event_id)
    return event


def list_breeding_events(animal_id: int | None = None) -> list[BreedingEvent]:
    """Return all events, or only those where *animal_id* is sire or dam."""
    events = get_event_store().list_events()
    if animal_id is None:
        return events
    return [e for e in events if animal_id in (e.male_id, e.female_id)]


def get_breeding_event(event_id: int) -> BreedingEvent | None:
    return get_event_store().get_event(event_id)


def update_breeding_event(event_id: int, data: BreedingEventUpdate) -> BreedingEvent | None:
    return get_event_store().update_event(event_id, **data.model_dump(exclude_unset=True))


def delete_breeding_event(event_id: int) -> bool:
    return get_event_store().delete_event(event_id)
