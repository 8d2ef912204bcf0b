"""Pair checks, mate search and suggestions on top of the pedigree store."""

import logging

from breeding.db.breed_table import get_breed_compatibility
from breeding.db.pedigree_store import get_store
from breeding.models.animal import Animal
from breeding.models.compatibility import (
    BreedingSuggestion,
    CompatibilityReport,
    CompatibilityVerdict,
    InbreedingRisk,
)
from breeding.services.compatibility import (
    FAIL_CLOSED_VERDICT,
    classify_relationship,
    compatibility_score,
    evaluate,
)
from breeding.services.event_service import predict_litter_size, predict_offspring_health

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 5


def _resolve_pair(male_id: int, female_id: int) -> tuple[Animal, Animal] | Exception:
    """Look up both animals; return the pair, or the failure as a value."""
    store = get_store()
    try:
        male = store.get_animal(male_id)
        female = store.get_animal(female_id)
    except Exception as e:
        return e
    if male is None:
        return LookupError(f"Animal {male_id} not found")
    if female is None:
        return LookupError(f"Animal {female_id} not found")
    return male, female


def check_pair(male_id: int, female_id: int) -> CompatibilityVerdict:
    """Evaluate two stored animals. Any lookup failure yields the fail-closed verdict."""
    resolved = _resolve_pair(male_id, female_id)
    if isinstance(resolved, Exception):
        logger.warning("Compatibility check %s x %s failed: %s", male_id, female_id, resolved)
        return FAIL_CLOSED_VERDICT
    male, female = resolved
    return evaluate(male, female)


def compatibility_report(male_id: int, female_id: int) -> CompatibilityReport:
    """Return the verdict for a pair with its breed table entry and litter predictions.

    Predictions are given for incompatible pairs too, with the inbreeding
    health penalty applied.
    """
    resolved = _resolve_pair(male_id, female_id)
    if isinstance(resolved, Exception):
        logger.warning("Compatibility report %s x %s failed: %s", male_id, female_id, resolved)
        return CompatibilityReport(
            verdict=FAIL_CLOSED_VERDICT,
            compatibility_score=compatibility_score(FAIL_CLOSED_VERDICT),
        )
    male, female = resolved
    verdict = evaluate(male, female)
    breed_entry = get_breed_compatibility(male.breed_id, female.breed_id)
    return CompatibilityReport(
        verdict=verdict,
        breed=breed_entry,
        compatibility_score=compatibility_score(verdict, breed_entry),
        predicted_litter_size=predict_litter_size(male, female),
        predicted_offspring_health=predict_offspring_health(male, female, risky=not verdict.compatible),
    )


def check_inbreeding_risk(male_id: int, female_id: int) -> InbreedingRisk:
    """Classify the relationship of a pair. Unknown animals are reported as not risky."""
    store = get_store()
    male = store.get_animal(male_id)
    female = store.get_animal(female_id)
    if male is None or female is None:
        return InbreedingRisk(is_risky=False)
    return classify_relationship(evaluate(male, female))


def get_potential_mates(animal_id: int) -> list[Animal]:
    """Return active animals of the opposite gender that can be paired with *animal_id*."""
    store = get_store()
    animal = store.get_animal(animal_id)
    if animal is None:
        return []

    opposite = "female" if animal.gender == "male" else "male"
    mates = []
    for candidate in store.list_animals(gender=opposite, status="active"):
        if candidate.id == animal.id:
            continue
        male, female = (animal, candidate) if animal.gender == "male" else (candidate, animal)
        if evaluate(male, female).compatible:
            mates.append(candidate)
    return mates


def get_breeding_suggestions(limit: int = DEFAULT_SUGGESTION_LIMIT) -> list[BreedingSuggestion]:
    """Return up to *limit* compatible active pairs, in creation order."""
    store = get_store()
    males = store.list_animals(gender="male", status="active")
    females = store.list_animals(gender="female", status="active")

    suggestions: list[BreedingSuggestion] = []
    for male in males:
        for female in females:
            verdict = evaluate(male, female)
            if not verdict.compatible:
                continue
            breed_entry = get_breed_compatibility(male.breed_id, female.breed_id)
            suggestions.append(BreedingSuggestion(
                male_id=male.id,
                male_name=male.name,
                female_id=female.id,
                female_name=female.name,
                compatibility_score=compatibility_score(verdict, breed_entry),
            ))
            if len(suggestions) >= limit:
                return suggestions
    return suggestions
