"""Breeding compatibility rules.

``evaluate`` is a pure function over two animal records: it performs no I/O,
never raises and never mutates its arguments, so it can be called from any
number of request handlers at once. Rules run from most to least severe and
the first match wins.
"""

from typing import Optional

from breeding.models.animal import Animal
from breeding.models.compatibility import (
    BreedCompatibility,
    CompatibilityVerdict,
    InbreedingRisk,
)

SELF_PAIRING_REASON = "Cannot breed an animal with itself"
PARENT_CHILD_REASON = "Parent-child breeding is not allowed due to high inbreeding risk"
SIBLINGS_REASON = "Siblings breeding is not allowed due to high inbreeding risk"
HALF_SIBLINGS_REASON = "Half-siblings breeding is not allowed due to moderate inbreeding risk"
SHARED_ANCESTRY_PREFIX = "Shared ancestry detected: "
SHARED_ANCESTRY_SUFFIX = ". This increases inbreeding risk."
CHECK_FAILED_REASON = "Error checking compatibility. Please try again."

# Returned whenever a pair cannot be evaluated (lookup, transport or parse failure)
FAIL_CLOSED_VERDICT = CompatibilityVerdict(compatible=False, reason=CHECK_FAILED_REASON, risk_level="high")

BASE_COMPATIBILITY_SCORE = 90
INBREEDING_PENALTY = 30
MIN_COMPATIBILITY_SCORE = 30
MAX_COMPATIBILITY_SCORE = 100


def _ancestry(animal: Animal) -> list[str]:
    """Return the animal's ancestry, or an empty list when missing or malformed."""
    value = getattr(animal, "ancestry", None)
    return value if isinstance(value, list) else []


def _shared_ancestors(male: Animal, female: Animal) -> list[str]:
    """Ancestors present in both lists, in the male's order, without duplicates."""
    male_ancestry = _ancestry(male)
    female_ancestry = _ancestry(female)
    if not male_ancestry or not female_ancestry:
        return []
    female_set = set(female_ancestry)
    return list(dict.fromkeys(a for a in male_ancestry if a in female_set))


def evaluate(male: Animal, female: Animal) -> CompatibilityVerdict:
    """Decide whether *male* and *female* may be paired.

    Genders are not checked. Parent/child detection only covers the sire of
    the female and the dam of the male; the other two orientations are not
    considered.
    """
    if male.id == female.id:
        return CompatibilityVerdict(compatible=False, reason=SELF_PAIRING_REASON, risk_level="high")

    if male.id == female.parent_male_id or female.id == male.parent_female_id:
        return CompatibilityVerdict(compatible=False, reason=PARENT_CHILD_REASON, risk_level="high")

    same_sire = (
        male.parent_male_id is not None
        and female.parent_male_id is not None
        and male.parent_male_id == female.parent_male_id
    )
    same_dam = (
        male.parent_female_id is not None
        and female.parent_female_id is not None
        and male.parent_female_id == female.parent_female_id
    )

    if same_sire:
        if same_dam:
            return CompatibilityVerdict(compatible=False, reason=SIBLINGS_REASON, risk_level="high")
        return CompatibilityVerdict(compatible=False, reason=HALF_SIBLINGS_REASON, risk_level="high")

    if same_dam:
        return CompatibilityVerdict(compatible=False, reason=HALF_SIBLINGS_REASON, risk_level="high")

    shared = _shared_ancestors(male, female)
    if shared:
        reason = f"{SHARED_ANCESTRY_PREFIX}{', '.join(shared)}{SHARED_ANCESTRY_SUFFIX}"
        return CompatibilityVerdict(compatible=False, reason=reason, risk_level="medium")

    return CompatibilityVerdict(compatible=True, risk_level="none")


def classify_relationship(verdict: CompatibilityVerdict) -> InbreedingRisk:
    """Map a verdict to the relationship type it was raised for."""
    if verdict.compatible:
        return InbreedingRisk(is_risky=False)

    reason = verdict.reason or ""
    if reason == SIBLINGS_REASON:
        relationship = "siblings"
    elif reason == HALF_SIBLINGS_REASON:
        relationship = "half-siblings"
    elif reason == PARENT_CHILD_REASON:
        relationship = "parent-child"
    elif reason.startswith(SHARED_ANCESTRY_PREFIX):
        relationship = "shared ancestry"
    elif reason == SELF_PAIRING_REASON:
        relationship = "self"
    else:
        relationship = None
    return InbreedingRisk(is_risky=True, relationship_type=relationship)


def compatibility_score(
    verdict: CompatibilityVerdict,
    breed_entry: Optional[BreedCompatibility] = None,
) -> int:
    """Return a 30-100 genetic compatibility score for a pairing.

    The breed table score, when known, replaces the default base of 90.
    Incompatible pairs lose 30 points.
    """
    score = breed_entry.compatibility_score if breed_entry is not None else BASE_COMPATIBILITY_SCORE
    if not verdict.compatible:
        score -= INBREEDING_PENALTY
    return max(MIN_COMPATIBILITY_SCORE, min(MAX_COMPATIBILITY_SCORE, score))
