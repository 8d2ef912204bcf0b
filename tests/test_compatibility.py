"""Tests for the breeding compatibility rules."""

from breeding.models.animal import Animal
from breeding.models.compatibility import BreedCompatibility, CompatibilityVerdict
from breeding.services.compatibility import (
    HALF_SIBLINGS_REASON,
    PARENT_CHILD_REASON,
    SELF_PAIRING_REASON,
    SIBLINGS_REASON,
    classify_relationship,
    compatibility_score,
    evaluate,
)


def _animal(animal_id: int, gender: str = "male", **fields) -> Animal:
    return Animal(id=animal_id, animal_id=f"T{animal_id}", name=f"Rabbit {animal_id}", gender=gender, **fields)


def _buck(animal_id: int, **fields) -> Animal:
    return _animal(animal_id, "male", **fields)


def _doe(animal_id: int, **fields) -> Animal:
    return _animal(animal_id, "female", **fields)


class TestSelfPairing:
    """An animal can never be paired with itself."""

    def test_same_animal(self):
        a = _buck(1)
        verdict = evaluate(a, a)
        assert verdict == CompatibilityVerdict(compatible=False, reason=SELF_PAIRING_REASON, risk_level="high")

    def test_checked_before_ancestry(self):
        a = _buck(1, parent_male_id=10, parent_female_id=20, ancestry=["10", "20"])
        verdict = evaluate(a, a)
        assert verdict.reason == SELF_PAIRING_REASON


class TestParentChild:
    """Only sire-of-doe and dam-of-buck are detected."""

    def test_male_is_sire_of_female(self):
        verdict = evaluate(_buck(1), _doe(2, parent_male_id=1))
        assert verdict.compatible is False
        assert verdict.reason == PARENT_CHILD_REASON
        assert verdict.risk_level == "high"

    def test_female_is_dam_of_male(self):
        verdict = evaluate(_buck(1, parent_female_id=2), _doe(2))
        assert verdict.reason == PARENT_CHILD_REASON
        assert verdict.risk_level == "high"

    def test_male_as_dam_of_female_not_detected(self):
        verdict = evaluate(_buck(1), _doe(2, parent_female_id=1))
        assert verdict.compatible is True

    def test_female_as_sire_of_male_not_detected(self):
        verdict = evaluate(_buck(1, parent_male_id=2), _doe(2))
        assert verdict.compatible is True

    def test_parent_child_wins_over_shared_ancestry(self):
        verdict = evaluate(_buck(1, ancestry=["9"]), _doe(2, parent_male_id=1, ancestry=["1", "9"]))
        assert verdict.reason == PARENT_CHILD_REASON


class TestSiblings:
    """Shared sire and/or dam."""

    def test_full_siblings(self):
        verdict = evaluate(
            _buck(1, parent_male_id=10, parent_female_id=20),
            _doe(2, parent_male_id=10, parent_female_id=20),
        )
        assert verdict == CompatibilityVerdict(compatible=False, reason=SIBLINGS_REASON, risk_level="high")

    def test_half_siblings_same_sire_missing_dam(self):
        verdict = evaluate(_buck(1, parent_male_id=10), _doe(2, parent_male_id=10, parent_female_id=99))
        assert verdict.reason == HALF_SIBLINGS_REASON
        assert verdict.risk_level == "high"

    def test_half_siblings_same_sire_different_dams(self):
        verdict = evaluate(
            _buck(1, parent_male_id=10, parent_female_id=20),
            _doe(2, parent_male_id=10, parent_female_id=21),
        )
        assert verdict.reason == HALF_SIBLINGS_REASON

    def test_half_siblings_same_dam(self):
        verdict = evaluate(
            _buck(1, parent_male_id=10, parent_female_id=20),
            _doe(2, parent_male_id=11, parent_female_id=20),
        )
        assert verdict.reason == HALF_SIBLINGS_REASON
        assert verdict.risk_level == "high"

    def test_half_sibling_reason_says_moderate_but_risk_is_high(self):
        verdict = evaluate(_buck(1, parent_female_id=20), _doe(2, parent_female_id=20))
        assert "moderate" in verdict.reason
        assert verdict.risk_level == "high"

    def test_both_sires_missing_is_not_a_match(self):
        verdict = evaluate(_buck(1), _doe(2))
        assert verdict.compatible is True

    def test_half_siblings_win_over_shared_ancestry(self):
        verdict = evaluate(
            _buck(1, parent_male_id=10, ancestry=["10", "A"]),
            _doe(2, parent_male_id=10, ancestry=["10", "A"]),
        )
        assert verdict.reason == HALF_SIBLINGS_REASON


class TestSharedAncestry:
    """Overlap of the denormalised ancestry lists."""

    def test_overlap(self):
        verdict = evaluate(_buck(1, ancestry=["A", "B"]), _doe(2, ancestry=["B", "C"]))
        assert verdict.compatible is False
        assert verdict.risk_level == "medium"
        assert "B" in verdict.reason
        assert verdict.reason == "Shared ancestry detected: B. This increases inbreeding risk."

    def test_every_shared_id_listed_once_in_male_order(self):
        verdict = evaluate(
            _buck(1, parent_male_id=10, parent_female_id=20, ancestry=["X", "A", "Y", "A", "B"]),
            _doe(2, parent_male_id=11, parent_female_id=21, ancestry=["B", "A", "Z"]),
        )
        assert verdict.reason == "Shared ancestry detected: A, B. This increases inbreeding risk."

    def test_disjoint_ancestry(self):
        verdict = evaluate(_buck(1, ancestry=["A"]), _doe(2, ancestry=["B"]))
        assert verdict == CompatibilityVerdict(compatible=True, risk_level="none")

    def test_empty_ancestry_skips_check(self):
        verdict = evaluate(_buck(1, ancestry=[]), _doe(2, ancestry=["A"]))
        assert verdict.compatible is True

    def test_missing_ancestry_skips_check(self):
        verdict = evaluate(_buck(1), _doe(2, ancestry=["A"]))
        assert verdict.compatible is True

    def test_malformed_ancestry_is_treated_as_none(self):
        male = Animal.model_construct(id=1, gender="male", ancestry="A,B")
        female = Animal.model_construct(id=2, gender="female", ancestry=["A"])
        verdict = evaluate(male, female)
        assert verdict.compatible is True


class TestDefaultVerdict:
    """Unrelated animals."""

    def test_unrelated(self):
        verdict = evaluate(_buck(1), _doe(2))
        assert verdict.compatible is True
        assert verdict.risk_level == "none"
        assert verdict.reason is None

    def test_serialises_without_reason(self):
        verdict = evaluate(_buck(1), _doe(2))
        assert verdict.model_dump(by_alias=True, exclude_none=True) == {"compatible": True, "riskLevel": "none"}

    def test_genders_are_not_validated(self):
        verdict = evaluate(_doe(1), _doe(2))
        assert verdict.compatible is True


class TestPurity:
    """Evaluation has no side effects."""

    def test_idempotent(self):
        male = _buck(1, parent_male_id=10, ancestry=["A", "B"])
        female = _doe(2, parent_male_id=11, ancestry=["B"])
        assert evaluate(male, female) == evaluate(male, female)

    def test_inputs_not_mutated(self):
        male = _buck(1, ancestry=["A", "B"])
        female = _doe(2, ancestry=["B", "C"])
        before = (male.model_dump(), female.model_dump())
        evaluate(male, female)
        assert (male.model_dump(), female.model_dump()) == before


class TestClassifyRelationship:
    """Verdict -> relationship type."""

    def test_compatible_is_not_risky(self):
        risk = classify_relationship(evaluate(_buck(1), _doe(2)))
        assert risk.is_risky is False
        assert risk.relationship_type is None

    def test_relationship_types(self):
        cases = [
            (evaluate(_buck(1, parent_male_id=10, parent_female_id=20),
                      _doe(2, parent_male_id=10, parent_female_id=20)), "siblings"),
            (evaluate(_buck(1, parent_female_id=20), _doe(2, parent_female_id=20)), "half-siblings"),
            (evaluate(_buck(1), _doe(2, parent_male_id=1)), "parent-child"),
            (evaluate(_buck(1, ancestry=["A"]), _doe(2, ancestry=["A"])), "shared ancestry"),
            (evaluate(_buck(1), _buck(1)), "self"),
        ]
        for verdict, expected in cases:
            risk = classify_relationship(verdict)
            assert risk.is_risky is True
            assert risk.relationship_type == expected


class TestCompatibilityScore:
    """Genetic compatibility score."""

    def test_default_score(self):
        assert compatibility_score(CompatibilityVerdict(compatible=True)) == 90

    def test_inbreeding_penalty(self):
        verdict = CompatibilityVerdict(compatible=False, reason="x", risk_level="high")
        assert compatibility_score(verdict) == 60

    def test_breed_score_replaces_base(self):
        entry = BreedCompatibility(breed_id_a=1, breed_id_b=2, compatibility_score=92)
        assert compatibility_score(CompatibilityVerdict(compatible=True), entry) == 92

    def test_clamped_to_minimum(self):
        entry = BreedCompatibility(breed_id_a=3, breed_id_b=5, compatibility_score=35)
        verdict = CompatibilityVerdict(compatible=False, reason="x", risk_level="medium")
        assert compatibility_score(verdict, entry) == 30
