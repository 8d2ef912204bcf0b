"""Pydantic models for compatibility verdicts, breed data and suggestions."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RiskLevel = Literal["none", "low", "medium", "high"]


class CompatibilityVerdict(BaseModel):
    """Outcome of evaluating a male/female pairing."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, frozen=True)

    compatible: bool = Field(..., description="Whether the pair may be bred")
    reason: Optional[str] = Field(None, description="Human-readable explanation when not compatible")
    risk_level: RiskLevel = Field("none", description="Inbreeding risk level")


class BreedCompatibility(BaseModel):
    """Precomputed compatibility of two breeds (unordered pair)."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    breed_id_a: int = Field(..., description="First breed ID")
    breed_id_b: int = Field(..., description="Second breed ID")
    compatibility_score: int = Field(..., ge=0, le=100, description="Cross-breed score 0-100")
    expected_traits: list[str] = Field(default_factory=list, description="Traits expected in offspring")
    recommended: bool = Field(False, description="Whether the cross is recommended")


class CompatibilityReport(BaseModel):
    """Verdict enriched with the breed compatibility entry and litter predictions."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    verdict: CompatibilityVerdict
    breed: Optional[BreedCompatibility] = None
    compatibility_score: int = Field(..., ge=0, le=100, description="Genetic compatibility score")
    predicted_litter_size: Optional[int] = Field(None, description="Expected kits if the pair were bred")
    predicted_offspring_health: Optional[int] = Field(
        None, description="Expected kit health; lowered when the parents are related"
    )


class InbreedingRisk(BaseModel):
    """Coarse relationship classification of a pair."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    is_risky: bool
    relationship_type: Optional[str] = Field(
        None, description="self, siblings, half-siblings, parent-child or shared ancestry"
    )


class RiskCheckRequest(BaseModel):
    """Request schema for an inbreeding risk check."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    male_id: int = Field(..., gt=0)
    female_id: int = Field(..., gt=0)


class BreedingSuggestion(BaseModel):
    """A compatible active pair offered on the dashboard."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    male_id: int
    male_name: str
    female_id: int
    female_name: str
    compatibility_score: int
