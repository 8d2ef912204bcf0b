"""Pydantic models for breeding events."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EventStatus = Literal["pending", "successful", "unsuccessful", "cancelled"]
BreedingPurpose = Literal["commercial", "show", "pets", "research"]


class BreedingEvent(BaseModel):
    """A recorded mating with its predicted and actual outcome."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: int
    event_id: str = Field(..., description="Custom ID like BE-1-2-20250401")
    male_id: int
    female_id: int
    pair_id: str = Field(..., description="Composite pair ID like PAIR-1-2")
    breeding_date: datetime
    nest_box_date: Optional[datetime] = None
    expected_birth_date: Optional[datetime] = None
    actual_birth_date: Optional[datetime] = None
    status: EventStatus = "pending"
    actual_offspring_count: Optional[int] = Field(None, ge=0)
    genetic_compatibility_score: Optional[int] = Field(None, ge=0, le=100)
    predicted_litter_size: Optional[int] = None
    predicted_offspring_health: Optional[int] = None
    predicted_roi: Optional[float] = None
    breeding_purpose: BreedingPurpose = "commercial"
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BreedingEventCreate(BaseModel):
    """Request schema for recording a breeding event.

    Derived fields left out of the request (IDs, dates, predictions) are
    filled in by the breeding event service.
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    male_id: int = Field(..., gt=0)
    female_id: int = Field(..., gt=0)
    event_id: Optional[str] = None
    pair_id: Optional[str] = None
    breeding_date: Optional[datetime] = None
    nest_box_date: Optional[datetime] = None
    expected_birth_date: Optional[datetime] = None
    status: EventStatus = "pending"
    genetic_compatibility_score: Optional[int] = Field(None, ge=0, le=100)
    predicted_litter_size: Optional[int] = None
    predicted_offspring_health: Optional[int] = None
    predicted_roi: Optional[float] = None
    breeding_purpose: BreedingPurpose = "commercial"
    notes: Optional[str] = None


class BreedingEventUpdate(BaseModel):
    """Request schema for a partial breeding event update."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    status: Optional[EventStatus] = None
    nest_box_date: Optional[datetime] = None
    actual_birth_date: Optional[datetime] = None
    actual_offspring_count: Optional[int] = Field(None, ge=0)
    breeding_purpose: Optional[BreedingPurpose] = None
    notes: Optional[str] = None
