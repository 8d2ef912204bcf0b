"""Pydantic models for animal (pedigree) records."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Gender = Literal["male", "female"]
AnimalStatus = Literal["active", "breeding", "retired", "sold", "deceased", "inactive"]


class Animal(BaseModel):
    """Schema representing a rabbit in the pedigree store."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: int = Field(..., description="Numeric animal ID")
    animal_id: str = Field(..., description="Herd tag, e.g. M1 or F1")
    name: str = Field(..., description="Animal name")
    gender: Gender = Field(..., description="male or female")
    breed: Optional[str] = Field(None, description="Breed name")
    breed_id: Optional[int] = Field(None, description="Breed ID used for breed compatibility lookups")
    parent_male_id: Optional[int] = Field(None, description="Sire ID")
    parent_female_id: Optional[int] = Field(None, description="Dam ID")
    generation: int = Field(0, ge=0, description="0 = foundation animal")
    ancestry: Optional[list[str]] = Field(None, description="Flattened ancestor IDs for quick relationship checks")
    registered_ancestry: list[str] = Field(
        default_factory=list,
        description="Ancestor IDs supplied at registration, e.g. from a paper pedigree",
    )
    status: AnimalStatus = Field("active", description="Lifecycle status")
    health: int = Field(85, ge=1, le=100, description="Health score 1-100")
    fertility: int = Field(85, ge=1, le=100, description="Fertility score 1-100")
    litter_size: Optional[int] = Field(None, ge=0, description="Average litter size")
    weight: Optional[float] = Field(None, gt=0, description="Weight in kg")
    date_of_birth: Optional[datetime] = Field(None, description="Date of birth")
    notes: Optional[str] = Field(None, description="Free-form notes")
    tags: list[str] = Field(default_factory=list, description="Tags")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")


class AnimalCreate(BaseModel):
    """Request schema for registering an animal.

    ``ancestry`` may carry ancestors that are not themselves in the store
    (e.g. from a purchased animal's paper pedigree). The store merges them
    with the ancestors it derives from ``parentMaleId`` / ``parentFemaleId``.
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    animal_id: Optional[str] = Field(None, description="Herd tag; generated when omitted")
    name: str = Field(..., min_length=1, max_length=60, description="Animal name")
    gender: Gender = Field(..., description="male or female")
    breed: Optional[str] = None
    breed_id: Optional[int] = None
    parent_male_id: Optional[int] = None
    parent_female_id: Optional[int] = None
    ancestry: Optional[list[str]] = None
    status: AnimalStatus = "active"
    health: int = Field(85, ge=1, le=100)
    fertility: int = Field(85, ge=1, le=100)
    litter_size: Optional[int] = Field(None, ge=0)
    weight: Optional[float] = Field(None, gt=0)
    date_of_birth: Optional[datetime] = None
    notes: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class AnimalUpdate(BaseModel):
    """Request schema for a partial animal update. Only fields sent are applied."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: Optional[str] = Field(None, min_length=1, max_length=60)
    breed: Optional[str] = None
    breed_id: Optional[int] = None
    parent_male_id: Optional[int] = None
    parent_female_id: Optional[int] = None
    status: Optional[AnimalStatus] = None
    health: Optional[int] = Field(None, ge=1, le=100)
    fertility: Optional[int] = Field(None, ge=1, le=100)
    litter_size: Optional[int] = Field(None, ge=0)
    weight: Optional[float] = Field(None, gt=0)
    date_of_birth: Optional[datetime] = None
    notes: Optional[str] = None
    tags: Optional[list[str]] = None

    @field_validator("name", "status", "health", "fertility", "tags")
    @classmethod
    def reject_null(cls, value):
        """Only parent IDs and optional details may be cleared with null."""
        if value is None:
            raise ValueError("may not be null")
        return value
