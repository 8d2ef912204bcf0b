"""Animal (pedigree record) endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Query, Request, Response, status
from pydantic import BaseModel
from slowapi import Limiter
from slowapi.util import get_remote_address

from breeding.config import settings
from breeding.db.pedigree_store import get_store
from breeding.models.animal import Animal, AnimalCreate, AnimalStatus, AnimalUpdate, Gender
from breeding.models.errors import ApiErrorResponse, error_detail
from breeding.services.breeding_service import get_potential_mates

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

_ERROR_MESSAGES = {
    "parent_not_found": "Parent animal not found",
    "invalid_parent_gender": "Sire must be male and dam must be female",
    "lineage_cycle": "An animal cannot be its own ancestor",
    "animal_id_exists": "An animal with this tag already exists",
}


class AnimalListResponse(BaseModel):
    """Response schema for a list of animals."""

    success: bool = True
    data: list[Animal]
    count: int


def _not_found(animal_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error_detail("animal_not_found", f"Animal {animal_id} not found"),
    )


def _bad_lineage(exc: ValueError) -> HTTPException:
    code = str(exc)
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=error_detail(code, _ERROR_MESSAGES.get(code, code)),
    )


@router.get(
    "/animals",
    response_model=AnimalListResponse,
    summary="List animals",
    description="Retrieve animals in registration order, optionally filtered by gender and status.",
)
@limiter.limit(settings.RATE_LIMIT)
async def list_animals(
    request: Request,
    gender: Gender | None = Query(None, description="Filter by gender"),
    animal_status: AnimalStatus | None = Query(None, alias="status", description="Filter by lifecycle status"),
) -> AnimalListResponse:
    """Get all animals with optional gender/status filters."""
    animals = get_store().list_animals(gender=gender, status=animal_status)
    logger.info("Returning %d animals (gender=%s, status=%s)", len(animals), gender, animal_status)
    return AnimalListResponse(data=animals, count=len(animals))


@router.post(
    "/animals",
    response_model=Animal,
    status_code=201,
    responses={400: {"model": ApiErrorResponse}},
    summary="Register an animal",
)
@limiter.limit(settings.RATE_LIMIT)
async def create_animal(request: Request, body: AnimalCreate) -> Animal:
    """Register an animal. Generation and ancestry are derived from its parents."""
    try:
        return get_store().create_animal(body)
    except ValueError as exc:
        raise _bad_lineage(exc)


@router.get(
    "/animals/{animal_id}",
    response_model=Animal,
    responses={404: {"model": ApiErrorResponse}},
    summary="Get animal by ID",
)
@limiter.limit(settings.RATE_LIMIT)
async def get_animal(request: Request, animal_id: int) -> Animal:
    animal = get_store().get_animal(animal_id)
    if animal is None:
        raise _not_found(animal_id)
    return animal


@router.put(
    "/animals/{animal_id}",
    response_model=Animal,
    responses={400: {"model": ApiErrorResponse}, 404: {"model": ApiErrorResponse}},
    summary="Update an animal",
)
@limiter.limit(settings.RATE_LIMIT)
async def update_animal(request: Request, animal_id: int, body: AnimalUpdate) -> Animal:
    """Update an animal. Changing a parent rebuilds ancestry for all descendants."""
    try:
        animal = get_store().update_animal(animal_id, body)
    except ValueError as exc:
        raise _bad_lineage(exc)
    if animal is None:
        raise _not_found(animal_id)
    return animal


@router.delete(
    "/animals/{animal_id}",
    status_code=204,
    responses={404: {"model": ApiErrorResponse}, 409: {"model": ApiErrorResponse}},
    summary="Delete an animal",
)
@limiter.limit(settings.RATE_LIMIT)
async def delete_animal(request: Request, animal_id: int) -> Response:
    """Delete an animal. Animals with offspring are marked inactive instead."""
    store = get_store()
    if store.get_animal(animal_id) is None:
        raise _not_found(animal_id)
    if not store.delete_animal(animal_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=error_detail(
                "animal_has_offspring",
                "Cannot delete an animal with offspring; its status has been set to inactive instead",
            ),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/animals/{animal_id}/potential-mates",
    response_model=AnimalListResponse,
    responses={404: {"model": ApiErrorResponse}},
    summary="List safe mates for an animal",
)
@limiter.limit(settings.RATE_LIMIT)
async def potential_mates(request: Request, animal_id: int) -> AnimalListResponse:
    """Active animals of the opposite gender that pass every compatibility rule."""
    if get_store().get_animal(animal_id) is None:
        raise _not_found(animal_id)
    mates = get_potential_mates(animal_id)
    return AnimalListResponse(data=mates, count=len(mates))


@router.get(
    "/health",
    summary="Health check",
    description="Check that the API is running.",
)
@limiter.limit(settings.RATE_LIMIT)
async def health_check(request: Request) -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "animals": len(get_store().list_animals())}
