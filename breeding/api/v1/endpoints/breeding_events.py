"""Breeding event endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Query, Request, Response, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from breeding.config import settings
from breeding.models.breeding_event import BreedingEvent, BreedingEventCreate, BreedingEventUpdate
from breeding.models.errors import ApiErrorResponse, error_detail
from breeding.services import event_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/breeding-events", tags=["Breeding events"])
limiter = Limiter(key_func=get_remote_address)


def _not_found(event_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error_detail("event_not_found", f"Breeding event {event_id} not found"),
    )


@router.get("", summary="List breeding events")
@limiter.limit(settings.RATE_LIMIT)
async def list_events(
    request: Request,
    animal_id: int | None = Query(None, alias="animalId", description="Only events with this sire or dam"),
) -> dict:
    events = event_service.list_breeding_events(animal_id)
    return {"events": [e.model_dump(by_alias=True) for e in events], "total": len(events)}


@router.post(
    "",
    response_model=BreedingEvent,
    status_code=201,
    responses={404: {"model": ApiErrorResponse}, 409: {"model": ApiErrorResponse}},
    summary="Record a breeding event",
)
@limiter.limit(settings.RATE_LIMIT)
async def create_event(request: Request, body: BreedingEventCreate) -> BreedingEvent:
    """Record a mating. Pairs that fail the compatibility rules are refused."""
    try:
        return event_service.create_breeding_event(body)
    except event_service.IncompatiblePairError as exc:
        detail = error_detail("incompatible_pair", exc.verdict.reason or "Pair is not compatible")
        detail["verdict"] = exc.verdict.model_dump(by_alias=True, exclude_none=True)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=error_detail("animal_not_found", "Sire or dam not found"),
        )


@router.get(
    "/{event_id}",
    response_model=BreedingEvent,
    responses={404: {"model": ApiErrorResponse}},
    summary="Get a breeding event",
)
@limiter.limit(settings.RATE_LIMIT)
async def get_event(request: Request, event_id: int) -> BreedingEvent:
    event = event_service.get_breeding_event(event_id)
    if event is None:
        raise _not_found(event_id)
    return event


@router.put(
    "/{event_id}",
    response_model=BreedingEvent,
    responses={404: {"model": ApiErrorResponse}},
    summary="Update a breeding event",
)
@limiter.limit(settings.RATE_LIMIT)
async def update_event(request: Request, event_id: int, body: BreedingEventUpdate) -> BreedingEvent:
    event = event_service.update_breeding_event(event_id, body)
    if event is None:
        raise _not_found(event_id)
    return event


@router.delete(
    "/{event_id}",
    status_code=204,
    responses={404: {"model": ApiErrorResponse}},
    summary="Delete a breeding event",
)
@limiter.limit(settings.RATE_LIMIT)
async def delete_event(request: Request, event_id: int) -> Response:
    if not event_service.delete_breeding_event(event_id):
        raise _not_found(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
