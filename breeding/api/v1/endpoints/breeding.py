"""Breeding compatibility endpoints."""

import logging

from fastapi import APIRouter, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from breeding.config import settings
from breeding.models.compatibility import (
    BreedingSuggestion,
    CompatibilityReport,
    CompatibilityVerdict,
    InbreedingRisk,
    RiskCheckRequest,
)
from breeding.services import breeding_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/breeding", tags=["Breeding"])
limiter = Limiter(key_func=get_remote_address)


@router.get(
    "/compatibility-check",
    response_model=CompatibilityVerdict,
    response_model_exclude_none=True,
    summary="Check whether two animals may be paired",
)
@limiter.limit(settings.RATE_LIMIT)
async def compatibility_check(
    request: Request,
    male_id: int = Query(..., alias="maleId", gt=0, description="Intended sire ID"),
    female_id: int = Query(..., alias="femaleId", gt=0, description="Intended dam ID"),
) -> CompatibilityVerdict:
    """Return the compatibility verdict for a pair.

    Unknown animals and internal failures are reported as an incompatible,
    high-risk verdict with status 200, so clients render every outcome the
    same way.
    """
    verdict = breeding_service.check_pair(male_id, female_id)
    logger.info(
        "Compatibility %s x %s -> compatible=%s risk=%s",
        male_id, female_id, verdict.compatible, verdict.risk_level,
    )
    return verdict


@router.get(
    "/compatibility-report",
    response_model=CompatibilityReport,
    response_model_exclude_none=True,
    summary="Compatibility verdict with breed cross information",
)
@limiter.limit(settings.RATE_LIMIT)
async def compatibility_report(
    request: Request,
    male_id: int = Query(..., alias="maleId", gt=0),
    female_id: int = Query(..., alias="femaleId", gt=0),
) -> CompatibilityReport:
    return breeding_service.compatibility_report(male_id, female_id)


@router.post(
    "/risk-check",
    response_model=InbreedingRisk,
    summary="Classify the relationship between two animals",
)
@limiter.limit(settings.RATE_LIMIT)
async def risk_check(request: Request, body: RiskCheckRequest) -> InbreedingRisk:
    return breeding_service.check_inbreeding_risk(body.male_id, body.female_id)


@router.get(
    "/suggestions",
    summary="Suggest compatible active pairs",
)
@limiter.limit(settings.RATE_LIMIT)
async def suggestions(
    request: Request,
    limit: int = Query(breeding_service.DEFAULT_SUGGESTION_LIMIT, ge=1, le=50, description="Max pairs to return"),
) -> dict:
    """Return the first compatible active male/female pairs with their scores."""
    pairs: list[BreedingSuggestion] = breeding_service.get_breeding_suggestions(limit)
    return {"suggestions": [p.model_dump(by_alias=True) for p in pairs], "total": len(pairs)}
