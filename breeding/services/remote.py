"""Client for a remote compatibility-check endpoint.

One GET per call: no retries, no de-duplication of concurrent checks for the
same pair. Whatever goes wrong on the way (connection error, timeout, non-2xx
status, malformed body) the caller gets the fail-closed verdict, never an
exception.
"""

import logging

import httpx

from breeding.config import settings
from breeding.models.compatibility import CompatibilityVerdict
from breeding.services.compatibility import FAIL_CLOSED_VERDICT

logger = logging.getLogger(__name__)

CHECK_PATH = "/breeding/compatibility-check"


async def _request_verdict(
    client: httpx.AsyncClient, male_id: int, female_id: int
) -> CompatibilityVerdict | Exception:
    """Perform the request; return the parsed verdict or the failure as a value."""
    url = settings.COMPATIBILITY_API_URL.rstrip("/") + CHECK_PATH
    try:
        response = await client.get(url, params={"maleId": male_id, "femaleId": female_id})
        response.raise_for_status()
        return CompatibilityVerdict.model_validate(response.json())
    except Exception as e:
        return e


async def check_compatibility_remote(
    male_id: int,
    female_id: int,
    client: httpx.AsyncClient | None = None,
) -> CompatibilityVerdict:
    """Ask the remote service whether two animals may be paired.

    Args:
        male_id: ID of the intended sire
        female_id: ID of the intended dam
        client: Optional shared client; a short-lived one is created otherwise

    Returns:
        The remote verdict, or the fail-closed verdict on any failure
    """
    if client is None:
        async with httpx.AsyncClient(timeout=settings.COMPATIBILITY_TIMEOUT) as owned_client:
            result = await _request_verdict(owned_client, male_id, female_id)
    else:
        result = await _request_verdict(client, male_id, female_id)

    if isinstance(result, Exception):
        logger.error("Error checking breeding compatibility %s x %s: %s", male_id, female_id, result)
        return FAIL_CLOSED_VERDICT
    return result
