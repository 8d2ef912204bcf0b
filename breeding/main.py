"""FastAPI application initialization and configuration."""

import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from breeding.api.v1.endpoints.animals import limiter, router as animals_router
from breeding.api.v1.endpoints.breeding import router as breeding_router
from breeding.api.v1.endpoints.breeding_events import router as breeding_events_router
from breeding.config import settings
from breeding.db.firestore import is_mock_mode
from breeding.db.pedigree_store import get_store
from breeding.db.seed import seed_sample_data

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Rabbit Breeding API",
    description="Pedigree records, breeding compatibility checks and breeding events for a rabbitry.",
    version="1.0.0",
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc",
    openapi_url="/api/v1/openapi.json",
)

# --- Middleware ---

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


# Request logging
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log every incoming request and its duration."""
    start = time.perf_counter()
    response: Response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s -> %s (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


# Register routes
app.include_router(animals_router, prefix="/api/v1", tags=["Animals"])
app.include_router(breeding_router, prefix="/api/v1", tags=["Breeding"])
app.include_router(breeding_events_router, prefix="/api/v1", tags=["Breeding events"])

# Sample pedigree for local development
if is_mock_mode() and settings.SEED_SAMPLE_DATA:
    seed_sample_data(get_store())

logger.info("Rabbit Breeding API started (debug=%s, mock=%s)", settings.DEBUG, is_mock_mode())
