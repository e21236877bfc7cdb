# backend/movequote/main.py

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from .api import api_pricing
from .core.config import settings
from .core.observability import setup_logging
from .utils.errors import field_errors_from_pydantic

# Configure logging before creating any loggers
setup_logging()
logger = logging.getLogger(__name__)

_BOOT_TS = time.time()

# Always use ORJSONResponse for JSON payloads to ensure consistent, fast
# serialization across all endpoints.
app = FastAPI(title=settings.PROJECT_NAME, default_response_class=ORJSONResponse)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.info("CORS origins set to: %s", settings.CORS_ORIGINS)


@app.get("/healthz", tags=["health"])
async def healthz():
    """Liveness probe; the pricing engine has no backing services to ping."""
    return {"status": "ok", "uptime_s": round(time.time() - _BOOT_TS, 1)}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return validation errors as ``{path, message}`` entries and log them."""
    errors = exc.errors()
    logger.warning("Validation error at %s: %s", request.url.path, errors)
    field_errors = field_errors_from_pydantic(errors, strip_prefix="body")
    return ORJSONResponse(
        status_code=422,
        content={
            "detail": {
                "message": "Invalid pricing request",
                "field_errors": field_errors,
            }
        },
    )


api_prefix = settings.API_V1_STR  # usually something like "/api/v1"

app.include_router(api_pricing.router, prefix=f"{api_prefix}", tags=["pricing"])
