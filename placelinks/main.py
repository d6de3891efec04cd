import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from placelinks.config import get_settings
from placelinks.routers.metadata import (
    FETCH_METADATA_PATH,
    MISSING_URL_ERROR,
    limiter,
    router as metadata_router,
)

settings = get_settings()

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": settings.log_level.upper(), "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Resolves shared Google Maps links and other URLs into place metadata for a curated link list.",
    version="1.0.0",
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # On the metadata route an unparseable or absent body counts as a missing url.
    if request.url.path == FETCH_METADATA_PATH:
        logger.warning("Rejected metadata request body: %s", exc.errors())
        return JSONResponse(status_code=400, content=MISSING_URL_ERROR)
    return await request_validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"error": "Failed to fetch metadata"})


app.include_router(metadata_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"status": "ok", "app": settings.app_name}
