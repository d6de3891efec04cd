import logging
from typing import Dict, Optional, Tuple

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from placelinks.config import get_settings
from placelinks.models.metadata import PlaceMetadata
from placelinks.models.metadata_request import CategoryGroupRequest, MetadataRequest
from placelinks.services.pipeline import resolve_metadata
from placelinks.services.postprocess import CATEGORY_GROUPS, category_group

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(prefix="/api", tags=["Metadata"])

FETCH_METADATA_PATH = "/api/fetch-metadata"
MISSING_URL_ERROR = {"error": "URL is required"}


@router.post(
    "/fetch-metadata",
    response_model=PlaceMetadata,
    summary="Resolve metadata for a link",
    description=(
        "Google Maps links (long form or `maps.app.goo.gl` short links) are "
        "resolved to place details: title, photo, category, rating, price "
        "level, address and city. Any other URL gets its Open Graph preview.\n\n"
        "Lookup failures never fail the request; the worst result is a record "
        "whose title is the submitted URL."
    ),
    responses={400: {"description": "`url` is missing"}},
)
@limiter.limit(lambda: get_settings().rate_limit)
async def fetch_metadata(request: Request, body: Optional[MetadataRequest] = None):
    url = ((body.url if body else None) or "").strip()
    if not url:
        return JSONResponse(status_code=400, content=MISSING_URL_ERROR)

    logger.info("Metadata request received", extra={"url": url})
    return await resolve_metadata(url)


@router.get("/category-groups", summary="Category groups used to filter the link list")
async def list_category_groups() -> Dict[str, Tuple[str, ...]]:
    return dict(CATEGORY_GROUPS)


@router.post("/category-group", summary="Group a place by its raw types and category label")
async def get_category_group(body: CategoryGroupRequest) -> Dict[str, str]:
    return {"group": category_group(body.types, body.category)}
