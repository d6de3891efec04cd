"""Client for the Google Places API (v1) and normalization of its results.

A lookup runs an ordered list of strategies and keeps the first place any
of them returns:

1. :func:`lookup_by_id`: Place Details, only for canonical ``ChIJ`` ids.
   Hex-pair ids from Maps URLs are not accepted by the API.
2. :func:`search_by_name`: Text Search limited to one result.

Nothing found (or no API key configured) means ``None``; the caller builds
its own title-only record.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, NamedTuple, Optional, Sequence

import httpx

from placelinks.config import get_settings
from placelinks.models.metadata import PlaceMetadata
from placelinks.models.outcome import Outcome
from placelinks.services.fetcher import build_client
from placelinks.services.maps_url import is_canonical_place_id
from placelinks.services.postprocess import extract_city, format_place_type, map_price_level

logger = logging.getLogger(__name__)

_BASE_URL = "https://places.googleapis.com/v1"
PLACE_FIELDS = (
    "id",
    "displayName",
    "formattedAddress",
    "types",
    "rating",
    "userRatingCount",
    "photos",
    "priceLevel",
    "primaryType",
)
DETAILS_FIELD_MASK = ",".join(PLACE_FIELDS)
SEARCH_FIELD_MASK = ",".join(f"places.{field}" for field in PLACE_FIELDS)


class PlaceQuery(NamedTuple):
    place_name: Optional[str]
    place_id: Optional[str]
    api_key: str


LookupStrategy = Callable[[httpx.AsyncClient, PlaceQuery], Awaitable[Outcome]]


def _headers(api_key: str, field_mask: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "X-Goog-Api-Key": api_key,
        "X-Goog-FieldMask": field_mask,
    }


async def lookup_by_id(client: httpx.AsyncClient, query: PlaceQuery) -> Outcome:
    if not is_canonical_place_id(query.place_id):
        return Outcome.empty("no canonical place id")

    try:
        response = await client.get(
            f"{_BASE_URL}/places/{query.place_id}",
            headers=_headers(query.api_key, DETAILS_FIELD_MASK),
        )
        if not response.is_success:
            return Outcome.empty(f"details returned HTTP {response.status_code}")
        place = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        return Outcome.empty(f"details request failed: {exc}")

    if not isinstance(place, dict) or not place:
        return Outcome.empty("details returned no place")
    return Outcome(place)


async def search_by_name(client: httpx.AsyncClient, query: PlaceQuery) -> Outcome:
    if not query.place_name:
        return Outcome.empty("no place name")

    try:
        response = await client.post(
            f"{_BASE_URL}/places:searchText",
            headers=_headers(query.api_key, SEARCH_FIELD_MASK),
            json={"textQuery": query.place_name, "maxResultCount": 1},
        )
        payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        return Outcome.empty(f"text search failed: {exc}")

    places = payload.get("places") if isinstance(payload, dict) else None
    if not isinstance(places, list) or not places:
        return Outcome.empty(f"text search returned no places (HTTP {response.status_code})")
    return Outcome(places[0])


LOOKUP_STRATEGIES: Sequence[LookupStrategy] = (lookup_by_id, search_by_name)


def _photo_url(photos: Any, api_key: str) -> Optional[str]:
    if not isinstance(photos, list) or not photos:
        return None
    name = photos[0].get("name")
    if not name:
        return None
    max_width = get_settings().photo_max_width
    return f"{_BASE_URL}/{name}/media?maxWidthPx={max_width}&key={api_key}"


def normalize_place(place: Dict[str, Any], api_key: str, fallback_title: str) -> PlaceMetadata:
    """Convert a raw Places API place into :class:`PlaceMetadata`."""
    types = place.get("types") or []
    address = place.get("formattedAddress") or None
    display_name = (place.get("displayName") or {}).get("text")

    return PlaceMetadata(
        title=display_name or fallback_title,
        description="",
        image=_photo_url(place.get("photos"), api_key),
        category=format_place_type(place.get("primaryType") or (types[0] if types else None)),
        types=types,
        address=address,
        city=extract_city(address),
        rating=place.get("rating") or None,
        review_count=place.get("userRatingCount") or None,
        price_level=map_price_level(place.get("priceLevel")),
    )


async def lookup_place(
    place_name: Optional[str],
    place_id: Optional[str],
    fallback_title: Optional[str] = None,
    strategies: Sequence[LookupStrategy] = LOOKUP_STRATEGIES,
) -> Optional[PlaceMetadata]:
    """Look a place up by id and/or name and return normalized metadata.

    Returns ``None`` without any network call when no API key is configured,
    and ``None`` when every strategy comes back empty. Never raises for
    transport or response errors.
    """
    api_key = get_settings().google_places_api_key
    if not api_key:
        logger.info("No Places API key configured; skipping place lookup")
        return None

    query = PlaceQuery(place_name=place_name, place_id=place_id, api_key=api_key)
    async with build_client() as client:
        for strategy in strategies:
            outcome = await strategy(client, query)
            if outcome.ok:
                logger.info(
                    "Place found",
                    extra={"strategy": strategy.__name__, "place_id": place_id, "place_name": place_name},
                )
                title = fallback_title or place_name or place_id
                try:
                    return normalize_place(outcome.value, api_key, title)
                except (AttributeError, KeyError, TypeError, ValueError) as exc:
                    logger.warning("Could not normalize place from %s: %s", strategy.__name__, exc)
                    return None
            logger.info("Lookup strategy %s came back empty: %s", strategy.__name__, outcome.reason)

    logger.info("No place found for name=%r id=%r", place_name, place_id)
    return None
