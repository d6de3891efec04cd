"""Metadata resolution: turns a submitted URL into one :class:`PlaceMetadata`."""

import logging
from typing import Optional

from placelinks.models.metadata import PlaceMetadata
from placelinks.services.maps_url import extract_identifiers, is_maps_url
from placelinks.services.opengraph import fetch_open_graph_metadata
from placelinks.services.places import lookup_place
from placelinks.services.short_link import resolve_short_link

logger = logging.getLogger(__name__)


async def handle_maps_link(url: str) -> Optional[PlaceMetadata]:
    """Resolve a Maps link into place metadata.

    Returns ``None`` when neither a place id nor a place name can be read
    from the (resolved) URL.
    """
    resolved = await resolve_short_link(url)
    identifiers = extract_identifiers(resolved)
    logger.info(
        "Maps identifiers extracted",
        extra={"url": resolved, "place_id": identifiers.place_id, "place_name": identifiers.place_name},
    )
    if not identifiers.found:
        return None

    fallback_title = identifiers.place_name or resolved
    place = await lookup_place(
        identifiers.place_name, identifiers.place_id, fallback_title=fallback_title
    )
    if place is not None:
        return place

    return PlaceMetadata.title_only(fallback_title)


async def resolve_metadata(url: str) -> PlaceMetadata:
    """Return metadata for *url*.

    Maps links go through short-link resolution, identifier extraction and the
    Places lookup; every other URL gets its Open Graph preview. External
    failures degrade to a record whose title is the URL; they never raise.
    """
    if is_maps_url(url):
        # ── Maps branch ──────────────────────────────────────────────────────
        place = await handle_maps_link(url)
        if place is None:
            logger.info("No place information in Maps URL %s", url)
            return PlaceMetadata.title_only(url)
        return place

    # ── Generic branch ───────────────────────────────────────────────────────
    og = await fetch_open_graph_metadata(url)
    return PlaceMetadata.from_open_graph(og)
