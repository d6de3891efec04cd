"""One-hop resolution of Google Maps short links."""

import logging

import httpx

from placelinks.models.outcome import Outcome
from placelinks.services.fetcher import build_client, validate_url
from placelinks.services.maps_url import is_short_link

logger = logging.getLogger(__name__)


async def _head_location(url: str) -> Outcome:
    """HEAD *url* without following redirects and return its ``Location`` header."""
    try:
        validate_url(url)
    except ValueError as exc:
        return Outcome.empty(f"blocked URL: {exc}")

    try:
        async with build_client(follow_redirects=False) as client:
            response = await client.head(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return Outcome.empty(f"HEAD request failed: {exc}")

    location = response.headers.get("location")
    if not location:
        return Outcome.empty(f"no Location header (HTTP {response.status_code})")
    return Outcome(location)


async def resolve_short_link(url: str) -> str:
    """Return the URL a short link redirects to, or *url* itself.

    Only one redirect hop is followed; short Maps links redirect exactly once.
    Failures are not errors: the original URL is returned and identifier
    extraction simply finds less.
    """
    if not is_short_link(url):
        return url

    outcome = await _head_location(url)
    if not outcome.ok:
        logger.warning("Could not resolve short link %s: %s", url, outcome.reason)
        return url

    logger.info("Resolved short link", extra={"url": url, "resolved": outcome.value})
    return outcome.value
