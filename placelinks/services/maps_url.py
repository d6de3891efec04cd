"""Google Maps URL classification and identifier extraction.

Maps links reach the service in two shapes:

``https://maps.app.goo.gl/<token>`` (or the older ``goo.gl/maps/<token>``)
    A short link. It redirects once to a long-form URL and carries no place
    information itself; see :mod:`placelinks.services.short_link`.

``https://www.google.com/maps/place/<Name>/@<lat>,<lng>,<zoom>z/data=...``
    A long-form place URL. The place name is the path segment after
    ``/maps/place/`` and the ``data=`` segment holds ``!``-delimited tokens,
    one of which (``!1s...``) is the place identifier.
"""

import re
from typing import NamedTuple, Optional
from urllib.parse import unquote

SHORT_LINK_HOSTS = ("maps.app.goo.gl", "goo.gl/maps")
MAPS_HOSTS = SHORT_LINK_HOSTS + ("google.com/maps", "maps.google.com")

# ---------------------------------------------------------------------------
# Place identifier
# Assumes the identifier follows a ``!1s`` marker inside the ``data=`` segment.
# Two observed forms: a hex pair (``0x3560...:0x2cb7...``) and the canonical
# ``ChIJ...`` id. The first ``!1s`` token in the URL wins; at a given position
# the hex alternative is tried first.
# ---------------------------------------------------------------------------
_PLACE_ID_PATTERN = re.compile(
    r"!1s(?:(?P<hex>0x[a-f0-9]+:0x[a-f0-9]+)|(?P<canonical>ChIJ[A-Za-z0-9_-]+))"
)

# ---------------------------------------------------------------------------
# Place name
# Assumes the URL-encoded name is the whole path segment after /maps/place/.
# ---------------------------------------------------------------------------
_PLACE_NAME_PATTERN = re.compile(r"/maps/place/(?P<name>[^/]+)")

CANONICAL_ID_PREFIX = "ChIJ"


class MapsIdentifiers(NamedTuple):
    place_id: Optional[str] = None
    place_name: Optional[str] = None

    @property
    def found(self) -> bool:
        return bool(self.place_id or self.place_name)


def is_maps_url(url: str) -> bool:
    """Return True when *url* points at Google Maps (long form or short link)."""
    if not isinstance(url, str):
        return False
    return any(host in url for host in MAPS_HOSTS)


def is_short_link(url: str) -> bool:
    if not isinstance(url, str):
        return False
    return any(host in url for host in SHORT_LINK_HOSTS)


def is_canonical_place_id(place_id: Optional[str]) -> bool:
    """Only ``ChIJ`` ids can be looked up directly; hex pairs cannot."""
    return bool(place_id) and place_id.startswith(CANONICAL_ID_PREFIX)


def extract_identifiers(url: str) -> MapsIdentifiers:
    """Pull the place identifier and the place name out of a long-form Maps URL.

    Both are optional and independent of each other.
    """
    place_id = None
    id_match = _PLACE_ID_PATTERN.search(url)
    if id_match:
        place_id = id_match.group("hex") or id_match.group("canonical")

    place_name = None
    name_match = _PLACE_NAME_PATTERN.search(url)
    if name_match:
        place_name = unquote(name_match.group("name").replace("+", " ")) or None

    return MapsIdentifiers(place_id=place_id, place_name=place_name)
