"""Open Graph preview extraction for non-Maps links."""

import logging
import re
from typing import Optional, Sequence
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from placelinks.config import get_settings
from placelinks.models.metadata import OpenGraphMetadata
from placelinks.services.fetcher import fetch_page

logger = logging.getLogger(__name__)

TITLE_KEYS = ("og:title", "twitter:title")
DESCRIPTION_KEYS = ("og:description", "twitter:description", "description")
IMAGE_KEYS = ("og:image", "twitter:image")


def _meta_content(soup: BeautifulSoup, attr: str, key: str) -> Optional[str]:
    pattern = re.compile(rf"^{re.escape(key)}$", re.IGNORECASE)
    for tag in soup.find_all("meta", attrs={attr: pattern}):
        content = str(tag.get("content") or "").strip()
        if content:
            return content
    return None


def extract_meta(soup: BeautifulSoup, key: str) -> Optional[str]:
    """Return the ``content`` of the first ``<meta>`` named *key*.

    ``property="..."`` matches are preferred over ``name="..."`` ones.
    Attribute order inside the tag does not matter.
    """
    return _meta_content(soup, "property", key) or _meta_content(soup, "name", key)


def _first_meta(soup: BeautifulSoup, keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = extract_meta(soup, key)
        if value:
            return value
    return None


def _extract_title(soup: BeautifulSoup) -> Optional[str]:
    title_tag = soup.find("title")
    if title_tag:
        return title_tag.get_text(strip=True) or None
    return None


def absolutize_image(image: str, page_url: str) -> str:
    """Resolve a relative image path against the origin of *page_url*.

    Protocol-relative paths (``//cdn...``) take the scheme of *page_url*.
    """
    if image.startswith("http"):
        return image
    if image.startswith("//"):
        return urljoin(page_url, image)
    parsed = urlparse(page_url)
    origin = f"{parsed.scheme}://{parsed.netloc}"
    if image.startswith("/"):
        return f"{origin}{image}"
    return f"{origin}/{image}"


def extract_open_graph(html: str, page_url: str, fallback_title: str) -> OpenGraphMetadata:
    """Extract title, description and image from *html*.

    *page_url* is the final URL after redirects; relative images are resolved
    against it.
    """
    soup = BeautifulSoup(html, "lxml")

    title = _first_meta(soup, TITLE_KEYS) or _extract_title(soup) or fallback_title
    description = _first_meta(soup, DESCRIPTION_KEYS) or ""
    image = _first_meta(soup, IMAGE_KEYS)
    if image:
        image = absolutize_image(image, page_url)

    return OpenGraphMetadata(title=title.strip(), description=description.strip(), image=image)


async def fetch_open_graph_metadata(url: str) -> OpenGraphMetadata:
    """Fetch *url* and return its Open Graph preview.

    Any failure (blocked URL, network error, non-2xx status) yields a preview
    whose title is *url* itself.
    """
    fallback = OpenGraphMetadata(title=url)
    try:
        page = await fetch_page(url, headers={"User-Agent": get_settings().user_agent})
    except (ValueError, RuntimeError, httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Could not fetch %s for Open Graph tags: %s", url, exc)
        return fallback

    if not page.ok:
        logger.info("Open Graph fetch for %s returned HTTP %s", url, page.status_code)
        return fallback

    return extract_open_graph(page.html, page.url, fallback_title=url)
