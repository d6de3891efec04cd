import ipaddress
import socket
from typing import Dict, NamedTuple, Optional
from urllib.parse import urljoin, urlparse

import httpx

from placelinks.config import get_settings

MAX_CONTENT_SIZE = 10 * 1024 * 1024  # 10 MB
MAX_REDIRECTS = 10
ALLOWED_SCHEMES = {"http", "https"}

# Replaced in tests with an ``httpx.MockTransport``.
_TRANSPORT: Optional[httpx.AsyncBaseTransport] = None


class FetchedPage(NamedTuple):
    url: str  # final URL after redirects
    status_code: int
    html: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def build_client(**kwargs) -> httpx.AsyncClient:
    """Return an :class:`httpx.AsyncClient` using the configured timeout."""
    kwargs.setdefault("timeout", get_settings().http_timeout)
    if _TRANSPORT is not None:
        kwargs.setdefault("transport", _TRANSPORT)
    return httpx.AsyncClient(**kwargs)


def _is_private_address(hostname: str) -> bool:
    """Return True if *hostname* resolves to a private, loopback, or link-local address."""
    try:
        infos = socket.getaddrinfo(hostname, None)
    except socket.gaierror:
        return False

    for info in infos:
        raw_ip = info[4][0]
        # Strip IPv6 zone IDs (e.g. "::1%eth0" → "::1")
        raw_ip = raw_ip.split("%")[0]
        try:
            addr = ipaddress.ip_address(raw_ip)
        except ValueError:
            continue
        if addr.is_private or addr.is_loopback or addr.is_link_local or addr.is_reserved:
            return True
    return False


def validate_url(url: str) -> None:
    """Raise ValueError if *url* fails SSRF / scheme validation."""
    parsed = urlparse(url)

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")

    hostname = parsed.hostname
    if not hostname:
        raise ValueError("URL must have a valid hostname.")

    if _is_private_address(hostname):
        raise ValueError("Requests to private/internal addresses are not allowed.")


async def fetch_page(url: str, headers: Optional[Dict[str, str]] = None) -> FetchedPage:
    """GET *url* and return the final URL, status code and body.

    Redirects are followed manually so that every redirect destination is
    validated against the SSRF rules before the next request is made. A
    non-2xx final status is returned, not raised.

    Raises:
        ValueError: if the URL fails SSRF / scheme validation.
        httpx.HTTPError: on network errors.
        RuntimeError: if the body exceeds MAX_CONTENT_SIZE or there are too many redirects.
    """
    validate_url(url)

    current_url = url
    async with build_client(follow_redirects=False, headers=headers) as client:
        for _ in range(MAX_REDIRECTS + 1):
            async with client.stream("GET", current_url) as response:
                if response.is_redirect:
                    location = response.headers.get("location", "")
                    next_url = urljoin(current_url, location)
                    validate_url(next_url)
                    current_url = next_url
                    continue

                content_length = response.headers.get("content-length")
                if content_length and int(content_length) > MAX_CONTENT_SIZE:
                    raise RuntimeError("Response body exceeds the maximum allowed size.")

                chunks = []
                total = 0
                async for chunk in response.aiter_bytes():
                    total += len(chunk)
                    if total > MAX_CONTENT_SIZE:
                        raise RuntimeError("Response body exceeds the maximum allowed size.")
                    chunks.append(chunk)

                body = b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")
                return FetchedPage(url=current_url, status_code=response.status_code, html=body)

    raise RuntimeError("Too many redirects.")
