import httpx
import pytest

from placelinks.config import get_settings
from placelinks.services import fetcher


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Start every test without an API key and with a fresh settings cache."""
    monkeypatch.delenv("GOOGLE_PLACES_API_KEY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def public_hosts(monkeypatch):
    """Skip DNS in the SSRF guard; every test host counts as public."""
    monkeypatch.setattr(fetcher, "_is_private_address", lambda hostname: False)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "test-key")
    get_settings.cache_clear()
    return "test-key"


@pytest.fixture
def transport(monkeypatch):
    """Route every client built by the fetcher through *handler*.

    Returns an installer; the list it returns collects every request seen.
    """

    def install(handler):
        seen = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        monkeypatch.setattr(fetcher, "_TRANSPORT", httpx.MockTransport(recording_handler))
        return seen

    return install
