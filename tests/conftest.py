"""Pytest configuration and fixtures shared by the test suite."""

import io
import json
import logging
from datetime import date
from pathlib import Path

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from satnogsctl.model import Satellite, SearchParams
from satnogsctl.progress.events import EventBus, set_bus

log = logging.getLogger(__name__)

API_URL = "https://network.satnogs.org/api/observations/"


def pytest_addoption(parser):
    parser.addoption("--slow", action="store", default=False, help="Run slow tests")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--slow"):
        # --slow given in cli: do not skip slow tests
        return
    skip_slow = pytest.mark.skip(reason="Marked as slow, skipping")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def make_response(url: str, status: int = 200, body: bytes = b"", headers: dict | None = None) -> requests.Response:
    """Build a real `requests.Response` streaming `body`."""
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.reason = "OK" if status < 400 else "Error"
    response.headers = CaseInsensitiveDict(headers or {})
    response.raw = io.BytesIO(body)
    return response


def link_header(next_url: str) -> dict[str, str]:
    return {"Link": f'<{next_url}>; rel="next"'}


class FakeSession:
    """Stand-in for `requests.Session` serving canned responses by URL.

    Each route is `(status, body, headers)`, a fresh response is built on every
    request so the same URL can be fetched more than once.
    """

    def __init__(self, routes: dict | None = None):
        self.routes: dict[str, tuple[int, bytes, dict]] = dict(routes or {})
        self.requests: list[dict] = []
        self.closed = False

    def add_json(self, url: str, payload, next_url: str | None = None, status: int = 200) -> None:
        headers = link_header(next_url) if next_url else {}
        self.routes[url] = (status, json.dumps(payload).encode(), headers)

    def add_bytes(self, url: str, body: bytes, status: int = 200) -> None:
        self.routes[url] = (status, body, {"Content-Length": str(len(body))})

    def mount(self, prefix, adapter) -> None:
        pass

    def get(self, url, headers=None, stream=False, timeout=None):
        self.requests.append({"url": url, "headers": dict(headers or {}), "stream": stream, "timeout": timeout})
        if url not in self.routes:
            raise requests.exceptions.ConnectionError(f"no route to {url}")
        status, body, response_headers = self.routes[url]
        return make_response(url, status=status, body=body, headers=response_headers)

    def close(self) -> None:
        self.closed = True

    @property
    def urls(self) -> list[str]:
        return [r["url"] for r in self.requests]


@pytest.fixture(autouse=True)
def event_bus():
    """Isolate progress events per test, returning the list of emitted events."""
    bus = EventBus()
    events = []
    bus.subscribe(events.append)
    set_bus(bus)
    yield events
    set_bus(None)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def downloader(fake_session):
    from satnogsctl.downloaders import HTTPDownloader

    dwl = HTTPDownloader()
    dwl.init(session=fake_session)
    return dwl


@pytest.fixture
def authenticator():
    from satnogsctl.auth import TokenAuthenticator

    return TokenAuthenticator(token="test-token")


@pytest.fixture
def cuava():
    return Satellite(name="CUAVA-2", norad_id="60527")


@pytest.fixture
def search_params():
    return SearchParams(start=date(2024, 8, 16), end=date(2024, 8, 17))


@pytest.fixture
def temp_download_dir(tmp_path) -> Path:
    """Provide a temporary directory for downloads."""
    download_dir = tmp_path / "downloads"
    download_dir.mkdir()
    return download_dir


def observation(obs_id: int, start: str | None = None, payloads: list[str] | None = None, **extra) -> dict:
    """Catalog record as served by the API, with a few unrelated fields."""
    record = {
        "id": obs_id,
        "start": start,
        "end": None,
        "ground_station": 42,
        "vetted_status": "good",
        "demoddata": [{"payload_demod": url} for url in payloads or []],
    }
    record.update(extra)
    return record
