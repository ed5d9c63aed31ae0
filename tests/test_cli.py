"""End-to-end tests for the command line interface."""

import logging
from datetime import date

import pytest
import requests
from typer.testing import CliRunner

from conftest import API_URL, FakeSession, observation
from satnogsctl.catalog import build_query_url
from satnogsctl.cli import app, default_end_date
from satnogsctl.config import reset_settings
from satnogsctl.model import Satellite, SearchParams

runner = CliRunner()

CUAVA = Satellite(name="CUAVA-2", norad_id="60527")
WS1 = Satellite(name="WS-1", norad_id="60469")


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SATNOGS_API_TOKEN", "cli-token")
    reset_settings()
    # the CLI reconfigures the root logger on every invocation
    handlers, level = logging.root.handlers[:], logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)
    reset_settings()


@pytest.fixture
def catalog(monkeypatch):
    """Every `requests.Session` created by the CLI serves these routes."""
    routes = FakeSession()
    created = []

    def make_session():
        session = FakeSession(routes.routes)
        created.append(session)
        return session

    monkeypatch.setattr(requests, "Session", make_session)
    routes.created = created
    return routes


def test_missing_token_stops_before_any_request(catalog, monkeypatch, tmp_path):
    monkeypatch.delenv("SATNOGS_API_TOKEN")

    result = runner.invoke(app, ["download", "-s", "2024-08-16", "-e", "2024-08-17", "-o", str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "SATNOGS_API_TOKEN" in result.output
    assert catalog.created == []
    assert not (tmp_path / "out").exists()


def test_empty_result_exits_cleanly(catalog, tmp_path):
    params = SearchParams(start=date(2024, 8, 16), end=date(2024, 8, 17))
    catalog.add_json(build_query_url(API_URL, CUAVA, params), [])

    result = runner.invoke(app, ["download", "-s", "2024-08-16", "-e", "2024-08-17", "-t", "CUAVA-2"])

    assert result.exit_code == 0, result.output
    assert not (tmp_path / "download").exists()
    assert catalog.created[0].requests[0]["headers"]["Authorization"] == "Bearer: cli-token"


def test_downloads_every_configured_satellite(catalog, tmp_path):
    params = SearchParams(start=date(2024, 8, 16), end=date(2024, 8, 17))
    payload = "https://db.example.org/data_obs/1"
    catalog.add_json(
        build_query_url(API_URL, CUAVA, params),
        [observation(1, start="2024-08-16T03:00:00Z", payloads=[payload])],
    )
    catalog.add_json(build_query_url(API_URL, WS1, params), [observation(2)])
    catalog.add_bytes(payload, b"beacon")
    out = tmp_path / "out"

    result = runner.invoke(app, ["-p", "simple", "download", "-s", "2024-08-16", "-e", "2024-08-17", "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert (out / "cuava-2" / "2024-08-16T03:00:00Z-cuava-2-beacon.raw").read_bytes() == b"beacon"
    assert (out / "cuava-2" / "2024-08-16T03:00:00Z-cuava-2-beacon.url").read_text() == f'"{payload}"\n'
    assert len(catalog.created) == 2


def test_transport_error_exits_non_zero(catalog, tmp_path):
    params = SearchParams(start=date(2024, 8, 16), end=date(2024, 8, 17))
    catalog.add_json(build_query_url(API_URL, CUAVA, params), {"detail": "Invalid token."}, status=401)

    result = runner.invoke(app, ["download", "-s", "2024-08-16", "-e", "2024-08-17", "-t", "60527"])

    assert result.exit_code == 1
    assert "Request failed" in result.output


def test_invalid_date_range(catalog):
    result = runner.invoke(app, ["download", "-s", "2024-08-17", "-e", "2024-08-16"])

    assert result.exit_code == 1
    assert "Invalid date range" in result.output
    assert catalog.created == []


def test_unknown_satellite(catalog):
    result = runner.invoke(app, ["download", "-t", "NOPE-1"])

    assert result.exit_code == 1
    assert "Unknown satellite" in result.output
    assert catalog.created == []


def test_unknown_layout(catalog):
    result = runner.invoke(app, ["download", "--layout", "flat"])

    assert result.exit_code == 1
    assert "Layout 'flat' not found" in result.output
    assert catalog.created == []


def test_list_satellites():
    result = runner.invoke(app, ["satellites"])

    assert result.exit_code == 0
    assert "CUAVA-2\t60527" in result.output
    assert "WS-1\t60469" in result.output


def test_default_end_date_is_after_today():
    assert default_end_date() >= date.today()


@pytest.mark.parametrize("command", [["download"], ["satellites"]])
def test_malformed_config_file(catalog, tmp_path, command):
    (tmp_path / "config.yml").write_text("layout: [unclosed\n")

    result = runner.invoke(app, command)

    assert result.exit_code == 1
    assert "Configuration failed: Unable to load settings" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert catalog.created == []
