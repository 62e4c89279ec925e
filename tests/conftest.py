"""Shared test fixtures for pokedexcli.

Provides reusable fixtures for stubbing the PokeAPI with
:class:`httpx.MockTransport`, isolating configuration directories, and
managing global output state.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterator

import httpx
import pytest

from pokedexcli.cache import TTLCache
from pokedexcli.client import PokeAPIClient
from pokedexcli.models import AppConfig, RequestConfig
from pokedexcli.output import reset_output

BASE_URL = "https://pokeapi.test/api/v2"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> Iterator[None]:
    """Reset the global OutputManager after every test."""
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Canned PokeAPI payloads
# ---------------------------------------------------------------------------


def location_page(names: list[str], next_url: str | None, previous_url: str | None) -> dict[str, Any]:
    return {
        "count": 1089,
        "next": next_url,
        "previous": previous_url,
        "results": [
            {"name": name, "url": f"{BASE_URL}/location-area/{i}/"}
            for i, name in enumerate(names, start=1)
        ],
    }


LOCATION_AREA = {
    "id": 1,
    "name": "canalave-city-area",
    "game_index": 1,
    "encounter_method_rates": [],
    "location": {"name": "canalave-city", "url": f"{BASE_URL}/location/1/"},
    "pokemon_encounters": [
        {"pokemon": {"name": "tentacool", "url": f"{BASE_URL}/pokemon/72/"}, "version_details": []},
        {"pokemon": {"name": "tentacruel", "url": f"{BASE_URL}/pokemon/73/"}, "version_details": []},
    ],
}

PIKACHU = {"id": 25, "name": "pikachu", "base_experience": 112, "height": 4, "weight": 60}


# ---------------------------------------------------------------------------
# Stub API
# ---------------------------------------------------------------------------


class StubAPI:
    """Route table for :class:`httpx.MockTransport` that records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add_json(self, url: str, data: Any, status_code: int = 200) -> None:
        self.routes[url] = httpx.Response(status_code, json=data)

    def add_text(self, url: str, text: str, status_code: int) -> None:
        self.routes[url] = httpx.Response(status_code, text=text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get(str(request.url))
        if response is None:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            content=response.content,
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def hits(self, url: str) -> int:
        return sum(1 for r in self.requests if str(r.url) == url)


@pytest.fixture
def base_url() -> str:
    """Root URL the stub API answers on."""
    return BASE_URL


@pytest.fixture
def stub_api() -> StubAPI:
    """A stub PokeAPI pre-loaded with two location pages, one area and pikachu."""
    api = StubAPI()
    first = f"{BASE_URL}/location-area"
    second = f"{BASE_URL}/location-area?offset=20&limit=20"
    api.add_json(first, location_page(["canalave-city-area", "eterna-city-area"], second, None))
    api.add_json(second, location_page(["mt-coronet-1f-route-207", "mt-coronet-2f"], None, first))
    api.add_json(f"{BASE_URL}/location-area/canalave-city-area", LOCATION_AREA)
    api.add_json(f"{BASE_URL}/pokemon/pikachu", PIKACHU)
    return api


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(base_url=BASE_URL, request=RequestConfig(timeout=5, max_retries=0))


@pytest.fixture
def cache() -> Iterator[TTLCache]:
    c = TTLCache(30)
    yield c
    c.close()


@pytest.fixture
def client(app_config: AppConfig, cache: TTLCache, stub_api: StubAPI) -> Iterator[PokeAPIClient]:
    with PokeAPIClient(app_config, cache, transport=stub_api.transport()) as c:
        yield c


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG dirs at tmp_path and clear POKEDEX_* environment variables."""
    monkeypatch.setattr("pokedexcli.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["POKEDEX_BASE_URL", "POKEDEX_CACHE_TTL"]:
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture
def write_config(isolated_config: Path) -> Callable[[Any], Path]:
    """Write a config.json (dict as JSON, str verbatim) into the isolated config dir."""

    def _write(data: Any) -> Path:
        path = isolated_config / "config" / "pokedexcli" / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
