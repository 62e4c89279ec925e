"""Pydantic models shared across pokedexcli.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`CacheConfig`, :class:`RequestConfig` and :class:`AppConfig`.

**API payload models** -- decoded from PokeAPI responses:
    :class:`NamedResource`, :class:`LocationAreaPage`,
    :class:`PokemonEncounter`, :class:`LocationArea` and :class:`Pokemon`.

Payload models ignore unknown fields; PokeAPI documents are large and we
only keep what the shell prints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


# --- Config ---


class CacheConfig(BaseModel):
    """Response cache settings stored in :class:`AppConfig`."""

    ttl_seconds: float = Field(
        default=30,
        gt=0,
        allow_inf_nan=False,
        description="Lifetime of cached responses in seconds",
    )


class RequestConfig(BaseModel):
    """HTTP request settings applied to every API call."""

    timeout: float = Field(default=30, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(
        default=0, ge=0, description="Retries on network errors and 5xx responses"
    )


class AppConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/pokedexcli/config.json``.

    Loaded by :func:`~pokedexcli.config.load_app_config`. Environment
    variables and CLI flags take precedence; see
    :func:`~pokedexcli.config.resolve_config`.
    """

    base_url: str = Field(default=DEFAULT_BASE_URL, description="PokeAPI root URL")
    cache: CacheConfig = Field(default_factory=CacheConfig)
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- API payloads ---


class NamedResource(BaseModel):
    """A ``{name, url}`` reference, PokeAPI's universal link shape."""

    model_config = ConfigDict(extra="ignore")

    name: str
    url: str = ""


class LocationAreaPage(BaseModel):
    """One page of the ``/location-area`` list endpoint."""

    model_config = ConfigDict(extra="ignore")

    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    results: list[NamedResource] = Field(default_factory=list)


class PokemonEncounter(BaseModel):
    """A Pokemon that can be encountered in a location area."""

    model_config = ConfigDict(extra="ignore")

    pokemon: NamedResource


class LocationArea(BaseModel):
    """A single location area from ``/location-area/{name}``."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    pokemon_encounters: list[PokemonEncounter] = Field(default_factory=list)


class Pokemon(BaseModel):
    """A Pokemon from ``/pokemon/{name}``.

    ``base_experience`` drives the catch chance; PokeAPI leaves it ``null``
    for a few forms, which we treat as zero.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    base_experience: int = 0

    @field_validator("base_experience", mode="before")
    @classmethod
    def _coerce_null(cls, value: Optional[int]) -> int:
        return value or 0
