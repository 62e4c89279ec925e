"""Configuration management with XDG paths and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.pokedexcli/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **App config** -- A single :class:`~pokedexcli.models.AppConfig` JSON
  file storing the API root URL, cache TTL and request settings.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables and the config file into the effective settings.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from pokedexcli.exceptions import ConfigError
from pokedexcli.models import AppConfig, CacheConfig

_APP_NAME = "pokedexcli"
_CONFIG_FILENAME = "config.json"

ENV_BASE_URL = "POKEDEX_BASE_URL"
ENV_CACHE_TTL = "POKEDEX_CACHE_TTL"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG base directories (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/pokedexcli/`` (default ``~/.config/pokedexcli/``).
    On macOS/Windows: ``~/.pokedexcli/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/pokedexcli/`` (default ``~/.local/share/pokedexcli/``).
    On macOS/Windows: ``~/.pokedexcli/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- App config ---


def config_path() -> Path:
    """Path to the app config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_app_config() -> AppConfig:
    """Load the configuration file.

    Returns:
        The deserialised :class:`~pokedexcli.models.AppConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            validation.
    """
    path = config_path()
    if not path.is_file():
        return AppConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return AppConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


# --- Precedence resolution ---


def resolve_config(
    cli_base_url: Optional[str] = None,
    cli_cache_ttl: Optional[float] = None,
) -> AppConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_base_url``, ``cli_cache_ttl``)
        2. Environment variables (``POKEDEX_BASE_URL``, ``POKEDEX_CACHE_TTL``)
        3. User config (``~/.config/pokedexcli/config.json``)
        4. Defaults

    Raises:
        ConfigError: On an invalid config file or a TTL that is not a positive finite number.
    """
    config = load_app_config()

    base_url = cli_base_url or os.environ.get(ENV_BASE_URL)
    if base_url:
        config.base_url = base_url
    config.base_url = config.base_url.rstrip("/")

    ttl: Optional[float] = cli_cache_ttl
    if ttl is None:
        env_ttl = os.environ.get(ENV_CACHE_TTL)
        if env_ttl:
            try:
                ttl = float(env_ttl)
            except ValueError as exc:
                raise ConfigError(f"{ENV_CACHE_TTL} must be a number, got {env_ttl!r}") from exc
    if ttl is not None:
        try:
            config.cache = CacheConfig(ttl_seconds=ttl)
        except ValidationError as exc:
            raise ConfigError(f"Cache TTL must be a positive finite number, got {ttl}") from exc

    return config
