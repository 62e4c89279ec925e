"""PokeAPI HTTP client with fetch-or-cache semantics.

:class:`PokeAPIClient` wraps :class:`httpx.Client` and layers on:

- **Response caching** -- raw bodies are memoised in a
  :class:`~pokedexcli.cache.TTLCache` keyed by the full URL.  A hit skips
  the network entirely.
- **Retry with backoff** -- retries on 5xx and network errors with
  exponential delay (1 s, 2 s, 4 s, ...) up to ``max_retries``.
- **Error mapping** -- any status of 300 or above becomes a typed
  :class:`~pokedexcli.exceptions.PokedexError`.
- **Decoding** -- typed helpers validate JSON bodies into the payload
  models from :mod:`pokedexcli.models`.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from pokedexcli.cache import TTLCache
from pokedexcli.exceptions import DecodeError, NetworkError, NotFoundError, ServerError
from pokedexcli.models import AppConfig, LocationArea, LocationAreaPage, Pokemon

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class PokeAPIClient:
    """Blocking PokeAPI client.

    Must be used as a context manager so that the underlying transport is
    opened and closed properly.  The cache is owned by the caller and is
    not closed on exit.

    Args:
        config: Resolved app configuration (base URL, request settings).
        cache: Response cache consulted before every request.
        transport: Optional httpx transport, used by tests to stub the API.
        sleep: Delay function between retries.  Injected by tests.

    Example::

        with TTLCache(30) as cache, PokeAPIClient(config, cache) as client:
            page = client.list_location_areas()
    """

    def __init__(
        self,
        config: AppConfig,
        cache: TTLCache,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._cache = cache
        self._transport = transport
        self._sleep = sleep
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> PokeAPIClient:
        self._client = httpx.Client(
            timeout=self._config.request.timeout,
            follow_redirects=True,
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    @property
    def base_url(self) -> str:
        return self._config.base_url

    # ------------------------------------------------------------------ #
    # Endpoints
    # ------------------------------------------------------------------ #

    def list_location_areas(self, url: Optional[str] = None) -> LocationAreaPage:
        """Fetch one page of location areas.

        Args:
            url: A ``next``/``previous`` link from an earlier page.  Defaults
                to the first page.
        """
        return self._decode(self.fetch(url or f"{self.base_url}/location-area"), LocationAreaPage)

    def get_location_area(self, name: str) -> LocationArea:
        """Fetch a location area by name or id."""
        return self._decode(self.fetch(f"{self.base_url}/location-area/{name}"), LocationArea)

    def get_pokemon(self, name: str) -> Pokemon:
        """Fetch a Pokemon by name or id."""
        return self._decode(self.fetch(f"{self.base_url}/pokemon/{name}"), Pokemon)

    # ------------------------------------------------------------------ #
    # Fetch-or-cache
    # ------------------------------------------------------------------ #

    def fetch(self, url: str) -> bytes:
        """Return the raw body for *url*, from the cache when possible.

        On a miss the URL is requested; a successful body is added to the
        cache before being returned.  Failed responses are never cached.

        Raises:
            NotFoundError: On 404.
            ServerError: On any other status of 300 or above.
            NetworkError: On network / timeout errors after all retries.
        """
        body, hit = self._cache.get(url)
        if hit:
            return body

        response = self._execute_with_retry(url)
        self._map_response_error(response)

        body = response.content
        self._cache.add(url, body)
        return body

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _execute_with_retry(self, url: str) -> httpx.Response:
        """GET *url*, retrying 5xx responses and network errors with backoff."""
        assert self._client is not None, "Client not initialised -- use as context manager"

        max_retries = self._config.request.max_retries
        for attempt in range(max_retries + 1):
            try:
                response = self._client.get(url)
            except httpx.TransportError as exc:
                if attempt < max_retries:
                    delay = 2 ** attempt
                    logger.debug(
                        "Connection error: %s, retrying in %ss (attempt %d/%d)",
                        exc, delay, attempt + 1, max_retries,
                    )
                    self._sleep(delay)
                    continue
                raise NetworkError(
                    f"Request to {url} failed after {max_retries + 1} attempts: {exc}"
                ) from exc

            if response.status_code >= 500 and attempt < max_retries:
                delay = 2 ** attempt
                logger.debug(
                    "Server error %d, retrying in %ss (attempt %d/%d)",
                    response.status_code, delay, attempt + 1, max_retries,
                )
                self._sleep(delay)
                continue

            return response

        raise NetworkError(f"Request to {url} failed")  # pragma: no cover

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for any status of 300 or above."""
        status = response.status_code
        if status < 300:
            return

        body = response.text[:200] if response.content else ""
        msg = f"Response failed with status code {status}"
        if body:
            msg = f"{msg}: {body}"

        if status == 404:
            raise NotFoundError(msg)
        raise ServerError(msg)

    @staticmethod
    def _decode(body: bytes, model: type[ModelT]) -> ModelT:
        try:
            return model.model_validate_json(body)
        except ValidationError as exc:
            raise DecodeError(
                f"Unexpected {model.__name__} payload: {exc.error_count()} validation error(s)"
            ) from exc
