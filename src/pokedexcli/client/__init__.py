"""HTTP client module for pokedexcli.

Provides :class:`PokeAPIClient`, a blocking client backed by
:class:`httpx.Client` that consults a :class:`~pokedexcli.cache.TTLCache`
before every request and decodes bodies into pydantic models.

Example::

    from pokedexcli.client import PokeAPIClient

    with PokeAPIClient(config, cache) as client:
        area = client.get_location_area("canalave-city-area")
"""

from pokedexcli.client.api_client import PokeAPIClient

__all__ = ["PokeAPIClient"]
