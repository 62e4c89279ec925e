"""In-memory response caching for pokedexcli.

This package provides :class:`TTLCache`, a thread-safe store for raw HTTP
response bodies keyed by URL.  Entries live for a fixed TTL and a
background thread sweeps expired ones away.

The cache is consumed by :class:`~pokedexcli.client.PokeAPIClient` and
its TTL is controlled by the ``cache`` section of the configuration
(:class:`~pokedexcli.models.CacheConfig`).
"""

from pokedexcli.cache.ttl_cache import CacheEntry, TTLCache

__all__ = ["CacheEntry", "TTLCache"]
