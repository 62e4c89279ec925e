"""pokedexcli -- an interactive Pokedex shell backed by the public PokeAPI.

Start the shell with ``pokedexcli`` and type commands at the
``Pokedex >`` prompt::

    Pokedex > map              # next 20 location areas
    Pokedex > mapb             # previous 20 location areas
    Pokedex > explore canalave-city-area
    Pokedex > catch pikachu

Raw API responses are memoised in memory for a short time so paging back
and forth does not hit the network twice.

Modules:
    app: Typer application and console-script entry point.
    cache: Thread-safe TTL cache for response bodies.
    client: PokeAPI HTTP client with fetch-or-cache semantics.
    repl: Input tokenizer, command registry and prompt loop.
    models: Pydantic models for configuration and API payloads.
    config: XDG-aware configuration loading and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting built on Rich.
"""

__version__ = "0.1.0"
