"""Exception hierarchy for pokedexcli.

All exceptions inherit from :class:`PokedexError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`pokedexcli.exit_codes`.
Inside the shell, :func:`~pokedexcli.repl.shell.run_repl` reports these
errors and keeps prompting; outside it, :func:`pokedexcli.app.main` exits
with the error's code.

Subclass hierarchy::

    PokedexError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- NotFoundError       (exit 4)
    +-- ServerError         (exit 5)
    +-- NetworkError        (exit 6)
    +-- DecodeError         (exit 7)
    +-- ConfigError         (exit 1)

The cache itself raises none of these: a miss is a normal result.
"""

from pokedexcli.exit_codes import (
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NETWORK_ERROR,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)


class PokedexError(Exception):
    """Base exception for all pokedexcli errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(PokedexError):
    """Raised when a shell command is missing a required argument."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(PokedexError):
    """Raised when the API returns HTTP 404 (unknown area or Pokemon)."""

    exit_code = EXIT_NOT_FOUND


class ServerError(PokedexError):
    """Raised when the API returns any other status of 300 or above."""

    exit_code = EXIT_SERVER_ERROR


class NetworkError(PokedexError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused)."""

    exit_code = EXIT_NETWORK_ERROR


class DecodeError(PokedexError):
    """Raised when a response body is not the JSON shape we expect."""

    exit_code = EXIT_DECODE_ERROR


class ConfigError(PokedexError):
    """Raised for configuration problems (invalid JSON, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
