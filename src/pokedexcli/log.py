"""Logging setup for the ``pokedexcli`` logger hierarchy.

Library modules log through ``logging.getLogger(__name__)``.  The CLI calls
:func:`configure_logging` once at startup to route those records to stderr
through Rich.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "pokedexcli"


def configure_logging(verbose: bool = False, no_color: bool = False) -> logging.Logger:
    """Attach a single Rich stderr handler to the package logger.

    Args:
        verbose: Log at DEBUG instead of WARNING.
        no_color: Disable Rich colour output.

    Returns:
        The configured ``pokedexcli`` logger.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(file=sys.stderr, stderr=True, no_color=no_color),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
