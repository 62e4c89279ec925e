"""Prompt loop for the interactive Pokedex shell."""

from __future__ import annotations

import logging
from typing import Iterable

import typer

from pokedexcli.exceptions import PokedexError
from pokedexcli.exit_codes import EXIT_SUCCESS
from pokedexcli.output import get_output
from pokedexcli.repl.commands import Session

logger = logging.getLogger(__name__)

PROMPT = "Pokedex > "
HINT = "Type 'help' to list commands."


def clean_input(text: str) -> list[str]:
    """Lowercase *text* and split it on whitespace."""
    return text.lower().split()


def run_repl(session: Session, lines: Iterable[str]) -> int:
    """Read commands from *lines* and dispatch them until exit or end of input.

    A usage hint is written to stderr first; ``--quiet`` hides it.
    Errors raised by a command are reported on stderr and the loop keeps
    going.

    Args:
        session: Shell state, including the command registry.
        lines: Input source, e.g. ``sys.stdin``.

    Returns:
        The exit code requested by the ``exit`` command, or
        :data:`~pokedexcli.exit_codes.EXIT_SUCCESS` at end of input.
    """
    out = get_output()
    out.info(HINT)
    out.prompt(PROMPT)
    for line in lines:
        words = clean_input(line)
        if words:
            command = session.registry.get(words[0])
            if command is None:
                out.print_data("Unknown command")
            else:
                try:
                    command.callback(session, words[1:])
                except typer.Exit as exc:
                    return exc.exit_code
                except PokedexError as exc:
                    logger.debug("Command %r failed", words[0], exc_info=True)
                    out.error(str(exc))
        out.prompt(PROMPT)

    out.print_data("")
    return EXIT_SUCCESS
