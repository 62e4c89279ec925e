"""Shell command handlers and the command registry.

Every handler has the signature ``callback(session, args)`` where *args*
are the already-cleaned words after the command name.  Handlers print
through :mod:`pokedexcli.output` and raise
:class:`~pokedexcli.exceptions.PokedexError` subclasses on failure; the
shell loop reports those and keeps prompting.

The registry is built once by :func:`build_registry` and carried on the
:class:`Session`, so handlers such as ``help`` read it from there instead
of from module state.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Optional

import typer

from pokedexcli.client import PokeAPIClient
from pokedexcli.exceptions import InvalidUsageError
from pokedexcli.exit_codes import EXIT_SUCCESS
from pokedexcli.models import LocationAreaPage, Pokemon
from pokedexcli.output import get_output

CATCH_ROLL_CEILING = 999
"""Catch draws are uniform in ``[0, CATCH_ROLL_CEILING)``."""


@dataclass
class Session:
    """Mutable state shared by all commands for one shell run.

    Attributes:
        client: Open API client used by every fetching command.
        registry: Command name to :class:`Command` mapping.
        next_url: ``next`` link of the last page shown by ``map``/``mapb``.
        previous_url: ``previous`` link of the last page shown.
        pokedex: Caught Pokemon keyed by name.
        rng: Random source for catch attempts.
    """

    client: PokeAPIClient
    registry: dict[str, Command] = field(default_factory=dict)
    next_url: Optional[str] = None
    previous_url: Optional[str] = None
    pokedex: dict[str, Pokemon] = field(default_factory=dict)
    rng: random.Random = field(default_factory=random.Random)


CommandCallback = Callable[[Session, list[str]], None]


@dataclass(frozen=True)
class Command:
    """A named shell command."""

    name: str
    description: str
    callback: CommandCallback


# ------------------------------------------------------------------ #
# Handlers
# ------------------------------------------------------------------ #


def command_help(session: Session, args: list[str]) -> None:
    out = get_output()
    out.print_data("Welcome to the Pokedex!")
    out.print_data("Usage:")
    out.print_data("")
    for command in session.registry.values():
        out.print_data(f"{command.name}: {command.description}")


def command_exit(session: Session, args: list[str]) -> None:
    get_output().print_data("Closing the Pokedex... Goodbye!")
    raise typer.Exit(EXIT_SUCCESS)


def command_map(session: Session, args: list[str]) -> None:
    page = session.client.list_location_areas(session.next_url)
    _show_page(session, page)


def command_mapb(session: Session, args: list[str]) -> None:
    page = session.client.list_location_areas(session.previous_url)
    _show_page(session, page)


def command_explore(session: Session, args: list[str]) -> None:
    if not args:
        raise InvalidUsageError("explore requires a location area name")

    area = session.client.get_location_area(args[0])
    out = get_output()
    out.print_data(f"Exploring {area.name}...")
    out.print_data("Found Pokemon:")
    for encounter in area.pokemon_encounters:
        out.print_data(f" - {encounter.pokemon.name}")


def command_catch(session: Session, args: list[str]) -> None:
    if not args:
        raise InvalidUsageError("catch requires a Pokemon name")

    out = get_output()
    out.print_data(f"Throwing a Pokeball at {args[0]}...")
    pokemon = session.client.get_pokemon(args[0])

    if pokemon.base_experience > session.rng.randrange(CATCH_ROLL_CEILING):
        out.print_data(f"{pokemon.name} escaped!")
        return

    session.pokedex[pokemon.name] = pokemon
    out.print_data(f"{pokemon.name} was caught!")


def _show_page(session: Session, page: LocationAreaPage) -> None:
    session.next_url = page.next
    session.previous_url = page.previous
    out = get_output()
    for area in page.results:
        out.print_data(area.name)


# ------------------------------------------------------------------ #
# Registry
# ------------------------------------------------------------------ #


def build_registry() -> dict[str, Command]:
    """Build the name-to-command mapping for the shell."""
    commands = [
        Command(
            "map",
            "Displays the names of the next 20 location areas in the Pokemon world.",
            command_map,
        ),
        Command("mapb", "Displays the names of the previous 20 location areas.", command_mapb),
        Command("explore", "Lists the Pokemon found in a location area: explore <area>", command_explore),
        Command("catch", "Throws a Pokeball at a Pokemon: catch <pokemon>", command_catch),
        Command("help", "Displays a help message", command_help),
        Command("exit", "Exit the Pokedex", command_exit),
    ]
    return {command.name: command for command in commands}
