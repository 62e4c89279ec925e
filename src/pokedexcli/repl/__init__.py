"""Interactive shell: input tokenizer, command registry and prompt loop."""

from pokedexcli.repl.commands import Command, Session, build_registry
from pokedexcli.repl.shell import HINT, PROMPT, clean_input, run_repl

__all__ = ["Command", "Session", "build_registry", "HINT", "PROMPT", "clean_input", "run_repl"]
