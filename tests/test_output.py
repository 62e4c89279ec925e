"""Tests for the output system.

Covers:
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- Markup in data is printed verbatim
- Global instance management
"""

from __future__ import annotations

from io import StringIO

import pytest

from pokedexcli import output as output_module
from pokedexcli.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def streams() -> tuple[StringIO, StringIO]:
    return StringIO(), StringIO()


def _manager(streams, **kwargs) -> OutputManager:
    out, err = streams
    return OutputManager(stdout=out, stderr=err, **kwargs)


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_color_enabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestStreams:
    def test_data_goes_to_stdout(self, streams) -> None:
        mgr = _manager(streams, no_color=True)
        mgr.print_data("pikachu")
        assert streams[0].getvalue() == "pikachu\n"
        assert streams[1].getvalue() == ""

    def test_prompt_has_no_newline(self, streams) -> None:
        mgr = _manager(streams, no_color=True)
        mgr.prompt("Pokedex > ")
        assert streams[0].getvalue() == "Pokedex > "

    def test_diagnostics_go_to_stderr(self, streams) -> None:
        mgr = _manager(streams, no_color=True)
        mgr.info("hello")
        mgr.error("broken")
        assert streams[0].getvalue() == ""
        assert streams[1].getvalue().splitlines() == ["hello", "Error: broken"]

    def test_markup_in_data_is_verbatim(self, streams) -> None:
        mgr = _manager(streams)
        mgr.print_data("[bold]mr-mime[/bold]")
        assert streams[0].getvalue() == "[bold]mr-mime[/bold]\n"

    def test_markup_in_error_is_escaped(self, streams) -> None:
        mgr = _manager(streams)
        mgr.error("bad [value]")
        assert "bad [value]" in streams[1].getvalue()


class TestQuietVerbose:
    def test_quiet_suppresses_info_not_errors(self, streams) -> None:
        mgr = _manager(streams, no_color=True, quiet=True)
        mgr.info("hello")
        mgr.error("broken")
        assert streams[1].getvalue().splitlines() == ["Error: broken"]

    def test_debug_only_when_verbose(self, streams) -> None:
        mgr = _manager(streams, no_color=True)
        mgr.debug("hidden")
        assert streams[1].getvalue() == ""

        verbose = _manager(streams, no_color=True, verbose=True)
        verbose.debug("shown")
        assert streams[1].getvalue() == "[debug] shown\n"


class TestGlobalInstance:
    def test_lazy_default(self) -> None:
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_and_reset(self, streams) -> None:
        mgr = _manager(streams, no_color=True)
        set_output(mgr)
        assert get_output() is mgr
        output_module.error("via module")
        output_module.debug("hidden")
        assert streams[0].getvalue() == ""
        assert streams[1].getvalue() == "Error: via module\n"
        reset_output()
        assert get_output() is not mgr
