"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- print_table and print_record in all three modes
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from catalogcli import output as output_module
from catalogcli.output import (
    OutputFormat,
    OutputManager,
    _flatten,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture(autouse=True)
def _reset_global_output():
    reset_output()
    yield
    reset_output()


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("catalogcli.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("catalogcli.output._is_tty", lambda: True)


def _plain(**kwargs) -> OutputManager:
    return OutputManager(format=OutputFormat.PLAIN, no_color=True, **kwargs)


# ------------------------------------------------------------------ #
# Format resolution and colour
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.RICH

    def test_no_color_flag_forces_plain(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStreams:
    def test_data_goes_to_stdout(self, capfd, non_tty):
        _plain().print_data("row")
        captured = capfd.readouterr()
        assert captured.out == "row\n"
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "success", "warning", "error"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method):
        getattr(_plain(), method)("message text")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "message text" in captured.err

    def test_error_prefix(self, capfd, non_tty):
        _plain().error("Invalid product ID")
        assert capfd.readouterr().err == "Error: Invalid product ID\n"


class TestQuietVerbose:
    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        mgr = _plain(quiet=True)
        mgr.info("hidden")
        mgr.success("hidden")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors_and_warnings(self, capfd, non_tty):
        mgr = _plain(quiet=True)
        mgr.warning("careful")
        mgr.error("broken")
        err = capfd.readouterr().err
        assert "careful" in err
        assert "broken" in err

    def test_debug_hidden_by_default(self, capfd, non_tty):
        _plain().debug("Cache hit: 1")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        _plain(verbose=True).debug("Cache hit: 1")
        assert capfd.readouterr().err == "[debug] Cache hit: 1\n"

    def test_debug_with_color_keeps_prefix(self, capfd, non_tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        OutputManager(format=OutputFormat.PLAIN, verbose=True).debug("Cache miss: 2")
        assert "[debug] Cache miss: 2" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Tables and records
# ------------------------------------------------------------------ #


class TestPrintTable:
    def test_plain_is_tab_separated(self, capfd, non_tty):
        _plain().print_table(["ID", "Title"], [["1", "Phone"], ["2", "Lamp"]], caption="Page 1/1")
        assert capfd.readouterr().out == "ID\tTitle\n1\tPhone\n2\tLamp\n"

    def test_json_is_list_of_objects(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_table(["ID", "Title"], [["1", "Phone"]])
        assert json.loads(capfd.readouterr().out) == [{"ID": "1", "Title": "Phone"}]

    def test_rich_shows_title_and_caption(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).print_table(
            ["ID", "Title"],
            [["1", "Essence Mascara Lash Princess Waterproof Edition"]],
            title="Products",
            caption="Page 1/5 (100 products)",
        )
        out = capfd.readouterr().out
        assert "Products" in out
        assert "Page 1/5 (100 products)" in out


class TestPrintRecord:
    def test_plain_skips_none(self, capfd, non_tty):
        _plain().print_record("Phone", {"ID": 1, "Brand": None, "Tags": ["a", "b"]})
        assert capfd.readouterr().out == "ID\t1\nTags\ta, b\n"

    def test_json_keeps_none(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_record("Phone", {"ID": 1, "Brand": None})
        assert json.loads(capfd.readouterr().out) == {"ID": 1, "Brand": None}

    def test_rich_contains_values(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).print_record(
            "Phone", {"Price": "$9.99"}
        )
        assert "$9.99" in capfd.readouterr().out


class TestFormatResponse:
    def test_json(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).format_response({"base_url": "https://x/"})
        assert json.loads(capfd.readouterr().out) == {"base_url": "https://x/"}

    def test_plain_dict_flattens_nested(self, capfd, non_tty):
        _plain().format_response({"cache": {"default_ttl_seconds": 300.0}})
        assert capfd.readouterr().out == 'cache\t{"default_ttl_seconds": 300.0}\n'

    def test_flatten(self):
        assert _flatten(("a", "b")) == "a, b"
        assert _flatten(3) == "3"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        assert isinstance(get_output(), OutputManager)

    def test_set_output_replaces(self):
        mgr = _plain()
        set_output(mgr)
        assert get_output() is mgr

    def test_module_functions_delegate(self, capfd, non_tty):
        set_output(_plain(verbose=True))
        output_module.info("i")
        output_module.debug("d")
        output_module.print_table(["A"], [["1"]])
        captured = capfd.readouterr()
        assert captured.out == "A\n1\n"
        assert "i\n" in captured.err
        assert "[debug] d" in captured.err
