"""Tests for sshd_shell.interface.handler and completion."""

import pytest

from sshd_shell.commands import SessionInterrupted, UnknownCommandError
from sshd_shell.interface import (
    ERROR_HEADER,
    GENERIC_ERROR_HINT,
    HELP_TEXT,
    format_group_help,
    format_help,
    handle_line,
    resolve_line,
    suggest,
)


class TestResolveLine:
    """Tests for mapping raw lines to descriptors."""

    def test_subcommand_with_argument(self, registry):
        descriptor, argument = resolve_line(registry, "test run bob")
        assert (descriptor.group, descriptor.name, argument) == ("test", "run", "bob")

    def test_argument_keeps_inner_spacing(self, registry):
        _, argument = resolve_line(registry, "  test run  bob   and  alice  ")
        assert argument == "bob   and  alice"

    def test_subcommand_without_argument(self, registry):
        _, argument = resolve_line(registry, "test run")
        assert argument == ""

    def test_default_command_gets_rest_of_line(self, registry):
        descriptor, argument = resolve_line(registry, "greet bob smith")
        assert descriptor.name == "execute"
        assert argument == "bob smith"

    def test_default_command_without_argument(self, registry):
        descriptor, argument = resolve_line(registry, "greet")
        assert descriptor.name == "execute"
        assert argument == ""

    def test_execute_is_not_user_typeable(self, registry):
        descriptor, argument = resolve_line(registry, "greet execute now")
        assert descriptor.name == "execute"
        assert argument == "execute now"

    def test_group_without_default_is_unknown(self, registry):
        with pytest.raises(UnknownCommandError):
            resolve_line(registry, "test")

    def test_unknown_subcommand_without_default_is_unknown(self, registry):
        with pytest.raises(UnknownCommandError) as excinfo:
            resolve_line(registry, "test nope")
        assert excinfo.value.name == "nope"

    def test_unknown_group(self, registry):
        with pytest.raises(UnknownCommandError):
            resolve_line(registry, "nope run")

    def test_blank_line(self, registry):
        assert resolve_line(registry, "   ") is None


class TestHandleLine:
    """Tests for handle_line()."""

    def test_runs_subcommand(self, registry):
        assert handle_line(registry, "test run bob") == "bob"

    def test_runs_default_command(self, registry):
        assert handle_line(registry, "greet") == "hello world"
        assert handle_line(registry, "greet bob") == "hello bob"

    def test_blank_line_prints_nothing(self, registry):
        assert handle_line(registry, "") is None

    @pytest.mark.parametrize("line", ["exit", "quit", " EXIT "])
    def test_exit_ends_session(self, registry, line):
        with pytest.raises(SessionInterrupted):
            handle_line(registry, line)

    def test_command_interruption_propagates(self, registry):
        with pytest.raises(SessionInterrupted):
            handle_line(registry, "test quit")

    def test_failure_is_rendered(self, registry):
        text = handle_line(registry, "test fail x", verbose=False)
        assert text == f"{ERROR_HEADER}\r\n{GENERIC_ERROR_HINT}"

    def test_failure_follows_session_newline(self, registry):
        text = handle_line(registry, "test fail x", verbose=False, newline="\n")
        assert text == f"{ERROR_HEADER}\n{GENERIC_ERROR_HINT}"
        assert "\r" not in text

    def test_failure_detail_when_verbose(self, registry):
        text = handle_line(registry, "test fail x", verbose=True)
        assert "RuntimeError: boom: x" in text

    def test_unknown_command_message(self, registry):
        text = handle_line(registry, "nope")
        assert text.startswith("Unknown command 'nope'.")
        assert text.endswith(HELP_TEXT)

    def test_unknown_command_suggests_close_group(self, registry):
        assert "Did you mean: test?" in handle_line(registry, "tets")

    def test_unknown_subcommand_suggests_close_name(self, registry):
        assert "Did you mean: test run?" in handle_line(registry, "test rnu")

    def test_null_default_is_reported_as_unknown(self, registry):
        assert handle_line(registry, "test").startswith("Unknown command 'test'")


class TestHelp:
    """Tests for help rendering."""

    def test_help_lists_groups(self, registry):
        text = handle_line(registry, "help", newline="\n")
        assert text == format_help(registry, newline="\n")
        lines = text.splitlines()
        greet_row = next(line for line in lines if line.startswith("| greet"))
        test_row = next(line for line in lines if line.startswith("| test"))
        assert lines.index(greet_row) < lines.index(test_row)
        assert "loud" in greet_row
        assert "fail, quit, run" in test_row
        assert "execute" not in text

    def test_help_group(self, registry):
        text = handle_line(registry, "help greet", newline="\n")
        assert text == format_group_help(registry, "greet", newline="\n")
        assert "greet loud" in text
        assert "Say hello" in text

    def test_help_group_without_default(self, registry):
        text = format_group_help(registry, "test")
        assert "test run" in text
        assert "Return the argument" in text

    def test_help_unknown_group(self, registry):
        assert format_group_help(registry, "nope") == "No such command: nope"

    def test_help_uses_crlf_by_default(self, registry):
        assert "\r\n" in format_help(registry)


class TestSuggest:
    """Tests for completion suggestions."""

    def test_first_token(self, registry):
        assert suggest(registry, "") == ["exit", "greet", "help", "quit", "test"]
        assert suggest(registry, "te") == ["test"]

    def test_subcommands(self, registry):
        assert suggest(registry, "test ") == ["fail", "quit", "run"]
        assert suggest(registry, "test r") == ["run"]

    def test_execute_never_suggested(self, registry):
        assert "execute" not in suggest(registry, "greet ")

    def test_help_target(self, registry):
        assert suggest(registry, "help g") == ["greet"]

    def test_nothing_past_second_token(self, registry):
        assert suggest(registry, "test run b") == []
