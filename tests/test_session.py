"""Tests for sshd_shell.interface.session and the stream frontend."""

import io
import logging

from sshd_shell.interface import HELP_TEXT, ShellSession, StreamCLI


def _run(registry, text, **kwargs):
    stdin = io.StringIO(text)
    stdout = io.StringIO()
    cli = StreamCLI(stdin, stdout, echo=kwargs.pop("echo", False))
    session = ShellSession(registry, cli, **kwargs)
    count = session.run()
    return stdout.getvalue(), count


class TestStreamCLI:
    """Tests for line I/O over streams."""

    def test_strips_carriage_return(self):
        cli = StreamCLI(io.StringIO("test run bob\r\n"), io.StringIO())
        assert cli.get_line("app> ") == "test run bob"

    def test_writes_prompt(self):
        stdout = io.StringIO()
        StreamCLI(io.StringIO("x\n"), stdout).get_line("app> ")
        assert stdout.getvalue() == "app> "

    def test_echo(self):
        stdout = io.StringIO()
        StreamCLI(io.StringIO("x\r"), stdout, echo=True).get_line("> ")
        assert stdout.getvalue() == "> x\r\n"

    def test_end_of_input(self):
        cli = StreamCLI(io.StringIO(""), io.StringIO())
        try:
            cli.get_line("> ")
        except EOFError:
            pass
        else:
            raise AssertionError("EOFError not raised")


class TestShellSession:
    """Tests for the session loop."""

    def test_transcript(self, registry):
        output, count = _run(registry, "test run bob\r\n", echo=True)
        assert output == (
            f"{HELP_TEXT}\r\n"
            "app> test run bob\r\n"
            "bob\r\n"
            "app> "
        )
        assert count == 1

    def test_custom_prompt_and_no_banner(self, registry):
        output, _ = _run(registry, "greet\n", prompt="ops", show_banner=False)
        assert output == "ops> hello world\r\nops> "

    def test_exit_ends_session(self, registry):
        output, count = _run(registry, "greet\nexit\ngreet bob\n", show_banner=False)
        assert "hello world" in output
        assert "hello bob" not in output
        assert count == 1

    def test_interrupting_command_ends_session_without_output(self, registry):
        output, count = _run(registry, "test quit\ntest run after\n", show_banner=False)
        assert output == "app> "
        assert count == 0

    def test_failures_do_not_end_session(self, registry):
        output, count = _run(registry, "test fail x\ntest run ok\n",
                             show_banner=False, verbose=False)
        assert "Please check server logs" in output
        assert "ok\r\n" in output
        assert count == 2

    def test_blank_lines_print_nothing(self, registry):
        output, count = _run(registry, "\n\n", show_banner=False)
        assert output == "app> app> app> "
        assert count == 2

    def test_sessions_are_logged(self, registry, caplog):
        with caplog.at_level(logging.INFO, logger="sshd_shell"):
            _run(registry, "test run a\n")
        messages = [r.getMessage() for r in caplog.records]
        assert any("started" in m for m in messages)
        assert any("ended after 1 line(s)" in m for m in messages)

    def test_sessions_have_distinct_ids(self, registry):
        first = ShellSession(registry, StreamCLI(io.StringIO(), io.StringIO()))
        second = ShellSession(registry, StreamCLI(io.StringIO(), io.StringIO()))
        assert first.session_id != second.session_id
