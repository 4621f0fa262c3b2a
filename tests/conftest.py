"""Pytest fixtures for sshd_shell tests."""

import logging

import pytest

from sshd_shell.commands import SessionInterrupted, build_registry, shell_command


@shell_command("test", description="Test commands")
class SampleCommands:
    """Group 'test' with a subcommand and no default command."""

    @shell_command("run", description="Return the argument")
    def run(self, arg: str) -> str:
        return arg

    @shell_command("fail")
    def fail(self, arg: str) -> str:
        raise RuntimeError(f"boom: {arg}")

    @shell_command("quit")
    def quit(self, arg: str) -> str:
        raise SessionInterrupted()


@shell_command("greet", description="Say hello")
class GreetCommands:
    """Group 'greet' with a default command named after the group."""

    def greet(self, arg: str) -> str:
        return f"hello {arg or 'world'}"

    @shell_command("loud")
    def loud(self, arg: str) -> str:
        return f"HELLO {arg.upper()}"


class Proxy:
    """Transparent wrapper recording every method call it forwards."""

    def __init__(self, target):
        self.__wrapped__ = target
        self.calls = []

    def __getattr__(self, name):
        attr = getattr(self.__wrapped__, name)
        if not callable(attr):
            return attr

        def intercepted(*args, **kwargs):
            self.calls.append(name)
            return attr(*args, **kwargs)

        return intercepted


@pytest.fixture
def handlers():
    return [SampleCommands(), GreetCommands()]


@pytest.fixture
def registry(handlers):
    return build_registry(handlers)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """init_logger() stops propagation; restore it so caplog keeps working."""
    yield
    logger = logging.getLogger("sshd_shell")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class TracingCommands(SampleCommands):
    """Subclass proxy: inherits the marker and intercepts run()."""

    def __init__(self):
        self.calls = []

    def run(self, arg: str) -> str:
        self.calls.append(arg)
        return super().run(arg)
