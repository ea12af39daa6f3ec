# ABOUTME: Tests for dispatching argv to registered commands
# ABOUTME: Covers abbreviation, help shifting, exit codes, version and the help listing

"""Tests for the Dispatcher."""

import io

import pytest
from cleo.io.outputs.buffered_output import BufferedOutput
from rich.console import Console

from shipyard.dispatcher import Dispatcher


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def output():
    return BufferedOutput()


@pytest.fixture
def dispatcher(registry, settings, console, output):
    return Dispatcher(registry, settings, console=console, output=output, error_output=BufferedOutput())


class TestDispatch:
    """Tests for running resolved commands."""

    def test_root_command(self, dispatcher, output):
        assert dispatcher.run(["hello", "Alice"]) == 0
        assert output.fetch() == "Hello Alice\n"

    def test_abbreviated_namespaced_command(self, dispatcher, output):
        assert dispatcher.run(["sub:good", "Bob"]) == 0
        assert output.fetch() == "Goodbye Bob\n"

    def test_options_reach_the_command(self, dispatcher, output):
        assert dispatcher.run(["sub:goodbye", "Bob", "--noop"]) == 0
        assert output.fetch() == "(noop) Goodbye Bob\n"

    def test_group_options_reach_the_command(self, dispatcher, output):
        assert dispatcher.run(["fleet:go", "--mute"]) == 0
        assert output.fetch() == "muted\n"

    def test_variadic_command(self, dispatcher, output):
        assert dispatcher.run(["fleet:dep", "web", "api", "worker"]) == 0
        assert output.fetch() == "web api worker\n"

    def test_nested_namespace_through_alias(self, dispatcher, output):
        assert dispatcher.run(["td:build"]) == 0
        assert output.fetch() == "built\n"

    def test_exit_code_is_propagated(self, dispatcher):
        assert dispatcher.run(["fleet:fail"]) == 3

    def test_handler_exceptions_propagate(self, settings):
        from cleo.commands.command import Command

        from shipyard.models import CommandGroup
        from shipyard.registry import Registry

        class BoomCommand(Command):
            name = "boom"

            def handle(self) -> int:
                raise RuntimeError("kaboom")

        registry = Registry([CommandGroup("main", [BoomCommand])])
        dispatcher = Dispatcher(registry, settings, output=BufferedOutput(), error_output=BufferedOutput())

        with pytest.raises(RuntimeError, match="kaboom"):
            dispatcher.run(["boom"])

    @pytest.mark.parametrize(
        "argv",
        [
            ["sub:goodbye", "--help"],
            ["sub:goodbye", "Bob", "-h"],
            ["help", "sub:good"],
            ["sub:goodbye", "help"],
        ],
    )
    def test_help_anywhere_shows_command_help(self, dispatcher, output, argv):
        assert dispatcher.run(argv) == 0

        text = output.fetch()
        assert "Says goodbye" in text
        assert "Goodbye" not in text.replace("Says goodbye", "")

    def test_uses_sys_argv_by_default(self, dispatcher, output, monkeypatch):
        monkeypatch.setattr("sys.argv", ["shipyard", "hello", "Zed"])

        assert dispatcher.run() == 0
        assert output.fetch() == "Hello Zed\n"


class TestFallback:
    """Tests for unresolved input."""

    def test_no_arguments_shows_help(self, dispatcher, console):
        assert dispatcher.run([]) == 0

        text = console.file.getvalue()
        assert text.startswith("Commands:")
        assert "shipyard sub:goodbye NAME" in text
        assert "Usage:" in text

    @pytest.mark.parametrize("argv", [["nope"], ["nope:thing"], ["fleet:s"], ["sub:zzz", "x"]])
    def test_unresolved_shows_help(self, dispatcher, console, output, argv):
        assert dispatcher.run(argv) == 0

        assert "Commands:" in console.file.getvalue()
        assert output.fetch() == ""

    def test_help_listing_is_sorted(self, dispatcher, console):
        dispatcher.run(["help"])

        text = console.file.getvalue()
        assert text.index("fleet:deploy") < text.index("shipyard hello") < text.index("sub:goodbye")

    def test_hidden_commands_need_all(self, dispatcher, console):
        dispatcher.run([])
        assert "fleet:secret" not in console.file.getvalue()

        dispatcher.run(["--all"])
        assert "fleet:secret" in console.file.getvalue()

    def test_help_listing_shows_descriptions_and_usage(self, dispatcher, console):
        dispatcher.run([])

        text = console.file.getvalue()
        assert "Scales a service" in text
        assert "shipyard fleet:deploy SERVICE [EXTRAS...]" in text

    @pytest.mark.parametrize("flag", ["--version", "-v"])
    def test_version_flag(self, dispatcher, console, flag):
        assert dispatcher.run([flag]) == 0
        assert console.file.getvalue() == "9.9.9\n"

    def test_version_flag_must_be_alone(self, dispatcher, console):
        dispatcher.run(["-v", "nope"])

        assert "Commands:" in console.file.getvalue()


class TestHelpList:
    """Tests for the operations shown in the top-level help."""

    def test_group_help_commands_are_dropped(self, settings):
        from cleo.commands.command import Command

        from shipyard.models import CommandGroup
        from shipyard.registry import Registry

        class HelpCommand(Command):
            name = "help"

            def handle(self) -> int:
                return 0

        registry = Registry([CommandGroup("main", [HelpCommand]), CommandGroup("sub", [HelpCommand])])
        names = [op.full_name for op in Dispatcher(registry, settings).help_list()]

        assert names == ["help"]
