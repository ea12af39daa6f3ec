# ABOUTME: Dispatcher that routes argv to the matching command group
# ABOUTME: Falls back to version output or the top-level help listing when nothing matches

"""Dispatch raw command lines to registered cleo commands."""

import sys
from collections.abc import Sequence

from cleo.application import Application
from cleo.io.inputs.argv_input import ArgvInput
from cleo.io.outputs.output import Output
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .command import RoutedCommand
from .config import Settings
from .models import GroupSpec, OperationSpec, ParsedInvocation
from .registry import Registry
from .routing import Normalizer, Resolver


class Dispatcher:
    """Resolve the command in argv and run it, or show the top-level help."""

    def __init__(
        self,
        registry: Registry,
        settings: Settings | None = None,
        console: Console | None = None,
        output: Output | None = None,
        error_output: Output | None = None,
    ):
        """Initialize the dispatcher.

        Args:
            registry: Registry of command groups.
            settings: Flag tables and program identity. Defaults to Settings().
            console: Rich console for help and version output.
            output: cleo output for dispatched commands (stdout when None).
            error_output: cleo error output for dispatched commands.
        """
        self.registry = registry
        self.settings = settings or Settings()
        self.resolver = Resolver(registry)
        self.normalizer = Normalizer(self.resolver, self.settings)
        self.console = console or Console()
        self.output = output
        self.error_output = error_output

    def run(self, raw_args: Sequence[str] | None = None) -> int:
        """Run one invocation and return its exit code."""
        raw_args = list(sys.argv[1:] if raw_args is None else raw_args)

        full_command = self.normalizer.full_command(raw_args)
        operation = self.registry.lookup(full_command)
        if operation is not None:
            return self.invoke(operation, self.normalizer.normalize(raw_args))

        if self.version_requested(raw_args):
            self.print_version()
            return 0

        self.print_help(show_all=self.show_all_requested(raw_args))
        return 0

    def invoke(self, operation: OperationSpec, invocation: ParsedInvocation) -> int:
        """Run a resolved operation inside its group's cleo application."""
        group = self.registry.lookup_group(operation.group)
        argv = list(invocation.argv)
        if invocation.help_requested:
            # cleo's help command takes only the command name
            argv = argv[:2]

        application = self.application(group)
        return application.run(
            ArgvInput([self.settings.program_name, *argv]),
            self.output,
            self.error_output,
        )

    def application(self, group: GroupSpec) -> Application:
        """Build a cleo application holding one group's commands under their bare names."""
        application = Application(self.settings.program_name, self.settings.version)
        application.auto_exits(False)
        application.catch_exceptions(False)

        for operation in group.operations.values():
            application.add(self._build_command(operation, group))

        return application

    def _build_command(self, operation: OperationSpec, group: GroupSpec):
        command = operation.command() if isinstance(operation.command, type) else operation.command

        for option in group.shared_options:
            if not command.definition.has_option(option.name):
                command.definition.add_option(option)

        if isinstance(command, RoutedCommand):
            command.bind(self.registry, self.settings)

        return command

    def version_requested(self, raw_args: Sequence[str]) -> bool:
        """Version is only shown for a lone ``--version`` or ``-v``."""
        return len(raw_args) == 1 and raw_args[0] in self.settings.version_flags

    def show_all_requested(self, raw_args: Sequence[str]) -> bool:
        return any(arg in self.settings.show_all_flags for arg in raw_args)

    def print_version(self) -> None:
        self.console.print(self.settings.version, markup=False, highlight=False)

    def help_list(self, show_all: bool = False) -> list[OperationSpec]:
        """Operations for the top-level help, sorted by full name.

        Per-group help commands are dropped; hidden commands only appear with show_all.
        """
        listed = []
        for operation in self.registry.operations():
            if operation.name == "help" and operation.group:
                continue
            if operation.hidden and not show_all:
                continue
            listed.append(operation)
        return listed

    def print_help(self, show_all: bool = False) -> None:
        """Print every command followed by the general usage text."""
        prog = self.settings.program_name

        table = Table(box=None, show_header=False, padding=(0, 2))
        table.add_column("Command", no_wrap=True)
        table.add_column("Description")
        for operation in self.help_list(show_all):
            banner = " ".join(part for part in (prog, operation.full_name, operation.usage) if part)
            table.add_row(Text(banner, style="cyan"), Text(operation.help_text))

        self.console.print("Commands:", markup=False)
        self.console.print(table)
        self.console.print()
        self.console.print(self.settings.usage_text, markup=False, highlight=False)
