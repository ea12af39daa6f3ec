# ABOUTME: CLI module for shipyard
# ABOUTME: Registers the command groups and provides the process entry point

"""Command-line interface for shipyard."""

import sys

from shipyard.config import Settings
from shipyard.dispatcher import Dispatcher
from shipyard.models import CommandGroup
from shipyard.registry import Registry

from .commands.completions import CompletionScriptCommand
from .commands.main import CompletionCommand, VersionCommand

# Alternate namespace -> registered namespace
ALIASES = {
    "completion": "completions",
}


def command_groups() -> list[CommandGroup]:
    """Static registration table for every command group."""
    return [
        CommandGroup("main", [VersionCommand, CompletionCommand]),
        CommandGroup("completions", [CompletionScriptCommand]),
    ]


def create_registry(settings: Settings | None = None) -> Registry:
    """Create the command registry."""
    settings = settings or Settings()
    return Registry(command_groups(), aliases=ALIASES, debug=settings.debug)


def create_dispatcher(settings: Settings | None = None) -> Dispatcher:
    """Create the dispatcher with the default registry."""
    settings = settings or Settings.load()
    return Dispatcher(create_registry(settings), settings)


def main():
    """Main entry point for the CLI."""
    dispatcher = create_dispatcher()
    sys.exit(dispatcher.run(sys.argv[1:]))


if __name__ == "__main__":
    main()
