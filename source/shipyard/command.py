# ABOUTME: Base class for commands that need the command registry
# ABOUTME: The dispatcher injects the registry and settings before running such commands

"""Registry-aware cleo command base."""

from typing import TYPE_CHECKING

from cleo.commands.command import Command

if TYPE_CHECKING:
    from .config import Settings
    from .registry import Registry


class RoutedCommand(Command):
    """Command that can inspect the registry it was dispatched from."""

    registry: "Registry | None" = None
    settings: "Settings | None" = None

    def bind(self, registry: "Registry", settings: "Settings | None" = None) -> "RoutedCommand":
        self.registry = registry
        self.settings = settings
        return self
