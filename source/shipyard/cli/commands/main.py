# ABOUTME: Root-group commands available without a namespace
# ABOUTME: Implements version and the completion callback used by the shell script

"""Root commands - version and completion."""

from cleo.helpers import argument

from shipyard import __version__
from shipyard.command import RoutedCommand
from shipyard.completer import Completer


class VersionCommand(RoutedCommand):
    """Print the shipyard version."""

    name = "version"
    description = "Prints version"

    def handle(self) -> int:
        """Execute the version command."""
        self.line(self.settings.version if self.settings else __version__)
        return 0


class CompletionCommand(RoutedCommand):
    """Print completion candidates for a partially typed command line."""

    name = "completion"
    description = "Prints words for auto-completion"
    arguments = [
        argument(
            "words",
            description="Words typed so far, after the program name",
            optional=True,
            multiple=True,
        )
    ]

    def handle(self) -> int:
        """Execute the completion command."""
        if self.registry is None:
            self.line_error("<error>Completion is only available through the shipyard dispatcher.</error>")
            return 1

        completer = Completer(self.registry, self.settings)
        for candidate in completer.complete(self.argument("words") or []):
            self.line(candidate)
        return 0
