# ABOUTME: Completion setup commands under the completions namespace
# ABOUTME: Generates the shell script that wires tab completion to the CLI

"""Completions command - shell integration."""

from shipyard.command import RoutedCommand
from shipyard.completer import Completer


class CompletionScriptCommand(RoutedCommand):
    """Generate a script that can be eval'd to set up auto-completion."""

    name = "script"
    description = "Generates script that can be eval to setup auto-completion"

    def handle(self) -> int:
        """Execute the completions script command."""
        completer = Completer(self.registry, self.settings)
        self.io.write(completer.script())
        return 0
