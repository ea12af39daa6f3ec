"""Pytest configuration and shared fixtures."""

import pytest
from cleo.commands.command import Command
from cleo.helpers import argument, option

from shipyard.config import Settings
from shipyard.models import CommandGroup
from shipyard.registry import Registry


class HelloCommand(Command):
    name = "hello"
    description = "Says hello"
    arguments = [argument("name", description="Who to greet")]

    def handle(self) -> int:
        self.line(f"Hello {self.argument('name')}")
        return 0


class GoodbyeCommand(Command):
    name = "goodbye"
    description = "Says goodbye"
    arguments = [argument("name", description="Who to see off")]
    options = [option("noop", description="Only pretend", flag=True)]

    def handle(self) -> int:
        prefix = "(noop) " if self.option("noop") else ""
        self.line(f"{prefix}Goodbye {self.argument('name')}")
        return 0


class GoCommand(Command):
    name = "go"
    description = "Goes"

    def handle(self) -> int:
        self.line("muted" if self.option("mute") else "going")
        return 0


class FleetGoodbyeCommand(GoodbyeCommand):
    options = []


class ScaleCommand(Command):
    name = "scale"
    description = "Scales a service"
    arguments = [argument("service", description="Service name"), argument("count", description="Task count")]
    options = [option("dry_run", description="Show the plan only", flag=True)]

    def handle(self) -> int:
        self.line(f"scale {self.argument('service')} to {self.argument('count')}")
        return 0


class DeployCommand(Command):
    name = "deploy"
    description = "Deploys services"
    arguments = [
        argument("service", description="Service name"),
        argument("extras", description="Additional services", optional=True, multiple=True),
    ]

    def handle(self) -> int:
        self.line(" ".join([self.argument("service"), *self.argument("extras")]))
        return 0


class FailCommand(Command):
    name = "fail"
    description = "Always fails"

    def handle(self) -> int:
        return 3


class SecretCommand(Command):
    name = "secret"
    description = "Not listed by default"
    hidden = True

    def handle(self) -> int:
        return 0


class BuildCommand(Command):
    name = "build"
    description = "Builds task definitions"

    def handle(self) -> int:
        self.line("built")
        return 0


@pytest.fixture(autouse=True)
def clear_debug_env(monkeypatch):
    """Keep discovery tracing off unless a test turns it on."""
    monkeypatch.delenv("SHIPYARD_DEBUG", raising=False)


@pytest.fixture
def scenario_registry():
    """Root group with hello and a sub group with goodbye."""
    return Registry(
        [
            CommandGroup("main", [HelloCommand]),
            CommandGroup("sub", [GoodbyeCommand]),
        ]
    )


@pytest.fixture
def registry():
    """Registry covering nested namespaces, aliases, variadic and hidden commands."""
    return Registry(
        [
            CommandGroup("main", [HelloCommand]),
            CommandGroup("sub", [GoodbyeCommand]),
            CommandGroup(
                "fleet",
                [GoCommand, FleetGoodbyeCommand, ScaleCommand, DeployCommand, FailCommand, SecretCommand],
                options=[option("mute", description="Less output", flag=True)],
            ),
            CommandGroup("task/definitions", [BuildCommand]),
        ],
        aliases={"td": "task:definitions"},
    )


@pytest.fixture
def settings():
    return Settings(version="9.9.9")
