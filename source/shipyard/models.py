# ABOUTME: Data model for command groups, operations and resolution results
# ABOUTME: Single source of truth for the metadata the router and completer consume

"""
Data model for the command registry.

Operations are described by plain declared data: the name, positional
parameters, arity and option flags come from the attributes a cleo command
class declares, never from inspecting the ``handle`` signature.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Identity of the root group; its operations have no namespace prefix.
ROOT_IDENTITY = "main"

# Separator between namespace segments and the operation name.
NAMESPACE_SEPARATOR = ":"


def namespace_for(identity: str) -> str:
    """Derive a group's namespace from its declared identity.

    Examples:
        main -> ""
        sub -> "sub"
        task/definitions -> "task:definitions"
    """
    identity = identity.strip().strip("/")
    if identity == ROOT_IDENTITY:
        return ""
    return identity.replace("/", NAMESPACE_SEPARATOR)


def join_name(namespace: str | None, operation: str | None) -> str | None:
    """Join a namespace and an operation into a full command name."""
    if operation is None:
        return None
    if not namespace:
        return operation
    return f"{namespace}{NAMESPACE_SEPARATOR}{operation}"


def split_name(full_name: str) -> tuple[str, str]:
    """Split a full command name into (namespace, operation).

    Example: sub:goodbye => ("sub", "goodbye"), hello => ("", "hello")
    """
    namespace, _, operation = full_name.rpartition(NAMESPACE_SEPARATOR)
    return namespace, operation


@dataclass(frozen=True)
class OperationSpec:
    """One invocable operation within a group."""

    group: str
    name: str
    arity: int  # Negative when the trailing parameter is variadic
    parameters: tuple[str, ...] = ()
    options: tuple[str, ...] = ()
    help_text: str = ""
    hidden: bool = False
    command: Any = None  # cleo Command class handling this operation

    @property
    def full_name(self) -> str:
        return join_name(self.group, self.name)

    @property
    def usage(self) -> str:
        """Positional parameters as shown in help listings, e.g. ``NAME [REST...]``."""
        required = abs(self.arity) - 1 if self.arity < 0 else self.arity
        words = []
        for index, parameter in enumerate(self.parameters):
            word = parameter.upper()
            if self.arity < 0 and index == len(self.parameters) - 1:
                word = f"{word}..."
            if index >= required:
                word = f"[{word}]"
            words.append(word)
        return " ".join(words)

    @classmethod
    def from_command(cls, group: str, command: Any) -> "OperationSpec":
        """Build an operation spec from a cleo command class's declarations.

        Args:
            group: Namespace of the owning group.
            command: cleo ``Command`` subclass (or instance).

        Returns:
            OperationSpec carrying the declared metadata.
        """
        arguments = list(getattr(command, "arguments", None) or [])
        fixed = sum(1 for a in arguments if a.is_required() and not a.is_list())
        variadic = any(a.is_list() for a in arguments)

        return cls(
            group=group,
            name=command.name,
            arity=-(fixed + 1) if variadic else fixed,
            parameters=tuple(a.name for a in arguments),
            options=tuple(o.name for o in (getattr(command, "options", None) or [])),
            help_text=getattr(command, "description", "") or "",
            hidden=bool(getattr(command, "hidden", False)),
            command=command,
        )


@dataclass(frozen=True)
class GroupSpec:
    """A named collection of operations sharing one namespace."""

    namespace: str
    identity: str
    operations: dict[str, OperationSpec] = field(default_factory=dict, hash=False)
    options: tuple[str, ...] = ()  # Group-wide shared flags
    shared_options: tuple[Any, ...] = field(default=(), hash=False)  # cleo Option objects behind ``options``

    @property
    def is_root(self) -> bool:
        return self.namespace == ""


@dataclass
class CommandGroup:
    """Registration entry: a group identity, its command classes and shared options."""

    identity: str
    commands: list[Any] = field(default_factory=list)
    options: list[Any] = field(default_factory=list)


class ResolutionStatus(Enum):
    """How a typed command string was resolved."""

    EXACT = "exact"
    EXPANDED = "expanded"
    EMPTY = "empty"
    UNKNOWN_NAMESPACE = "unknown_namespace"
    AMBIGUOUS = "ambiguous"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class Resolution:
    """Result of resolving a typed command string."""

    name: str | None
    status: ResolutionStatus
    candidates: tuple[str, ...] = ()  # Operations an ambiguous prefix matched

    @property
    def resolved(self) -> bool:
        return self.status in (ResolutionStatus.EXACT, ResolutionStatus.EXPANDED)


@dataclass(frozen=True)
class ParsedInvocation:
    """A normalized invocation ready for the group's cleo application."""

    full_name: str | None
    argv: tuple[str, ...]
    help_requested: bool = False

    @property
    def operation(self) -> str | None:
        if self.full_name is None:
            return None
        return split_name(self.full_name)[1]

    @property
    def arguments(self) -> tuple[str, ...]:
        """Arguments after the help and operation tokens."""
        skip = 2 if self.help_requested else 1
        return self.argv[skip:]
