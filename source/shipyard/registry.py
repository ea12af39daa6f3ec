# ABOUTME: Command registry built from the static group registration table
# ABOUTME: Provides group and operation lookup plus the sorted list of full command names

"""Command registry for shipyard."""

import sys
from collections.abc import Iterable

from .models import CommandGroup, GroupSpec, OperationSpec, join_name, namespace_for, split_name


class RegistrationError(Exception):
    """Base exception for mistakes in the command registration table."""

    pass


class DuplicateCommandError(RegistrationError):
    """Raised when two registrations produce the same namespace or full command name."""

    pass


class UnknownAliasError(RegistrationError):
    """Raised when an alias points at a namespace nobody registered."""

    pass


class Registry:
    """Registry of command groups and their operations.

    Groups are discovered lazily from the registration table on first use and
    cached for the lifetime of the registry.
    """

    def __init__(
        self,
        groups: Iterable[CommandGroup],
        aliases: dict[str, str] | None = None,
        debug: bool = False,
    ):
        """Initialize the registry.

        Args:
            groups: Registration entries, one per command group.
            aliases: Alternate namespace -> canonical namespace.
            debug: Trace discovery to stderr.
        """
        self._declarations = list(groups)
        self._aliases = dict(aliases or {})
        self.debug = debug
        self._groups: dict[str, GroupSpec] | None = None

    def _debug_print(self, message: str) -> None:
        """Print debug message only if debug mode is enabled"""
        if self.debug:
            print(f"Debug: {message}", file=sys.stderr)

    def _discover(self) -> dict[str, GroupSpec]:
        groups: dict[str, GroupSpec] = {}
        seen: set[str] = set()

        for declaration in self._declarations:
            namespace = namespace_for(declaration.identity)
            if namespace in groups:
                raise DuplicateCommandError(
                    f"Namespace '{namespace}' registered twice (identity: {declaration.identity})"
                )

            operations: dict[str, OperationSpec] = {}
            for command in declaration.commands:
                operation = OperationSpec.from_command(namespace, command)
                if operation.full_name in seen:
                    raise DuplicateCommandError(f"Command '{operation.full_name}' registered twice")
                seen.add(operation.full_name)
                operations[operation.name] = operation
                self._debug_print(f"discovered {operation.full_name} (arity {operation.arity})")

            groups[namespace] = GroupSpec(
                namespace=namespace,
                identity=declaration.identity,
                operations=operations,
                options=tuple(o.name for o in declaration.options),
                shared_options=tuple(declaration.options),
            )

        for alias, target in self._aliases.items():
            if alias in groups:
                raise DuplicateCommandError(f"Alias '{alias}' hides the registered namespace '{alias}'")
            if target not in groups:
                raise UnknownAliasError(f"Alias '{alias}' points at unknown namespace '{target}'")

        return groups

    @property
    def groups(self) -> dict[str, GroupSpec]:
        if self._groups is None:
            self._groups = self._discover()
        return self._groups

    def discover_all(self) -> list[GroupSpec]:
        """Return every registered group."""
        return list(self.groups.values())

    def full_names(self) -> list[str]:
        """Fully qualified command names, sorted.

        Examples:
            hello
            sub:goodbye
        """
        return sorted(
            join_name(group.namespace, name) for group in self.groups.values() for name in group.operations
        )

    def operations(self) -> list[OperationSpec]:
        """Every registered operation, sorted by full name."""
        found = [op for group in self.groups.values() for op in group.operations.values()]
        return sorted(found, key=lambda op: op.full_name)

    def lookup_group(self, namespace: str | None) -> GroupSpec | None:
        """Find a group by namespace or alias. None or "" is the root group."""
        namespace = namespace or ""
        namespace = self._aliases.get(namespace, namespace)
        return self.groups.get(namespace)

    def lookup_operation(self, group: GroupSpec | str | None, name: str) -> OperationSpec | None:
        if not isinstance(group, GroupSpec):
            group = self.lookup_group(group)
        if group is None:
            return None
        return group.operations.get(name)

    def lookup(self, full_name: str | None) -> OperationSpec | None:
        """Find an operation by its exact full command name."""
        if not full_name:
            return None
        namespace, name = split_name(full_name)
        return self.lookup_operation(namespace, name)
