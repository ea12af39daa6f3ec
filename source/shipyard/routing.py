# ABOUTME: Namespace resolution and argument normalization for dispatch
# ABOUTME: Expands abbreviated command names and moves help requests to the front

"""Routing helpers: resolve typed command names and normalize argv."""

from collections.abc import Sequence

from .config import Settings
from .models import (
    NAMESPACE_SEPARATOR,
    ParsedInvocation,
    Resolution,
    ResolutionStatus,
    join_name,
    split_name,
)
from .registry import Registry

END_OF_OPTIONS = "--"


class Resolver:
    """Map a possibly abbreviated ``namespace:operation`` string to a full command name."""

    def __init__(self, registry: Registry):
        self.registry = registry

    def resolve_detailed(self, raw_command: str | None) -> Resolution:
        """Resolve a command string and report how it was resolved.

        Unresolvable input comes back unchanged, with the status saying why.
        """
        if not raw_command:
            return Resolution(raw_command, ResolutionStatus.EMPTY)

        words = raw_command.split(NAMESPACE_SEPARATOR)
        namespace = NAMESPACE_SEPARATOR.join(words[:-1]) if len(words) > 1 else None
        typed = words[-1]

        group = self.registry.lookup_group(namespace)
        if group is None:
            return Resolution(raw_command, ResolutionStatus.UNKNOWN_NAMESPACE)

        if typed in group.operations:
            return Resolution(join_name(group.namespace, typed), ResolutionStatus.EXACT)

        matches = tuple(name for name in group.operations if typed and name.startswith(typed))
        if len(matches) == 1:
            return Resolution(join_name(group.namespace, matches[0]), ResolutionStatus.EXPANDED)
        if matches:
            return Resolution(raw_command, ResolutionStatus.AMBIGUOUS, tuple(sorted(matches)))
        return Resolution(raw_command, ResolutionStatus.NO_MATCH)

    def resolve(self, raw_command: str | None) -> str | None:
        """Resolve a command string, returning the input as typed when it cannot be resolved.

        Examples:
            resolve("sub:good") => "sub:goodbye"
            resolve("sub:go") => "sub:go" when "go" and "goodbye" both exist
        """
        return self.resolve_detailed(raw_command).name


class Normalizer:
    """Rewrite raw argv into the help-first, un-namespaced form cleo expects.

    Help may be requested via any of:
        shipyard sub:goodbye help
        shipyard sub:goodbye -h
        shipyard sub:goodbye Alice --help
        shipyard help sub:goodbye
    """

    def __init__(self, resolver: Resolver, settings: Settings | None = None):
        self.resolver = resolver
        self.settings = settings or Settings()

    def is_help(self, token: str) -> bool:
        return token in self.settings.help_flags

    def command_candidate(self, raw_args: Sequence[str]) -> str | None:
        """First argument that is neither an option nor a help token."""
        for token in raw_args:
            if token is None or self.settings.is_flag(token) or self.is_help(token):
                continue
            return token
        return None

    def full_command(self, raw_args: Sequence[str]) -> str | None:
        return self.resolver.resolve(self.command_candidate(raw_args))

    def normalize(self, raw_args: Sequence[str]) -> ParsedInvocation:
        """Strip the namespace from the command and shift help to the front.

        Returns:
            ParsedInvocation whose argv is ``["help", operation, *rest]`` when
            help was requested anywhere, else ``[operation, *rest]``.
        """
        full_name = self.full_command(raw_args)
        operation = split_name(full_name)[1] if full_name else None

        args: list[str | None] = list(raw_args)
        # Words after a bare "--" are literal, help tokens included
        tail: list[str | None] = []
        if END_OF_OPTIONS in args:
            index = args.index(END_OF_OPTIONS)
            args, tail = args[:index], args[index:]

        help_requested = any(self.is_help(token) for token in args if token is not None)
        if help_requested:
            args = [token for token in args if token is None or not self.is_help(token)]
        args += tail

        if args:
            args[0] = operation
        else:
            args = [operation]

        argv = [token for token in args if token is not None]
        if help_requested:
            argv.insert(0, "help")

        return ParsedInvocation(full_name=full_name, argv=tuple(argv), help_requested=help_requested)
