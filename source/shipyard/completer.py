# ABOUTME: Shell completion engine for namespaced commands
# ABOUTME: Suggests commands, positional parameter placeholders, then unused option flags

"""
Completion engine.

There are three phases, picked by how many words have been completed:

  1. top-level commands - no words yet
  2. params completions - the command still has required positional params left
  3. options completions - positional params are done, only flags remain

Params are the declared positional arguments of a command. For
``scale(service, count)`` the params are ``service, count`` and the arity is 2:

    shipyard scale service count [TAB]   # --noop --verbose etc

Variadic commands carry a negative arity (``ships(*services)`` is -1,
``deploy(service, *rest)`` is -2). Only the size of the params region matters,
so the absolute value is used either way.

The first word is expected to be a complete command name; the shell script
only calls back once the shell has matched the top-level word itself.
"""

from collections.abc import Sequence

from .config import Settings
from .models import OperationSpec, split_name
from .registry import Registry
from .routing import Resolver

SCRIPT = """\
# shipyard shell completion. Enable with:
#   eval "$({prog} completions:script)"
# zsh users should run `autoload -U +X bashcompinit && bashcompinit` first.

_{func}_completions() {{
  local cur words candidates
  COMP_WORDBREAKS=${{COMP_WORDBREAKS//:}}
  cur="${{COMP_WORDS[COMP_CWORD]}}"
  words=("${{COMP_WORDS[@]:1:COMP_CWORD-1}}")
  candidates=$({prog} completion -- "${{words[@]}}")
  COMPREPLY=( $(compgen -W "$candidates" -- "$cur") )
  return 0
}}

complete -F _{func}_completions {prog}
"""


class Completer:
    """Produce completion candidates for a partially typed command line."""

    def __init__(self, registry: Registry, settings: Settings | None = None):
        self.registry = registry
        self.settings = settings or Settings()
        self.resolver = Resolver(registry)

    def complete(self, words: Sequence[str]) -> list[str]:
        """Candidates for the next word after the already completed ``words``."""
        words = list(words)
        if not words:
            return self.all_commands()

        operation = self.registry.lookup(self.resolver.resolve(words[0]))
        if operation is None:
            return []

        if len(words) <= abs(operation.arity):
            return self.params_completions(operation, words)
        return self.options_completions(operation, words)

    def all_commands(self) -> list[str]:
        """All top-level commands except per-group help commands."""
        return [name for name in self.registry.full_names() if split_name(name)[1] != "help"]

    def params_completions(self, operation: OperationSpec, words: Sequence[str]) -> list[str]:
        """Placeholder name of the positional param the cursor is on."""
        offset = len(words) - 1
        remaining = operation.parameters[offset:]
        return list(remaining[:1])

    def options_completions(self, operation: OperationSpec, words: Sequence[str]) -> list[str]:
        """Unused option flags of the operation and its group."""
        group = self.registry.lookup_group(operation.group)
        names = list(operation.options) + list(group.options if group else ())

        marker = self.settings.option_marker * 2
        used = set(words)
        flags = []
        for name in names:
            flag = f"{marker}{name.replace('_', '-')}"
            if flag not in used and flag not in flags:
                flags.append(flag)
        return flags

    def script(self) -> str:
        """Shell script that hooks completion up to ``<prog> completion``."""
        prog = self.settings.program_name
        func = "".join(c if c.isalnum() else "_" for c in prog)
        return SCRIPT.format(prog=prog, func=func)
