# ABOUTME: Settings for the shipyard command router
# ABOUTME: Handles flag tables, program identity and the optional user config file

"""Configuration management for shipyard."""

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import __version__

# Thor-style help mappings plus the bare "help" word
DEFAULT_HELP_FLAGS = ("help", "-h", "--help", "-?", "-D")
DEFAULT_VERSION_FLAGS = ("--version", "-v")
DEFAULT_SHOW_ALL_FLAGS = ("--all", "-A")

USAGE_TEXT = """\
Usage:
  {prog} COMMAND [ARGS] [OPTIONS]

Commands are namespaced with colons, e.g. {prog} completions:script.
Names may be abbreviated when the abbreviation is unambiguous.
Add help, -h or --help anywhere on the line for help on a command."""


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


@dataclass
class Settings:
    """Runtime settings for routing, help and completion."""

    program_name: str = "shipyard"
    version: str = __version__
    help_aliases: list[str] = field(default_factory=list)  # Extra short help forms, e.g. "-H"
    version_flags: tuple[str, ...] = DEFAULT_VERSION_FLAGS
    show_all_flags: tuple[str, ...] = DEFAULT_SHOW_ALL_FLAGS
    option_marker: str = "-"
    debug: bool = False

    CONFIG_DIR = Path.home() / ".shipyard"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    @property
    def help_flags(self) -> tuple[str, ...]:
        flags = list(DEFAULT_HELP_FLAGS)
        flags += [alias for alias in self.help_aliases if alias not in flags]
        return tuple(flags)

    @property
    def usage_text(self) -> str:
        return USAGE_TEXT.format(prog=self.program_name)

    def is_flag(self, token: str) -> bool:
        return token.startswith(self.option_marker)

    def to_dict(self) -> dict[str, Any]:
        return {
            "program_name": self.program_name,
            "help_aliases": list(self.help_aliases),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Create settings from a config file mapping, ignoring unknown keys."""
        kwargs: dict[str, Any] = {}
        if data.get("program_name"):
            kwargs["program_name"] = str(data["program_name"])
        if "help_aliases" in data:
            aliases = data["help_aliases"] or []
            if isinstance(aliases, str):
                aliases = [a.strip() for a in aliases.split(",")]
            kwargs["help_aliases"] = [str(a) for a in aliases if a]
        return cls(**kwargs)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from the user config file and environment.

        The file is optional; a missing or unreadable file yields defaults.
        ``SHIPYARD_DEBUG`` enables debug output.
        """
        path = path or cls.CONFIG_FILE
        settings = cls()

        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                settings = cls.from_dict(data)
            except Exception as e:
                print(f"Warning: Could not load config: {e}", file=sys.stderr)
                settings = cls()

        settings.debug = _env_flag("SHIPYARD_DEBUG")
        return settings
