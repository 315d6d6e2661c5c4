"""
Runtime context: the explicit view of the host a run operates on.

Built ONCE at start-up from the process environment and then passed
to every detector, installer and emitter.  Nothing below the CLI
reads ``os.environ`` directly:

    - CLI:    main.py → RuntimeContext.from_environ()
    - Tests:  RuntimeContext(platform=..., home_dir=tmp_path, path_entries=[...])

The executable search path is the only mutable part: installing the
Windows bootstrap package manager appends its bin directory for the
rest of the run.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from devstack.core.models.platform import Platform


class RuntimeContext(BaseModel):
    """Platform, home directory and executable search path for one run."""

    platform: Platform
    home_dir: Path
    path_entries: list[str] = Field(default_factory=list)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> RuntimeContext:
        """Build a context from environment variables (default: ``os.environ``)."""
        from devstack.core.services.tool_install.detection.platform import (
            platform_from_environ,
        )

        env = os.environ if environ is None else environ
        home = env.get("HOME") or env.get("USERPROFILE") or str(Path.home())
        raw_path = env.get("PATH", "")
        entries = [p for p in raw_path.split(os.pathsep) if p]
        return cls(
            platform=platform_from_environ(env),
            home_dir=Path(home),
            path_entries=entries,
        )

    @property
    def search_path(self) -> str:
        """``path_entries`` joined the way ``PATH`` expects."""
        return os.pathsep.join(self.path_entries)

    def extend_path(self, entry: str) -> None:
        """Append a directory to the search path (no duplicates)."""
        if entry not in self.path_entries:
            self.path_entries.append(entry)

    def expand(self, value: str | Path) -> Path:
        """Resolve a leading ``~`` against ``home_dir``."""
        text = str(value)
        if text == "~":
            return self.home_dir
        if text.startswith("~/") or text.startswith("~\\"):
            return self.home_dir / text[2:]
        return Path(text)

    def subprocess_env(self) -> dict[str, str]:
        """Environment for child processes with this context's PATH and HOME."""
        env = os.environ.copy()
        env["PATH"] = self.search_path
        env["HOME"] = str(self.home_dir)
        return env
