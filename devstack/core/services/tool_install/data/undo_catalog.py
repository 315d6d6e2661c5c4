"""
L0 Data: Removal commands for each platform package manager.

Templates use a ``{package}`` placeholder resolved at removal time.
Recipes that installed outside the package manager carry their own
``remove`` steps and never reach this table.
"""

from __future__ import annotations

from devstack.core.services.tool_install.data.constants import (
    APT_CLEANUP,
    BREW_CLEANUP,
)

UNDO_COMMANDS: dict[str, dict] = {
    "linux": {
        "command": ["apt-get", "remove", "--purge", "-y", "{package}"],
        "needs_sudo": True,
        "cleanup": APT_CLEANUP,
    },
    "macos": {
        "command": ["brew", "uninstall", "{package}"],
        "needs_sudo": False,
        "cleanup": BREW_CLEANUP,
    },
    "windows": {
        "command": ["choco", "uninstall", "{package}", "-y"],
        "needs_sudo": False,
        "cleanup": [],
    },
}
