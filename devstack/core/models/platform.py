"""
Platform identifier: the closed set of host classifications.

Derived once per run by the OS detector and used to pick an
installation backend.
"""

from __future__ import annotations

from enum import StrEnum


class Platform(StrEnum):
    """Host operating system family."""

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    UNKNOWN = "unknown"

    @property
    def supported(self) -> bool:
        """Whether an installation backend exists for this platform."""
        return self is not Platform.UNKNOWN
