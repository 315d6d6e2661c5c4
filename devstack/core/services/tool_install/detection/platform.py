"""
L1 Detection: Host platform classification.

``detect_platform`` is a pure function of two signals: the platform
type string (bash's ``OSTYPE`` or Python's ``sys.platform``) and the
``OS`` environment variable that Windows shells export.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Mapping

from devstack.core.models.platform import Platform

_WINDOWS_OS_RE = re.compile(r"^(windows|mingw|cygwin)", re.IGNORECASE)


def detect_platform(platform_type: str | None, os_name: str | None) -> Platform:
    """Classify the host into exactly one ``Platform``.

    Rules, first match wins:
        1. ``linux`` in the platform type   → LINUX
        2. ``darwin`` in the platform type  → MACOS
        3. OS name starts with Windows / MINGW / CYGWIN → WINDOWS
        4. anything else                    → UNKNOWN
    """
    ptype = (platform_type or "").lower()
    if "linux" in ptype:
        return Platform.LINUX
    if "darwin" in ptype:
        return Platform.MACOS
    if os_name and _WINDOWS_OS_RE.match(os_name):
        return Platform.WINDOWS
    return Platform.UNKNOWN


def platform_from_environ(environ: Mapping[str, str]) -> Platform:
    """Read the two signals from an environment mapping.

    ``OSTYPE`` is a bash variable that is usually not exported, so the
    interpreter's own ``sys.platform`` stands in when it is absent.
    """
    platform_type = environ.get("OSTYPE") or sys.platform
    return detect_platform(platform_type, environ.get("OS"))
