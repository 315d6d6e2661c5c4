"""
L0 Data: the tool catalog.

Installed in this order, one at a time.
"""

from __future__ import annotations

TOOL_CATALOG: tuple[str, ...] = (
    "terraform",
    "awscli",
    "git",
    "terragrunt",
    "opa",
    "python3",
    "helm",
    "kubectl",
    "rsync",
)
