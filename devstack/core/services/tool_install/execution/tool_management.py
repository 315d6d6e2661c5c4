"""
L3 Execution: Tool removal and package-manager cleanup.

Removal never stops a run: a tool that is not on PATH, or whose
removal command exits non-zero, is reported as ``not_found`` and the
caller moves on to the next tool.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from devstack.core.context import RuntimeContext
from devstack.core.models.outcome import Outcome, OutcomeAction
from devstack.core.services.tool_install.data.constants import REMOVE_TIMEOUT
from devstack.core.services.tool_install.detection.tool_version import find_tool
from devstack.core.services.tool_install.execution.installer import run_steps
from devstack.core.services.tool_install.resolver.method_selection import (
    resolve_cleanup,
    resolve_removal,
)

logger = logging.getLogger(__name__)


def remove_tool(tool: str, ctx: RuntimeContext) -> Outcome:
    """Remove (uninstall) a tool using the platform's removal method.

    Resolution order for the remove command:
      1. Recipe's explicit ``remove`` steps (binary downloads, bundles)
      2. ``UNDO_COMMANDS`` purge through the package manager

    Returns:
        ``Outcome`` with action ``removed``, ``not_found`` or
        ``unsupported_os``.
    """
    tool = tool.lower().strip()
    platform = ctx.platform

    if not platform.supported:
        logger.warning("Unsupported OS: %s", platform)
        return Outcome.of(
            tool, platform, OutcomeAction.UNSUPPORTED_OS,
            detail=f"Unsupported OS: {platform}",
        )

    if not find_tool(tool, ctx):
        logger.info("%s not found", tool)
        return Outcome.of(tool, platform, OutcomeAction.NOT_FOUND, detail="not on PATH")

    steps = resolve_removal(tool, platform)
    logger.info("Removing %s...", tool)
    ran, failure = run_steps(steps, ctx, timeout=REMOVE_TIMEOUT)

    if failure:
        logger.info("%s not found (%s)", tool, failure.get("error"))
        return Outcome.of(
            tool, platform, OutcomeAction.NOT_FOUND,
            detail=failure.get("error", ""),
            commands=ran,
        )

    logger.info("%s removed", tool)
    return Outcome.of(tool, platform, OutcomeAction.REMOVED, commands=ran)


def remove_directory(path: Path) -> bool:
    """Delete a directory tree; returns whether anything was removed."""
    if not path.exists():
        logger.info("Nothing to remove at %s", path)
        return False
    shutil.rmtree(path)
    logger.info("Removed %s", path)
    return True


def cleanup_package_manager(ctx: RuntimeContext) -> list[dict]:
    """Run the platform's dependency cleanup and cache clean.

    Every cleanup command runs even when an earlier one fails.
    """
    results: list[dict] = []
    for step in resolve_cleanup(ctx.platform):
        _ran, failure = run_steps([step], ctx, timeout=REMOVE_TIMEOUT)
        results.append(failure or {"ok": True, "command": step.command})
    return results
