"""
L3 Execution: Single-tool installer.

``install_package`` is idempotent: a tool whose command already
resolves on the search path is reported and left alone.  Otherwise the
platform's acquisition plan runs step by step; the first failing step
ends that tool's sequence and the failure is returned, not raised.
"""

from __future__ import annotations

import logging
import shutil

from devstack.core.context import RuntimeContext
from devstack.core.models.acquisition import AcquisitionStep
from devstack.core.models.outcome import Outcome, OutcomeAction
from devstack.core.models.platform import Platform
from devstack.core.services.tool_install.data.constants import (
    APT_REFRESH,
    CHOCO_BIN_DIR,
    CHOCO_BOOTSTRAP,
    CHOCO_CLI,
    INSTALL_TIMEOUT,
    REFRESH_TIMEOUT,
)
from devstack.core.services.tool_install.data.recipes import TOOL_RECIPES
from devstack.core.services.tool_install.detection.tool_version import find_tool
from devstack.core.services.tool_install.execution.subprocess_runner import _run_subprocess
from devstack.core.services.tool_install.resolver.method_selection import (
    resolve_acquisition,
)

logger = logging.getLogger(__name__)


def run_steps(
    steps: list[AcquisitionStep],
    ctx: RuntimeContext,
    *,
    timeout: int = INSTALL_TIMEOUT,
) -> tuple[list[list[str]], dict | None]:
    """Run steps in order, stopping at the first failure.

    Returns:
        ``(commands_run, failure)`` where ``failure`` is the runner's
        result dict for the failing step, or ``None`` if all passed.
    """
    ran: list[list[str]] = []
    for step in steps:
        if step.label:
            logger.info("%s", step.label)
        ran.append(step.command)
        result = _run_subprocess(
            step.command, ctx, needs_sudo=step.needs_sudo, timeout=timeout,
        )
        if not result["ok"]:
            result["step"] = step.label or step.command[0]
            return ran, result
    return ran, None


def refresh_package_index(ctx: RuntimeContext) -> dict:
    """Refresh the apt package index."""
    return _run_subprocess(APT_REFRESH, ctx, needs_sudo=True, timeout=REFRESH_TIMEOUT)


def ensure_bootstrap(ctx: RuntimeContext) -> dict:
    """Make sure Chocolatey is available, installing it when absent.

    After a successful bootstrap the Chocolatey bin directory is appended
    to ``ctx.path_entries`` so later steps in the same run can find it.
    """
    if shutil.which(CHOCO_CLI, path=ctx.search_path):
        return {"ok": True, "skipped": True}

    logger.info("Chocolatey not found. Installing...")
    result = _run_subprocess(CHOCO_BOOTSTRAP, ctx, timeout=INSTALL_TIMEOUT)
    if result["ok"]:
        ctx.extend_path(CHOCO_BIN_DIR)
    return result


def _failure_detail(failure: dict) -> str:
    detail = f"{failure.get('step', '')}: {failure.get('error', 'failed')}"
    stderr = (failure.get("stderr") or "").strip()
    if stderr:
        detail += f" ({stderr.splitlines()[-1]})"
    return detail


def install_package(tool: str, ctx: RuntimeContext) -> Outcome:
    """Install one tool if it is not already present.

    Args:
        tool: Tool id (e.g. ``"helm"``).
        ctx: Runtime context; ``path_entries`` may be extended on Windows.

    Returns:
        ``Outcome`` with action ``already_present``, ``installed``,
        ``failed``, ``unknown_package`` or ``unsupported_os``.
    """
    tool = tool.lower().strip()
    platform = ctx.platform

    existing = find_tool(tool, ctx)
    if existing:
        logger.info("%s is already installed. Skipping...", tool)
        return Outcome.of(tool, platform, OutcomeAction.ALREADY_PRESENT, detail=existing)

    if not platform.supported:
        logger.warning("Unsupported OS: %s", platform)
        return Outcome.of(
            tool, platform, OutcomeAction.UNSUPPORTED_OS,
            detail=f"Unsupported OS: {platform}",
        )

    commands: list[list[str]] = []

    if platform is Platform.LINUX:
        commands.append(list(APT_REFRESH))
        refreshed = refresh_package_index(ctx)
        if not refreshed["ok"]:
            # A stale index is not fatal; the install step decides.
            logger.warning("Package index refresh failed: %s", refreshed.get("error"))

    plan = resolve_acquisition(tool, platform)
    if plan is None:
        logger.warning("Unknown package: %s", tool)
        return Outcome.of(
            tool, platform, OutcomeAction.UNKNOWN_PACKAGE,
            detail=f"Unknown package: {tool}",
            commands=commands,
        )

    if plan.bootstrap:
        boot = ensure_bootstrap(ctx)
        if not boot.get("skipped"):
            commands.append(list(CHOCO_BOOTSTRAP))
        if not boot["ok"]:
            return Outcome.of(
                tool, platform, OutcomeAction.FAILED,
                detail=f"Chocolatey bootstrap: {boot.get('error', 'failed')}",
                commands=commands,
            )

    label = TOOL_RECIPES.get(tool, {}).get("label", tool)
    logger.info("Installing %s on %s via %s...", label, platform, plan.method)

    ran, failure = run_steps(plan.steps, ctx)
    commands.extend(ran)

    if failure:
        logger.error("Failed to install %s: %s", tool, failure.get("error"))
        return Outcome.of(
            tool, platform, OutcomeAction.FAILED,
            detail=_failure_detail(failure),
            commands=commands,
        )

    logger.info("%s installed", tool)
    return Outcome.of(
        tool, platform, OutcomeAction.INSTALLED,
        detail=str(plan.method),
        commands=commands,
    )
