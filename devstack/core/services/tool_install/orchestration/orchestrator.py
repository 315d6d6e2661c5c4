"""
L4 Orchestration: Full install and uninstall runs.

These functions tie the layers together: one ``Outcome`` per tool,
sequential, with no early exit.  A failing tool never prevents the
next one from being attempted, and the pre-commit setup runs even
when tools failed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devstack.core.context import RuntimeContext
from devstack.core.models.config import DevstackConfig, normalise_tools
from devstack.core.models.outcome import RunSummary
from devstack.core.services.generators.precommit import generate, write_files
from devstack.core.services.tool_install.detection.tool_version import collect_versions
from devstack.core.services.tool_install.execution.installer import install_package
from devstack.core.services.tool_install.execution.precommit_env import (
    install_global_template,
    setup_precommit_env,
)
from devstack.core.services.tool_install.execution.tool_management import (
    cleanup_package_manager,
    remove_directory,
    remove_tool,
)

logger = logging.getLogger(__name__)


def hooks_target_dir(ctx: RuntimeContext, config: DevstackConfig, cwd: Path | None = None) -> Path:
    """Directory that receives the two pre-commit documents."""
    if config.hooks.target == "cwd":
        return cwd or Path.cwd()
    return ctx.home_dir


def run_install(
    ctx: RuntimeContext,
    config: DevstackConfig,
    tools: list[str] | None = None,
    *,
    cwd: Path | None = None,
) -> RunSummary:
    """Install every configured tool, then set up pre-commit.

    Args:
        ctx: Runtime context for the run.
        config: Loaded configuration.
        tools: Explicit tool ids; defaults to ``config.tools``.
        cwd: Directory used when hooks are written to the working directory.

    Returns:
        ``RunSummary`` with one outcome per tool and the version report.
    """
    selected = normalise_tools(tools) if tools is not None else config.tools
    summary = RunSummary(operation="install", platform=ctx.platform)
    logger.info("Detected OS: %s", ctx.platform)

    for tool in selected:
        summary.outcomes.append(install_package(tool, ctx))

    # ── Pre-commit environment and hook documents ───────────────
    venv_dir = ctx.expand(config.precommit_venv)
    env = setup_precommit_env(ctx, venv_dir)
    if not env["ok"]:
        summary.notes.append(f"Pre-commit environment: {env.get('error', 'failed')}")
    summary.versions.update(env.get("versions", {}))

    target = hooks_target_dir(ctx, config, cwd)
    for path in write_files(generate(config.hooks.extra_repos), target):
        summary.notes.append(f"Wrote {path}")

    if config.hooks.global_template:
        template_dir = ctx.expand(config.hooks.template_dir)
        wired = install_global_template(ctx, venv_dir, template_dir)
        if wired["ok"]:
            summary.notes.append(f"Global hook template: {template_dir}")
        else:
            summary.notes.append(f"Global hook template: {wired.get('error', 'failed')}")

    # ── Version report ──────────────────────────────────────────
    logger.info("Installed versions:")
    for tool, version in collect_versions(selected, ctx).items():
        summary.versions[tool] = version
        logger.info("%s: %s", tool, version)

    logger.info(
        "Install finished: %d tools, %d failed",
        len(summary.outcomes), len(summary.failed),
    )
    return summary


def run_uninstall(ctx: RuntimeContext, config: DevstackConfig) -> RunSummary:
    """Remove every configured tool and the pre-commit environment, then clean up.

    There is no confirmation step and no dry run.
    """
    summary = RunSummary(operation="uninstall", platform=ctx.platform)
    logger.info("Uninstalling packages...")

    for tool in config.tools:
        summary.outcomes.append(remove_tool(tool, ctx))

    venv_dir = ctx.expand(config.precommit_venv)
    try:
        if remove_directory(venv_dir):
            summary.notes.append(f"Removed {venv_dir}")
    except OSError as e:
        logger.error("Could not remove %s: %s", venv_dir, e)
        summary.notes.append(f"Could not remove {venv_dir}: {e}")

    if ctx.platform.supported:
        for result in cleanup_package_manager(ctx):
            if not result.get("ok"):
                summary.notes.append(f"Cleanup: {result.get('error', 'failed')}")

    logger.info("Uninstallation complete")
    return summary
