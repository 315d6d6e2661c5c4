"""
L3 Execution: Isolated environment for pre-commit and Checkov.

Both tools live in their own virtualenv so they never collide with
system Python packages.  The environment is created once; later runs
only upgrade the packages inside it.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from devstack.core.context import RuntimeContext
from devstack.core.models.platform import Platform
from devstack.core.services.tool_install.data.constants import (
    INSTALL_TIMEOUT,
    PRECOMMIT_PACKAGES,
)
from devstack.core.services.tool_install.detection.tool_version import get_tool_version
from devstack.core.services.tool_install.execution.subprocess_runner import _run_subprocess

logger = logging.getLogger(__name__)

UNKNOWN_VERSION = "Unknown"


def venv_bin_dir(venv_dir: Path, platform: Platform) -> Path:
    """Directory holding the virtualenv's executables."""
    return venv_dir / ("Scripts" if platform is Platform.WINDOWS else "bin")


def venv_executable(venv_dir: Path, platform: Platform, name: str) -> Path:
    suffix = ".exe" if platform is Platform.WINDOWS else ""
    return venv_bin_dir(venv_dir, platform) / f"{name}{suffix}"


def setup_precommit_env(ctx: RuntimeContext, venv_dir: Path) -> dict[str, Any]:
    """Create (if missing) and populate the pre-commit virtualenv.

    Returns::

        {
            "ok": True,
            "venv": "/home/user/precommit_venv",
            "created": False,
            "versions": {"pre-commit": "4.0.1", "checkov": "3.2.373"},
        }
    """
    logger.info("Setting up separate virtual environment for pre-commit and checkov...")
    result: dict[str, Any] = {"ok": True, "venv": str(venv_dir), "created": False}

    if not venv_dir.exists():
        created = _run_subprocess(
            [sys.executable, "-m", "venv", str(venv_dir)], ctx, timeout=INSTALL_TIMEOUT,
        )
        if not created["ok"]:
            return {**result, "ok": False, "error": created["error"],
                    "versions": _versions(ctx, venv_dir)}
        result["created"] = True

    python = str(venv_executable(venv_dir, ctx.platform, "python"))
    for cmd in (
        [python, "-m", "pip", "install", "--upgrade", "pip"],
        [python, "-m", "pip", "install", *PRECOMMIT_PACKAGES],
    ):
        step = _run_subprocess(cmd, ctx, timeout=INSTALL_TIMEOUT)
        if not step["ok"]:
            result["ok"] = False
            result["error"] = step["error"]
            break

    result["versions"] = _versions(ctx, venv_dir)
    for tool, version in result["versions"].items():
        logger.info("%s version: %s", tool, version)
    logger.info("Pre-commit and Checkov installed in virtual environment at %s", venv_dir)
    return result


def _versions(ctx: RuntimeContext, venv_dir: Path) -> dict[str, str]:
    versions: dict[str, str] = {}
    for tool in ("pre-commit", "checkov"):
        exe = venv_executable(venv_dir, ctx.platform, tool)
        version = get_tool_version(tool, ctx, executable=str(exe)) if exe.exists() else None
        versions[tool] = version or UNKNOWN_VERSION
    return versions


def install_global_template(
    ctx: RuntimeContext,
    venv_dir: Path,
    template_dir: Path,
) -> dict[str, Any]:
    """Point git's init template at *template_dir* and fill it with pre-commit.

    New clones and ``git init`` then get the pre-commit hook without a
    per-repository ``pre-commit install``.
    """
    precommit = str(venv_executable(venv_dir, ctx.platform, "pre-commit"))
    for cmd in (
        ["git", "config", "--global", "init.templateDir", str(template_dir)],
        [precommit, "init-templatedir", str(template_dir)],
    ):
        step = _run_subprocess(cmd, ctx)
        if not step["ok"]:
            return {"ok": False, "error": step["error"], "template_dir": str(template_dir)}
    logger.info("Global hook template wired at %s", template_dir)
    return {"ok": True, "template_dir": str(template_dir)}
