"""
L3 Execution: Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for install and
removal operations.  Escalation, environment, logging and error
capture are centralised here.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from typing import Any

from devstack.core.context import RuntimeContext
from devstack.core.models.platform import Platform

logger = logging.getLogger(__name__)

# Tail kept in results; the full output goes to the run log.
_OUTPUT_TAIL = 2000


def _is_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def _log_output(text: str) -> None:
    for line in text.splitlines():
        if line.strip():
            logger.info("  | %s", line)


def _run_subprocess(
    cmd: list[str],
    ctx: RuntimeContext,
    *,
    needs_sudo: bool = False,
    timeout: int = 120,
    cwd: str | None = None,
) -> dict[str, Any]:
    """Run a command and capture its result.

    Never raises for command failures: a non-zero exit, a missing
    executable and a timeout all come back as ``ok=False``.

    Escalation:
    - ``sudo`` is prefixed only on POSIX hosts and only when not
      already root.  The password prompt goes to the terminal.

    Args:
        cmd: Command list for ``subprocess.run()``.
        ctx: Runtime context; supplies PATH and HOME.
        needs_sudo: Whether the command requires root.
        timeout: Seconds before ``TimeoutExpired``.
        cwd: Working directory for the command.

    Returns:
        ``{"ok": True, "returncode": 0, "stdout": "...", "elapsed_ms": N}``
        on success, ``{"ok": False, "error": "...", ...}`` on failure.
    """
    if needs_sudo and ctx.platform is not Platform.WINDOWS and not _is_root():
        cmd = ["sudo", *cmd]

    logger.info("$ %s", shlex.join(cmd))

    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=ctx.subprocess_env(),
            cwd=cwd,
        )
    except FileNotFoundError:
        logger.warning("Command not found: %s", cmd[0])
        return {"ok": False, "returncode": None, "error": f"Command not found: {cmd[0]}"}
    except subprocess.TimeoutExpired:
        logger.warning("Command timed out after %ss: %s", timeout, cmd[0])
        return {"ok": False, "returncode": None, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        logger.exception("Subprocess error: %s", cmd)
        return {"ok": False, "returncode": None, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    _log_output(result.stdout or "")
    _log_output(result.stderr or "")

    stdout = (result.stdout or "")[-_OUTPUT_TAIL:]
    stderr = (result.stderr or "")[-_OUTPUT_TAIL:]

    if result.returncode == 0:
        return {
            "ok": True,
            "returncode": 0,
            "stdout": stdout,
            "elapsed_ms": elapsed_ms,
        }

    logger.warning("Command failed (exit %d): %s", result.returncode, shlex.join(cmd))
    return {
        "ok": False,
        "returncode": result.returncode,
        "error": f"Command failed (exit {result.returncode})",
        "stderr": stderr,
        "stdout": stdout,
        "elapsed_ms": elapsed_ms,
    }
