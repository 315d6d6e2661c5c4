"""
L1 Detection: Tool presence and version checking.

Read-only probes: resolves the tool's command on the context's search
path, runs its version command and parses the output.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess

from devstack.core.context import RuntimeContext
from devstack.core.services.tool_install.data.constants import PROBE_TIMEOUT
from devstack.core.services.tool_install.data.recipes import TOOL_RECIPES

logger = logging.getLogger(__name__)

NOT_FOUND = "not found"

VERSION_COMMANDS: dict[str, tuple[list[str], str]] = {
    "terraform":  (["terraform", "version"],             r"Terraform\s+v(\d+\.\d+\.\d+)"),
    "awscli":     (["aws", "--version"],                 r"aws-cli/(\d+\.\d+\.\d+)"),
    "git":        (["git", "--version"],                 r"git version\s+(\d+\.\d+\.\d+)"),
    "terragrunt": (["terragrunt", "--version"],          r"v?(\d+\.\d+\.\d+)"),
    "opa":        (["opa", "version"],                   r"Version:\s*(\d+\.\d+\.\d+)"),
    "python3":    (["python3", "--version"],             r"Python\s+(\d+\.\d+\.\d+)"),
    "helm":       (["helm", "version", "--short"],       r"v(\d+\.\d+\.\d+)"),
    "kubectl":    (["kubectl", "version", "--client=true"],
                                                         r"v(\d+\.\d+\.\d+)"),
    "rsync":      (["rsync", "--version"],               r"version\s+(\d+\.\d+\.\d+)"),
    # pre-commit environment
    "pre-commit": (["pre-commit", "--version"],          r"pre-commit\s+(\d+\.\d+\.\d+)"),
    "checkov":    (["checkov", "--version"],             r"(\d+\.\d+\.\d+)"),
}


def cli_name(tool: str) -> str:
    """Command name probed for *tool* (``aws`` for ``awscli``)."""
    return TOOL_RECIPES.get(tool, {}).get("cli", tool)


def find_tool(tool: str, ctx: RuntimeContext) -> str | None:
    """Absolute path of the tool's command on ``ctx``'s search path, or None."""
    return shutil.which(cli_name(tool), path=ctx.search_path)


def is_installed(tool: str, ctx: RuntimeContext) -> bool:
    """Whether the tool's command resolves on the search path."""
    return find_tool(tool, ctx) is not None


def parse_version(output: str, pattern: str) -> str | None:
    """Extract the first version match from command output."""
    match = re.search(pattern, output)
    return match.group(1) if match else None


def get_tool_version(
    tool: str,
    ctx: RuntimeContext,
    *,
    executable: str | None = None,
) -> str | None:
    """Get the installed version of a tool.

    Args:
        tool: Tool id.
        ctx: Runtime context (search path).
        executable: Explicit path to the command, e.g. inside a
            virtualenv.  Defaults to resolving on the search path.

    Returns:
        Version string (e.g. ``"1.9.8"``) or ``None`` if the tool is not
        installed or the version can't be determined.
    """
    entry = VERSION_COMMANDS.get(tool)
    cmd, pattern = entry if entry else ([cli_name(tool), "--version"], r"(\d+\.\d+(?:\.\d+)?)")

    binary = executable or find_tool(tool, ctx)
    if not binary:
        return None

    try:
        result = subprocess.run(
            [binary, *cmd[1:]],
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT,
            env=ctx.subprocess_env(),
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Version probe for %s failed: %s", tool, e)
        return None

    # Some tools print their version on stderr
    output = (result.stdout or "") + (result.stderr or "")
    return parse_version(output, pattern)


def collect_versions(tools: list[str], ctx: RuntimeContext) -> dict[str, str]:
    """Re-probe every tool: ``{tool: version | "not found"}``.

    A tool that is on PATH but whose version can't be parsed reports
    ``"installed"``.
    """
    versions: dict[str, str] = {}
    for tool in tools:
        if not is_installed(tool, ctx):
            versions[tool] = NOT_FOUND
            continue
        versions[tool] = get_tool_version(tool, ctx) or "installed"
    return versions
