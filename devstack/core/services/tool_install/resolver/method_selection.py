"""
L2 Resolver: Acquisition and removal method selection.

Maps ``(tool, platform)`` to the concrete steps to run.  Linux reads
the per-tool sequence from ``TOOL_RECIPES``; macOS and Windows
delegate every tool to a single package manager.
"""

from __future__ import annotations

from devstack.core.models.acquisition import (
    AcquisitionMethod,
    AcquisitionPlan,
    AcquisitionStep,
)
from devstack.core.models.platform import Platform
from devstack.core.services.tool_install.data.constants import (
    BREW_INSTALL,
    CHOCO_INSTALL,
)
from devstack.core.services.tool_install.data.recipes import TOOL_RECIPES
from devstack.core.services.tool_install.data.undo_catalog import UNDO_COMMANDS


def _fill(template: list[str], package: str) -> list[str]:
    return [t.replace("{package}", package) for t in template]


def _steps(raw: list[dict]) -> list[AcquisitionStep]:
    return [AcquisitionStep.model_validate(s) for s in raw]


def resolve_acquisition(tool: str, platform: Platform) -> AcquisitionPlan | None:
    """Resolve the install plan for *tool* on *platform*.

    Returns:
        The plan, or ``None`` when no sequence exists: an unsupported
        platform, or a tool without a Linux recipe.
    """
    if platform is Platform.MACOS:
        return AcquisitionPlan(
            tool=tool,
            platform=platform,
            method=AcquisitionMethod.PACKAGE_MANAGER_INSTALL,
            steps=[AcquisitionStep(
                command=_fill(BREW_INSTALL, tool),
                label=f"brew install {tool}",
            )],
        )

    if platform is Platform.WINDOWS:
        return AcquisitionPlan(
            tool=tool,
            platform=platform,
            method=AcquisitionMethod.DELEGATE_TO_BOOTSTRAP,
            bootstrap=True,
            steps=[AcquisitionStep(
                command=_fill(CHOCO_INSTALL, tool),
                label=f"choco install {tool}",
            )],
        )

    if platform is Platform.LINUX:
        spec = TOOL_RECIPES.get(tool, {}).get("install", {}).get("linux")
        if not spec:
            return None
        return AcquisitionPlan(
            tool=tool,
            platform=platform,
            method=AcquisitionMethod(spec["method"]),
            steps=_steps(spec["steps"]),
            refresh_index=True,
        )

    return None


def resolve_removal(tool: str, platform: Platform) -> list[AcquisitionStep]:
    """Resolve the removal steps for *tool* on *platform*.

    Resolution order:
      1. The recipe's explicit ``remove`` steps for the platform
      2. ``UNDO_COMMANDS`` purge for the recipe's package names
         (the tool id when none are declared)

    Returns an empty list on an unsupported platform.
    """
    recipe = TOOL_RECIPES.get(tool, {})

    explicit = recipe.get("remove", {}).get(platform.value)
    if explicit:
        return _steps(explicit)

    undo = UNDO_COMMANDS.get(platform.value)
    if not undo:
        return []

    packages = recipe.get("packages", {}).get(platform.value, [tool])
    return [
        AcquisitionStep(
            command=_fill(undo["command"], pkg),
            needs_sudo=undo["needs_sudo"],
            label=f"Remove {pkg}",
        )
        for pkg in packages
    ]


def resolve_cleanup(platform: Platform) -> list[AcquisitionStep]:
    """Package-manager cleanup run once at the end of an uninstall."""
    undo = UNDO_COMMANDS.get(platform.value)
    if not undo:
        return []
    return [
        AcquisitionStep(command=list(cmd), needs_sudo=undo["needs_sudo"], label=" ".join(cmd))
        for cmd in undo["cleanup"]
    ]
