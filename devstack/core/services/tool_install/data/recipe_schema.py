"""
L0 Data: Recipe schema validator.

Every entry in ``TOOL_RECIPES`` must conform to the shape documented
in ``recipes.py``.  Tests run the validator over the whole table so a
typo in a method name or a malformed step is caught before any
installer logic runs.
"""

from __future__ import annotations

from typing import Any

from devstack.core.models.acquisition import AcquisitionMethod
from devstack.core.models.platform import Platform

# ── Canonical recipe fields ─────────────────────────────────────

_REQUIRED_FIELDS = {"label", "install"}
_OPTIONAL_FIELDS = {"cli", "category", "remove", "packages"}

_STEP_FIELDS = {"label", "command", "needs_sudo"}

# Platforms that may appear as keys of install/remove/packages
VALID_PLATFORM_KEYS = {p.value for p in Platform if p.supported}

VALID_METHODS = {m.value for m in AcquisitionMethod}


def _validate_steps(where: str, steps: Any) -> list[str]:
    errors: list[str] = []
    if not isinstance(steps, list) or not steps:
        return [f"{where}: steps must be a non-empty list"]
    for i, step in enumerate(steps):
        loc = f"{where}[{i}]"
        if not isinstance(step, dict):
            errors.append(f"{loc}: step must be a dict")
            continue
        unknown = set(step) - _STEP_FIELDS
        if unknown:
            errors.append(f"{loc}: unknown fields {sorted(unknown)}")
        cmd = step.get("command")
        if not isinstance(cmd, list) or not cmd:
            errors.append(f"{loc}: command must be a non-empty list")
        elif not all(isinstance(t, str) and t for t in cmd):
            errors.append(f"{loc}: command tokens must be non-empty strings")
        if not isinstance(step.get("needs_sudo", False), bool):
            errors.append(f"{loc}: needs_sudo must be a bool")
    return errors


def validate_recipe(tool_id: str, recipe: dict) -> list[str]:
    """Validate a single recipe.

    Returns:
        A list of error strings; empty when the recipe is valid.
    """
    errors: list[str] = []

    missing = _REQUIRED_FIELDS - set(recipe)
    if missing:
        errors.append(f"missing required fields {sorted(missing)}")

    unknown = set(recipe) - _REQUIRED_FIELDS - _OPTIONAL_FIELDS
    if unknown:
        errors.append(f"unknown fields {sorted(unknown)}")

    cli = recipe.get("cli", tool_id)
    if not isinstance(cli, str) or not cli:
        errors.append("cli must be a non-empty string")

    install = recipe.get("install", {})
    if not isinstance(install, dict):
        errors.append("install must be a dict keyed by platform")
        install = {}
    for platform, spec in install.items():
        where = f"install.{platform}"
        if platform not in VALID_PLATFORM_KEYS:
            errors.append(f"{where}: unknown platform")
            continue
        if not isinstance(spec, dict):
            errors.append(f"{where}: must be a dict")
            continue
        if spec.get("method") not in VALID_METHODS:
            errors.append(f"{where}: invalid method {spec.get('method')!r}")
        errors.extend(_validate_steps(f"{where}.steps", spec.get("steps")))

    for platform, steps in recipe.get("remove", {}).items():
        where = f"remove.{platform}"
        if platform not in VALID_PLATFORM_KEYS:
            errors.append(f"{where}: unknown platform")
            continue
        errors.extend(_validate_steps(where, steps))

    for platform, names in recipe.get("packages", {}).items():
        if platform not in VALID_PLATFORM_KEYS:
            errors.append(f"packages.{platform}: unknown platform")
        elif not isinstance(names, list) or not names:
            errors.append(f"packages.{platform}: must be a non-empty list")

    return errors


def validate_all_recipes(recipes: dict[str, dict]) -> dict[str, list[str]]:
    """Validate every recipe; return ``{tool_id: errors}`` for failures only."""
    failures: dict[str, list[str]] = {}
    for tool_id, recipe in recipes.items():
        errs = validate_recipe(tool_id, recipe)
        if errs:
            failures[tool_id] = errs
    return failures
