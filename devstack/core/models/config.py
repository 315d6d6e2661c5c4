"""
Configuration model: the optional ``devstack.yml``.

Every field has a default, so a run without any config file behaves
exactly like the built-in catalog and paths.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from devstack.core.models.hooks import HookRepo
from devstack.core.services.tool_install.data.catalog import TOOL_CATALOG


def normalise_tools(tools: list[str]) -> list[str]:
    """Lower-case and strip tool ids, dropping blanks and repeats (first wins)."""
    seen: list[str] = []
    for raw in tools:
        tool = raw.strip().lower()
        if tool and tool not in seen:
            seen.append(tool)
    return seen


class HooksConfig(BaseModel):
    """Where the pre-commit documents go and whether to wire git templates."""

    target: Literal["home", "cwd"] = "home"
    global_template: bool = False
    template_dir: str = "~/.git-template"
    extra_repos: list[HookRepo] = Field(default_factory=list)


class DevstackConfig(BaseModel):
    """Root configuration."""

    tools: list[str] = Field(default_factory=lambda: list(TOOL_CATALOG))
    log_file: str = "install_log.txt"
    precommit_venv: str = "~/precommit_venv"
    hooks: HooksConfig = Field(default_factory=HooksConfig)

    @field_validator("tools")
    @classmethod
    def _dedupe_tools(cls, value: list[str]) -> list[str]:
        return normalise_tools(value)
