"""
Acquisition models: how a tool gets onto a platform.

A recipe row in ``TOOL_RECIPES`` is resolved into an
``AcquisitionPlan``: the method that applies and the concrete
command steps to run, in order.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from devstack.core.models.platform import Platform


class AcquisitionMethod(StrEnum):
    """The shape of an acquisition sequence."""

    REPO_ADD_THEN_INSTALL = "repo_add_then_install"
    DIRECT_DOWNLOAD_INSTALL = "direct_download_install"
    PACKAGE_MANAGER_INSTALL = "package_manager_install"
    DELEGATE_TO_BOOTSTRAP = "delegate_to_bootstrap"


class AcquisitionStep(BaseModel):
    """One command of an acquisition sequence."""

    command: list[str]
    needs_sudo: bool = False
    label: str = ""


class AcquisitionPlan(BaseModel):
    """Resolved install plan for one tool on one platform."""

    tool: str
    platform: Platform
    method: AcquisitionMethod
    steps: list[AcquisitionStep] = Field(default_factory=list)
    refresh_index: bool = False    # run the package index update first
    bootstrap: bool = False        # ensure the bootstrap package manager first
