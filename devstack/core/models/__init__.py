"""
Domain models: Pydantic types for devstack.

All models are re-exported here for convenient access:

    from devstack.core.models import Platform, Outcome, RunSummary
"""

from devstack.core.models.acquisition import (
    AcquisitionMethod,
    AcquisitionPlan,
    AcquisitionStep,
)
from devstack.core.models.hooks import Hook, HookRepo, ManifestHook
from devstack.core.models.outcome import Outcome, OutcomeAction, RunSummary
from devstack.core.models.platform import Platform
from devstack.core.models.template import GeneratedFile

__all__ = [
    # acquisition.py
    "AcquisitionMethod",
    "AcquisitionPlan",
    "AcquisitionStep",
    # hooks.py
    "Hook",
    "HookRepo",
    "ManifestHook",
    # outcome.py
    "Outcome",
    "OutcomeAction",
    "RunSummary",
    # platform.py
    "Platform",
    # template.py
    "GeneratedFile",
]
