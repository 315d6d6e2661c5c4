"""
Outcome models: what happened to each tool during a run.

The installer and remover return one ``Outcome`` per tool; the
orchestrator folds them into a ``RunSummary`` that carries the
version report and the process exit code.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from devstack.core.models.platform import Platform


class OutcomeAction(StrEnum):
    """Result classification for a single tool."""

    ALREADY_PRESENT = "already_present"
    INSTALLED = "installed"
    FAILED = "failed"
    UNKNOWN_PACKAGE = "unknown_package"
    UNSUPPORTED_OS = "unsupported_os"
    REMOVED = "removed"
    NOT_FOUND = "not_found"


# Actions that do not count against the exit code
_NON_FAILING = frozenset({
    OutcomeAction.ALREADY_PRESENT,
    OutcomeAction.INSTALLED,
    OutcomeAction.UNKNOWN_PACKAGE,
    OutcomeAction.REMOVED,
    OutcomeAction.NOT_FOUND,
})


class Outcome(BaseModel):
    """Result of installing or removing one tool."""

    tool: str
    platform: Platform
    action: OutcomeAction
    success: bool = True
    detail: str = ""
    commands: list[list[str]] = Field(default_factory=list)

    @classmethod
    def of(
        cls,
        tool: str,
        platform: Platform,
        action: OutcomeAction,
        detail: str = "",
        commands: list[list[str]] | None = None,
    ) -> Outcome:
        """Create an outcome whose ``success`` follows from ``action``."""
        return cls(
            tool=tool,
            platform=platform,
            action=action,
            success=action in _NON_FAILING,
            detail=detail,
            commands=commands or [],
        )


class RunSummary(BaseModel):
    """Aggregate of a full install or uninstall run."""

    operation: str
    platform: Platform
    outcomes: list[Outcome] = Field(default_factory=list)
    versions: dict[str, str] = Field(default_factory=dict)
    notes: list[str] = Field(default_factory=list)

    @property
    def failed(self) -> list[Outcome]:
        """Outcomes that did not succeed."""
        return [o for o in self.outcomes if not o.success]

    @property
    def ok(self) -> bool:
        """Whether every tool succeeded."""
        return not self.failed

    @property
    def exit_code(self) -> int:
        """0 when every outcome succeeded, 1 otherwise."""
        return 0 if self.ok else 1

    def to_dict(self) -> dict:
        """JSON-ready representation."""
        data = self.model_dump(mode="json")
        data["ok"] = self.ok
        data["exit_code"] = self.exit_code
        return data
