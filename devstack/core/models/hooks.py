"""
Hook models: the pre-commit pipeline as typed data.

``Hook`` keeps only the keys pre-commit understands; unset keys are
left out of the emitted document so the output stays minimal.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Hook(BaseModel):
    """A single hook entry inside a repository block."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str | None = None
    entry: str | None = None
    language: str | None = None
    files: str | None = None
    types: list[str] | None = None
    stages: list[str] | None = None
    args: list[str] | None = None
    pass_filenames: bool | None = None
    description: str | None = None

    def to_dict(self) -> dict:
        """Mapping for YAML emission, unset keys dropped, ``id`` first."""
        return self.model_dump(exclude_none=True)


class HookRepo(BaseModel):
    """A repository block: a remote hook source or ``local``."""

    model_config = ConfigDict(extra="forbid")

    repo: str
    rev: str | None = None
    hooks: list[Hook] = Field(default_factory=list)

    @property
    def is_local(self) -> bool:
        return self.repo == "local"

    def to_dict(self) -> dict:
        data: dict = {"repo": self.repo}
        if self.rev is not None:
            data["rev"] = self.rev
        data["hooks"] = [h.to_dict() for h in self.hooks]
        return data


class ManifestHook(BaseModel):
    """An entry of a hooks manifest (``.pre-commit-hooks.yaml``)."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    entry: str
    language: str
    description: str = ""
    files: str | None = None
    stages: list[str] | None = None
    minimum_pre_commit_version: str | None = None

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)
