"""
Pre-commit document generator.

Produces the hook pipeline (``.pre-commit-config.yaml``) and the hook
manifest (``.pre-commit-hooks.yaml``) from typed hook data:
- Formatting, linting, secret detection and IaC security scanning
- Local hooks for a custom linter, large files, Go, HTML and Java
- One block per repository, one entry per hook id

Repositories declared more than once are merged: the first revision
wins and repeated hook ids are dropped, each with a warning.  Output
is deterministic, so writing twice yields identical bytes.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from devstack.core.models.hooks import HookRepo, ManifestHook
from devstack.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)

PIPELINE_FILE = ".pre-commit-config.yaml"
MANIFEST_FILE = ".pre-commit-hooks.yaml"

_HEADER = "# Generated by devstack. Local edits are overwritten on the next run.\n"


# ── Hook data ───────────────────────────────────────────────────

PIPELINE_REPOS: list[dict] = [
    {
        "repo": "https://github.com/pre-commit/pre-commit-hooks",
        "rev": "v5.0.0",
        "hooks": [
            {"id": "trailing-whitespace"},
            {"id": "end-of-file-fixer"},
            {"id": "check-yaml"},
            {"id": "debug-statements"},
            {"id": "double-quote-string-fixer"},
            {"id": "name-tests-test"},
            {"id": "requirements-txt-fixer"},
            {"id": "check-docstring-first"},
            {"id": "check-added-large-files", "args": ["--maxkb=5000"]},
            {"id": "check-json"},
            {"id": "detect-private-key"},
            {"id": "sort-simple-yaml"},
        ],
    },
    {
        "repo": "https://github.com/asottile/setup-cfg-fmt",
        "rev": "v2.7.0",
        "hooks": [{"id": "setup-cfg-fmt"}],
    },
    {
        "repo": "https://github.com/asottile/reorder-python-imports",
        "rev": "v3.14.0",
        "hooks": [{
            "id": "reorder-python-imports",
            "args": ["--py39-plus", "--add-import", "from __future__ import annotations"],
        }],
    },
    {
        "repo": "https://github.com/asottile/add-trailing-comma",
        "rev": "v3.1.0",
        "hooks": [{"id": "add-trailing-comma"}],
    },
    {
        "repo": "https://github.com/asottile/pyupgrade",
        "rev": "v3.19.1",
        "hooks": [{"id": "pyupgrade", "args": ["--py39-plus"]}],
    },
    {
        "repo": "https://github.com/hhatto/autopep8",
        "rev": "v2.3.2",
        "hooks": [{"id": "autopep8"}],
    },
    {
        "repo": "https://github.com/PyCQA/flake8",
        "rev": "7.1.2",
        "hooks": [{"id": "flake8"}],
    },
    {
        "repo": "https://github.com/psf/black",
        "rev": "25.1.0",
        "hooks": [{"id": "black"}],
    },
    {
        "repo": "https://github.com/golangci/golangci-lint",
        "rev": "v1.64.5",
        "hooks": [{
            "id": "golangci-lint",
            "name": "Go linter",
            "files": r"\.go$",
            "types": ["file"],
        }],
    },
    {
        "repo": "https://github.com/bridgecrewio/checkov",
        "rev": "3.2.373",
        "hooks": [{
            "id": "checkov",
            "name": "Checkov Security Scanner",
            "entry": "checkov -d .",
            "language": "python",
            "pass_filenames": False,
        }],
    },
    {
        "repo": "local",
        "hooks": [
            {
                "id": "custom-python-linter",
                "name": "Custom Python Linter",
                "entry": "python3 custom_linter.py",
                "language": "system",
                "types": ["python"],
                "stages": ["pre-commit"],
                "description": "Runs a custom Python linter to enforce coding standards.",
            },
            {
                "id": "check-large-files",
                "name": "Check for Large Files",
                "entry": "check_large_files.sh",
                "language": "script",
                "types": ["file"],
                "stages": ["pre-commit"],
                "description": "Prevents committing files larger than 1MB.",
            },
            {
                "id": "golang-setup",
                "name": "Go Environment Setup",
                "entry": "go version",
                "language": "system",
                "files": r"\.go$",
            },
            {
                "id": "htmlhint",
                "name": "HTMLHint",
                "entry": "htmlhint",
                "language": "system",
                "types": ["text"],
                "files": r"\.html$",
            },
            {
                "id": "checkstyle",
                "name": "Checkstyle Java Linter",
                "entry": "checkstyle -c checkstyle.xml",
                "language": "system",
                "files": r"\.java$",
            },
        ],
    },
]

MANIFEST_HOOKS: list[dict] = [
    {
        "id": "validate_manifest",
        "name": "validate pre-commit manifest",
        "description": "This validator validates a pre-commit hooks manifest file",
        "entry": "pre-commit validate-manifest",
        "language": "python",
        "files": r"^\.pre-commit-hooks\.yaml$",
        "stages": ["pre-commit", "pre-push", "manual"],
        "minimum_pre_commit_version": "3.2.0",
    },
]


# ── Normalisation ───────────────────────────────────────────────


def merge_repos(repos: list[HookRepo]) -> list[HookRepo]:
    """Collapse repeated repository blocks and repeated hook ids.

    The first declaration of a repository fixes its position and
    revision.  Later blocks for the same repository contribute only
    hook ids not seen yet.
    """
    merged: dict[str, HookRepo] = {}
    seen_ids: dict[str, set[str]] = {}

    for repo in repos:
        target = merged.get(repo.repo)
        if target is None:
            target = HookRepo(repo=repo.repo, rev=repo.rev)
            merged[repo.repo] = target
            seen_ids[repo.repo] = set()
        elif repo.rev != target.rev:
            logger.warning(
                "Conflicting revisions for %s: keeping %s, dropping %s",
                repo.repo, target.rev, repo.rev,
            )

        ids = seen_ids[repo.repo]
        for hook in repo.hooks:
            if hook.id in ids:
                logger.warning("Duplicate hook id '%s' in %s dropped", hook.id, repo.repo)
                continue
            ids.add(hook.id)
            target.hooks.append(hook)

    return list(merged.values())


def build_pipeline(extra_repos: list[HookRepo] | None = None) -> list[HookRepo]:
    """Validate the built-in repos, append any extras and merge them.

    Extras normally arrive already validated from ``HooksConfig``; plain
    mappings are validated here.
    """
    repos = [HookRepo.model_validate(r) for r in PIPELINE_REPOS]
    repos.extend(HookRepo.model_validate(r) for r in extra_repos or [])
    return merge_repos(repos)


def _dump(data: object) -> str:
    return yaml.safe_dump(
        data,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=100,
    )


def render_pipeline(repos: list[HookRepo]) -> str:
    """Hook pipeline document text."""
    return _HEADER + _dump({"repos": [r.to_dict() for r in repos]})


def render_manifest(hooks: list[ManifestHook]) -> str:
    """Hook manifest document text."""
    return _HEADER + _dump([h.to_dict() for h in hooks])


# ── Public API ──────────────────────────────────────────────────


def generate(extra_repos: list[HookRepo] | None = None) -> list[GeneratedFile]:
    """Produce both pre-commit documents.

    Args:
        extra_repos: Additional repository blocks, usually
            ``HooksConfig.extra_repos``, merged after the built-in ones.

    Returns:
        ``[pipeline, manifest]`` as ``GeneratedFile`` instances.
    """
    repos = build_pipeline(extra_repos)
    manifest = [ManifestHook.model_validate(h) for h in MANIFEST_HOOKS]
    return [
        GeneratedFile(
            path=PIPELINE_FILE,
            content=render_pipeline(repos),
            reason="Pre-commit hook pipeline",
        ),
        GeneratedFile(
            path=MANIFEST_FILE,
            content=render_manifest(manifest),
            reason="Pre-commit hook manifest",
        ),
    ]


def write_files(files: list[GeneratedFile], target_dir: Path) -> list[Path]:
    """Write generated files under *target_dir*, replacing existing ones.

    Raises:
        FileExistsError: For a file with ``overwrite=False`` that exists.
        OSError: When the directory or file can't be written.
    """
    written: list[Path] = []
    for f in files:
        target = target_dir / f.path
        if target.exists() and not f.overwrite:
            raise FileExistsError(f"File already exists: {target}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(f.content, encoding="utf-8")
        logger.info("Wrote generated file: %s", target)
        written.append(target)
    return written


def hook_ids(repos: list[HookRepo]) -> list[str]:
    """Flat list of hook ids, in pipeline order."""
    return [h.id for r in repos for h in r.hooks]


__all__ = [
    "MANIFEST_FILE",
    "PIPELINE_FILE",
    "build_pipeline",
    "generate",
    "hook_ids",
    "merge_repos",
    "write_files",
]
