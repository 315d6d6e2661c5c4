"""
CLI commands for the pre-commit hook documents.

Thin wrappers over ``devstack.core.services.generators.precommit``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from devstack.ui.cli.tools import require_config, runtime_context


@click.group()
def hooks() -> None:
    """Hooks: show or write the pre-commit documents."""


@hooks.command("show")
@click.option("--manifest", is_flag=True, help="Show the hook manifest instead of the pipeline.")
@click.pass_context
def show(ctx: click.Context, manifest: bool) -> None:
    """Print a generated pre-commit document to stdout."""
    from devstack.core.services.generators.precommit import MANIFEST_FILE, PIPELINE_FILE, generate

    config = require_config(ctx)
    wanted = MANIFEST_FILE if manifest else PIPELINE_FILE
    for f in generate(config.hooks.extra_repos):
        if f.path == wanted:
            click.echo(f.content, nl=False)


@hooks.command("write")
@click.option(
    "--target-dir",
    "-t",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write into (default: from config).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def write(ctx: click.Context, target_dir: Path | None, as_json: bool) -> None:
    """Write both pre-commit documents, replacing existing ones."""
    from devstack.core.services.generators.precommit import generate, write_files
    from devstack.core.services.tool_install.orchestration.orchestrator import hooks_target_dir

    config = require_config(ctx)
    target = target_dir or hooks_target_dir(runtime_context(ctx), config)

    try:
        written = write_files(generate(config.hooks.extra_repos), target)
    except OSError as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"ok": True, "files": [str(p) for p in written]}, indent=2))
        return

    for path in written:
        click.secho(f"📝 {path}", fg="green")
