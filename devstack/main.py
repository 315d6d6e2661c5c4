"""
devstack: CLI entrypoint.

Usage:
    devstack                 # interactive menu
    devstack install [TOOL]
    devstack uninstall
    devstack config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from devstack import __version__
from devstack.core.observability.logging_config import ENV_LOG_LEVEL, setup_logging


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="devstack")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to devstack.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """devstack: install developer tools and pre-commit hooks."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING")
    ctx.obj["log_level"] = level

    setup_logging(level=level)

    if ctx.invoked_subcommand is None:
        _menu(ctx)


def _menu(ctx: click.Context) -> None:
    """Interactive entry: 1 installs, 2 uninstalls, anything else exits."""
    click.echo("Select an option:")
    click.echo("1) Install Packages")
    click.echo("2) Remove Installed Packages")
    choice = click.prompt("Enter your choice", default="", show_default=False)

    if choice.strip() == "1":
        ctx.invoke(install)
    elif choice.strip() == "2":
        ctx.invoke(uninstall)
    else:
        click.echo("Invalid option. Exiting...")


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate devstack.yml configuration."""
    from devstack.core.config.loader import check_config

    result = check_config(ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result, indent=2))
        sys.exit(0 if result["valid"] else 1)
        return

    if result["valid"]:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   File: {result['path'] or '(defaults)'}")
        click.echo(f"   Tools: {', '.join(result['tools'])}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result["errors"]:
            click.echo(f"   • {err}")
        click.echo()
        sys.exit(1)

    click.echo()


# ── Register command groups ─────────────────────────────────────

from devstack.ui.cli.tools import detect, install, status, uninstall  # noqa: E402
from devstack.ui.cli.hooks import hooks  # noqa: E402

cli.add_command(install)
cli.add_command(uninstall)
cli.add_command(status)
cli.add_command(detect)
cli.add_command(hooks)


if __name__ == "__main__":
    cli()
