"""
CLI commands for tool installation and removal.

Thin wrappers over ``devstack.core.services.tool_install``.
"""

from __future__ import annotations

import json
import sys

import click

from devstack.core.context import RuntimeContext
from devstack.core.models.config import DevstackConfig
from devstack.core.models.outcome import OutcomeAction, RunSummary

_ICONS = {
    OutcomeAction.ALREADY_PRESENT: ("✅", "green"),
    OutcomeAction.INSTALLED: ("📦", "green"),
    OutcomeAction.REMOVED: ("🗑️ ", "green"),
    OutcomeAction.NOT_FOUND: ("➖", "white"),
    OutcomeAction.UNKNOWN_PACKAGE: ("⚠️ ", "yellow"),
    OutcomeAction.UNSUPPORTED_OS: ("❌", "red"),
    OutcomeAction.FAILED: ("❌", "red"),
}


# ── Shared helpers ──────────────────────────────────────────────


def runtime_context(ctx: click.Context) -> RuntimeContext:
    """The run's RuntimeContext, built once per invocation."""
    runtime = ctx.obj.get("runtime")
    if runtime is None:
        runtime = RuntimeContext.from_environ()
        ctx.obj["runtime"] = runtime
    return runtime


def require_config(ctx: click.Context) -> DevstackConfig:
    """Load devstack.yml (or defaults); exit 2 on a configuration error."""
    from devstack.core.config.loader import ConfigError, load_config

    config = ctx.obj.get("config")
    if config is not None:
        return config
    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(2)
    ctx.obj["config"] = config
    return config


def open_run_log(ctx: click.Context, config: DevstackConfig) -> None:
    """Attach the run log; exit 1 with a message when it can't be opened."""
    from devstack.core.observability.logging_config import start_run_log

    configured = runtime_context(ctx).expand(config.log_file)
    try:
        start_run_log(ctx.obj.get("log_level", "WARNING"), configured)
    except OSError as e:
        click.secho(f"❌ Cannot open run log: {e}", fg="red", err=True)
        sys.exit(1)


def print_summary(summary: RunSummary, *, quiet: bool = False) -> None:
    """Human-readable report of a run."""
    title = "Install" if summary.operation == "install" else "Uninstall"
    click.secho(f"\n🛠️  {title} on {summary.platform}", fg="cyan", bold=True)

    for o in summary.outcomes:
        icon, color = _ICONS.get(o.action, ("•", "white"))
        detail = f"  ({o.detail})" if o.detail and not quiet else ""
        click.secho(f"   {icon} {o.tool:<12} {o.action}{detail}", fg=color)

    if summary.versions:
        click.echo()
        click.secho("   Versions:", fg="white", bold=True)
        for tool, version in summary.versions.items():
            click.echo(f"     {tool:<12} {version}")

    if summary.notes and not quiet:
        click.echo()
        for note in summary.notes:
            click.echo(f"   ℹ️  {note}")

    click.echo()
    if summary.ok:
        click.secho(f"✅ {title} finished", fg="green", bold=True)
    else:
        names = ", ".join(o.tool for o in summary.failed)
        click.secho(f"❌ {title} finished with failures: {names}", fg="red", bold=True)


def _finish(ctx: click.Context, summary: RunSummary, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary(summary, quiet=ctx.obj.get("quiet", False))
    sys.exit(summary.exit_code)


# ── Install / uninstall ─────────────────────────────────────────


@click.command()
@click.argument("tool", required=False)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, tool: str | None, as_json: bool) -> None:
    """Install the tool catalog (or a single TOOL) and set up pre-commit."""
    from devstack.core.services.tool_install.orchestration.orchestrator import run_install

    config = require_config(ctx)
    open_run_log(ctx, config)
    runtime = runtime_context(ctx)

    try:
        summary = run_install(runtime, config, [tool] if tool else None)
    except OSError as e:
        click.secho(f"❌ Could not write hook documents: {e}", fg="red", err=True)
        sys.exit(1)

    _finish(ctx, summary, as_json)


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def uninstall(ctx: click.Context, as_json: bool) -> None:
    """Remove every catalog tool and the pre-commit environment."""
    from devstack.core.services.tool_install.orchestration.orchestrator import run_uninstall

    config = require_config(ctx)
    open_run_log(ctx, config)
    summary = run_uninstall(runtime_context(ctx), config)
    _finish(ctx, summary, as_json)


# ── Observe ─────────────────────────────────────────────────────


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show the detected platform and installed tool versions."""
    from devstack.core.services.tool_install.detection.tool_version import (
        NOT_FOUND,
        collect_versions,
    )

    config = require_config(ctx)
    runtime = runtime_context(ctx)
    versions = collect_versions(config.tools, runtime)

    if as_json:
        click.echo(json.dumps(
            {"platform": str(runtime.platform), "versions": versions}, indent=2,
        ))
        return

    click.secho(f"\n🖥️  Platform: {runtime.platform}", fg="cyan", bold=True)
    for name, version in versions.items():
        if version == NOT_FOUND:
            click.secho(f"   ❌ {name:<12} {version}", fg="red")
        else:
            click.secho(f"   ✅ {name:<12} {version}", fg="green")
    click.echo()


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool) -> None:
    """Print the detected platform identifier."""
    runtime = runtime_context(ctx)

    if as_json:
        click.echo(json.dumps(
            {"platform": str(runtime.platform), "supported": runtime.platform.supported},
            indent=2,
        ))
        return

    click.echo(str(runtime.platform))
    if not runtime.platform.supported:
        sys.exit(1)
