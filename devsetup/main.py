"""
devsetup — CLI entrypoint.

Usage:
    devsetup --help
    devsetup run
    devsetup verify
    python -m devsetup.main status --json
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from devsetup import __version__
from devsetup.core.observability.logging_config import (
    ENV_LOG_FILE,
    ENV_LOG_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="devsetup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to devsetup.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """devsetup — provision a developer workstation, idempotently."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
    )


def _load_config(ctx: click.Context):
    """Load the setup config or exit 1 with a readable error."""
    from devsetup.core.config.loader import ConfigError, load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _shell_adapter():
    from devsetup.adapters.shell.command import ShellCommandAdapter

    return ShellCommandAdapter()


@cli.command()
@click.option("--dry-run", is_flag=True, help="Probe and report without installing or writing.")
@click.option(
    "--init-workspace",
    "workspace",
    type=click.Path(file_okay=False),
    default=None,
    help="Also initialize a Gas Town workspace at this path.",
)
@click.pass_context
def run(ctx: click.Context, dry_run: bool, workspace: str | None) -> None:
    """Install everything that is missing, then verify."""
    from devsetup.core.observability.console import Console
    from devsetup.core.services.installer import SetupError
    from devsetup.core.services.orchestrator import run_setup

    config = _load_config(ctx)
    console = Console()

    try:
        run_setup(
            config,
            _shell_adapter(),
            console,
            dry_run=dry_run,
            workspace=Path(workspace).expanduser() if workspace else None,
        )
    except SetupError as e:
        console.error(str(e))
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def verify(ctx: click.Context, as_json: bool) -> None:
    """Report the installed version of every tool."""
    from devsetup.core.data.recipes import VERIFY_ORDER
    from devsetup.core.models.results import VerifyReport
    from devsetup.core.observability.console import Console
    from devsetup.core.services.verifier import check_tool, verify_tools

    config = _load_config(ctx)
    adapter = _shell_adapter()

    if as_json:
        report = VerifyReport()
        for tool_id in VERIFY_ORDER:
            report.add(check_tool(tool_id, adapter))
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    verify_tools(adapter, Console(), rc_hint=f"~/{config.shell_rc.name}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show which tools are present, without changing anything."""
    from devsetup.core.data.recipes import TOOL_RECIPES
    from devsetup.core.services.presence import is_on_path, tool_presence
    from devsetup.core.services.shell_config import file_contains, path_contains

    config = _load_config(ctx)
    presence = tool_presence(TOOL_RECIPES)
    result = {
        "brew": is_on_path("brew"),
        "tools": presence,
        "go_bin": {
            "path": str(config.go_bin),
            "in_path": path_contains(config.go_bin),
            "in_shell_config": file_contains(config.shell_rc, str(config.go_bin)),
            "shell_config": str(config.shell_rc),
        },
    }

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    click.secho("🔧 Toolchain:", fg="cyan", bold=True)
    click.echo(f"   {'✅' if result['brew'] else '❌'} Homebrew")
    for tool_id, present in presence.items():
        icon = "✅" if present else "❌"
        click.echo(f"   {icon} {TOOL_RECIPES[tool_id]['label']}")

    go_bin = result["go_bin"]
    click.secho("\n🐚 Shell:", fg="cyan", bold=True)
    click.echo(f"   {'✅' if go_bin['in_path'] else '❌'} {go_bin['path']} on PATH")
    click.echo(f"   {'✅' if go_bin['in_shell_config'] else '❌'} {go_bin['path']} in {go_bin['shell_config']}")


@cli.command()
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option("--dry-run", is_flag=True, help="Show the commands without running them.")
@click.pass_context
def workspace(ctx: click.Context, path: str | None, dry_run: bool) -> None:
    """Initialize a Gas Town workspace (default: ~/gt)."""
    from devsetup.core.observability.console import Console
    from devsetup.core.services.installer import SetupError
    from devsetup.core.services.workspace import init_workspace

    config = _load_config(ctx)
    target = Path(path).expanduser() if path else config.workspace_dir
    console = Console()

    try:
        init_workspace(target, _shell_adapter(), console, dry_run=dry_run)
    except SetupError as e:
        console.error(str(e))
        sys.exit(1)
    console.info(f"Workspace ready at {target}")


if __name__ == "__main__":
    cli()
