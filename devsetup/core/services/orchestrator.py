"""
Orchestrator — the fixed-order provisioning run.

    Homebrew → core utilities → Dolt → Go PATH → bd → gt → Node.js →
    Claude Code → verification

No branching beyond what each step decides for itself. The first
``SetupError`` propagates to the caller; steps already completed stay
applied.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devsetup.adapters.base import Adapter
from devsetup.core.config.loader import SetupConfig
from devsetup.core.models.results import SetupReport
from devsetup.core.observability.console import Console
from devsetup.core.services.installer import Installer
from devsetup.core.services.verifier import verify_tools
from devsetup.core.services.workspace import init_workspace

logger = logging.getLogger(__name__)


def run_setup(
    config: SetupConfig,
    adapter: Adapter,
    console: Console,
    *,
    dry_run: bool = False,
    workspace: Path | None = None,
) -> SetupReport:
    """Provision the workstation.

    Args:
        config: Paths and package list.
        adapter: Executes external commands.
        console: Receives progress lines.
        dry_run: Probe and report, but install and write nothing.
        workspace: If set, initialise a Gas Town workspace there afterwards.

    Returns:
        Report of every step plus the verification result.

    Raises:
        SetupError: The first install command that failed.
    """
    report = SetupReport()
    installer = Installer(config, adapter, console, report, dry_run=dry_run)

    console.info("Starting workstation setup...")
    if dry_run:
        console.warn("Dry run: nothing will be installed or written.")
    console.line()

    installer.install_homebrew()
    installer.install_brew_packages()
    installer.install_dolt()
    installer.configure_go_path()
    installer.install_latest("bd")
    installer.install_latest("gt")
    installer.install_claude_code()

    report.verification = verify_tools(adapter, console, rc_hint=f"~/{config.shell_rc.name}")
    logger.info(
        "Setup finished: %d steps, %d config file(s) changed, verification %s",
        len(report.steps),
        len(report.config_files_changed),
        "ok" if report.verification.all_ok else "incomplete",
    )

    if workspace is not None:
        console.line()
        init_workspace(workspace, adapter, console, dry_run=dry_run)

    console.line()
    console.info("Setup complete!")
    if workspace is None:
        console.info("To initialize your workspace, run:")
        ws = config.workspace_dir
        console.line(f"    gt install {ws} --shell")
        console.line(f"    cd {ws} && gt enable && gt git-init && gt up && gt doctor")
    console.line()
    console.warn(
        f"If any tools show as missing, open a new terminal (or run 'source ~/{config.shell_rc.name}') "
        "and re-run devsetup."
    )
    return report
