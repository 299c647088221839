"""
Workspace initialisation — create a Gas Town workspace after install.

Opt-in. Every ``gt`` subcommand used here is safe to re-run.
"""

from __future__ import annotations

from pathlib import Path

from devsetup.adapters.base import Adapter
from devsetup.core.models.action import Receipt
from devsetup.core.observability.console import Console
from devsetup.core.services.installer import SetupError

WORKSPACE_COMMANDS: list[list[str]] = [
    ["gt", "enable"],
    ["gt", "git-init"],
    ["gt", "doctor"],
]


def init_workspace(
    path: Path,
    adapter: Adapter,
    console: Console,
    *,
    dry_run: bool = False,
) -> list[Receipt]:
    """Install a workspace at ``path`` and enable it.

    Raises:
        SetupError: On the first failing ``gt`` command.
    """
    console.info(f"Initializing Gas Town workspace at {path} ...")
    steps: list[tuple[list[str], str | None]] = [(["gt", "install", str(path), "--shell"], None)]
    steps += [(cmd, str(path)) for cmd in WORKSPACE_COMMANDS]

    receipts = []
    for cmd, cwd in steps:
        action_id = "workspace:" + cmd[1]
        receipt = adapter.run(action_id, cmd, name=" ".join(cmd), stream=True, cwd=cwd, dry_run=dry_run)
        if receipt.failed:
            raise SetupError(action_id, receipt)
        receipts.append(receipt)
    return receipts
