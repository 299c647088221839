"""
Presence checks — is a tool already installed?

Read-only probes. Executables are resolved against the *live* PATH,
which earlier steps may have extended during this run.
"""

from __future__ import annotations

import logging
import os
import shutil

from devsetup.adapters.base import Adapter

logger = logging.getLogger(__name__)


def is_on_path(cli: str) -> bool:
    """Whether ``cli`` resolves to an executable on the current PATH."""
    return shutil.which(cli, path=os.environ.get("PATH")) is not None


def installed_formulae(adapter: Adapter) -> list[str]:
    """Names of installed Homebrew formulae, one per line of ``brew list``.

    A failing ``brew list`` (brew missing, broken tap) reads as "nothing
    installed" so the caller falls through to ``brew install``.
    """
    receipt = adapter.run("brew-list", ["brew", "list", "--formula"], name="List Homebrew formulae")
    if not receipt.ok:
        logger.debug("brew list failed: %s", receipt.error)
        return []
    return [line.strip() for line in receipt.output.splitlines() if line.strip()]


def is_formula_installed(pkg: str, adapter: Adapter) -> bool:
    """Whether Homebrew reports ``pkg`` installed.

    Exact line match: ``go`` must not match ``go-task`` or ``go@1.21``.
    """
    return pkg in installed_formulae(adapter)


def tool_presence(recipes: dict[str, dict]) -> dict[str, bool]:
    """Presence of every recipe's CLI, keyed by tool ID."""
    return {tool_id: is_on_path(recipe.get("cli", tool_id)) for tool_id, recipe in recipes.items()}
