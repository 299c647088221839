"""
Shared test fixtures — a simulated workstation.

``FakeMachine`` stands in for the real system: it decides which
executables ``shutil.which`` finds and which Homebrew formulae
``brew list`` reports, and install commands sent to its MockAdapter
make the corresponding tool appear.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from devsetup.adapters.base import ExecutionContext
from devsetup.adapters.mock import MockAdapter
from devsetup.core.config.loader import SetupConfig
from devsetup.core.data.recipes import TOOL_RECIPES

ALL_BINARIES = {"brew", "go", "git", "tmux", "dolt", "node", "npm", "bd", "gt", "claude"}
ALL_FORMULAE = {"go", "git", "tmux", "dolt", "node"}

# Executables a formula puts on PATH
_FORMULA_BINARIES = {"node": {"node", "npm"}}


class FakeMachine:
    """Simulated workstation state plus a MockAdapter wired to it."""

    def __init__(self, binaries: set[str] | None = None, formulae: set[str] | None = None):
        self.binaries = set(binaries or ())
        self.formulae = set(formulae or ())
        self.failures: dict[str, str] = {}
        self.adapter = MockAdapter(adapter_name="shell", on_execute=self._apply)

    def which(self, cmd, mode=None, path=None):
        return f"/usr/local/bin/{cmd}" if cmd in self.binaries else None

    def fail(self, action_id: str, error: str = "boom") -> None:
        self.failures[action_id] = error

    def installs(self) -> list[str]:
        """Action IDs of every install-type command, in order."""
        return [
            a for a in self.adapter.action_ids
            if a.startswith(("brew-install:", "go-install:", "npm-install:", "homebrew-install"))
        ]

    def _apply(self, ctx: ExecutionContext) -> None:
        action_id = ctx.action.id
        if action_id in self.failures:
            self.adapter.set_failure(action_id, self.failures[action_id])
            return

        kind, _, target = action_id.partition(":")
        if kind == "brew-list":
            self.adapter.set_output(action_id, "\n".join(sorted(self.formulae)))
        elif kind == "homebrew-install":
            self.binaries.add("brew")
        elif kind == "brew-install":
            self.formulae.add(target)
            self.binaries |= _FORMULA_BINARIES.get(target, {target})
        elif kind in ("go-install", "npm-install"):
            self.binaries.add(target)
        elif kind == "verify":
            cli = TOOL_RECIPES[target]["cli"]
            if cli in self.binaries:
                self.adapter.set_output(action_id, f"{cli} version 1.0.0\nextra line")
            else:
                self.adapter.set_failure(action_id, f"{cli}: command not found")


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """An empty home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def config(home: Path, tmp_path: Path) -> SetupConfig:
    """Config pointing every file at the temp home, zsh as the shell."""
    return SetupConfig(home=home, shell="/bin/zsh", homebrew_prefix=tmp_path / "homebrew")


@pytest.fixture
def clean_path(monkeypatch) -> str:
    """A PATH without the Go bin directory; restored after the test."""
    monkeypatch.setenv("PATH", "/usr/bin:/bin")
    return "/usr/bin:/bin"


def _install_machine(monkeypatch, machine: FakeMachine) -> FakeMachine:
    monkeypatch.setattr(shutil, "which", machine.which)
    return machine


@pytest.fixture
def fresh_machine(monkeypatch, clean_path) -> FakeMachine:
    """Nothing installed."""
    return _install_machine(monkeypatch, FakeMachine())


@pytest.fixture
def provisioned_machine(monkeypatch, clean_path) -> FakeMachine:
    """Every tool already installed."""
    return _install_machine(monkeypatch, FakeMachine(ALL_BINARIES, ALL_FORMULAE))


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
