"""
Installer steps — check presence, install if absent.

Each public method of ``Installer`` is one provisioning step. A step
that finds its tool present reports ``[SKIP]`` and changes nothing; a
step that has to install runs the external command and, if that fails,
raises ``SetupError`` so the whole run stops (fail-fast, no rollback).

``bd`` and ``gt`` are the exception: they are reinstalled on every run
to track their latest release, and presence only picks the message.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devsetup.adapters.base import Adapter
from devsetup.core.config.loader import SetupConfig
from devsetup.core.data.recipes import HOMEBREW_INSTALL_CMD, TOOL_RECIPES
from devsetup.core.models.action import Receipt
from devsetup.core.models.results import SetupReport
from devsetup.core.observability.console import Console
from devsetup.core.services.presence import is_formula_installed, is_on_path
from devsetup.core.services.shell_config import (
    apply_homebrew_env,
    brew_shellenv_line,
    ensure_config_block,
    ensure_live_path,
    file_contains,
    path_contains,
    path_export_line,
)

logger = logging.getLogger(__name__)


class SetupError(Exception):
    """An install command failed; the run must stop."""

    def __init__(self, step: str, receipt: Receipt):
        self.step = step
        self.receipt = receipt
        detail = receipt.error or "command failed"
        super().__init__(f"{step}: {detail}")


class Installer:
    """Runs provisioning steps against one adapter and records receipts."""

    def __init__(
        self,
        config: SetupConfig,
        adapter: Adapter,
        console: Console,
        report: SetupReport | None = None,
        *,
        dry_run: bool = False,
    ):
        self.config = config
        self.adapter = adapter
        self.console = console
        self.report = report if report is not None else SetupReport()
        self.dry_run = dry_run

    # ── Helpers ─────────────────────────────────────────────────

    def _execute(self, step: str, action_id: str, command: list[str] | str) -> Receipt:
        """Run an install command, streaming its output. Raises on failure."""
        receipt = self.adapter.run(
            action_id,
            command,
            name=step,
            stream=True,
            dry_run=self.dry_run,
        )
        if receipt.failed:
            logger.error("Step %s failed: %s", step, receipt.error)
            self.report.record(step, receipt)
            raise SetupError(step, receipt)
        return receipt

    def _skipped(self, step: str, reason: str) -> Receipt:
        return self.report.record(
            step, Receipt.skip(adapter=self.adapter.name, action_id=step, reason=reason),
        )

    def _persist(self, path: Path, marker: str, lines: list[str], header: str) -> bool:
        appended = ensure_config_block(path, marker, lines, header, dry_run=self.dry_run)
        if appended and not self.dry_run:
            self.report.config_files_changed.append(str(path))
        return appended

    # ── 1. Homebrew ─────────────────────────────────────────────

    def install_homebrew(self) -> Receipt:
        if is_on_path("brew"):
            self.console.skip("Homebrew already installed — skipping.")
            receipt = self._skipped("homebrew", "brew on PATH")
        else:
            self.console.info("Installing Homebrew...")
            receipt = self.report.record(
                "homebrew", self._execute("homebrew", "homebrew-install", HOMEBREW_INSTALL_CMD),
            )

        brew_bin = self.config.brew_bin
        if brew_bin.is_file() and not is_on_path("brew"):
            self.console.info("Adding Homebrew to current PATH...")
            if not self.dry_run:
                apply_homebrew_env(self.config.homebrew_prefix)

        shellenv = brew_shellenv_line(brew_bin)
        profile = self.config.login_profile
        if brew_bin.is_file() and not file_contains(profile, shellenv):
            self.console.info(f"Persisting Homebrew PATH in {profile}...")
            self._persist(profile, shellenv, [shellenv], "Homebrew")

        return receipt

    # ── 2. Core utilities ───────────────────────────────────────

    def update_homebrew(self) -> Receipt:
        if not self.config.update_homebrew:
            return self._skipped("brew-update", "disabled in config")
        self.console.info("Updating Homebrew...")
        return self.report.record(
            "brew-update", self._execute("brew-update", "brew-update", ["brew", "update", "--quiet"]),
        )

    def brew_install(self, pkg: str) -> Receipt:
        """Install a Homebrew formula unless ``brew list`` already has it."""
        if is_formula_installed(pkg, self.adapter):
            self.console.skip(f"Homebrew package '{pkg}' already installed — skipping.")
            return self._skipped(pkg, "formula installed")

        self.console.info(f"Installing '{pkg}' via Homebrew...")
        return self.report.record(
            pkg, self._execute(pkg, f"brew-install:{pkg}", ["brew", "install", pkg]),
        )

    def install_brew_packages(self) -> list[Receipt]:
        self.update_homebrew()
        return [self.brew_install(pkg) for pkg in self.config.brew_packages]

    # ── 3. Database backend ─────────────────────────────────────

    def install_dolt(self) -> Receipt:
        if is_on_path("dolt"):
            self.console.skip("Dolt already installed — skipping.")
            return self._skipped("dolt", "dolt on PATH")
        self.console.info("Installing Dolt via Homebrew...")
        return self.brew_install(TOOL_RECIPES["dolt"]["formula"])

    # ── 4. Go PATH ──────────────────────────────────────────────

    def configure_go_path(self) -> Receipt:
        go_bin = self.config.go_bin
        rc = self.config.shell_rc
        changed = False

        if not path_contains(go_bin):
            self.console.info(f"Adding {go_bin} to current session PATH...")
            if not self.dry_run:
                ensure_live_path(go_bin)
            changed = True
        else:
            self.console.skip("Go bin already in current PATH — skipping.")

        if file_contains(rc, str(go_bin)):
            self.console.skip(f"Go bin PATH already in {rc} — skipping.")
        else:
            self.console.info(f"Persisting Go bin PATH in {rc}...")
            self._persist(rc, str(go_bin), [path_export_line(go_bin)], "Go binaries")
            changed = True

        if not changed:
            return self._skipped("go-path", "already configured")
        if self.dry_run:
            return self._skipped("go-path", f"[dry-run] would add {go_bin} to PATH")
        return self.report.record(
            "go-path",
            Receipt.success(adapter=self.adapter.name, action_id="go-path", output=str(go_bin)),
        )

    # ── 5/6. Always-latest CLIs ─────────────────────────────────

    def install_latest(self, tool_id: str) -> Receipt:
        """Reinstall a ``go install`` tool; presence only chooses the message."""
        recipe = TOOL_RECIPES[tool_id]
        label = recipe["label"]
        was_present = is_on_path(recipe["cli"])
        if was_present:
            self.console.skip(f"{label} already installed — re-installing to ensure latest version...")
        else:
            self.console.info(f"Installing {label} CLI...")

        receipt = self._execute(tool_id, f"go-install:{tool_id}", recipe["install"])
        receipt.metadata["was_present"] = was_present
        return self.report.record(tool_id, receipt)

    # ── 7. Node.js ──────────────────────────────────────────────

    def install_node(self) -> Receipt:
        if is_on_path("npm"):
            self.console.skip("Node.js/npm already installed — skipping.")
            return self._skipped("node", "npm on PATH")
        self.console.info("npm not found — installing Node.js via Homebrew...")
        return self.brew_install(TOOL_RECIPES["node"]["formula"])

    # ── 8. Claude Code CLI ──────────────────────────────────────

    def install_claude_code(self) -> Receipt:
        self.install_node()
        recipe = TOOL_RECIPES["claude"]
        if is_on_path(recipe["cli"]):
            self.console.skip("Claude Code CLI already installed — skipping.")
            return self._skipped("claude", "claude on PATH")
        self.console.info("Installing Claude Code CLI via npm...")
        return self.report.record(
            "claude", self._execute("claude", "npm-install:claude", recipe["install"]),
        )
