"""
Verification — run each tool's version command and report.

Advisory only: a failed check is printed and counted, never raised,
and never affects the exit code of a run.
"""

from __future__ import annotations

import logging

from devsetup.adapters.base import Adapter
from devsetup.core.data.recipes import TOOL_RECIPES, VERIFY_ORDER
from devsetup.core.models.results import CheckResult, VerifyReport
from devsetup.core.observability.console import Console

logger = logging.getLogger(__name__)


def check_tool(tool_id: str, adapter: Adapter) -> CheckResult:
    """Run one version command; ok with its first stdout line, or not ok."""
    recipe = TOOL_RECIPES[tool_id]
    receipt = adapter.run(f"verify:{tool_id}", recipe["verify"], name=f"Verify {recipe['label']}")
    if receipt.ok:
        return CheckResult(label=recipe["label"], ok=True, version=receipt.first_line)
    logger.debug("Verification of %s failed: %s", tool_id, receipt.error)
    return CheckResult(label=recipe["label"], ok=False)


def verify_tools(
    adapter: Adapter,
    console: Console,
    tools: list[str] | None = None,
    *,
    rc_hint: str = "~/.zshrc",
) -> VerifyReport:
    """Check every tool, print one line each, then a combined verdict."""
    report = VerifyReport()

    console.line()
    console.info("─── Verifying installations ───")
    for tool_id in tools or VERIFY_ORDER:
        check = check_tool(tool_id, adapter)
        report.add(check)
        console.check(check.label, check.ok, check.version if check.ok else "NOT FOUND or failed")

    console.line()
    if report.all_ok:
        console.info("All prerequisites verified successfully!")
    else:
        console.warn("Some tools may not be in PATH yet.")
        console.warn(f"Try opening a new terminal or running: source {rc_hint}")
    return report
