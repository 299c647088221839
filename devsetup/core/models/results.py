"""
Run results — what a provisioning run and a verification pass report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from devsetup.core.models.action import Receipt


@dataclass
class StepResult:
    """Outcome of one provisioning step."""

    step: str
    receipt: Receipt

    @property
    def status(self) -> str:
        return self.receipt.status


@dataclass
class CheckResult:
    """One verification line: a tool and its reported version."""

    label: str
    ok: bool
    version: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "ok": self.ok, "version": self.version}


@dataclass
class VerifyReport:
    """Aggregate of all verification checks. Advisory only."""

    checks: list[CheckResult] = field(default_factory=list)

    def add(self, check: CheckResult) -> None:
        self.checks.append(check)

    @property
    def all_ok(self) -> bool:
        return all(c.ok for c in self.checks)

    @property
    def failed(self) -> list[CheckResult]:
        return [c for c in self.checks if not c.ok]

    def to_dict(self) -> dict[str, Any]:
        return {
            "all_ok": self.all_ok,
            "checks": [c.to_dict() for c in self.checks],
        }


@dataclass
class SetupReport:
    """Everything a full provisioning run did, in order."""

    steps: list[StepResult] = field(default_factory=list)
    verification: VerifyReport | None = None
    config_files_changed: list[str] = field(default_factory=list)

    def record(self, step: str, receipt: Receipt) -> Receipt:
        self.steps.append(StepResult(step=step, receipt=receipt))
        return receipt

    def status_of(self, step: str) -> str | None:
        """Status of the most recent result recorded for ``step``."""
        for result in reversed(self.steps):
            if result.step == step:
                return result.status
        return None
