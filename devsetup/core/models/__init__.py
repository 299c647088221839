"""
Domain models — execution contract and run results.

    from devsetup.core.models import Action, Receipt, SetupReport
"""

from devsetup.core.models.action import Action, Receipt
from devsetup.core.models.results import (
    CheckResult,
    SetupReport,
    StepResult,
    VerifyReport,
)

__all__ = [
    "Action",
    "CheckResult",
    "Receipt",
    "SetupReport",
    "StepResult",
    "VerifyReport",
]
