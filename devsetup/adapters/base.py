"""
Adapter base — the protocol contract between services and external tools.

Provisioning services never call ``subprocess`` themselves: they build an
``Action``, wrap it in an ``ExecutionContext`` and hand it to an adapter,
which returns a ``Receipt``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from devsetup.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action."""

    action: Action
    dry_run: bool = False

    @property
    def working_dir(self) -> str | None:
        """Working directory for the action (None = inherit the process cwd)."""
        return self.action.params.get("cwd")


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this adapter's underlying tool is available.

        Should be fast and never raise.
        """

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the action and return a receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def run(
        self,
        action_id: str,
        command: list[str] | str,
        *,
        name: str = "",
        stream: bool = False,
        cwd: str | None = None,
        dry_run: bool = False,
    ) -> Receipt:
        """Build an action for ``command``, validate it and execute it."""
        params: dict = {"command": command, "shell": isinstance(command, str), "stream": stream}
        if cwd:
            params["cwd"] = cwd
        context = ExecutionContext(
            action=Action(id=action_id, name=name, adapter=self.name, params=params),
            dry_run=dry_run,
        )
        valid, error = self.validate(context)
        if not valid:
            return Receipt.failure(adapter=self.name, action_id=action_id, error=error)
        return self.execute(context)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
