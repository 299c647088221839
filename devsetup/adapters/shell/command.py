"""
Shell command adapter — execute external commands.

This is the SINGLE PLACE where ``subprocess.run`` is called. Every
presence probe, install and version check goes through it.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from devsetup.adapters.base import Adapter, ExecutionContext
from devsetup.core.models.action import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute commands and capture output.

    Action params:
        command (list[str] | str): argv list, or a string run through the shell.
        shell (bool): Whether to run through the shell (default: str commands only).
        stream (bool): Let output go straight to the terminal instead of
            capturing it (default: False).
        cwd (str): Working directory (default: inherit).
    """

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which("sh") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        command = context.action.params.get("command")
        if not command:
            return False, "Missing required param: 'command'"

        cwd = context.working_dir
        if cwd and not context.dry_run and not Path(cwd).is_dir():
            return False, f"Working directory does not exist: {cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        command = params.get("command", "")
        use_shell = params.get("shell", isinstance(command, str))
        stream = params.get("stream", False)
        cwd = context.working_dir
        display = command if isinstance(command, str) else " ".join(command)

        if context.dry_run:
            logger.debug("Dry run, not executing: %s", display)
            return Receipt.skip(
                adapter=self.name,
                action_id=context.action.id,
                reason=f"[dry-run] {display}",
                metadata={"command": display, "dry_run": True},
            )

        logger.debug("Executing: %s (cwd=%s)", display, cwd or ".")
        start = time.monotonic()

        try:
            result = subprocess.run(
                command,
                shell=use_shell,
                cwd=cwd,
                capture_output=not stream,
                text=True,
                # Earlier steps mutate PATH in place; children must see it.
                env=os.environ.copy(),
            )

            elapsed_ms = int((time.monotonic() - start) * 1000)
            output = (result.stdout or "").strip()
            stderr = (result.stderr or "").strip()

            if result.returncode == 0:
                return Receipt.success(
                    adapter=self.name,
                    action_id=context.action.id,
                    output=output,
                    duration_ms=elapsed_ms,
                    metadata={
                        "command": display,
                        "return_code": result.returncode,
                        "stderr": stderr,
                    },
                )
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=stderr or f"Command exited with code {result.returncode}",
                output=output,
                duration_ms=elapsed_ms,
                metadata={
                    "command": display,
                    "return_code": result.returncode,
                },
            )

        except FileNotFoundError:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command not found: {display.split()[0]}",
                metadata={"command": display, "return_code": 127},
            )
        except Exception as e:
            logger.exception("Subprocess error: %s", display)
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command execution error: {e}",
                metadata={"command": display},
            )
