"""
Shell command adapter — run a command and capture its output.

Listing commands are pipelines (``pacman -Qqe``, ``xbps-query -m | ...``)
and run through ``sh -c``. Install and remove commands run directly with
their arguments split shell-style. No timeout is applied: a package
manager that hangs blocks goat until it exits.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import time

from goat.adapters.base import Adapter, ExecutionContext
from goat.core.models.action import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute commands and capture output.

    Action params:
        command (str): The command to execute.
        shell (bool): Whether to run through the shell (default: True).
    """

    @property
    def name(self) -> str:
        return "shell"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        command = context.params.get("command", "")
        if not command or not command.strip():
            return False, "Missing required param: 'command'"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        command = context.params.get("command", "")
        use_shell = context.params.get("shell", True)

        logger.debug("Executing: %s (shell=%s)", command, use_shell)
        start = time.monotonic()

        try:
            result = subprocess.run(
                command if use_shell else shlex.split(command),
                shell=use_shell,
                capture_output=True,
                text=True,
            )
        except (OSError, ValueError) as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command execution error: {e}",
                command=command,
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=context.action.id,
                output=output,
                duration_ms=elapsed_ms,
                command=command,
                return_code=result.returncode,
            )

        return Receipt.failure(
            adapter=self.name,
            action_id=context.action.id,
            error=stderr or f"Command exited with code {result.returncode}",
            output=output,
            duration_ms=elapsed_ms,
            command=command,
            return_code=result.returncode,
        )
