"""
Checked command execution — turns failed receipts into CommandFailed.

Adapters report failures in receipts; backend services cannot continue
after a failed command, so they go through run_checked().
"""

from __future__ import annotations

import logging

from goat.adapters.base import Adapter
from goat.core.errors import CommandFailed
from goat.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


def run_checked(
    adapter: Adapter,
    action_id: str,
    command: str,
    shell: bool = True,
) -> Receipt:
    """Run ``command`` through ``adapter``.

    Raises:
        CommandFailed: If the receipt is not ok. No retry is attempted.
    """
    action = Action(
        id=action_id,
        adapter=adapter.name,
        params={"command": command, "shell": shell},
    )
    receipt = adapter.run(action)

    if receipt.failed:
        logger.debug("%s failed: %s", action_id, receipt.error)
        raise CommandFailed(command, receipt.return_code, receipt.error or "")

    logger.debug("%s ok (%dms)", action_id, receipt.duration_ms)
    return receipt
