"""
Sync use case — apply the configuration to the host.

The host is never modified except through sync_system(). It requires
root, runs the stage pipeline and stops at the first failing stage.
There is no rollback: a partial sync stays partial until sync is run
again.
"""

from __future__ import annotations

import logging
import os

from goat.core.engine.pipeline import PipelineReport, run_pipeline
from goat.core.errors import PermissionDenied
from goat.core.system import System

logger = logging.getLogger(__name__)


def is_privileged() -> bool:
    """Whether the process runs with an effective UID of root."""
    return os.geteuid() == 0


def sync_system(
    system: System,
    privileged: bool | None = None,
    update: bool = False,
) -> PipelineReport:
    """Synchronize the host with the loaded configuration.

    Args:
        system: The loaded system.
        privileged: Override the root check (default: effective UID).
        update: Run a full system update before the stages.

    Returns:
        PipelineReport with one outcome per stage.

    Raises:
        PermissionDenied: If not running as root.
        GoatError: The first stage failure.
    """
    if privileged is None:
        privileged = is_privileged()
    if not privileged:
        raise PermissionDenied("Sync requires root privileges!")

    if update:
        system.package_manager.full_system_update()

    report = run_pipeline(system.stages, system)
    logger.info(
        "Sync complete: %d stage(s) applied, %d skipped",
        report.done,
        report.skipped,
    )
    return report
