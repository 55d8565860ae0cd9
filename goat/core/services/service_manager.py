"""
Service manager service — drives systemd, openrc, ... via a descriptor.
"""

from __future__ import annotations

import logging
import shlex

from goat.adapters.base import Adapter
from goat.adapters.shell.command import ShellCommandAdapter
from goat.core.engine.differ import materialize_command
from goat.core.models.descriptor import ServiceManagerDescriptor
from goat.core.services.commands import run_checked

logger = logging.getLogger(__name__)

ACTION_PREFIX = "service_manager"


class ServiceManager:
    """Runs service-manager commands for the host."""

    def __init__(
        self,
        descriptor: ServiceManagerDescriptor,
        adapter: Adapter | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.adapter = adapter or ShellCommandAdapter()

    def reload_hostname(self, hostname: str) -> None:
        """Make running services pick up a changed hostname.

        A ``{}`` in the reload command is replaced with ``hostname``.
        """
        command = materialize_command(
            self.descriptor.hostname_reload_command,
            [shlex.quote(hostname)],
        )
        logger.info("Reloading hostname: %s", command)
        run_checked(self.adapter, f"{ACTION_PREFIX}:reload_hostname", command)
