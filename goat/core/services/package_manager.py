"""
Package manager service — drives one package manager via its descriptor.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from goat.adapters.base import Adapter
from goat.adapters.shell.command import ShellCommandAdapter
from goat.core.engine.differ import materialize_command
from goat.core.models.descriptor import PackageManagerDescriptor
from goat.core.services.commands import run_checked

logger = logging.getLogger(__name__)

ACTION_PREFIX = "package_manager"


class PackageManager:
    """Lists, installs and removes packages with the host's package manager.

    Listing commands run through the shell and their output is split on
    whitespace. Install and remove run the materialized command directly.
    """

    def __init__(
        self,
        descriptor: PackageManagerDescriptor,
        adapter: Adapter | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.adapter = adapter or ShellCommandAdapter()

    @property
    def core_packages(self) -> list[str]:
        return list(self.descriptor.core_packages)

    def explicit_packages(self) -> list[str]:
        """Packages the user explicitly installed."""
        return self._list("list_explicit", self.descriptor.list_explicit_packages_command)

    def all_packages(self) -> list[str]:
        """Every installed package, explicit or pulled in as a dependency."""
        return self._list("list_all", self.descriptor.list_all_packages_command)

    def install(self, packages: Sequence[str]) -> bool:
        """Install exactly ``packages``.

        Returns:
            False when there was nothing to install, True otherwise.
        """
        return self._apply("install", self.descriptor.install_command, packages)

    def remove(self, packages: Sequence[str]) -> bool:
        """Remove exactly ``packages``.

        Returns:
            False when there was nothing to remove, True otherwise.
        """
        return self._apply("remove", self.descriptor.remove_command, packages)

    def full_system_update(self) -> None:
        """Update the package database and upgrade every package."""
        command = materialize_command(self.descriptor.full_system_update_command, [])
        logger.info("Running full system update: %s", command)
        run_checked(self.adapter, f"{ACTION_PREFIX}:full_system_update", command)

    def _list(self, operation: str, template: str) -> list[str]:
        command = materialize_command(template, [])
        receipt = run_checked(self.adapter, f"{ACTION_PREFIX}:{operation}", command)
        return receipt.output.split()

    def _apply(self, operation: str, template: str, packages: Sequence[str]) -> bool:
        if not packages:
            logger.debug("Nothing to %s", operation)
            return False

        command = materialize_command(template, packages)
        logger.info("%s: %s", operation.capitalize(), " ".join(packages))
        run_checked(
            self.adapter,
            f"{ACTION_PREFIX}:{operation}",
            command,
            shell=False,
        )
        return True
