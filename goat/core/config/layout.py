"""
Directory layout — where goat keeps its config, cache and descriptors.

    /etc/goat/config.yml                 user configuration
    /var/goat/cache/cache.json           cached backend selection
    /var/goat/package_managers/*.yml     package manager descriptors
    /var/goat/service_managers/*.yml     service manager descriptors
    /etc/hostname                        live hostname

``Layout.under(root)`` moves every path under a prefix, which is how the
CLI's ``--root`` option and the tests run against a scratch tree.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel

from goat.core.config.loader import CONFIG_FILE
from goat.core.errors import FileAccessError

logger = logging.getLogger(__name__)

CACHE_FILE = "cache.json"


class Layout(BaseModel):
    """Filesystem locations used by goat."""

    configuration_directory: Path = Path("/etc/goat")
    cache_directory: Path = Path("/var/goat/cache")
    package_manager_directory: Path = Path("/var/goat/package_managers")
    service_manager_directory: Path = Path("/var/goat/service_managers")
    hostname_file: Path = Path("/etc/hostname")

    @classmethod
    def default(cls) -> Layout:
        return cls()

    @classmethod
    def under(cls, root: Path) -> Layout:
        """The default layout relocated beneath ``root``."""
        base = cls()
        return cls(**{
            name: root / path.relative_to("/")
            for name, path in base.model_dump().items()
        })

    @property
    def config_file(self) -> Path:
        return self.configuration_directory / CONFIG_FILE

    @property
    def cache_file(self) -> Path:
        return self.cache_directory / CACHE_FILE

    @property
    def directories(self) -> list[Path]:
        return [
            self.configuration_directory,
            self.cache_directory,
            self.package_manager_directory,
            self.service_manager_directory,
        ]


def ensure_directories(layout: Layout) -> list[Path]:
    """Create any missing layout directory.

    Returns:
        The directories that had to be created.

    Raises:
        FileAccessError: If a directory cannot be created.
    """
    created: list[Path] = []
    for directory in layout.directories:
        if not directory.is_dir():
            logger.warning('Directory "%s" doesn\'t exist! Fixing...', directory)
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FileAccessError(directory, "create directory", e) from e
            created.append(directory)
    return created
