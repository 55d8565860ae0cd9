"""
Bundled descriptors for common package and service managers.

Shipped as YAML next to this module and copied into an empty descriptor
directory the first time goat creates it:

    from goat.core.data import PACKAGE_MANAGERS, seed_descriptors

    seed_descriptors(PACKAGE_MANAGERS, Path("/var/goat/package_managers"))
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from goat.core.errors import FileAccessError

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

PACKAGE_MANAGERS = "package_managers"
SERVICE_MANAGERS = "service_managers"


def bundled_descriptors(kind: str) -> list[Path]:
    """List the bundled descriptor files of one kind, sorted by name."""
    directory = _DATA_DIR / kind
    if not directory.is_dir():
        logger.warning("Bundled descriptor directory not found: %s", directory)
        return []
    return sorted(p for p in directory.iterdir() if p.suffix == ".yml")


def seed_descriptors(kind: str, target: Path) -> list[Path]:
    """Copy bundled descriptors into ``target`` without overwriting.

    Returns:
        The files written.

    Raises:
        FileAccessError: If a descriptor cannot be copied.
    """
    written: list[Path] = []
    for source in bundled_descriptors(kind):
        destination = target / source.name
        if destination.exists():
            continue
        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            raise FileAccessError(destination, "write descriptor", e) from e
        written.append(destination)

    if written:
        logger.info("Seeded %d %s descriptors into %s", len(written), kind, target)
    return written
