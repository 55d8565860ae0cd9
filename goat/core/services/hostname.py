"""
Hostname file access.

The hostname file (``/etc/hostname``) is the authoritative source: it is
portable across service managers, unlike ``hostnamectl``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from goat.core.errors import FileAccessError, ParseError

logger = logging.getLogger(__name__)


def read_hostname(path: Path) -> str | None:
    """Return the hostname stored in ``path``, or None if there is none.

    Raises:
        FileAccessError: If the file exists but cannot be read.
        ParseError: If the file is not valid UTF-8.
    """
    if not path.is_file():
        logger.debug("No hostname file at %s", path)
        return None

    try:
        hostname = path.read_text(encoding="utf-8").strip()
    except UnicodeDecodeError as e:
        raise ParseError(f"Hostname file {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise FileAccessError(path, "read hostname file", e) from e
    return hostname or None


def write_hostname(path: Path, hostname: str) -> None:
    """Replace the hostname stored in ``path``.

    Raises:
        FileAccessError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{hostname}\n", encoding="utf-8")
    except OSError as e:
        raise FileAccessError(path, "write hostname file", e) from e
    logger.debug("Wrote hostname %r to %s", hostname, path)
