"""
Cache model — which descriptor files were selected last time.

Stored as JSON in the cache directory. Only bare file names are kept
(e.g. "pacman.yml"), never full paths, so the descriptor directories
can move without invalidating the cache.
"""

from __future__ import annotations

from pydantic import BaseModel


class Cache(BaseModel):
    """Cached backend selection. ``None`` means "probe on next load"."""

    package_manager_configuration_file: str | None = None
    service_manager_configuration_file: str | None = None
