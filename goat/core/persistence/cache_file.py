"""
Cache file persistence — read/write for the backend selection cache.

The cache is stored as JSON in the cache directory. Writes are atomic
(write to temp file, then rename) so a crash never leaves a half-written
cache behind.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from pydantic import ValidationError

from goat.core.errors import FileAccessError, NotFound, ParseError
from goat.core.models.cache import Cache

logger = logging.getLogger(__name__)


def load_cache(path: Path) -> Cache:
    """Load the cache from a JSON file.

    The file must exist; callers create it with reset_cache() first.
    Keys missing from the JSON object load as None.

    Raises:
        NotFound: If the file does not exist.
        ParseError: If the content is not a valid cache object.
    """
    if not path.is_file():
        raise NotFound(path, "Cache file")

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Failed to read cache file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse json from cache file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a JSON object in cache file {path}, got {type(data).__name__}"
        )

    try:
        cache = Cache.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Invalid cache file {path}: {e}") from e

    logger.debug("Loaded cache from %s", path)
    return cache


def save_cache(cache: Cache, path: Path) -> None:
    """Save the cache to a JSON file (atomic write).

    Args:
        cache: The cache to save.
        path: Target path for the cache file.

    Raises:
        FileAccessError: If the cache directory is not writable.
    """
    content = json.dumps(cache.model_dump(mode="json"), indent=2) + "\n"
    _atomic_write(path, content)
    logger.debug("Cache saved to %s", path)


def reset_cache(path: Path) -> None:
    """Truncate the cache to an empty JSON object, dropping every selection."""
    _atomic_write(path, "{}\n")


def _atomic_write(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".cache_",
            suffix=".tmp",
        )
    except OSError as e:
        raise FileAccessError(path, "write cache file", e) from e

    tmp = Path(tmp_path)
    try:
        with open(_fd, "w", encoding="utf-8") as f:
            f.write(content)
        tmp.replace(path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise FileAccessError(path, "write cache file", e) from e
