"""
Backend resolver — picks the package or service manager for this host.

Resolution is cache-first:

    cached name   → load that descriptor, trust it, done (no probing)
    no cached name → walk the descriptor directory, load each candidate,
                     return the first whose binary is on PATH

A cached selection is never re-validated. If the cached manager is
uninstalled the cache goes stale until ``goat --recache``.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel

from goat.core.config.descriptor_loader import load_descriptor
from goat.core.errors import NoBackendFound, NotFound

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=BaseModel)

# Returns the resolved path of a binary, or None (shutil.which signature)
Probe = Callable[[str], str | None]


def candidate_files(directory: Path) -> list[Path]:
    """Descriptor candidates in probing order.

    Regular, non-hidden files sorted by name, so the same directory
    always resolves to the same backend.
    """
    if not directory.is_dir():
        raise NotFound(directory, "Descriptor directory")
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and not p.name.startswith(".")
    )


def resolve_backend(
    model: type[D],
    cached_name: str | None,
    directory: Path,
    probe: Probe = shutil.which,
) -> tuple[D, str | None]:
    """Resolve a backend descriptor.

    Args:
        model: Descriptor model class (must have ``binary_name``).
        cached_name: Descriptor file name from the cache, if any.
        directory: Descriptor directory.
        probe: PATH lookup used to test each candidate's binary.

    Returns:
        (descriptor, new_name). ``new_name`` is None on a cache hit and the
        selected file name after probing; the caller persists it.

    Raises:
        NoBackendFound: No candidate's binary resolves.
        NotFound / EvalError / MissingField / TypeMismatch: A descriptor
            failed to load. Probing stops at the first such failure.
    """
    kind = model.__name__

    if cached_name:
        logger.debug("Using cached %s: %s", kind, cached_name)
        return load_descriptor(directory / cached_name, model), None

    logger.warning("%s not cached, probing %s", kind, directory)

    for path in candidate_files(directory):
        descriptor = load_descriptor(path, model)
        binary: str = descriptor.binary_name  # type: ignore[attr-defined]
        if probe(binary):
            logger.info("Selected %s %s (found %s)", kind, path.name, binary)
            return descriptor, path.name
        logger.debug("Skipping %s: %s not on PATH", path.name, binary)

    raise NoBackendFound(
        f"Failed to locate an applicable {kind} in {directory}"
    )
