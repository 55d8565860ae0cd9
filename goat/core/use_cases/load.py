"""
Load use case — resolve everything a sync needs.

This is the startup sequence: make sure goat's directories exist, load
(or reset) the backend cache, resolve the package and service managers,
make sure a config exists, and read it. Nothing on the host changes
here apart from goat's own files.

Flow:
    directories → cache → package manager → service manager → config → System
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from goat.adapters.base import Adapter
from goat.core.config.layout import Layout, ensure_directories
from goat.core.config.loader import generate_config, load_config
from goat.core.data import PACKAGE_MANAGERS, SERVICE_MANAGERS, seed_descriptors
from goat.core.engine.pipeline import build_stages
from goat.core.engine.resolver import Probe, resolve_backend
from goat.core.models.cache import Cache
from goat.core.models.config import DEFAULT_HOSTNAME
from goat.core.models.descriptor import (
    PackageManagerDescriptor,
    ServiceManagerDescriptor,
)
from goat.core.persistence.cache_file import load_cache, reset_cache, save_cache
from goat.core.services.hostname import read_hostname
from goat.core.services.package_manager import PackageManager
from goat.core.services.service_manager import ServiceManager
from goat.core.system import System

logger = logging.getLogger(__name__)


def _prepare_directories(layout: Layout) -> None:
    """Create missing directories, seeding new descriptor directories."""
    created = ensure_directories(layout)

    seeds = (
        (PACKAGE_MANAGERS, layout.package_manager_directory),
        (SERVICE_MANAGERS, layout.service_manager_directory),
    )
    for kind, directory in seeds:
        if directory in created:
            seed_descriptors(kind, directory)


def _prepare_cache(cache_file: Path, recache: bool) -> Cache:
    if recache or not cache_file.is_file():
        logger.warning('Recaching "%s"...', cache_file)
        reset_cache(cache_file)
    return load_cache(cache_file)


def load_system(
    recache: bool = False,
    layout: Layout | None = None,
    probe: Probe = shutil.which,
    adapter: Adapter | None = None,
) -> System:
    """Load the system: backends, cache and configuration.

    Args:
        recache: Discard the cached backend selection before resolving.
        layout: Filesystem layout (default: system paths).
        probe: PATH lookup used when a backend has to be probed.
        adapter: Command adapter for the backends (default: shell).

    Returns:
        The resolved System.

    Raises:
        GoatError: On the first failure; nothing is retried.
    """
    if layout is None:
        layout = Layout.default()

    _prepare_directories(layout)
    cache = _prepare_cache(layout.cache_file, recache)

    # ── Package manager ──────────────────────────────────────────
    pm_descriptor, selected = resolve_backend(
        PackageManagerDescriptor,
        cache.package_manager_configuration_file,
        layout.package_manager_directory,
        probe,
    )
    if selected:
        cache = cache.model_copy(update={"package_manager_configuration_file": selected})
        save_cache(cache, layout.cache_file)

    # ── Service manager ──────────────────────────────────────────
    sm_descriptor, selected = resolve_backend(
        ServiceManagerDescriptor,
        cache.service_manager_configuration_file,
        layout.service_manager_directory,
        probe,
    )
    if selected:
        cache = cache.model_copy(update={"service_manager_configuration_file": selected})
        save_cache(cache, layout.cache_file)

    package_manager = PackageManager(pm_descriptor, adapter)
    service_manager = ServiceManager(sm_descriptor, adapter)

    # ── Config ───────────────────────────────────────────────────
    live_hostname = read_hostname(layout.hostname_file) or DEFAULT_HOSTNAME

    if not layout.config_file.is_file():
        logger.warning('Generating configuration file "%s"...', layout.config_file)
        generate_config(
            layout.config_file,
            package_manager.explicit_packages(),
            live_hostname,
        )

    config = load_config(layout.config_file, default_hostname=live_hostname)

    return System(
        layout=layout,
        cache=cache,
        config=config,
        package_manager=package_manager,
        service_manager=service_manager,
        stages=build_stages(config, layout.configuration_directory),
    )
