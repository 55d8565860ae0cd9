"""
System — the resolved view of the host that a sync works from.

Built once by load_system() and handed, read-only, to every stage.
"""

from __future__ import annotations

from dataclasses import dataclass

from goat.core.config.layout import Layout
from goat.core.engine.pipeline import Stage
from goat.core.models.cache import Cache
from goat.core.models.config import Config
from goat.core.services.package_manager import PackageManager
from goat.core.services.service_manager import ServiceManager


@dataclass(frozen=True)
class System:
    """Resolved backends, configuration and stage list."""

    layout: Layout
    cache: Cache
    config: Config
    package_manager: PackageManager
    service_manager: ServiceManager
    stages: tuple[Stage, ...]

    def to_dict(self) -> dict:
        return {
            "package_manager": self.cache.package_manager_configuration_file,
            "service_manager": self.cache.service_manager_configuration_file,
            "hostname": self.config.hostname,
            "packages": self.config.packages,
            "stages": [stage.name for stage in self.stages],
            "config_file": str(self.layout.config_file),
        }
