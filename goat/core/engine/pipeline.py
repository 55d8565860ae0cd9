"""
Stage pipeline — the ordered reconciliation steps of a sync.

A stage is one of a closed set of variants:

    HostnameStage        hostname file  ← config.hostname
    PackagesStage        installed packages ← config.packages
    CustomStage(path)    user script exposing ``apply(system)``

Every stage goes through apply_stage(), which returns DONE when it
changed the host and SKIPPED when the host already matched. Stages run
strictly in order and the pipeline stops at the first failure. Stages
that already ran are NOT rolled back; re-running sync after fixing the
cause converges because every stage is idempotent.

Flow:
    stages → apply_stage (one at a time) → StageOutcome → PipelineReport
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from goat.core.config.evaluator import evaluate_file
from goat.core.engine.differ import to_install, to_remove
from goat.core.errors import GoatError, StageFailed
from goat.core.models.config import Config
from goat.core.services.hostname import read_hostname, write_hostname

if TYPE_CHECKING:
    from goat.core.system import System

logger = logging.getLogger(__name__)


class StageResult(StrEnum):
    """Outcome of a stage that did not fail."""

    DONE = "done"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class HostnameStage:
    """Synchronize the hostname file with the configured hostname."""

    name: str = "Hostname"


@dataclass(frozen=True)
class PackagesStage:
    """Install declared packages and remove undeclared explicit ones."""

    name: str = "Packages"


@dataclass(frozen=True)
class CustomStage:
    """Delegate to a user script's ``apply(system)`` function."""

    script_path: Path

    @property
    def name(self) -> str:
        return f"Custom({self.script_path.stem})"


Stage = HostnameStage | PackagesStage | CustomStage


@dataclass
class StageOutcome:
    """Result of applying one stage."""

    name: str
    result: StageResult
    duration_ms: int = 0


@dataclass
class PipelineReport:
    """Result of running every stage."""

    outcomes: list[StageOutcome] = field(default_factory=list)

    @property
    def done(self) -> int:
        return sum(1 for o in self.outcomes if o.result == StageResult.DONE)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.result == StageResult.SKIPPED)

    @property
    def changed(self) -> bool:
        return self.done > 0

    def to_dict(self) -> dict:
        return {
            "done": self.done,
            "skipped": self.skipped,
            "stages": [
                {"name": o.name, "result": str(o.result), "duration_ms": o.duration_ms}
                for o in self.outcomes
            ],
        }


def build_stages(config: Config, configuration_directory: Path) -> tuple[Stage, ...]:
    """The fixed built-in stages followed by the config's custom stages.

    Custom stage paths are resolved relative to the configuration
    directory unless absolute.
    """
    custom = tuple(
        CustomStage(script_path=configuration_directory / entry)
        for entry in config.stages
    )
    return (HostnameStage(), PackagesStage(), *custom)


# ── Stage implementations ─────────────────────────────────────────


def _apply_hostname(system: System) -> StageResult:
    path = system.layout.hostname_file
    desired = system.config.hostname
    current = read_hostname(path)

    if current == desired:
        logger.debug("Hostname already %r", desired)
        return StageResult.SKIPPED

    write_hostname(path, desired)
    logger.warning(
        "Hostname changed from %r to %r; this takes effect after a reboot "
        "or a hostname reload.",
        current,
        desired,
    )

    if system.config.reload_hostname:
        system.service_manager.reload_hostname(desired)

    return StageResult.DONE


def _apply_packages(system: System) -> StageResult:
    packages = system.config.packages
    if packages is None:
        logger.debug("Packages not managed by config")
        return StageResult.SKIPPED

    pm = system.package_manager
    desired = [*packages, *pm.core_packages]

    # Install first so nothing the config asks for is ever missing
    installed = pm.install(to_install(desired, pm.all_packages()))
    removed = pm.remove(to_remove(desired, pm.explicit_packages()))

    if installed or removed:
        return StageResult.DONE
    return StageResult.SKIPPED


def _coerce_result(stage: CustomStage, value: Any) -> StageResult:
    """Map a custom apply() return value onto a StageResult."""
    if value is None or value is True:
        return StageResult.DONE
    if value is False:
        return StageResult.SKIPPED
    if isinstance(value, str) and value in tuple(StageResult):
        return StageResult(value)
    raise StageFailed(
        stage.name,
        TypeError(f"apply() returned {value!r}; expected a StageResult, bool or None"),
    )


def _apply_custom(stage: CustomStage, system: System) -> StageResult:
    values = evaluate_file(stage.script_path)
    apply = values.get_callable("apply")

    try:
        value = apply(system)
    except GoatError:
        raise
    except Exception as e:
        raise StageFailed(stage.name, e) from e

    return _coerce_result(stage, value)


def apply_stage(stage: Stage, system: System) -> StageResult:
    """Apply one stage to the system."""
    if isinstance(stage, HostnameStage):
        return _apply_hostname(system)
    if isinstance(stage, PackagesStage):
        return _apply_packages(system)
    if isinstance(stage, CustomStage):
        return _apply_custom(stage, system)
    raise TypeError(f"Unknown stage: {stage!r}")


def run_pipeline(stages: tuple[Stage, ...], system: System) -> PipelineReport:
    """Apply every stage in order, stopping at the first failure.

    Raises:
        GoatError: Whatever the failing stage raised. Earlier stages
            stay applied.
    """
    report = PipelineReport()

    for stage in stages:
        logger.info("→ %s", stage.name)
        start = time.monotonic()

        try:
            result = apply_stage(stage, system)
        except GoatError:
            logger.error("✗ %s failed; earlier stages are left applied", stage.name)
            raise

        elapsed_ms = int((time.monotonic() - start) * 1000)
        report.outcomes.append(StageOutcome(stage.name, result, elapsed_ms))

        status_marker = "✓" if result == StageResult.DONE else "⊘"
        logger.info("%s %s → %s", status_marker, stage.name, result)

    return report
