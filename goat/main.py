"""
goat — CLI entrypoint.

Usage:
    goat                 load the system and show what would be managed
    goat --sync          apply config.yml to this host (root)
    goat --recache       forget the cached package/service manager first
    goat --sync --update full system update, then sync
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click

from goat import __version__
from goat.core.config.layout import Layout
from goat.core.engine.pipeline import PipelineReport, StageResult
from goat.core.errors import GoatError
from goat.core.observability.logging_config import DEFAULT_LEVEL, setup_logging
from goat.core.system import System

logger = logging.getLogger("goat")


@click.command()
@click.version_option(version=__version__, prog_name="goat")
@click.option("--sync", "-s", "do_sync", is_flag=True, help="Synchronize the system with the configuration.")
@click.option("--recache", "-C", is_flag=True, help="Discard cached backend selections before resolving.")
@click.option("--update", "-u", is_flag=True, help="Run a full system update before syncing (needs --sync).")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="GOAT_ROOT",
    default=None,
    help="Relocate every goat path (and /etc/hostname) under this directory.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Show more detail in the summary.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    do_sync: bool,
    recache: bool,
    update: bool,
    root: Path | None,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """goat — declarative system configuration manager."""
    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("GOAT_LOG_LEVEL", DEFAULT_LEVEL)

    setup_logging(
        level=level,
        log_file=os.environ.get("GOAT_LOG_FILE"),
        log_file_level=os.environ.get("GOAT_LOG_FILE_LEVEL"),
    )

    if update and not do_sync:
        raise click.UsageError("--update only applies together with --sync.")

    from goat.core.use_cases.load import load_system
    from goat.core.use_cases.sync import sync_system

    layout = Layout.under(root) if root else Layout.default()

    report: PipelineReport | None = None
    try:
        system = load_system(recache=recache, layout=layout)
        if do_sync:
            report = sync_system(system, update=update)
    except GoatError as e:
        logger.error("%s", e)
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        sys.exit(1)

    if as_json:
        data = {"system": system.to_dict()}
        if report is not None:
            data["sync"] = report.to_dict()
        click.echo(json.dumps(data, indent=2))
        return

    if quiet:
        return

    _print_system(system, verbose)
    if report is not None:
        _print_report(report, verbose)


def _print_system(system: System, verbose: bool) -> None:
    config = system.config

    click.secho("\n🐐 goat", fg="cyan", bold=True)
    click.echo(f"   Package manager: {system.cache.package_manager_configuration_file}")
    click.echo(f"   Service manager: {system.cache.service_manager_configuration_file}")
    click.echo(f"   Hostname:        {config.hostname}")
    if config.packages is None:
        click.echo("   Packages:        not managed")
    else:
        click.echo(f"   Packages:        {len(config.packages)} declared")
    if verbose:
        click.echo(f"   Config:          {system.layout.config_file}")
        for stage in system.stages:
            click.echo(f"     • {stage.name}")
    click.echo()


def _print_report(report: PipelineReport, verbose: bool) -> None:
    for outcome in report.outcomes:
        timing = f" ({outcome.duration_ms}ms)" if verbose else ""
        if outcome.result == StageResult.DONE:
            click.secho(f"   ✓ {outcome.name}", fg="green", nl=False)
        else:
            click.secho(f"   ⊘ {outcome.name}", fg="yellow", nl=False)
        click.echo(f" {outcome.result}{timing}")

    click.echo()
    if report.changed:
        click.secho(f"   Result: {report.done} stage(s) applied", fg="green", bold=True)
    else:
        click.secho("   Result: already in sync", fg="green", bold=True)
    click.echo()


if __name__ == "__main__":
    cli()
