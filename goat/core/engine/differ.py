"""
Package set differ — what to install and what to remove.

Pure functions over already-listed package names. Listing and command
execution belong to the package manager service; this module only
decides.

    to_install(desired, all_installed)            desired - all_installed
    to_remove(desired_explicit, currently_explicit) currently_explicit - desired_explicit

Install is checked against *all* installed packages so a package that is
already present as a dependency is not reinstalled. Remove is checked
against *explicit* packages only, so dependencies are left to the
native package manager.
"""

from __future__ import annotations

from collections.abc import Iterable

from goat.core.errors import EmptyCommand
from goat.core.models.descriptor import PACKAGE_PLACEHOLDER


def _ordered_difference(keep: Iterable[str], drop: Iterable[str]) -> list[str]:
    """Items of ``keep`` not in ``drop``, first-seen order, no duplicates."""
    excluded = set(drop)
    return [p for p in dict.fromkeys(keep) if p not in excluded]


def to_install(desired: Iterable[str], all_installed: Iterable[str]) -> list[str]:
    """Packages to install, in the order they were declared."""
    return _ordered_difference(desired, all_installed)


def to_remove(
    desired_explicit: Iterable[str],
    currently_explicit: Iterable[str],
) -> list[str]:
    """Explicit packages no longer declared, in listing order."""
    return _ordered_difference(currently_explicit, desired_explicit)


def materialize_command(template: str, packages: Iterable[str]) -> str:
    """Substitute the package list into a command template.

    Every ``{}`` is replaced with the space-joined package names. A
    template without a placeholder is returned as-is.

    Example:
        >>> materialize_command("pacman -S {}", ["vim", "git"])
        'pacman -S vim git'

    Raises:
        EmptyCommand: If nothing but whitespace remains.
    """
    command = template.replace(PACKAGE_PLACEHOLDER, " ".join(packages))
    if not command.split():
        raise EmptyCommand(f"Command template {template!r} produced an empty command")
    return command
