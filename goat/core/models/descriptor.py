"""
Descriptor models — how to drive one concrete package or service manager.

Descriptors are loaded from script files in the descriptor directories
and never change afterwards. Commands are plain strings; package lists
are substituted into the ``{}`` placeholder at execution time.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Placeholder replaced by the space-joined package list
PACKAGE_PLACEHOLDER = "{}"


class PackageManagerDescriptor(BaseModel):
    """Commands for one package manager (pacman, apt, xbps, ...).

    ``binary_name`` is only used to probe for the manager on PATH. It is
    never used to build commands, since some managers ship several
    binaries (xbps-install, xbps-remove, ...).
    """

    model_config = ConfigDict(frozen=True)

    binary_name: str
    install_command: str                 # e.g. "pacman -S --noconfirm {}"
    remove_command: str                  # e.g. "pacman -Rns --noconfirm {}"
    full_system_update_command: str      # e.g. "pacman -Syu --noconfirm"
    list_explicit_packages_command: str  # packages the user asked for
    list_all_packages_command: str       # every installed package
    core_packages: tuple[str, ...] = Field(default_factory=tuple)


class ServiceManagerDescriptor(BaseModel):
    """Commands for one service manager (systemd, openrc, ...)."""

    model_config = ConfigDict(frozen=True)

    binary_name: str
    hostname_reload_command: str         # "{}" becomes the new hostname
