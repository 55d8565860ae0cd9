"""
Config model — the declared state of the host.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Used when neither the config nor the host provides a hostname
DEFAULT_HOSTNAME = "goatOS"


class Config(BaseModel):
    """User configuration read from ``config.yml``.

    ``packages`` is None when the config does not mention packages at all:
    the Packages stage then leaves the system alone. An empty list means
    "manage packages, and nothing beyond the core set should be explicit".
    """

    hostname: str = DEFAULT_HOSTNAME
    packages: list[str] | None = None

    # Custom stage scripts, resolved against the configuration directory
    stages: list[str] = Field(default_factory=list)

    # Run the service manager's hostname reload after a hostname change
    reload_hostname: bool = False
