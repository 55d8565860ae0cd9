"""
Configuration loader — reads config.yml into the Config model.

The config file is the declared state of the host. When it does not
exist yet, goat writes one that captures the host as it is now, so the
first sync is a no-op instead of a mass package removal.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from goat.core.config.evaluator import evaluate_file
from goat.core.errors import FileAccessError, NotFound
from goat.core.models.config import DEFAULT_HOSTNAME, Config

logger = logging.getLogger(__name__)

# Default config filename (inside the configuration directory)
CONFIG_FILE = "config.yml"

_GENERATED_HEADER = (
    "# Generated by goat from the current state of this host.\n"
    "# Edit freely; run `goat --sync` to apply.\n"
)


def load_config(path: Path, default_hostname: str = DEFAULT_HOSTNAME) -> Config:
    """Load and validate the user configuration.

    Args:
        path: Path to config.yml.
        default_hostname: Hostname used when the config does not set one.

    Returns:
        Validated Config model.

    Raises:
        NotFound: If the file is missing.
        EvalError / TypeMismatch: If the file is invalid.
    """
    if not path.is_file():
        raise NotFound(path, "Config file")

    logger.debug("Loading config from %s", path)
    values = evaluate_file(path)

    # The hostname file is read stripped, so compare like with like
    hostname = (values.get_optional_string("hostname") or "").strip()

    config = Config(
        hostname=hostname or default_hostname,
        packages=values.get_optional_string_list("packages"),
        stages=values.get_optional_string_list("stages") or [],
        reload_hostname=values.get_optional_bool("reload_hostname", False),
    )

    logger.info(
        "Loaded config: hostname=%s, packages=%s",
        config.hostname,
        "unmanaged" if config.packages is None else len(config.packages),
    )
    return config


def generate_config(path: Path, packages: list[str], hostname: str) -> None:
    """Write a default config.yml describing the host as it is.

    Args:
        path: Target config path.
        packages: Currently explicit packages.
        hostname: Live hostname.

    Raises:
        FileAccessError: If the file cannot be written.
    """
    data = {"hostname": hostname, "packages": list(packages)}
    content = _GENERATED_HEADER + yaml.safe_dump(
        data, default_flow_style=False, sort_keys=False
    )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileAccessError(path, "write config file", e) from e
    logger.debug("Wrote default config to %s (%d packages)", path, len(packages))
