"""
Script evaluator — turns a descriptor, config or stage file into named values.

The rest of goat never touches YAML documents or Python namespaces
directly. It asks a ScriptValues object for typed values by name:

    values = evaluate_file(Path("/var/goat/package_managers/pacman.yml"))
    binary = values.get_string("binary_name")
    core = values.get_optional_string_list("core_packages") or []

Two kinds of file are understood, chosen by suffix:

    .yml / .yaml   static mapping, read with yaml.safe_load
    .py            executed with runpy; top-level names become values.
                   A ``goat`` helper object is injected as a global so
                   scripts can adapt to the host, e.g.
                   ``goat.program_exists("hostnamectl")``.
"""

from __future__ import annotations

import logging
import runpy
import shutil
from collections.abc import Callable, Mapping
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import yaml

from goat.core.errors import EvalError, MissingField, NotFound, TypeMismatch

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yml", ".yaml")
PYTHON_SUFFIXES = (".py",)


def program_exists(program: str) -> bool:
    """Check whether a program is on PATH. Exposed to Python scripts."""
    return shutil.which(program) is not None


def _runtime() -> SimpleNamespace:
    """The ``goat`` global injected into Python scripts."""
    return SimpleNamespace(program_exists=program_exists)


class ScriptValues:
    """Typed, read-only access to the values a script defined."""

    def __init__(self, values: Mapping[str, Any], source: Path) -> None:
        self._values = dict(values)
        self.source = source

    def __contains__(self, name: str) -> bool:
        return self._values.get(name) is not None

    def _get(self, name: str) -> Any:
        value = self._values.get(name)
        if value is None:
            raise MissingField(name, self.source)
        return value

    def get_string(self, name: str) -> str:
        value = self._get(name)
        if not isinstance(value, str):
            raise TypeMismatch(name, "a string", self.source)
        return value

    def get_optional_string(self, name: str) -> str | None:
        if name not in self:
            return None
        return self.get_string(name)

    def get_string_list(self, name: str) -> list[str]:
        value = self._get(name)
        if not isinstance(value, (list, tuple)) or not all(
            isinstance(item, str) for item in value
        ):
            raise TypeMismatch(name, "a list of strings", self.source)
        return list(value)

    def get_optional_string_list(self, name: str) -> list[str] | None:
        if name not in self:
            return None
        return self.get_string_list(name)

    def get_optional_bool(self, name: str, default: bool = False) -> bool:
        if name not in self:
            return default
        value = self._values[name]
        if not isinstance(value, bool):
            raise TypeMismatch(name, "a boolean", self.source)
        return value

    def get_callable(self, name: str) -> Callable[..., Any]:
        value = self._get(name)
        if not callable(value):
            raise TypeMismatch(name, "callable", self.source)
        return value


def evaluate_file(path: Path) -> ScriptValues:
    """Evaluate a script file and return its values.

    Raises:
        NotFound: If the file does not exist.
        EvalError: If the file type is unknown or evaluation fails.
    """
    if not path.is_file():
        raise NotFound(path)

    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        values = _evaluate_yaml(path)
    elif suffix in PYTHON_SUFFIXES:
        values = _evaluate_python(path)
    else:
        raise EvalError(f'Unsupported script type "{path.suffix}" for "{path}"')

    logger.debug("Evaluated %s (%d values)", path, len(values))
    return ScriptValues(values, path)


def _evaluate_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise EvalError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise EvalError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is an empty mapping
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise EvalError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def _evaluate_python(path: Path) -> dict[str, Any]:
    try:
        namespace = runpy.run_path(str(path), init_globals={"goat": _runtime()})
    except Exception as e:
        raise EvalError(f"Failed to interpret {path}: {e}") from e

    return {k: v for k, v in namespace.items() if not k.startswith("__")}
