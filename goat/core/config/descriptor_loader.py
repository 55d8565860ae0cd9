"""
Descriptor loader — reads backend descriptors from script files.

Descriptors live as one file per backend:

    /var/goat/package_managers/
        pacman.yml
        apt.yml
        xbps.yml
    /var/goat/service_managers/
        systemd.yml
        openrc.yml

Every field declared on the descriptor model is pulled from the script by
name. Required fields must be present with the right shape; fields with a
default (``core_packages``) fall back to it when the script omits them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from goat.core.config.evaluator import evaluate_file
from goat.core.errors import EvalError
from goat.core.models.descriptor import (
    PackageManagerDescriptor,
    ServiceManagerDescriptor,
)

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=BaseModel)


def load_descriptor(path: Path, model: type[D]) -> D:
    """Load a single descriptor of the given model type.

    Args:
        path: Path to the descriptor script.
        model: Descriptor model class to build.

    Returns:
        The validated, frozen descriptor.

    Raises:
        NotFound: The file does not exist.
        EvalError: The script failed to evaluate.
        MissingField: A required value is absent.
        TypeMismatch: A value has the wrong shape.
    """
    values = evaluate_file(path)
    data: dict[str, object] = {}

    for name, field in model.model_fields.items():
        if field.annotation is str:
            if field.is_required():
                data[name] = values.get_string(name)
            elif name in values:
                data[name] = values.get_string(name)
        else:
            # Only string sequences remain on descriptor models
            if field.is_required():
                data[name] = tuple(values.get_string_list(name))
            else:
                items = values.get_optional_string_list(name)
                if items is not None:
                    data[name] = tuple(items)

    try:
        descriptor = model.model_validate(data)
    except ValidationError as e:
        raise EvalError(f"Invalid descriptor {path}: {e}") from e

    logger.debug("Loaded %s from %s", model.__name__, path)
    return descriptor


def load_package_manager(path: Path) -> PackageManagerDescriptor:
    """Load a package manager descriptor."""
    return load_descriptor(path, PackageManagerDescriptor)


def load_service_manager(path: Path) -> ServiceManagerDescriptor:
    """Load a service manager descriptor."""
    return load_descriptor(path, ServiceManagerDescriptor)
