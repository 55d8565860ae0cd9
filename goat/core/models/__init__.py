"""
Domain models — pydantic types for goat.

All models are re-exported here for convenient access:

    from goat.core.models import Cache, Config, PackageManagerDescriptor
"""

from goat.core.models.action import Action, Receipt
from goat.core.models.cache import Cache
from goat.core.models.config import DEFAULT_HOSTNAME, Config
from goat.core.models.descriptor import (
    PACKAGE_PLACEHOLDER,
    PackageManagerDescriptor,
    ServiceManagerDescriptor,
)

__all__ = [
    # action.py
    "Action",
    # cache.py
    "Cache",
    # config.py
    "Config",
    "DEFAULT_HOSTNAME",
    # descriptor.py
    "PACKAGE_PLACEHOLDER",
    "PackageManagerDescriptor",
    "Receipt",
    "ServiceManagerDescriptor",
]
