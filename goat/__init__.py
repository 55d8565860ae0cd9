"""goat — declarative system configuration manager."""

__version__ = "0.1.0"
