"""
Error taxonomy — every failure the core can raise.

All errors derive from GoatError so the CLI can catch one type, log the
message and exit non-zero. Nothing in the core recovers locally: the
first error ends the current Load or Sync.
"""

from __future__ import annotations


class GoatError(Exception):
    """Base class for all goat failures."""


class NotFound(GoatError):
    """Raised when a required file or directory does not exist."""

    def __init__(self, path: object, what: str = "File") -> None:
        self.path = path
        super().__init__(f'{what} "{path}" does not exist')


class EvalError(GoatError):
    """Raised when a descriptor, config or stage script fails to evaluate."""


class ParseError(GoatError):
    """Raised when file content (the cache JSON, the hostname) is malformed."""


class FileAccessError(GoatError):
    """Raised when a file or directory goat owns cannot be read or written."""

    def __init__(self, path: object, action: str, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f'Cannot {action} "{path}": {cause.strerror or cause}')


class MissingField(GoatError):
    """Raised when a script does not define a mandatory value."""

    def __init__(self, name: str, source: object = None) -> None:
        self.name = name
        self.source = source
        where = f' in "{source}"' if source is not None else ""
        super().__init__(f"No '{name}' value found{where}")


class TypeMismatch(GoatError):
    """Raised when a script defines a value with the wrong shape."""

    def __init__(self, name: str, expected: str, source: object = None) -> None:
        self.name = name
        self.expected = expected
        self.source = source
        where = f' in "{source}"' if source is not None else ""
        super().__init__(f"Value '{name}'{where} must be {expected}")


class NoBackendFound(GoatError):
    """Raised when no descriptor's binary resolves on this host."""


class EmptyCommand(GoatError):
    """Raised when a materialized command has nothing to execute."""


class CommandFailed(GoatError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, command: str, exit_status: int | None, stderr: str = "") -> None:
        self.command = command
        self.exit_status = exit_status
        self.stderr = stderr
        detail = f": {stderr}" if stderr else ""
        super().__init__(
            f'Command "{command}" failed with status {exit_status}{detail}'
        )


class PermissionDenied(GoatError):
    """Raised when sync is attempted without root privileges."""


class StageFailed(GoatError):
    """Raised when a custom stage's apply() call raises."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"Stage '{stage}' failed: {cause}")
