"""Error types for the sidebar generator.

Failures fall into a closed set of kinds so the reporting boundary can
handle every case explicitly.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Kinds of failure the sidebar pipeline can report."""

    CONFIGURATION = "configuration"
    IO = "io"


class SidebarError(Exception):
    """Base class for sidebar generation failures.

    Attributes:
        kind: The kind of failure.
        message: Human-readable description.
        cause: The underlying exception, if any.
    """

    kind: ErrorKind

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(SidebarError):
    """The docs root is missing or is not a directory."""

    kind = ErrorKind.CONFIGURATION


class SidebarIOError(SidebarError, OSError):
    """The sidebar file could not be written.

    Also an ``OSError``, so callers catching ``IOError`` see it.
    """

    kind = ErrorKind.IO
