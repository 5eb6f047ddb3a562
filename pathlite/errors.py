"""Exceptions raised by :class:`pathlite.Path` operations.

Every precondition failure is a :class:`PathError`, which is an ``OSError``.
Each concrete class also derives from the matching builtin so callers can
catch either ``PathExistsError`` or plain ``FileExistsError``. Failures of the
underlying filesystem calls are not wrapped and propagate as raised by ``os``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .path import Path


class PathError(OSError):
    """Base class for path precondition violations."""

    def __init__(self, message: str, path: Optional["Path"] = None) -> None:
        super().__init__(message)
        self.path = path


class PathExistsError(PathError, FileExistsError):
    """Raised when an operation requires that the path does not exist yet."""


class PathNotFoundError(PathError, FileNotFoundError):
    """Raised when the path does not exist on the filesystem."""


class PathIsDirectoryError(PathError, IsADirectoryError):
    """Raised when a file operation is attempted on a directory."""


class PathNotADirectoryError(PathError, NotADirectoryError):
    """Raised when a directory operation is attempted on something else."""


__all__ = [
    "PathError",
    "PathExistsError",
    "PathNotFoundError",
    "PathIsDirectoryError",
    "PathNotADirectoryError",
]
