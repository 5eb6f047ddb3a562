"""pathlite: an immutable string-backed filesystem path with convenience methods."""

from .config import Settings
from .errors import (
    PathError,
    PathExistsError,
    PathIsDirectoryError,
    PathNotADirectoryError,
    PathNotFoundError,
)
from .path import Path

__version__ = "0.1.0"

__all__ = [
    "Path",
    "PathError",
    "PathExistsError",
    "PathNotFoundError",
    "PathIsDirectoryError",
    "PathNotADirectoryError",
    "Settings",
]
