"""Immutable filesystem path value with inspection and mutation helpers.

``Path`` stores the path text exactly as given and re-derives structure from
it on every call. Nothing is cached: each query stats the filesystem again.

Operations that resolve to an absolute path (``exists``, ``is_dir``,
``is_file``, ``permissions``, ``age``, ``resolve``, ``glob``, ``read_bytes``)
depend on the process working directory for relative paths.

Two error policies apply:
- ``exists``/``is_dir``/``is_file`` never raise; any failure to resolve or
  stat reads as ``False``.
- Everything else raises: a :class:`~pathlite.errors.PathError` subclass for a
  violated precondition, or the ``OSError`` from the underlying call.
"""

from __future__ import annotations

import glob as _glob
import logging
import os
import shutil
import stat as _stat
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import BinaryIO, List, Optional, Union, cast

from . import config as _config
from .errors import (
    PathExistsError,
    PathIsDirectoryError,
    PathNotADirectoryError,
    PathNotFoundError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_SEPARATORS = os.sep + (os.altsep or "")
_CLOEXEC = getattr(os, "O_CLOEXEC", 0)
_BINARY = getattr(os, "O_BINARY", 0)


def _clean(path: str) -> str:
    """Lexically simplify ``path``; empty input becomes ``"."``."""
    cleaned = os.path.normpath(path)
    # POSIX normpath keeps a leading "//"
    if os.sep == "/" and cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _extension(path: str) -> str:
    """Return the final extension of ``path`` including the dot, or ``""``."""
    start = max(path.rfind(sep) for sep in _SEPARATORS) + 1
    dot = path.rfind(".", start)
    return path[dot:] if dot >= 0 else ""


def _stat_abs(raw: str) -> os.stat_result:
    return os.stat(os.path.abspath(raw))


def _makedirs(name: str, mode: int) -> None:
    # every level created gets mode, not just the leaf
    head, tail = os.path.split(name)
    if not tail:
        head, tail = os.path.split(head)
    if head and tail and not os.path.exists(head):
        try:
            _makedirs(head, mode)
        except FileExistsError:
            pass
        if tail == os.curdir:
            return
    os.mkdir(name, mode)


@dataclass(frozen=True, slots=True, order=True, repr=False)
class Path:
    """Textual handle to a filesystem location, absolute or relative.

    Equality is exact equality of the text: ``Path("a/../b")`` and ``Path("b")``
    differ until resolved. A ``Path`` never equals a plain ``str``.
    """

    raw: str

    def __post_init__(self) -> None:
        raw = os.fspath(self.raw)
        if not isinstance(raw, str):
            raise TypeError(
                "argument should be a str or an os.PathLike object "
                "where __fspath__ returns a str, not 'bytes'"
            )
        object.__setattr__(self, "raw", raw)

    def __fspath__(self) -> str:
        return self.raw

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"Path({self.raw!r})"

    def __truediv__(self, other: PathLike) -> Path:
        return self.join_path(other)

    def __rtruediv__(self, other: PathLike) -> Path:
        return Path(other).join_path(self)

    # ---------- Inspection ----------
    def exists(self) -> bool:
        """Return True if the path exists. Errors of any kind read as False."""
        try:
            _stat_abs(self.raw)
        except (OSError, ValueError) as exc:
            logger.debug("stat failed for %s: %s", self.raw, exc)
            return False
        return True

    def is_dir(self) -> bool:
        """Return True for a directory. False if missing or not stat-able."""
        try:
            st = _stat_abs(self.raw)
        except (OSError, ValueError) as exc:
            logger.debug("stat failed for %s: %s", self.raw, exc)
            return False
        return _stat.S_ISDIR(st.st_mode)

    def is_file(self) -> bool:
        """Return True for a regular file. False if missing or not stat-able."""
        try:
            st = _stat_abs(self.raw)
        except (OSError, ValueError) as exc:
            logger.debug("stat failed for %s: %s", self.raw, exc)
            return False
        return _stat.S_ISREG(st.st_mode)

    def permissions(self) -> int:
        """Return the permission bits (``0o777`` mask) of the entry."""
        return _stat_abs(self.raw).st_mode & 0o777

    def age(self, now: datetime) -> timedelta:
        """Return ``now`` minus the last modification time.

        ``now`` is supplied by the caller. A naive ``now`` is compared with the
        local modification time; an aware one in its own timezone.
        """
        if not self.exists():
            raise PathNotFoundError(f"{self.raw} does not exist", self)
        mtime = datetime.fromtimestamp(_stat_abs(self.raw).st_mtime, tz=now.tzinfo)
        return now - mtime

    # ---------- Resolution ----------
    def resolve(self) -> Path:
        """Return the absolute form of the path, which must exist.

        Raises:
            PathNotFoundError: the absolute path does not exist. Its ``path``
                attribute is this (unresolved) path.
        """
        resolved = Path(_clean(os.path.abspath(self.raw)))
        if not resolved.exists():
            raise PathNotFoundError(
                f"Cannot resolve path that does not exist: {resolved}", self
            )
        return resolved

    # ---------- Path algebra ----------
    @property
    def name(self) -> str:
        """Last component; trailing separators are ignored."""
        stripped = self.raw.rstrip(_SEPARATORS)
        if not stripped:
            return os.sep if self.raw else "."
        return os.path.basename(stripped)

    @property
    def parent(self) -> Path:
        """Directory containing this path (``"."`` for a bare relative name)."""
        return Path(_clean(os.path.dirname(self.raw)))

    @property
    def suffix(self) -> str:
        """Final extension of the last segment including the dot, or ``""``."""
        return _extension(self.raw)

    def join_path(self, *others: PathLike) -> Path:
        """Join components with the host separator and clean the result.

        Later absolute components are appended as segments rather than
        replacing what came before: ``Path("a").join_path("/b") == Path("a/b")``.
        """
        if not others:
            return self
        parts = [p for p in (self.raw, *(os.fspath(o) for o in others)) if p]
        if not parts:
            return Path("")
        return Path(_clean(os.sep.join(parts)))

    def with_suffix(self, suffix: str) -> Path:
        """Return a new path with the final extension replaced.

        ``suffix`` is given without the dot (a single leading dot is accepted).
        An empty or whitespace-only suffix removes the extension and its dot.
        """
        suffix = suffix.strip()
        if suffix.startswith("."):
            suffix = suffix[1:]
        old = _extension(self.raw)
        if not old and not suffix:
            return self
        if not old:
            return Path(f"{self.raw}.{suffix}")
        stem = self.raw[: len(self.raw) - len(old)]
        if suffix:
            return Path(f"{stem}.{suffix}")
        return Path(stem)

    # ---------- Listing ----------
    def glob(self, pattern: str) -> List[Path]:
        """Return absolute paths of entries matching ``pattern`` in this directory.

        Single level only; ``**`` has no recursive meaning. Hidden entries
        match wildcards.
        """
        if not self.is_dir():
            raise PathNotADirectoryError(f"Glob only works on directories: {self.raw}", self)
        base = _glob.escape(_clean(os.path.abspath(self.raw)))
        expression = Path(base).join_path(pattern)
        matches = _glob.glob(expression.raw, recursive=False, include_hidden=True)
        return [Path(m) for m in sorted(matches)]

    # ---------- Reading ----------
    def read_bytes(self) -> bytes:
        """Return the whole content of the file."""
        with open(os.path.abspath(self.raw), "rb") as fh:
            return fh.read()

    # ---------- Mutation ----------
    def touch(self) -> None:
        """Create an empty file unless the path already exists.

        Parent directories are not created.
        """
        if self.exists():
            return
        fd = os.open(
            self.raw,
            os.O_WRONLY | os.O_CREAT | os.O_TRUNC | _CLOEXEC,
            _config.settings.create_mode,
        )
        os.close(fd)
        logger.debug("touched %s", self.raw)

    def mkdir(self) -> None:
        """Create the directory and any missing ancestors.

        Every directory created gets ``settings.mkdir_mode`` (less the umask).

        An existing path (directory included) is an error.
        """
        if self.exists():
            raise PathExistsError(
                f"Cannot make directory {self.raw} because it already exists", self
            )
        _makedirs(self.raw, _config.settings.mkdir_mode)
        logger.debug("created directory %s", self.raw)

    def write_bytes(self, data: bytes) -> int:
        """Truncate or create the file and write ``data``; return bytes written."""
        fd = os.open(
            self.raw,
            os.O_WRONLY | os.O_CREAT | os.O_TRUNC | _CLOEXEC | _BINARY,
            _config.settings.create_mode,
        )
        try:
            fh = os.fdopen(fd, "wb", closefd=True)
        except Exception:
            os.close(fd)
            raise
        with fh:
            written = fh.write(data)
        logger.debug("wrote %d bytes to %s", written, self.raw)
        return written

    def unlink(self) -> None:
        """Remove a file. Directories are refused (see :meth:`rmdir`)."""
        if self.is_dir():
            raise PathIsDirectoryError(f"{self.raw} is a directory. Use rmdir() instead.", self)
        os.remove(self.raw)
        logger.debug("removed %s", self.raw)

    def rmdir(self) -> None:
        """Remove an empty directory."""
        if not self.is_dir():
            raise PathNotADirectoryError(
                f"{self.raw} is not a directory. Use unlink() instead.", self
            )
        os.rmdir(self.raw)
        logger.debug("removed directory %s", self.raw)

    def rmdir_recursive(self) -> None:
        """Remove a directory and everything inside it.

        A symlink to a directory is removed as a link; the target is kept.
        """
        if not self.is_dir():
            raise PathNotADirectoryError(
                f"{self.raw} is not a directory. Use unlink() instead.", self
            )
        if os.path.islink(self.raw):
            os.remove(self.raw)
        else:
            shutil.rmtree(self.raw)
        logger.debug("removed directory tree %s", self.raw)

    def rename(self, target: PathLike) -> Path:
        """Move the entry to ``target`` and return the target as a ``Path``."""
        dest = Path(target)
        os.rename(self.raw, dest.raw)
        logger.debug("renamed %s -> %s", self.raw, dest.raw)
        return dest

    def open(self, mode: str = "r", permissions: Optional[int] = None) -> BinaryIO:
        """Open the file with a compact mode string and return a binary handle.

        - ``"r"`` and ``"w"`` together: read/write; ``"r"``: read only;
          ``"w"``: write only. Anything else defaults to read only.
        - ``"+"`` adds append mode.
        - A path that does not exist yet is created with ``permissions``
          (default ``settings.open_mode``). Existing content is never truncated.

        The caller owns the returned handle.
        """
        if self.is_dir():
            raise PathIsDirectoryError(f"Cannot open {self.raw} because it is a directory.", self)
        if permissions is None:
            permissions = _config.settings.open_mode

        readable = "r" in mode
        writable = "w" in mode
        append = "+" in mode

        if readable and writable:
            flags = os.O_RDWR
            fmode = "a+b" if append else "r+b"
        elif writable:
            flags = os.O_WRONLY
            fmode = "ab" if append else "wb"
        else:
            flags = os.O_RDONLY
            fmode = "rb"
        if append:
            flags |= os.O_APPEND
        if not self.exists():
            flags |= os.O_CREAT
        flags |= _CLOEXEC | _BINARY

        fd = os.open(self.raw, flags, permissions)
        try:
            fh = os.fdopen(fd, fmode, closefd=True)
        except Exception:
            os.close(fd)
            raise
        logger.debug("opened %s with mode %r", self.raw, mode)
        return cast(BinaryIO, fh)


__all__ = ["Path", "PathLike"]
