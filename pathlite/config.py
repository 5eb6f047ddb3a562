"""pathlite configuration for default permission modes.

All settings are backed by environment variables following the PL_* naming
convention and are parsed as octal permission bits.

Example:
    >>> from pathlite.config import settings
    >>> oct(settings.mkdir_mode)
    '0o755'

Environment Variables:
    PL_OPEN_MODE: Mode for files created by ``Path.open`` (default: 0755)
    PL_MKDIR_MODE: Mode for directories created by ``Path.mkdir`` (default: 0755)
    PL_CREATE_MODE: Mode for files created by ``touch``/``write_bytes`` (default: 0666)

The process umask still applies to every mode.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_MAX_MODE = 0o7777


def _env(name: str, default: str) -> str:
    """Get environment variable with PL_* prefix validation."""
    if not name.startswith("PL_"):
        raise ValueError(f"Only PL_* env vars are allowed, got: {name}")
    return os.getenv(name, default)


def _env_mode(name: str, default: int) -> int:
    """Get environment variable as octal permission bits."""
    raw = _env(name, oct(default)).strip()
    try:
        mode = int(raw, 8)
    except ValueError:
        return default
    if not 0 <= mode <= _MAX_MODE:
        return default
    return mode


@dataclass(frozen=True)
class Settings:
    """Default permission modes used when creating filesystem entries.

    Values are read once at import. For testing, set the environment before
    reloading this module, or monkeypatch ``pathlite.config.settings``;
    ``Path`` operations look it up there at call time. The package root
    exports only the ``Settings`` class, never a snapshot of the instance.
    """

    open_mode: int = _env_mode("PL_OPEN_MODE", 0o755)
    mkdir_mode: int = _env_mode("PL_MKDIR_MODE", 0o755)
    create_mode: int = _env_mode("PL_CREATE_MODE", 0o666)


# Module-level instance for convenient access
settings = Settings()

__all__ = ["settings", "Settings"]
