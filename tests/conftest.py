# tests/conftest.py
# Shared filesystem fixtures: a populated directory tree, a fixed umask and a
# working directory pinned to tmp_path.

from __future__ import annotations

import os
from pathlib import Path as StdPath

import pytest

from pathlite import Path


@pytest.fixture
def fixed_umask():
    """Run the test under umask 022 and restore the previous mask afterwards."""
    previous = os.umask(0o022)
    yield 0o022
    os.umask(previous)


@pytest.fixture
def in_tmp(tmp_path: StdPath, monkeypatch) -> StdPath:
    """Make tmp_path the process working directory for the test."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def conf_dir(tmp_path: StdPath) -> Path:
    """Directory with a few *.conf files, a hidden one, a text file and a subdir."""
    root = tmp_path / "etc"
    root.mkdir()
    for name in ("a.conf", "b.conf", ".hidden.conf", "notes.txt"):
        (root / name).write_bytes(b"x")
    (root / "sub").mkdir()
    (root / "sub" / "nested.conf").write_bytes(b"y")
    return Path(str(root))
