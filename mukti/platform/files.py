"""Filesystem helpers."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text"]


def _published_mode(path: Path) -> int:
    """Permission bits the replacement file should carry.

    An existing file keeps its mode. A new one gets the usual ``0o666``
    minus the process umask, as ``open()`` would have created it.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically.

    The content goes to a sibling temp file which then replaces ``path``, so
    readers see either the old file or the new one. The result carries the
    target's permission bits, not the private ``0o600`` of ``mkstemp``. On
    failure the temp file is removed, ``path`` is left as it was, and the
    OSError propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _published_mode(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    replaced = False
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
        replaced = True
    finally:
        if not replaced:
            tmp_path.unlink(missing_ok=True)
