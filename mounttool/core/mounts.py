# core/mounts.py - Mount table queries
"""
Answer "is this directory a mount point right now?".

Linux: read /proc/self/mounts and look for an entry whose mount point equals
the target. The kernel escapes whitespace and backslashes in that file as
three-digit octal sequences (``\\040`` for a space), which are decoded before
comparing.

Elsewhere (macOS has no /proc): ``os.path.ismount``.

The table is read fresh on every call. Nothing is cached.
"""

import logging
import os
import re
from pathlib import Path
from typing import List, NamedTuple, Optional

from mounttool.core.paths import Paths

_mounts_logger = logging.getLogger("mounttool.mounts")

_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


class MountEntry(NamedTuple):
    """One line of the mount table."""

    source: str
    mount_point: str
    fstype: str


def _unescape(field: str) -> str:
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), field)


def parse_mount_table(text: str) -> List[MountEntry]:
    """
    Parse the contents of a /proc/mounts style table.

    Malformed lines (fewer than three fields) are skipped.
    """
    entries = []
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 3:
            continue
        entries.append(MountEntry(_unescape(parts[0]), _unescape(parts[1]), parts[2]))
    return entries


def read_mount_table(mounts_file: Path = Paths.PROC_SELF_MOUNTS) -> Optional[List[MountEntry]]:
    """Return the current mount table, or None if it cannot be read."""
    try:
        text = Path(mounts_file).read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        _mounts_logger.debug(f"mounts.table.unavailable: path={mounts_file}, error={e}")
        return None
    return parse_mount_table(text)


def is_mount_point(target: Path, mounts_file: Path = Paths.PROC_SELF_MOUNTS) -> bool:
    """
    Check whether ``target`` is currently a mount point.

    Args:
        target: Absolute, already-resolved directory path
        mounts_file: Mount table to consult (tests pass a fixture file)

    Returns:
        True if some filesystem is mounted at ``target``.
    """
    table = read_mount_table(mounts_file)
    if table is None:
        mounted = os.path.ismount(str(target))
    else:
        wanted = str(target)
        mounted = any(entry.mount_point == wanted for entry in table)

    _mounts_logger.debug(f"mounts.query: target={target}, mounted={mounted}")
    return mounted
