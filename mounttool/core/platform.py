# core/platform.py - SINGLE SOURCE OF TRUTH for platform detection
"""
Platform-specific detection and command selection.

This module provides:
- get_platform(): Get normalized platform name
- has_display(): Whether a graphical session is available
- unmount_cmd(): Unmount facility for a FUSE mount point
- file_manager_cmd(): Desktop "open this folder" launcher

Command builders return argument lists; they never run anything.
"""

import os
import platform as _platform
import shutil
from pathlib import Path
from typing import List, Optional

from mounttool.core.constants import EnvVars, Tools


def get_platform() -> str:
    """
    Get normalized platform name.

    Returns:
        One of: "windows", "darwin", "linux", or the raw system name lowercase.
    """
    return _platform.system().lower()


def is_macos() -> bool:
    """Check if running on macOS."""
    return get_platform() == "darwin"


def has_display() -> bool:
    """
    Check whether a GUI toolkit can open windows in this session.

    macOS always has its native window server. Elsewhere an X11 or Wayland
    display must be set, unless QT_QPA_PLATFORM names an explicit Qt platform
    plugin (e.g. "offscreen").
    """
    if is_macos():
        return True
    return any(os.environ.get(var) for var in (EnvVars.DISPLAY, EnvVars.WAYLAND_DISPLAY, EnvVars.QT_QPA_PLATFORM))


# ===========================================================================
# Unmount
# ===========================================================================


def unmount_cmd(target: Path) -> List[str]:
    """
    Get the command that unmounts a FUSE filesystem as the calling user.

    Linux: ``fusermount -u`` (``fusermount3 -u`` when only FUSE 3 is installed)
    macOS: ``umount`` (macFUSE mounts are user-unmountable)

    Args:
        target: Absolute mount point

    Returns:
        Argument list ready for subprocess.
    """
    if is_macos():
        return [Tools.UMOUNT, str(target)]

    fusermount = Tools.FUSERMOUNT
    if shutil.which(Tools.FUSERMOUNT) is None and shutil.which(Tools.FUSERMOUNT3):
        fusermount = Tools.FUSERMOUNT3
    return [fusermount, "-u", str(target)]


# ===========================================================================
# File manager
# ===========================================================================


def file_manager_cmd(path: Path, override: Optional[str] = None) -> List[str]:
    """
    Get the platform-specific command that opens a directory in the desktop.

    Args:
        path: Directory to open
        override: Executable configured by the user (``file_manager`` setting)

    Returns:
        Argument list ready for subprocess.

    Platform commands:
        macOS: ['open', path]
        Linux/other: ['xdg-open', path]
    """
    if override:
        return [override, str(path)]
    if is_macos():
        return [Tools.MACOS_OPEN, str(path)]
    return [Tools.XDG_OPEN, str(path)]
