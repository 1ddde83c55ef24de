"""
gocryptfs CLI adapter

Wraps the three operations mounttool needs from the encryption layer:

- info:    ``gocryptfs -info SOURCE`` (exit 0 means SOURCE is a valid gocryptfs dir)
- mount:   ``gocryptfs [-i Nm] SOURCE TARGET`` with the password on stdin
- unmount: ``fusermount -u TARGET`` / ``umount TARGET`` (see core.platform)

Every call returns a ToolResult with the exit status and the combined
stdout+stderr text; interpreting the result is the caller's job. The password
is only ever written to the child's stdin and never appears in argv.
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from mounttool.core.constants import GocryptfsFlags, Tools
from mounttool.core.dependencies import install_hint
from mounttool.core.errors import ToolMissingError
from mounttool.core.platform import unmount_cmd

_gocryptfs_logger = logging.getLogger("mounttool.gocryptfs")

# Exit status synthesized when the process could not be started
EXIT_NOT_RUNNABLE = 127


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one external invocation."""

    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def find_gocryptfs(configured_path: str = "") -> Optional[str]:
    """
    Locate the gocryptfs executable.

    Args:
        configured_path: ``gocryptfs_path`` setting; empty means search PATH

    Returns:
        Absolute path of the executable, or None if it cannot be found.
    """
    return shutil.which(configured_path or Tools.GOCRYPTFS)


def build_mount_cmd(executable: str, source: Path, target: Path, idle_minutes: Optional[int] = None) -> List[str]:
    """Build the gocryptfs mount argument list (no password, it goes to stdin)."""
    cmd = [executable]
    if idle_minutes is not None:
        cmd.extend([GocryptfsFlags.IDLE, f"{idle_minutes}{GocryptfsFlags.IDLE_UNIT}"])
    cmd.extend([str(source), str(target)])
    return cmd


def run_tool(args: List[str], *, input_text: Optional[str] = None) -> ToolResult:
    """
    Run a command, merging stderr into stdout.

    The call blocks until the command exits; no timeout is applied. A command
    that cannot be started is reported as a failed ToolResult rather than an
    exception, so callers treat it like any other non-zero exit.
    """
    try:
        result = subprocess.run(
            args,
            input=input_text,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as e:
        _gocryptfs_logger.error(f"tool.start.failed: cmd={args[0]}, error={e}")
        return ToolResult(EXIT_NOT_RUNNABLE, str(e))

    return ToolResult(result.returncode, (result.stdout or "").strip())


class Gocryptfs:
    """
    Thin wrapper around one gocryptfs executable.

    Usage:
        tool = Gocryptfs.locate(cfg[ConfigKeys.GOCRYPTFS_PATH])
        if tool.info(source).ok:
            tool.mount(source, target, password)
    """

    def __init__(self, executable: str):
        self.executable = executable

    @classmethod
    def locate(cls, configured_path: str = "") -> "Gocryptfs":
        """
        Find gocryptfs and wrap it.

        Raises:
            ToolMissingError: gocryptfs is not installed / not executable
        """
        executable = find_gocryptfs(configured_path)
        if executable is None:
            _gocryptfs_logger.error(f"gocryptfs.locate: configured={configured_path!r}, found=False")
            raise ToolMissingError(configured_path or Tools.GOCRYPTFS, install_hint(Tools.GOCRYPTFS))
        _gocryptfs_logger.debug(f"gocryptfs.locate: path={executable}")
        return cls(executable)

    def info(self, source: Path) -> ToolResult:
        """Check that ``source`` is a gocryptfs cipher directory."""
        result = run_tool([self.executable, GocryptfsFlags.INFO, str(source)])
        _gocryptfs_logger.info(f"gocryptfs.info: source={source}, exit={result.returncode}")
        return result

    def mount(self, source: Path, target: Path, password: str, idle_minutes: Optional[int] = None) -> ToolResult:
        """
        Mount ``source`` on ``target``.

        gocryptfs reads the password from stdin when stdin is not a terminal.
        """
        cmd = build_mount_cmd(self.executable, source, target, idle_minutes)
        result = run_tool(cmd, input_text=password + "\n")
        _gocryptfs_logger.info(
            f"gocryptfs.mount: source={source}, target={target}, idle={idle_minutes}, exit={result.returncode}"
        )
        return result

    @staticmethod
    def unmount(target: Path) -> ToolResult:
        """Unmount the FUSE filesystem at ``target``."""
        result = run_tool(unmount_cmd(target))
        _gocryptfs_logger.info(f"gocryptfs.unmount: target={target}, exit={result.returncode}")
        return result
