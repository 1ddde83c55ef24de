# core/errors.py - Exception taxonomy for mounttool
"""
Every fatal outcome of a run is one of these exceptions.

Each class carries the process exit status it maps to, so the entry point
can translate an exception into ``sys.exit()`` without a lookup table.
Non-fatal outcomes (a failed mount attempt, a user cancelling the password
prompt) are NOT exceptions; the toggle loop handles them inline.
"""

from mounttool.core.constants import ExitCodes


class MountToolError(Exception):
    """Base exception for mounttool failures."""

    exit_code = ExitCodes.FAILURE


class UsageError(MountToolError):
    """Malformed invocation: wrong argument count, bad flag, unresolvable path."""


class ToolMissingError(MountToolError):
    """The encryption tool is not installed or not executable."""

    def __init__(self, tool: str, hint: str = ""):
        self.tool = tool
        self.hint = hint
        super().__init__(f"{tool} not found")


class FormatInvalidError(MountToolError):
    """The source directory is not a valid encrypted filesystem."""

    def __init__(self, source, output: str = ""):
        self.source = source
        self.output = output
        super().__init__(f"Not a gocryptfs directory: {source}")


class UnmountError(MountToolError):
    """The unmount facility returned a non-zero status."""

    def __init__(self, target, returncode: int, output: str):
        self.target = target
        self.returncode = returncode
        self.output = output
        super().__init__(f"Unmount of {target} failed (exit {returncode})")


class DialogError(MountToolError):
    """No dialog backend could be started."""
