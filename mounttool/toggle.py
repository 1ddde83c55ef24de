"""
mounttool toggle

Mount or unmount a gocryptfs encrypted directory with desktop dialogs.

Usage:
    mounttool [-i mins] [-o] source_enc_dir target_mount_dir

    -i mins   unmount automatically after this many idle minutes (gocryptfs -i)
    -o        do not open the mounted folder in the file manager

If target_mount_dir is already a mount point, mounttool offers to unmount it.
Otherwise it asks for the password and mounts source_enc_dir there, asking
again after every failed attempt until the mount succeeds or the password
dialog is cancelled.

Dependencies (runtime):
- gocryptfs in PATH (or the gocryptfs_path setting)
- fusermount (Linux) / umount (macOS)
- zenity, or PyQt6 for in-process dialogs
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from mounttool.core.constants import Branding, ConfigKeys, ExitCodes
from mounttool.core.errors import (
    DialogError,
    FormatInvalidError,
    MountToolError,
    ToolMissingError,
    UnmountError,
    UsageError,
)
from mounttool.core.dependencies import install_hint
from mounttool.core.limits import Limits
from mounttool.core.mounts import is_mount_point
from mounttool.core.platform import unmount_cmd
from mounttool.dialogs import Dialogs, dialog_install_hint, get_dialogs, open_in_file_manager
from mounttool.gocryptfs_cli import EXIT_NOT_RUNNABLE, Gocryptfs
from mounttool.i18n import tr

_toggle_logger = logging.getLogger("mounttool.toggle")


# =============================================================================
# Invocation
# =============================================================================


@dataclass(frozen=True)
class Invocation:
    """Parsed command line. Built once, never modified."""

    source_path: Path
    target_path: Path
    idle_minutes: Optional[int] = None
    open_after_mount: bool = True


class _UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser(prog: str = Branding.APP_NAME) -> argparse.ArgumentParser:
    parser = _UsageArgumentParser(
        prog=prog,
        add_help=False,
        usage="%(prog)s [-i mins] [-o] source_enc_dir target_mount_dir",
        description="Mount or unmount a gocryptfs encrypted directory.",
    )
    parser.add_argument("-i", dest="idle_minutes", metavar="mins", help="Idle minutes before automatic unmount")
    parser.add_argument(
        "-o", dest="no_open", action="store_true", help="Do not open the folder in the file manager after mounting"
    )
    parser.add_argument("source", help="gocryptfs encrypted (cipher) directory")
    parser.add_argument("target", help="Mount point directory")
    return parser


def _parse_idle_minutes(value: str) -> int:
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        raise UsageError(tr("usage_bad_idle", value=value))
    if minutes < Limits.IDLE_MINUTES_MIN:
        raise UsageError(tr("usage_bad_idle", value=value))
    return minutes


def resolve_path(raw: str) -> Path:
    """
    Canonicalize a path argument to absolute form.

    Like ``readlink -f``, the last component may be missing but its parent
    must exist; otherwise there is nothing to resolve and the argument is
    rejected.

    Raises:
        UsageError: empty argument or unresolvable path
    """
    if not raw or not raw.strip():
        raise UsageError(tr("usage_bad_path", path=raw))
    try:
        resolved = Path(raw).expanduser().resolve()
    except (OSError, RuntimeError):
        raise UsageError(tr("usage_bad_path", path=raw))
    if not resolved.parent.is_dir():
        raise UsageError(tr("usage_bad_path", path=raw))
    return resolved


def parse_invocation(argv: List[str], default_idle_minutes: Optional[int] = None) -> Invocation:
    """
    Build an Invocation from command-line arguments.

    Args:
        argv: Arguments without the program name
        default_idle_minutes: ``default_idle_minutes`` setting, used when -i is absent

    Raises:
        UsageError: wrong argument count, unknown flag, bad -i value or path
    """
    args = build_parser().parse_args(argv)

    idle_minutes = default_idle_minutes
    if args.idle_minutes is not None:
        idle_minutes = _parse_idle_minutes(args.idle_minutes)

    return Invocation(
        source_path=resolve_path(args.source),
        target_path=resolve_path(args.target),
        idle_minutes=idle_minutes,
        open_after_mount=not args.no_open,
    )


# =============================================================================
# Mount / unmount
# =============================================================================


def remove_if_empty(directory: Path) -> bool:
    """
    Remove ``directory`` if it is empty.

    A non-empty, missing or busy directory is left alone; that is expected
    and not an error.
    """
    try:
        directory.rmdir()
    except OSError as e:
        _toggle_logger.debug(f"cleanup.rmdir.skipped: path={directory}, reason={e.strerror}")
        return False
    _toggle_logger.info(f"cleanup.rmdir: path={directory}")
    return True


@dataclass
class RetryState:
    """Progress of the password loop."""

    attempts_made: int = 0
    mounted: bool = False
    cancelled: bool = False


class MountToggler:
    """
    Decide between mount and unmount for one Invocation and carry it out.

    run() returns the process exit status for the non-fatal outcomes and
    raises a MountToolError subclass for the fatal ones.
    """

    def __init__(
        self,
        invocation: Invocation,
        dialogs: Dialogs,
        gocryptfs_path: str = "",
        file_manager: str = "",
    ):
        self.invocation = invocation
        self.dialogs = dialogs
        self.gocryptfs_path = gocryptfs_path
        self.file_manager = file_manager

    def run(self) -> int:
        """
        Raises:
            ToolMissingError: gocryptfs not installed
            FormatInvalidError: source is not a gocryptfs directory
            UnmountError: unmount returned non-zero
        """
        tool = Gocryptfs.locate(self.gocryptfs_path)
        target = self.invocation.target_path

        if is_mount_point(target):
            _toggle_logger.info(f"toggle.state: target={target}, mounted=True")
            return self.unmount(tool)

        _toggle_logger.info(f"toggle.state: target={target}, mounted=False")
        self.mount(tool)
        return ExitCodes.OK

    def unmount(self, tool: Gocryptfs) -> int:
        target = self.invocation.target_path

        if not self.dialogs.confirm(tr("popup_confirm_unmount_body", target=target)):
            _toggle_logger.info(f"unmount.declined: target={target}")
            return ExitCodes.OK

        result = tool.unmount(target)
        if not result.ok:
            output = result.output
            if result.returncode == EXIT_NOT_RUNNABLE:
                # The unmount program itself could not be started
                output = "\n\n".join(filter(None, [output, install_hint(unmount_cmd(target)[0])]))
            raise UnmountError(target, result.returncode, output)

        remove_if_empty(target)
        return ExitCodes.OK

    def mount(self, tool: Gocryptfs) -> RetryState:
        inv = self.invocation
        source, target = inv.source_path, inv.target_path

        info = tool.info(source)
        if not info.ok:
            raise FormatInvalidError(source, info.output)

        try:
            target.mkdir(exist_ok=True)
        except OSError as e:
            # gocryptfs reports the unusable mount point itself
            _toggle_logger.debug(f"mount.target.mkdir.failed: path={target}, error={e}")

        state = RetryState()
        while not state.mounted:
            password = self.dialogs.ask_password(tr("popup_password_body", source=source, target=target))
            if password is None:
                state.cancelled = True
                _toggle_logger.info(f"mount.cancelled: attempts={state.attempts_made}")
                break

            state.attempts_made += 1
            result = tool.mount(source, target, password, inv.idle_minutes)
            if result.ok:
                state.mounted = True
                _toggle_logger.info(f"mount.success: target={target}, attempts={state.attempts_made}")
                if inv.open_after_mount:
                    open_in_file_manager(target, self.file_manager)
            else:
                _toggle_logger.warning(
                    f"mount.attempt.failed: n={state.attempts_made}, exit={result.returncode}"
                )
                self.dialogs.error(tr("popup_mount_failed_body", source=source, output=result.output))

        if not state.mounted:
            remove_if_empty(target)
        return state


# =============================================================================
# Error reporting
# =============================================================================


def report_error(dialogs: Dialogs, error: MountToolError) -> None:
    """Show a fatal error in a dialog, using the tool's own output verbatim."""
    if isinstance(error, ToolMissingError):
        body = tr("popup_tool_missing_body", tool=error.tool, hint=error.hint)
    elif isinstance(error, FormatInvalidError):
        body = tr("popup_format_invalid_body", source=error.source, output=error.output)
    elif isinstance(error, UnmountError):
        body = tr("popup_unmount_failed_body", target=error.target, output=error.output)
    else:
        body = str(error)
    _toggle_logger.error(f"toggle.failed: error={error}")
    dialogs.error(body)


def print_usage(reason: str = "") -> None:
    """Usage goes to stdout; the specific reason, if any, to stderr."""
    if reason:
        print(f"{Branding.APP_NAME}: {reason}", file=sys.stderr)
    print(tr("usage", prog=Branding.APP_NAME))


def main(argv: Optional[List[str]] = None, cfg: Optional[Dict[str, Any]] = None) -> int:
    """
    Run one toggle and return the process exit status.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])
        cfg: Merged settings (default: built-in defaults)
    """
    if argv is None:
        argv = sys.argv[1:]
    if cfg is None:
        from mounttool.core.config import get_default_config

        cfg = get_default_config()

    try:
        invocation = parse_invocation(argv, cfg.get(ConfigKeys.DEFAULT_IDLE_MINUTES))
    except UsageError as e:
        _toggle_logger.info(f"usage.error: argv={argv}, reason={e}")
        print_usage(str(e))
        return e.exit_code

    try:
        dialogs = get_dialogs(cfg.get(ConfigKeys.DIALOG_BACKEND))
    except DialogError as e:
        _toggle_logger.error(f"dialogs.unavailable: error={e}")
        print(tr("console_dialog_unavailable", error=e, hint=dialog_install_hint()), file=sys.stderr)
        return e.exit_code

    toggler = MountToggler(
        invocation,
        dialogs,
        gocryptfs_path=cfg.get(ConfigKeys.GOCRYPTFS_PATH, ""),
        file_manager=cfg.get(ConfigKeys.FILE_MANAGER, ""),
    )

    try:
        return toggler.run()
    except DialogError as e:
        _toggle_logger.error(f"dialogs.failed: error={e}")
        print(tr("console_dialog_unavailable", error=e, hint=dialog_install_hint()), file=sys.stderr)
        return e.exit_code
    except MountToolError as e:
        report_error(dialogs, e)
        return e.exit_code
