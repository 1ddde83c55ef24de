"""
Dialog backends and desktop helpers.

Three interactions are needed, whatever draws them:

- error(body):      show a message, wait for OK
- confirm(body):    yes/no question, True for yes
- ask_password(body): masked text entry, the text or None on cancel

Backends:
- ZenityDialogs: runs the ``zenity`` program and reads its exit status/stdout
- QtDialogs:     PyQt6 QMessageBox / QInputDialog in-process

get_dialogs() picks one from the ``dialog_backend`` setting.
open_in_file_manager() launches the desktop file browser, detached.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from mounttool.core.constants import DialogBackends, Tools, ZenityFlags
from mounttool.core.dependencies import install_hint, is_package_installed
from mounttool.core.errors import DialogError
from mounttool.core.platform import file_manager_cmd, has_display
from mounttool.i18n import tr

_dialog_logger = logging.getLogger("mounttool.dialogs")


class Dialogs:
    """Interface shared by all dialog backends."""

    name = "base"

    def error(self, body: str) -> None:
        raise NotImplementedError

    def confirm(self, body: str) -> bool:
        raise NotImplementedError

    def ask_password(self, body: str) -> Optional[str]:
        raise NotImplementedError


# ===========================================================================
# zenity
# ===========================================================================


def escape_markup(text: str) -> str:
    """
    Escape text for zenity's --text option.

    zenity renders --text as Pango markup, so '&', '<' and '>' in paths or
    tool output would otherwise be parsed (or rejected) as tags.
    """
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class ZenityDialogs(Dialogs):
    """
    Dialogs drawn by the zenity program.

    zenity exits 0 for OK/Yes, 1 for Cancel/No or a closed window, and -1/5
    on internal errors or timeouts; everything non-zero counts as "no".
    """

    name = DialogBackends.ZENITY

    def __init__(self, executable: str = Tools.ZENITY):
        self.executable = executable

    def _run(self, args: List[str], capture: bool = False) -> subprocess.CompletedProcess:
        cmd = [self.executable] + args
        try:
            return subprocess.run(
                cmd,
                stdout=subprocess.PIPE if capture else subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                text=True,
                check=False,
            )
        except OSError as e:
            raise DialogError(f"zenity could not be started: {e}") from e

    def error(self, body: str) -> None:
        self._run(
            [ZenityFlags.ERROR, ZenityFlags.TITLE, tr("dialog_title_error"), ZenityFlags.TEXT, escape_markup(body)]
        )

    def confirm(self, body: str) -> bool:
        result = self._run(
            [ZenityFlags.QUESTION, ZenityFlags.TITLE, tr("dialog_title"), ZenityFlags.TEXT, escape_markup(body)]
        )
        return result.returncode == 0

    def ask_password(self, body: str) -> Optional[str]:
        result = self._run(
            [
                ZenityFlags.ENTRY,
                ZenityFlags.HIDE_TEXT,
                ZenityFlags.TITLE,
                tr("dialog_title"),
                ZenityFlags.TEXT,
                escape_markup(body),
            ],
            capture=True,
        )
        if result.returncode != 0:
            return None
        # zenity terminates the entered text with a newline
        return (result.stdout or "").rstrip("\n")


# ===========================================================================
# PyQt6
# ===========================================================================


class QtDialogs(Dialogs):
    """Dialogs drawn in-process with PyQt6 standard dialogs."""

    name = DialogBackends.QT

    def __init__(self):
        try:
            from PyQt6 import QtWidgets  # noqa: F401
        except ImportError as e:
            raise DialogError(f"PyQt6 is not available: {e}") from e
        # QApplication aborts the whole process when it cannot connect to a display
        if not has_display():
            raise DialogError("no graphical display available for Qt dialogs (DISPLAY/WAYLAND_DISPLAY unset)")
        self._app = None

    def _ensure_app(self):
        """Create the QApplication on first use; a running one is reused."""
        from PyQt6.QtWidgets import QApplication

        app = QApplication.instance()
        if app is None:
            app = QApplication([])
        self._app = app
        return app

    def error(self, body: str) -> None:
        from PyQt6.QtWidgets import QMessageBox

        self._ensure_app()
        QMessageBox.critical(None, tr("dialog_title_error"), body)

    def confirm(self, body: str) -> bool:
        from PyQt6.QtWidgets import QMessageBox

        self._ensure_app()
        reply = QMessageBox.question(
            None,
            tr("dialog_title"),
            body,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return reply == QMessageBox.StandardButton.Yes

    def ask_password(self, body: str) -> Optional[str]:
        from PyQt6.QtWidgets import QInputDialog, QLineEdit

        self._ensure_app()
        text, ok = QInputDialog.getText(None, tr("dialog_title"), body, QLineEdit.EchoMode.Password)
        if not ok:
            return None
        return text


# ===========================================================================
# Backend selection
# ===========================================================================


def get_dialogs(backend: str = DialogBackends.AUTO) -> Dialogs:
    """
    Create the dialog backend named by the ``dialog_backend`` setting.

    "auto" prefers zenity when it is on PATH and falls back to PyQt6.

    Raises:
        DialogError: the requested backend (or, for "auto", any backend) is unusable
    """
    if backend == DialogBackends.ZENITY:
        executable = shutil.which(Tools.ZENITY)
        if executable is None:
            raise DialogError("zenity not found in PATH")
        return ZenityDialogs(executable)

    if backend == DialogBackends.QT:
        return QtDialogs()

    executable = shutil.which(Tools.ZENITY)
    if executable is not None:
        _dialog_logger.debug(f"dialogs.select: backend=zenity, path={executable}")
        return ZenityDialogs(executable)
    if is_package_installed("PyQt6"):
        _dialog_logger.debug("dialogs.select: backend=qt (zenity not found)")
        return QtDialogs()
    raise DialogError("neither zenity nor PyQt6 is installed")


def dialog_install_hint() -> str:
    """Installation hint shown on the console when no backend works."""
    return "\n".join(filter(None, [install_hint(Tools.ZENITY), install_hint("PyQt6")]))


# ===========================================================================
# Cross-Platform File Explorer Helper
# ===========================================================================


def open_in_file_manager(path: Path, override: Optional[str] = None) -> bool:
    """
    Open a directory in the system file manager without waiting for it.

    The launcher runs in its own session with all stdio on /dev/null and is
    never waited on.

    Args:
        path: Directory to open
        override: ``file_manager`` setting (empty/None for the platform default)

    Returns:
        True if the launcher process was started, False on error
    """
    if not isinstance(path, Path):
        path = Path(path)

    cmd = file_manager_cmd(path, override)
    try:
        subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        _dialog_logger.warning(f"file_manager.open.failed: cmd={cmd[0]}, path={path}, error={e}")
        hint = install_hint(cmd[0])
        if hint:
            _dialog_logger.warning(f"file_manager.install_hint: {hint!r}")
        return False

    _dialog_logger.info(f"file_manager.open: cmd={cmd[0]}, path={path}")
    return True
