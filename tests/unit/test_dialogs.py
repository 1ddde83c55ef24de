#!/usr/bin/env python3
"""
Unit tests for dialog backends and the file manager launcher.

These tests ensure:
1. zenity is called with the right mode flags and markup-escaped text
2. Non-zero zenity exits mean "no" / cancel; the entered password is returned verbatim
3. Backend selection honours the dialog_backend setting
4. Qt is refused with DialogError when there is no display to connect to
5. The file manager is started detached and never waited on
"""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from mounttool.core.constants import DialogBackends, EnvVars
from mounttool.core.errors import DialogError
from mounttool.dialogs import (
    QtDialogs,
    ZenityDialogs,
    escape_markup,
    get_dialogs,
    open_in_file_manager,
)


def zenity_result(returncode=0, stdout=""):
    return MagicMock(returncode=returncode, stdout=stdout)


class TestEscapeMarkup:
    def test_special_characters(self):
        assert escape_markup("a & b <c>") == "a &amp; b &lt;c&gt;"

    def test_plain_text_unchanged(self):
        assert escape_markup("/home/user/Private") == "/home/user/Private"


class TestZenityDialogs:
    """Argument construction and exit status handling."""

    def test_error(self):
        with patch("subprocess.run", return_value=zenity_result()) as mock_run:
            ZenityDialogs("/usr/bin/zenity").error("Could not unmount '/a&b'")

        cmd = mock_run.call_args[0][0]
        assert cmd[0] == "/usr/bin/zenity"
        assert "--error" in cmd
        assert cmd[cmd.index("--text") + 1] == "Could not unmount '/a&amp;b'"

    @pytest.mark.parametrize("returncode,expected", [(0, True), (1, False), (5, False), (-1, False)])
    def test_confirm(self, returncode, expected):
        with patch("subprocess.run", return_value=zenity_result(returncode)) as mock_run:
            assert ZenityDialogs().confirm("Unmount?") is expected
        assert "--question" in mock_run.call_args[0][0]

    def test_ask_password_hidden_entry(self):
        with patch("subprocess.run", return_value=zenity_result(0, "s3cret pass\n")) as mock_run:
            assert ZenityDialogs().ask_password("Password:") == "s3cret pass"

        cmd = mock_run.call_args[0][0]
        assert "--entry" in cmd
        assert "--hide-text" in cmd
        assert mock_run.call_args[1]["stdout"] == subprocess.PIPE

    def test_ask_password_keeps_surrounding_spaces(self):
        with patch("subprocess.run", return_value=zenity_result(0, "  padded  \n")):
            assert ZenityDialogs().ask_password("Password:") == "  padded  "

    def test_ask_password_empty_is_not_cancel(self):
        """OK with an empty field returns "" so the mount attempt still happens."""
        with patch("subprocess.run", return_value=zenity_result(0, "\n")):
            assert ZenityDialogs().ask_password("Password:") == ""

    def test_ask_password_cancel(self):
        with patch("subprocess.run", return_value=zenity_result(1, "")):
            assert ZenityDialogs().ask_password("Password:") is None

    def test_start_failure_raises_dialog_error(self):
        with patch("subprocess.run", side_effect=FileNotFoundError("zenity")):
            with pytest.raises(DialogError):
                ZenityDialogs().confirm("Unmount?")


class TestGetDialogs:
    """Backend selection."""

    def test_zenity_explicit(self):
        with patch("shutil.which", return_value="/usr/bin/zenity"):
            dialogs = get_dialogs(DialogBackends.ZENITY)
        assert isinstance(dialogs, ZenityDialogs)
        assert dialogs.executable == "/usr/bin/zenity"

    def test_zenity_explicit_missing(self):
        with patch("shutil.which", return_value=None):
            with pytest.raises(DialogError):
                get_dialogs(DialogBackends.ZENITY)

    def test_auto_prefers_zenity(self):
        with patch("shutil.which", return_value="/usr/bin/zenity"):
            assert isinstance(get_dialogs(DialogBackends.AUTO), ZenityDialogs)

    def test_auto_falls_back_to_qt(self):
        with patch("shutil.which", return_value=None), patch(
            "mounttool.dialogs.is_package_installed", return_value=True
        ), patch("mounttool.dialogs.QtDialogs") as mock_qt:
            assert get_dialogs(DialogBackends.AUTO) is mock_qt.return_value

    def test_auto_nothing_available(self):
        with patch("shutil.which", return_value=None), patch(
            "mounttool.dialogs.is_package_installed", return_value=False
        ):
            with pytest.raises(DialogError):
                get_dialogs(DialogBackends.AUTO)

    def test_auto_headless_refuses_qt(self, monkeypatch):
        """zenity missing and no display: a DialogError, never a Qt abort."""
        for var in (EnvVars.DISPLAY, EnvVars.WAYLAND_DISPLAY, EnvVars.QT_QPA_PLATFORM):
            monkeypatch.delenv(var, raising=False)
        with patch("shutil.which", return_value=None), patch(
            "mounttool.dialogs.is_package_installed", return_value=True
        ), patch("mounttool.core.platform.is_macos", return_value=False):
            with pytest.raises(DialogError):
                get_dialogs(DialogBackends.AUTO)


class TestQtDialogs:
    """PyQt6 backend, with the standard dialogs patched out."""

    @pytest.fixture
    def qt(self, monkeypatch):
        pytest.importorskip("PyQt6.QtWidgets")
        monkeypatch.setenv("QT_QPA_PLATFORM", "offscreen")
        dialogs = QtDialogs()
        monkeypatch.setattr(dialogs, "_ensure_app", lambda: None)
        return dialogs

    def test_ask_password_uses_password_echo(self, qt):
        from PyQt6.QtWidgets import QLineEdit

        with patch("PyQt6.QtWidgets.QInputDialog.getText", return_value=("hunter2", True)) as mock_get:
            assert qt.ask_password("Password:") == "hunter2"
        assert mock_get.call_args[0][3] == QLineEdit.EchoMode.Password

    def test_ask_password_cancel(self, qt):
        with patch("PyQt6.QtWidgets.QInputDialog.getText", return_value=("", False)):
            assert qt.ask_password("Password:") is None

    def test_confirm(self, qt):
        from PyQt6.QtWidgets import QMessageBox

        with patch("PyQt6.QtWidgets.QMessageBox.question", return_value=QMessageBox.StandardButton.Yes):
            assert qt.confirm("Unmount?") is True
        with patch("PyQt6.QtWidgets.QMessageBox.question", return_value=QMessageBox.StandardButton.No):
            assert qt.confirm("Unmount?") is False

    def test_error(self, qt):
        with patch("PyQt6.QtWidgets.QMessageBox.critical") as mock_critical:
            qt.error("boom")
        assert mock_critical.call_args[0][2] == "boom"

    def test_no_display_raises(self, monkeypatch):
        pytest.importorskip("PyQt6.QtWidgets")
        for var in (EnvVars.DISPLAY, EnvVars.WAYLAND_DISPLAY, EnvVars.QT_QPA_PLATFORM):
            monkeypatch.delenv(var, raising=False)
        with patch("mounttool.core.platform.is_macos", return_value=False):
            with pytest.raises(DialogError, match="display"):
                QtDialogs()


class TestOpenInFileManager:
    """Detached launch of the desktop file browser."""

    def test_detached_launch(self):
        with patch("mounttool.dialogs.file_manager_cmd", return_value=["xdg-open", "/mnt/x"]), patch(
            "subprocess.Popen"
        ) as mock_popen:
            assert open_in_file_manager(Path("/mnt/x")) is True

        args, kwargs = mock_popen.call_args
        assert args[0] == ["xdg-open", "/mnt/x"]
        assert kwargs["start_new_session"] is True
        assert kwargs["stdin"] == subprocess.DEVNULL
        assert kwargs["stdout"] == subprocess.DEVNULL
        assert kwargs["stderr"] == subprocess.DEVNULL
        mock_popen.return_value.wait.assert_not_called()

    def test_override(self):
        with patch("subprocess.Popen") as mock_popen:
            open_in_file_manager("/mnt/x", override="thunar")
        assert mock_popen.call_args[0][0] == ["thunar", "/mnt/x"]

    def test_launch_failure_returns_false(self):
        with patch("subprocess.Popen", side_effect=FileNotFoundError("xdg-open")):
            assert open_in_file_manager(Path("/mnt/x")) is False

    def test_launch_failure_logs_install_hint(self, caplog):
        with patch("mounttool.dialogs.file_manager_cmd", return_value=["xdg-open", "/mnt/x"]), patch(
            "subprocess.Popen", side_effect=FileNotFoundError("xdg-open")
        ), patch("mounttool.core.dependencies.is_macos", return_value=False):
            with caplog.at_level("WARNING", logger="mounttool.dialogs"):
                open_in_file_manager(Path("/mnt/x"))
        assert "xdg-utils" in caplog.text
