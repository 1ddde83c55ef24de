#!/usr/bin/env python3
"""
Pytest configuration and shared fixtures for mounttool tests.

This module sets up the Python path so the tests run from a plain checkout
as well as from an installed package, and isolates every test from the
user's real settings and log directories.
"""

import sys
from pathlib import Path

# =============================================================================
# Path Setup - Execute BEFORE any test imports
# =============================================================================

# tests/conftest.py → tests/ → repository root
_tests_dir = Path(__file__).resolve().parent
_repo_root = _tests_dir.parent

if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

REPO_ROOT = _repo_root
TESTS_DIR = _tests_dir

# =============================================================================
# Shared Fixtures
# =============================================================================

from typing import List, Optional

import pytest

from mounttool.core.constants import EnvVars
from mounttool.dialogs import Dialogs
from mounttool.i18n import set_lang


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point XDG directories at a temp dir and reset global language state."""
    monkeypatch.setenv(EnvVars.XDG_CONFIG_HOME, str(tmp_path / "xdg-config"))
    monkeypatch.setenv(EnvVars.XDG_STATE_HOME, str(tmp_path / "xdg-state"))
    monkeypatch.delenv(EnvVars.CONFIG, raising=False)
    set_lang("en")
    yield
    set_lang("en")


class FakeDialogs(Dialogs):
    """
    Scripted dialog backend.

    passwords: answers for successive password prompts; None (or running out)
               means the user pressed Cancel
    confirm_answer: answer to every yes/no question
    """

    name = "fake"

    def __init__(self, passwords: Optional[List[Optional[str]]] = None, confirm_answer: bool = True):
        self.passwords = list(passwords or [])
        self.confirm_answer = confirm_answer
        self.errors: List[str] = []
        self.confirms: List[str] = []
        self.prompts: List[str] = []

    def error(self, body: str) -> None:
        self.errors.append(body)

    def confirm(self, body: str) -> bool:
        self.confirms.append(body)
        return self.confirm_answer

    def ask_password(self, body: str) -> Optional[str]:
        self.prompts.append(body)
        if not self.passwords:
            return None
        return self.passwords.pop(0)


@pytest.fixture
def fake_dialogs():
    """Factory for FakeDialogs instances."""
    return FakeDialogs


@pytest.fixture
def source_dir(tmp_path):
    """An (unchecked) cipher directory."""
    path = tmp_path / "cipher"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path):
    """Mount point path whose parent exists but which is not created yet."""
    return tmp_path / "plain"
