# core/dependencies.py - SINGLE SOURCE OF TRUTH for dependency checking
"""
Dependency checking and installation guidance for mounttool.

This module checks for:
- System tools: gocryptfs, zenity, fusermount, xdg-open
- Python packages: PyQt6 (Qt dialog backend)

Missing tools are reported with OS-specific remediation hints.
"""

import importlib.util
from dataclasses import dataclass
from typing import Dict, Optional

from mounttool.core.constants import Tools
from mounttool.core.platform import is_macos


@dataclass
class DependencyInfo:
    """Information about a dependency and how to install it."""

    name: str
    install_linux: str  # Linux installation instructions (Debian/Ubuntu, Fedora)
    install_macos: str  # macOS installation instructions
    url: Optional[str] = None  # Download URL for more info


REQUIRED_SYSTEM_TOOLS: Dict[str, DependencyInfo] = {
    Tools.GOCRYPTFS: DependencyInfo(
        name="gocryptfs",
        install_linux="Ubuntu/Debian: sudo apt install gocryptfs\nFedora: sudo dnf install gocryptfs",
        install_macos="brew install gocryptfs (requires macFUSE)",
        url="https://nuetzlich.net/gocryptfs/",
    ),
    Tools.ZENITY: DependencyInfo(
        name="zenity",
        install_linux="Ubuntu/Debian: sudo apt install zenity\nFedora: sudo dnf install zenity",
        install_macos="brew install zenity",
        url="https://gitlab.gnome.org/GNOME/zenity",
    ),
    Tools.FUSERMOUNT: DependencyInfo(
        name="fusermount",
        install_linux="Ubuntu/Debian: sudo apt install fuse3\nFedora: sudo dnf install fuse3",
        install_macos="Install macFUSE: brew install --cask macfuse",
        url="https://github.com/libfuse/libfuse",
    ),
    Tools.XDG_OPEN: DependencyInfo(
        name="xdg-open",
        install_linux="Ubuntu/Debian: sudo apt install xdg-utils\nFedora: sudo dnf install xdg-utils",
        install_macos="Not needed on macOS ('open' is built in)",
    ),
}

OPTIONAL_PYTHON_PACKAGES: Dict[str, DependencyInfo] = {
    "PyQt6": DependencyInfo(
        name="PyQt6",
        install_linux="pip install PyQt6",
        install_macos="pip install PyQt6",
        url="https://pypi.org/project/PyQt6/",
    ),
}


def is_package_installed(package_name: str) -> bool:
    """
    Check if a Python package is installed.

    Args:
        package_name: Name of the package to check

    Returns:
        True if package is installed, False otherwise
    """
    import_names = {
        "PyQt6": "PyQt6.QtWidgets",  # Check a submodule to ensure Qt is actually available
    }

    import_name = import_names.get(package_name, package_name)

    try:
        spec = importlib.util.find_spec(import_name)
        return spec is not None
    except (ModuleNotFoundError, ValueError):
        return False


def get_platform_instructions(dep: DependencyInfo) -> str:
    """
    Get OS-appropriate installation instructions.

    Args:
        dep: DependencyInfo for the dependency

    Returns:
        Installation instructions string for current platform
    """
    if is_macos():
        return dep.install_macos
    return dep.install_linux


def install_hint(tool_name: str) -> str:
    """
    Format a short remediation hint for one tool or package.

    Unknown tools get an empty hint.
    """
    dep = REQUIRED_SYSTEM_TOOLS.get(tool_name) or OPTIONAL_PYTHON_PACKAGES.get(tool_name)
    if dep is None:
        return ""
    lines = [get_platform_instructions(dep)]
    if dep.url:
        lines.append(f"More info: {dep.url}")
    return "\n".join(lines)
