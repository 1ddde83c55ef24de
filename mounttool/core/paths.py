# core/paths.py - SINGLE SOURCE OF TRUTH for all filesystem paths
"""
All filesystem paths MUST be defined here as Path objects.
No other module may construct filesystem paths.

RULES:
- All paths are Path objects internally
- Convert to str() ONLY at I/O boundaries (subprocess, JSON, print)
- Use Path arithmetic (/) for joins, never string concatenation
"""

import os
from pathlib import Path
from typing import Optional

from mounttool.core.constants import Branding, EnvVars, FileNames


class Paths:
    """
    Centralized path definitions. All paths are Path objects.

    Usage:
        from mounttool.core.paths import Paths
        config_path = Paths.config_file()
    """

    # Linux mount table of the calling process
    PROC_SELF_MOUNTS = Path("/proc/self/mounts")

    # Subdirectory for rotating logs under the state directory
    LOGS_SUBDIR = "logs"

    # ==========================================================================
    # XDG base directories
    # ==========================================================================

    @staticmethod
    def _xdg_dir(env_var: str, fallback: Path) -> Path:
        value = os.environ.get(env_var, "").strip()
        # Relative XDG values are invalid and ignored
        if value and os.path.isabs(value):
            return Path(value)
        return fallback

    @classmethod
    def config_dir(cls) -> Path:
        """Return ``$XDG_CONFIG_HOME/mounttool`` (default ``~/.config/mounttool``)."""
        base = cls._xdg_dir(EnvVars.XDG_CONFIG_HOME, Path.home() / ".config")
        return base / Branding.APP_NAME

    @classmethod
    def state_dir(cls) -> Path:
        """Return ``$XDG_STATE_HOME/mounttool`` (default ``~/.local/state/mounttool``)."""
        base = cls._xdg_dir(EnvVars.XDG_STATE_HOME, Path.home() / ".local" / "state")
        return base / Branding.APP_NAME

    # ==========================================================================
    # Files
    # ==========================================================================

    @classmethod
    def config_file(cls) -> Path:
        """Settings file, honouring the MOUNTTOOL_CONFIG override."""
        override: Optional[str] = os.environ.get(EnvVars.CONFIG, "").strip()
        if override:
            return Path(override).expanduser()
        return cls.config_dir() / FileNames.CONFIG_JSON

    @classmethod
    def logs_dir(cls) -> Path:
        return cls.state_dir() / cls.LOGS_SUBDIR

    @classmethod
    def log_file(cls) -> Path:
        return cls.logs_dir() / FileNames.LOG_FILE
