# core/config.py - Settings loading and validation
"""
SINGLE SOURCE OF TRUTH for settings handling.

This module provides:
- Built-in defaults for every ConfigKeys entry
- Loading of the optional user settings file (JSON)
- Per-key validation: a bad value falls back to its default, never aborts

The settings file is read-only from mounttool's point of view; it is never
written back.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from mounttool.core.constants import ConfigKeys, Defaults, DialogBackends
from mounttool.core.limits import Limits

# Logger for config operations
_config_logger = logging.getLogger("mounttool.config")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_default_config() -> Dict[str, Any]:
    """Return a fresh copy of the built-in defaults."""
    return {
        ConfigKeys.SCHEMA_VERSION: Defaults.SCHEMA_VERSION,
        ConfigKeys.DIALOG_BACKEND: Defaults.DIALOG_BACKEND,
        ConfigKeys.GOCRYPTFS_PATH: "",
        ConfigKeys.FILE_MANAGER: "",
        ConfigKeys.LANG: Defaults.LANG,
        ConfigKeys.LOG_LEVEL: Defaults.LOG_LEVEL,
        ConfigKeys.DEFAULT_IDLE_MINUTES: None,
    }


# =============================================================================
# Validation
# =============================================================================


def _valid_idle_minutes(value: Any) -> bool:
    # bool is an int subclass; reject it explicitly
    if value is None:
        return True
    return isinstance(value, int) and not isinstance(value, bool) and value >= Limits.IDLE_MINUTES_MIN


_VALIDATORS = {
    ConfigKeys.SCHEMA_VERSION: lambda v: isinstance(v, int) and not isinstance(v, bool),
    ConfigKeys.DIALOG_BACKEND: lambda v: v in DialogBackends.ALL,
    ConfigKeys.GOCRYPTFS_PATH: lambda v: isinstance(v, str),
    ConfigKeys.FILE_MANAGER: lambda v: isinstance(v, str),
    ConfigKeys.LANG: lambda v: isinstance(v, str) and bool(v),
    ConfigKeys.LOG_LEVEL: lambda v: isinstance(v, str) and v.upper() in _LOG_LEVELS,
    ConfigKeys.DEFAULT_IDLE_MINUTES: _valid_idle_minutes,
}


def merge_config(user_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Overlay user settings on the defaults.

    Known keys with an invalid value keep their default (logged as a warning).
    Unknown keys are preserved untouched so newer settings files still load.

    Args:
        user_config: Parsed settings file contents

    Returns:
        Merged settings dictionary
    """
    config = get_default_config()
    rejected: List[str] = []

    for key, value in user_config.items():
        validator = _VALIDATORS.get(key)
        if validator is None:
            config[key] = value
            continue
        if validator(value):
            config[key] = value
        else:
            rejected.append(key)
            _config_logger.warning(f"config.invalid: key={key}, value={value!r}, using default")

    if isinstance(config[ConfigKeys.LOG_LEVEL], str):
        config[ConfigKeys.LOG_LEVEL] = config[ConfigKeys.LOG_LEVEL].upper()

    return config


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from file, falling back to defaults.

    A missing file is normal (first run). An unreadable or malformed file is
    logged and ignored.

    Args:
        config_path: Settings file. Defaults to Paths.config_file().

    Returns:
        Merged settings dictionary
    """
    if config_path is None:
        from mounttool.core.paths import Paths

        config_path = Paths.config_file()
    config_path = Path(config_path)

    if not config_path.exists():
        _config_logger.debug(f"config.load: path={config_path}, exists=False, using defaults")
        return get_default_config()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        _config_logger.warning(f"config.load.failed: path={config_path}, error={e}")
        return get_default_config()

    if not isinstance(user_config, dict):
        _config_logger.warning(f"config.load.failed: path={config_path}, error=top-level value is not an object")
        return get_default_config()

    _config_logger.info(f"config.load: path={config_path}")
    return merge_config(user_config)
