"""
mounttool launcher
==================

Console entry point: sets up logging and settings, then runs one toggle.

Usage:
    mounttool [-i mins] [-o] source_enc_dir target_mount_dir
    # or
    python -m mounttool ...
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from mounttool.core.config import load_config
from mounttool.core.constants import Branding, ConfigKeys, ExitCodes
from mounttool.core.limits import Limits
from mounttool.core.paths import Paths
from mounttool.i18n import set_lang, tr
from mounttool.toggle import main as toggle_main

# ============================================================
# LOGGING
# ============================================================


def setup_logging(log_file: Optional[Path] = None, level: str = "INFO") -> logging.Logger:
    """
    Set up the rotating log file for the ``mounttool`` logger hierarchy.

    If the log directory cannot be created the run continues without a log
    file; logging must never stop a mount.

    Args:
        log_file: Log file path (default: Paths.log_file())
        level: Logging level name

    Returns:
        Configured logger instance
    """
    if log_file is None:
        log_file = Paths.log_file()

    logger = logging.getLogger("mounttool")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Re-running main() in the same process must not stack handlers
    for handler in list(logger.handlers):
        if getattr(handler, "_mounttool_handler", False):
            logger.removeHandler(handler)
            handler.close()

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            str(log_file),
            maxBytes=Limits.LOG_FILE_MAX_BYTES,
            backupCount=Limits.LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        print(f"{Branding.APP_NAME}: " + tr("console_log_disabled", error=e), file=sys.stderr)
        return logger

    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    handler._mounttool_handler = True
    logger.addHandler(handler)
    return logger


# ============================================================
# MAIN
# ============================================================


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``mounttool`` console script."""
    logger = setup_logging()
    cfg = load_config()
    logger.setLevel(getattr(logging, cfg[ConfigKeys.LOG_LEVEL], logging.INFO))
    set_lang(cfg[ConfigKeys.LANG])

    try:
        exit_code = toggle_main(argv, cfg)
    except KeyboardInterrupt:
        logger.info("launcher.interrupted")
        print("\n" + tr("console_aborted"), file=sys.stderr)
        exit_code = ExitCodes.FAILURE
    except Exception as e:
        logger.exception("launcher.unhandled_exception")
        print(tr("console_internal_error", error=e), file=sys.stderr)
        exit_code = ExitCodes.FAILURE

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
