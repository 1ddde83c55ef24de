# core/limits.py - SINGLE SOURCE OF TRUTH for numeric thresholds
"""
All numeric limits MUST be defined here.
No other module may define these values.
"""


class Limits:
    """Operational limits and thresholds."""

    # ==========================================================================
    # Logging
    # ==========================================================================

    LOG_FILE_MAX_BYTES = 1024 * 1024
    LOG_FILE_BACKUP_COUNT = 3

    # ==========================================================================
    # Idle timeout bounds (minutes)
    # ==========================================================================

    # 0 disables gocryptfs' idle unmount
    IDLE_MINUTES_MIN = 0
