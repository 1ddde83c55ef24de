# core/constants.py - SINGLE SOURCE OF TRUTH for all shared string literals
"""
All shared string constants MUST be defined here.
No other module may define these values.

Categories:
- ConfigKeys: JSON config keys
- Defaults: Default configuration values
- DialogBackends: Supported dialog implementations
- Tools: External executable names
- GocryptfsFlags: gocryptfs command-line options
- ExitCodes: Process exit statuses
- FileNames: Config and log file names
- EnvVars: Environment variables read at startup
"""


# =============================================================================
# Branding
# =============================================================================


class Branding:
    """Product naming used in titles, usage text and directory names."""

    APP_NAME = "mounttool"


# =============================================================================
# Config Keys
# =============================================================================


class ConfigKeys:
    """All configuration file keys. Use these instead of string literals."""

    SCHEMA_VERSION = "schema_version"

    # Collaborators
    DIALOG_BACKEND = "dialog_backend"
    GOCRYPTFS_PATH = "gocryptfs_path"
    FILE_MANAGER = "file_manager"

    # Presentation
    LANG = "lang"
    LOG_LEVEL = "log_level"

    # Mount behaviour
    DEFAULT_IDLE_MINUTES = "default_idle_minutes"


# =============================================================================
# Dialog Backends
# =============================================================================


class DialogBackends:
    """Values accepted for ConfigKeys.DIALOG_BACKEND."""

    AUTO = "auto"
    ZENITY = "zenity"
    QT = "qt"

    ALL = (AUTO, ZENITY, QT)


# =============================================================================
# External Tools
# =============================================================================


class Tools:
    """Executable names looked up on PATH."""

    GOCRYPTFS = "gocryptfs"
    ZENITY = "zenity"
    FUSERMOUNT = "fusermount"
    FUSERMOUNT3 = "fusermount3"
    UMOUNT = "umount"
    XDG_OPEN = "xdg-open"
    MACOS_OPEN = "open"


class GocryptfsFlags:
    """gocryptfs CLI options used for command construction (SSOT)."""

    INFO = "-info"
    IDLE = "-i"

    # gocryptfs parses durations the Go way; minutes use the "m" suffix
    IDLE_UNIT = "m"


class ZenityFlags:
    """zenity CLI options used by the zenity dialog backend."""

    ERROR = "--error"
    QUESTION = "--question"
    ENTRY = "--entry"
    HIDE_TEXT = "--hide-text"
    TITLE = "--title"
    TEXT = "--text"


# =============================================================================
# Exit Codes
# =============================================================================


class ExitCodes:
    """Process exit statuses."""

    OK = 0
    FAILURE = 1


# =============================================================================
# File Names and Environment
# =============================================================================


class FileNames:
    """Config and log file names."""

    CONFIG_JSON = "config.json"
    LOG_FILE = "mounttool.log"


class EnvVars:
    """Environment variables consulted at startup."""

    CONFIG = "MOUNTTOOL_CONFIG"
    XDG_CONFIG_HOME = "XDG_CONFIG_HOME"
    XDG_STATE_HOME = "XDG_STATE_HOME"

    # Graphical session
    DISPLAY = "DISPLAY"
    WAYLAND_DISPLAY = "WAYLAND_DISPLAY"
    QT_QPA_PLATFORM = "QT_QPA_PLATFORM"


# =============================================================================
# Defaults
# =============================================================================


class Defaults:
    """Default configuration values."""

    SCHEMA_VERSION = 1
    DIALOG_BACKEND = DialogBackends.AUTO
    LANG = "en"
    LOG_LEVEL = "INFO"
