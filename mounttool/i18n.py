"""
Internationalization (i18n) Module

SINGLE SOURCE OF TRUTH for all user-visible text: dialog titles and bodies,
usage and console error lines.
All strings MUST be defined here and accessed via tr() function.

- NO user-visible text literals outside this module
- Fallback: missing key in selected lang -> try 'en' -> fail loudly
"""

from typing import Dict

# =============================================================================
# Available Languages
# =============================================================================

AVAILABLE_LANGUAGES: Dict[str, str] = {
    "en": "English",
    "de": "Deutsch",
}

# =============================================================================
# Translation Table
# =============================================================================

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        # Window titles
        "dialog_title": "Encrypted Folder",
        "dialog_title_error": "Encrypted Folder - Error",

        # Console
        "usage": "Usage: {prog} [-i mins] [-o] source_enc_dir target_mount_dir",
        "usage_bad_path": "Cannot resolve path: '{path}'",
        "usage_bad_idle": "Idle timeout must be a non-negative number of minutes: '{value}'",
        "console_dialog_unavailable": "No dialog program available: {error}\nInstall zenity or PyQt6.\n{hint}",
        "console_internal_error": "Unexpected error: {error}",
        "console_aborted": "Aborted by user.",
        "console_log_disabled": "file logging disabled: {error}",

        # Tool check
        "popup_tool_missing_body": "{tool} was not found.\n\nInstall it and try again:\n{hint}",

        # Format check
        "popup_format_invalid_body": (
            "'{source}' is not a gocryptfs encrypted directory (or does not exist).\n\n"
            "Check the path, or create a new encrypted directory with:\n"
            "  mkdir -p '{source}' && gocryptfs -init '{source}'\n\n"
            "{output}"
        ),

        # Unmount
        "popup_confirm_unmount_body": "'{target}' is already mounted.\n\nUnmount it?",
        "popup_unmount_failed_body": "Could not unmount '{target}':\n\n{output}",

        # Mount
        "popup_password_body": "Password for '{source}'\n(to be mounted at '{target}'):",
        "popup_mount_failed_body": "Mounting '{source}' failed:\n\n{output}",
    },
    "de": {
        # Window titles
        "dialog_title": "Verschlüsselter Ordner",
        "dialog_title_error": "Verschlüsselter Ordner - Fehler",

        # Console
        "usage": "Aufruf: {prog} [-i min] [-o] quell_verzeichnis einhaengepunkt",
        "usage_bad_path": "Pfad kann nicht aufgelöst werden: '{path}'",
        "usage_bad_idle": "Leerlaufzeit muss eine nicht-negative Minutenzahl sein: '{value}'",
        "console_dialog_unavailable": "Kein Dialogprogramm verfügbar: {error}\nBitte zenity oder PyQt6 installieren.\n{hint}",
        "console_internal_error": "Unerwarteter Fehler: {error}",
        "console_aborted": "Vom Benutzer abgebrochen.",
        "console_log_disabled": "Protokolldatei deaktiviert: {error}",

        # Tool check
        "popup_tool_missing_body": "{tool} wurde nicht gefunden.\n\nBitte installieren und erneut versuchen:\n{hint}",

        # Format check
        "popup_format_invalid_body": (
            "'{source}' ist kein gocryptfs-Verzeichnis (oder existiert nicht).\n\n"
            "Pfad prüfen oder ein neues verschlüsseltes Verzeichnis anlegen mit:\n"
            "  mkdir -p '{source}' && gocryptfs -init '{source}'\n\n"
            "{output}"
        ),

        # Unmount
        "popup_confirm_unmount_body": "'{target}' ist bereits eingehängt.\n\nAushängen?",
        "popup_unmount_failed_body": "'{target}' konnte nicht ausgehängt werden:\n\n{output}",

        # Mount
        "popup_password_body": "Passwort für '{source}'\n(Einhängepunkt '{target}'):",
        "popup_mount_failed_body": "Einhängen von '{source}' fehlgeschlagen:\n\n{output}",
    },
}

# =============================================================================
# Global State
# =============================================================================

_current_lang: str = "en"


def set_lang(lang: str) -> str:
    """
    Select the language used by tr() when no explicit lang is passed.

    Unknown language codes fall back to English.

    Returns:
        The language actually selected
    """
    global _current_lang
    _current_lang = lang if lang in TRANSLATIONS else "en"
    return _current_lang


def get_lang() -> str:
    """Return the currently selected language code."""
    return _current_lang


def tr(key: str, *, lang: str = None, **kwargs) -> str:
    """
    Translate a string key to the specified language.

    Args:
        key: Translation key (e.g., "popup_password_body")
        lang: Target language code (default: the language set via set_lang)
        **kwargs: Format arguments for string interpolation

    Returns:
        Translated string

    Raises:
        KeyError: If key is missing in both selected lang and 'en' fallback

    Examples:
        tr("dialog_title")  # "Encrypted Folder"
        tr("usage", prog="mounttool")
    """
    if lang is None:
        lang = _current_lang

    # Try selected language
    if lang in TRANSLATIONS and key in TRANSLATIONS[lang]:
        template = TRANSLATIONS[lang][key]
        return template.format(**kwargs) if kwargs else template

    # Fallback to English
    if key in TRANSLATIONS.get("en", {}):
        template = TRANSLATIONS["en"][key]
        return template.format(**kwargs) if kwargs else template

    # Hard fail - missing key even in English
    raise KeyError(
        f"Translation key '{key}' not found in language '{lang}' "
        f"nor in fallback language 'en'. This is a programming error."
    )
