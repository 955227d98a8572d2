"""Exception types raised by webapp_desktop.

Only :class:`MonitorSetupError` ever reaches callers of the public API;
the other errors are raised and handled inside the package so that a bad
launcher or icon never aborts more than the file it belongs to.
"""

from __future__ import annotations


class WebappError(Exception):
    """Base class for all package errors."""


class MonitorSetupError(WebappError):
    """The root directories could not be watched or scanned."""


class LauncherParseError(WebappError):
    """Launcher text is not a valid desktop entry."""


class IconDecodeError(WebappError):
    """Image payload could not be decoded."""


class PreferenceUnavailableError(WebappError):
    """The favorites preference cannot be read or written."""
