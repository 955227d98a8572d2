from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "desktop-webapp"


def xdg_data_home() -> Path:
    """Return XDG_DATA_HOME or default ~/.local/share"""
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def xdg_state_home() -> Path:
    """Return XDG_STATE_HOME or default ~/.local/state"""
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


def state_dir() -> Path:
    """Return the app state directory (XDG_STATE_HOME/desktop-webapp)"""
    return xdg_state_home() / APP_NAME


def applications_dir() -> Path:
    """Return the per-user launcher directory (XDG_DATA_HOME/applications)"""
    return xdg_data_home() / "applications"


def icons_dir() -> Path:
    """Return the per-user icon base directory (XDG_DATA_HOME/icons)"""
    return xdg_data_home() / "icons"


def desktop_dir() -> Path:
    """Return the user's Desktop folder, where the browser stages shortcuts."""
    from gi.repository import GLib

    special = GLib.get_user_special_dir(GLib.UserDirectory.DIRECTORY_DESKTOP)
    if special:
        return Path(special)
    return Path.home() / "Desktop"
