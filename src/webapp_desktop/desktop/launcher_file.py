"""Desktop launcher (de)serialization on top of GLib.KeyFile."""

from __future__ import annotations

import logging
from pathlib import Path

from gi.repository import GLib

from webapp_desktop.core.errors import LauncherParseError
from webapp_desktop.core.models import (
    LAUNCHER_PREFIX,
    LAUNCHER_SUFFIX,
    LauncherEntry,
    launcher_basename,  # noqa: F401
)

from .config import IntegrationSettings

logger = logging.getLogger(__name__)

DESKTOP_GROUP = "Desktop Entry"
CATEGORIES = ["Network", "WebBrowser"]


def is_launcher_name(basename: str) -> bool:
    return basename.startswith(LAUNCHER_PREFIX)


def app_id_from_basename(basename: str) -> str:
    """Recover the app id from ``chrome-<id>-Default.desktop``.

    Browser-written names without the profile suffix (``chrome-<id>.desktop``)
    are accepted too.
    """
    stem = basename[len(LAUNCHER_PREFIX) :] if is_launcher_name(basename) else basename
    for suffix in (LAUNCHER_SUFFIX, ".desktop"):
        if stem.endswith(suffix):
            return stem[: -len(suffix)]
    return stem


def _load(text: str, flags: GLib.KeyFileFlags = GLib.KeyFileFlags.NONE) -> GLib.KeyFile:
    key_file = GLib.KeyFile()
    try:
        key_file.load_from_data(text, len(text.encode("utf-8")), flags)
    except GLib.Error as exc:
        raise LauncherParseError(exc.message) from exc
    if not key_file.has_group(DESKTOP_GROUP):
        raise LauncherParseError(f"missing [{DESKTOP_GROUP}] group")
    return key_file


def _optional_string(key_file: GLib.KeyFile, key: str) -> str | None:
    if not key_file.has_key(DESKTOP_GROUP, key):
        return None
    return key_file.get_string(DESKTOP_GROUP, key)


def build(entry: LauncherEntry, settings: IntegrationSettings) -> str:
    """Render *entry* as desktop-entry text."""
    key_file = GLib.KeyFile()
    key_file.set_string(DESKTOP_GROUP, "Name", entry.display_name)
    key_file.set_string(DESKTOP_GROUP, "GenericName", entry.display_name)
    if entry.description:
        key_file.set_string(DESKTOP_GROUP, "Comment", entry.description)
    key_file.set_string(
        DESKTOP_GROUP, "Exec", f'{settings.launcher_command} "--app={entry.exec_command}"'
    )
    key_file.set_boolean(DESKTOP_GROUP, "Terminal", False)
    key_file.set_string_list(DESKTOP_GROUP, "Categories", CATEGORIES)
    key_file.set_string(DESKTOP_GROUP, "Type", "Application")
    key_file.set_boolean(DESKTOP_GROUP, "StartupNotify", True)
    key_file.set_string(DESKTOP_GROUP, "StartupWMClass", settings.wm_class)
    if entry.icon_ref:
        key_file.set_string(DESKTOP_GROUP, "Icon", entry.icon_ref)
    data, _length = key_file.to_data()
    return data


def parse(text: str, file_path: Path | None = None) -> LauncherEntry:
    """Parse desktop-entry *text*. Raises LauncherParseError."""
    key_file = _load(text)
    try:
        name = key_file.get_string(DESKTOP_GROUP, "Name")
        exec_command = key_file.get_string(DESKTOP_GROUP, "Exec")
    except GLib.Error as exc:
        raise LauncherParseError(exc.message) from exc
    app_id = app_id_from_basename(file_path.name) if file_path is not None else ""
    return LauncherEntry(
        app_id=app_id,
        display_name=name,
        exec_command=exec_command,
        description=_optional_string(key_file, "Comment"),
        icon_ref=_optional_string(key_file, "Icon") or "",
        file_path=file_path,
    )


def set_icon(text: str, icon_ref: str) -> str:
    """Return *text* with its Icon key replaced, keeping comments and translations."""
    key_file = _load(
        text, GLib.KeyFileFlags.KEEP_COMMENTS | GLib.KeyFileFlags.KEEP_TRANSLATIONS
    )
    key_file.set_string(DESKTOP_GROUP, "Icon", icon_ref)
    data, _length = key_file.to_data()
    return data
