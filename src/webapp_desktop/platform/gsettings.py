from __future__ import annotations

import logging

from gi.repository import Gio

from webapp_desktop.core.errors import PreferenceUnavailableError

logger = logging.getLogger(__name__)


class GSettingsFavorites:
    """Favorites list stored in a GSettings string-array key.

    The schema is looked up before ``Gio.Settings`` is built, since GLib
    aborts the process when asked for a schema that is not installed.
    """

    def __init__(self, schema_id: str, key: str) -> None:
        self._schema_id = schema_id
        self._key = key
        self._settings: Gio.Settings | None = None

    def _get_settings(self) -> Gio.Settings:
        if self._settings is not None:
            return self._settings
        source = Gio.SettingsSchemaSource.get_default()
        schema = source.lookup(self._schema_id, True) if source is not None else None
        if schema is None:
            raise PreferenceUnavailableError(f"schema {self._schema_id} is not installed")
        if not schema.has_key(self._key):
            raise PreferenceUnavailableError(f"schema {self._schema_id} has no key {self._key}")
        self._settings = Gio.Settings.new(self._schema_id)
        return self._settings

    def read(self) -> list[str]:
        return list(self._get_settings().get_strv(self._key))

    def write(self, values: list[str]) -> None:
        settings = self._get_settings()
        if not settings.set_strv(self._key, values):
            raise PreferenceUnavailableError(f"{self._schema_id} {self._key} is not writable")
        # Flush now; the CLI may exit right after an install
        Gio.Settings.sync()
