from __future__ import annotations

import logging

from gi.repository import GLib

from webapp_desktop.core.errors import PreferenceUnavailableError
from webapp_desktop.core.types import FavoritesPreference

logger = logging.getLogger(__name__)

_PREFERENCE_ERRORS = (GLib.Error, OSError, PreferenceUnavailableError)


class FavoritesListManager:
    """Read-modify-write of the shell's ordered favorites list.

    The preference is read again before every mutation and rewritten in
    full; nothing is cached between calls.
    """

    def __init__(self, preference: FavoritesPreference) -> None:
        self._preference = preference

    def list(self) -> list[str]:
        try:
            return list(self._preference.read())
        except _PREFERENCE_ERRORS as exc:
            logger.warning("could not read favorites: %s", exc)
            return []

    def contains(self, basename: str) -> bool:
        return basename in self.list()

    def add(self, basename: str) -> bool:
        """Append *basename* unless present. Returns True when a write happened."""
        try:
            current = list(self._preference.read())
        except _PREFERENCE_ERRORS as exc:
            logger.warning("could not read favorites, not adding %s: %s", basename, exc)
            return False
        if basename in current:
            logger.debug("%s already in favorites", basename)
            return False
        current.append(basename)
        return self._write(current, f"add {basename}")

    def remove(self, basename: str) -> bool:
        """Drop *basename* keeping the order of the rest. Returns True when a write happened."""
        try:
            current = list(self._preference.read())
        except _PREFERENCE_ERRORS as exc:
            logger.warning("could not read favorites, not removing %s: %s", basename, exc)
            return False
        remaining = [name for name in current if name != basename]
        if len(remaining) == len(current):
            logger.debug("%s not in favorites", basename)
            return False
        return self._write(remaining, f"remove {basename}")

    def _write(self, values: list[str], action: str) -> bool:
        try:
            self._preference.write(values)
        except _PREFERENCE_ERRORS as exc:
            logger.warning("could not write favorites (%s): %s", action, exc)
            return False
        logger.info("favorites %s", action)
        return True
