from __future__ import annotations

import logging
import os
from pathlib import Path

from webapp_desktop.core.errors import LauncherParseError
from webapp_desktop.core.models import LauncherEntry

from . import launcher_file
from .command_line import extract_app_url
from .config import IntegrationSettings
from .favorites import FavoritesListManager
from .icons import DATA_URL_PREFIX, IconResolver, decode_data_url, flat_icon_name

logger = logging.getLogger(__name__)


def _string_arg(value: object) -> str | None:
    """Return *value* when it is a non-empty string, else None."""
    if isinstance(value, str) and value:
        return value
    return None


def _valid_app_id(app_id: str) -> bool:
    return app_id not in (".", "..") and os.sep not in app_id and "\0" not in app_id


def _remove_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("could not delete %s: %s", path, exc)


class Installer:
    """Install-time writer of launchers, flat icons and favorites."""

    def __init__(
        self,
        settings: IntegrationSettings,
        resolver: IconResolver,
        favorites: FavoritesListManager,
    ) -> None:
        self._settings = settings
        self._resolver = resolver
        self._favorites = favorites

    def launcher_path(self, app_id: str) -> Path:
        return self._settings.applications_dir / launcher_file.launcher_basename(app_id)

    def install(
        self,
        app_id: object,
        name: object,
        description: object,
        command: object,
        icon_data_url: object,
    ) -> Path | None:
        app_id_arg = _string_arg(app_id)
        name_arg = _string_arg(name)
        command_arg = _string_arg(command)
        if app_id_arg is None or name_arg is None or command_arg is None:
            logger.debug("install: string expected for app id, name and command")
            return None
        if not _valid_app_id(app_id_arg):
            logger.warning("install: refusing app id %r", app_id_arg)
            return None

        entry = LauncherEntry(
            app_id=app_id_arg,
            display_name=name_arg,
            exec_command=command_arg,
            description=_string_arg(description),
        )
        if isinstance(icon_data_url, str) and icon_data_url.startswith(DATA_URL_PREFIX):
            icon_name = self._resolver.save_flat_icon(app_id_arg, icon_data_url)
            if icon_name is None:
                logger.debug("install: failed saving icon for %s", app_id_arg)
                icon_name = self._settings.fallback_icon
            entry.icon_ref = icon_name

        path = self.launcher_path(app_id_arg)
        entry.file_path = path
        text = launcher_file.build(entry, self._settings)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            logger.warning("install: failed saving %s: %s", path, exc)
            return None
        logger.info("installed %s (%s)", path.name, name_arg)

        self._favorites.add(path.name)
        return path

    def uninstall(self, app_id: object) -> None:
        app_id_arg = _string_arg(app_id)
        if app_id_arg is None:
            logger.debug("uninstall: string expected for app id")
            return
        if not _valid_app_id(app_id_arg):
            logger.warning("uninstall: refusing app id %r", app_id_arg)
            return

        path = self.launcher_path(app_id_arg)
        _remove_file(path)
        self._favorites.remove(path.name)

        _remove_file(self._resolver.flat_icon_path(app_id_arg))
        hicolor = self._settings.icons_dir / "hicolor"
        for icon in hicolor.glob(f"*/apps/{flat_icon_name(app_id_arg)}.png"):
            _remove_file(icon)
        logger.info("uninstalled %s", path.name)

    def set_icon_for_url(self, url: object, icon_data_url: object) -> list[Path]:
        """Store the icon for every launcher whose ``--app=`` value is *url*."""
        url_arg = _string_arg(url)
        icon_arg = _string_arg(icon_data_url)
        if url_arg is None or icon_arg is None:
            logger.debug("set_icon_for_url: string expected for URL and icon")
            return []
        data = decode_data_url(icon_arg)
        if data is None:
            return []

        saved: list[Path] = []
        for path in self._launchers():
            try:
                text = path.read_text(encoding="utf-8")
                entry = launcher_file.parse(text, path)
            except (OSError, UnicodeDecodeError, LauncherParseError) as exc:
                logger.debug("skipping %s: %s", path, exc)
                continue
            if extract_app_url(entry.exec_command) != url_arg:
                continue

            icon_name = flat_icon_name(entry.app_id)
            target = self._resolver.persist_icon(icon_name, data, is_base64_data_url=False)
            if target is None:
                continue
            saved.append(target)
            if entry.icon_ref != icon_name:
                self._point_icon_at(path, text, icon_name)
        if not saved:
            logger.info("no launcher takes an icon for %s", url_arg)
        return saved

    def _launchers(self) -> list[Path]:
        apps_dir = self._settings.applications_dir
        try:
            return sorted(
                p for p in apps_dir.iterdir() if launcher_file.is_launcher_name(p.name)
            )
        except OSError as exc:
            logger.warning("could not list %s: %s", apps_dir, exc)
            return []

    @staticmethod
    def _point_icon_at(path: Path, text: str, icon_name: str) -> None:
        try:
            path.write_text(launcher_file.set_icon(text, icon_name), encoding="utf-8")
        except (OSError, LauncherParseError) as exc:
            logger.warning("could not update Icon in %s: %s", path, exc)
