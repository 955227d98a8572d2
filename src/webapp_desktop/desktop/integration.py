from __future__ import annotations

import logging
import os
from pathlib import Path

from webapp_desktop.core.enums import MonitorState
from webapp_desktop.core.services import WebappService
from webapp_desktop.core.types import (
    FavoritesPreference,
    IconLoader,
    IconThemeLookup,
    ImageCodec,
)

from .config import IntegrationSettings, load_settings_from_env
from .favorites import FavoritesListManager
from .icons import IconResolver
from .installer import Installer
from .reconciler import DirectoryReconciler

logger = logging.getLogger(__name__)


def use_mock_backends() -> bool:
    return os.environ.get("WEBAPP_MOCK", "0") == "1"


class WebappIntegration(WebappService):
    """Context object tying the engine together.

    One instance per process normally; tests build as many as they like.
    Collaborators default to the PyGObject implementations, or to the
    in-memory mocks when ``WEBAPP_MOCK=1``.
    """

    def __init__(
        self,
        settings: IntegrationSettings | None = None,
        *,
        preference: FavoritesPreference | None = None,
        codec: ImageCodec | None = None,
        theme: IconThemeLookup | None = None,
    ) -> None:
        self._settings = settings or load_settings_from_env()
        mock = use_mock_backends()

        if preference is None:
            if mock:
                from webapp_desktop.mock import MemoryFavoritesPreference

                preference = MemoryFavoritesPreference()
            else:
                from webapp_desktop.platform.gsettings import GSettingsFavorites

                preference = GSettingsFavorites(
                    self._settings.favorites_schema, self._settings.favorites_key
                )
        if codec is None:
            if mock:
                from webapp_desktop.mock import MockImageCodec

                codec = MockImageCodec()
            else:
                from webapp_desktop.platform.pixbuf import PixbufCodec

                codec = PixbufCodec()
        if theme is None:
            if mock:
                from webapp_desktop.mock import MockIconTheme

                theme = MockIconTheme()
            else:
                from webapp_desktop.platform.icon_theme import GtkIconThemeLookup

                theme = GtkIconThemeLookup()

        self.favorites = FavoritesListManager(preference)
        self.resolver = IconResolver(self._settings, codec, theme)
        self.installer = Installer(self._settings, self.resolver, self.favorites)
        self.reconciler = DirectoryReconciler(self._settings, self.resolver, self.favorites)
        logger.debug("integration settings: %s", self._settings.to_log_string())

    @property
    def settings(self) -> IntegrationSettings:
        return self._settings

    def install(
        self,
        app_id: object,
        name: object,
        description: object,
        command: object,
        icon_data_url: object,
    ) -> None:
        logger.debug("install called")
        self.installer.install(app_id, name, description, command, icon_data_url)

    def uninstall(self, app_id: object) -> None:
        logger.debug("uninstall called")
        self.installer.uninstall(app_id)

    def set_icon_for_url(self, url: object, icon_data_url: object) -> list[Path]:
        logger.debug("set_icon_for_url called")
        if not isinstance(url, str) or not url:
            logger.debug("set_icon_for_url: string expected for URL")
            return []
        if not self.reconciler.accept_icon_response(url):
            return []
        return self.installer.set_icon_for_url(url, icon_data_url)

    def set_icon_loader_callback(self, callback: object) -> None:
        logger.debug("set_icon_loader_callback called")
        if not callable(callback):
            logger.debug("set_icon_loader_callback: callable expected")
            return
        self.reconciler.set_icon_loader(callback)

    def start_monitor(self, icon_loader: IconLoader | None = None) -> None:
        self.reconciler.start(icon_loader)

    def stop_monitor(self) -> None:
        self.reconciler.stop()

    def monitor_state(self) -> MonitorState:
        return self.reconciler.state
