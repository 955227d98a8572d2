from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from .paths import applications_dir, desktop_dir, icons_dir

DEFAULT_LAUNCHER_COMMAND = "chromium"
DEFAULT_WM_CLASS = "chrome.google.com__webstore_category_home"
DEFAULT_FALLBACK_ICON = "chromium-browser"
DEFAULT_FAVORITES_SCHEMA = "org.gnome.shell"
DEFAULT_FAVORITES_KEY = "favorite-apps"
DEFAULT_HIGH_RES_THRESHOLD = 64


@dataclass(slots=True)
class IntegrationSettings:
    applications_dir: Path = field(default_factory=applications_dir)
    staging_dir: Path = field(default_factory=desktop_dir)
    icons_dir: Path = field(default_factory=icons_dir)
    launcher_command: str = DEFAULT_LAUNCHER_COMMAND
    wm_class: str = DEFAULT_WM_CLASS
    fallback_icon: str = DEFAULT_FALLBACK_ICON  # Used when an install-time icon cannot be saved
    favorites_schema: str = DEFAULT_FAVORITES_SCHEMA
    favorites_key: str = DEFAULT_FAVORITES_KEY
    high_res_threshold: int = DEFAULT_HIGH_RES_THRESHOLD

    def clone(self) -> "IntegrationSettings":
        return replace(self)

    def to_log_string(self) -> str:
        return (
            f"applications_dir={self.applications_dir} staging_dir={self.staging_dir} "
            f"icons_dir={self.icons_dir} launcher_command={self.launcher_command} "
            f"favorites={self.favorites_schema}:{self.favorites_key} "
            f"high_res_threshold={self.high_res_threshold}"
        )


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    value = os.environ.get(name, "").strip()
    return value or default


def _env_path(name: str) -> Path | None:
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    return Path(value).expanduser()


def load_settings_from_env() -> IntegrationSettings:
    settings = IntegrationSettings(
        launcher_command=_env_str("WEBAPP_LAUNCHER_COMMAND", DEFAULT_LAUNCHER_COMMAND),
        favorites_schema=_env_str("WEBAPP_FAVORITES_SCHEMA", DEFAULT_FAVORITES_SCHEMA),
        favorites_key=_env_str("WEBAPP_FAVORITES_KEY", DEFAULT_FAVORITES_KEY),
        high_res_threshold=_env_int("WEBAPP_HIGH_RES_THRESHOLD", DEFAULT_HIGH_RES_THRESHOLD),
    )
    apps = _env_path("WEBAPP_APPLICATIONS_DIR")
    if apps is not None:
        settings.applications_dir = apps
    staging = _env_path("WEBAPP_STAGING_DIR")
    if staging is not None:
        settings.staging_dir = staging
    icons = _env_path("WEBAPP_ICONS_DIR")
    if icons is not None:
        settings.icons_dir = icons
    return settings
