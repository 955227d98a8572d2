from dataclasses import dataclass
from pathlib import Path

from .enums import WatchDirectory

LAUNCHER_PREFIX = "chrome-"
LAUNCHER_SUFFIX = "-Default.desktop"


def launcher_basename(app_id: str) -> str:
    return f"{LAUNCHER_PREFIX}{app_id}{LAUNCHER_SUFFIX}"


@dataclass(slots=True)
class LauncherEntry:
    app_id: str
    display_name: str
    exec_command: str
    description: str | None = None
    icon_ref: str = ""  # Theme icon name, absolute path, or empty
    file_path: Path | None = None

    @property
    def basename(self) -> str:
        return launcher_basename(self.app_id)


@dataclass(slots=True)
class IconAsset:
    pixels: object  # Codec-specific decoded image
    width: int
    height: int

    @property
    def min_dimension(self) -> int:
        return min(self.width, self.height)


@dataclass(slots=True, frozen=True)
class WatchEvent:
    directory: WatchDirectory
    path: Path
    created: bool = True
