from .enums import MonitorState, PipelineOutcome, WatchDirectory
from .errors import (
    IconDecodeError,
    LauncherParseError,
    MonitorSetupError,
    PreferenceUnavailableError,
    WebappError,
)
from .models import IconAsset, LauncherEntry, WatchEvent
from .services import WebappService
from .types import (
    SCALABLE_ICON_SIZE,
    FavoritesPreference,
    IconLoader,
    IconThemeLookup,
    ImageCodec,
)

__all__ = [
    "FavoritesPreference",
    "IconAsset",
    "IconDecodeError",
    "IconLoader",
    "IconThemeLookup",
    "ImageCodec",
    "LauncherEntry",
    "LauncherParseError",
    "MonitorSetupError",
    "MonitorState",
    "PipelineOutcome",
    "PreferenceUnavailableError",
    "SCALABLE_ICON_SIZE",
    "WatchDirectory",
    "WatchEvent",
    "WebappError",
    "WebappService",
]
