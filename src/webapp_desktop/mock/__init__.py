"""Mock collaborators for development without a GNOME session, and for tests."""

from .codec import MockImageCodec, mock_data_url, mock_image
from .loader import RecordingIconLoader
from .preference import MemoryFavoritesPreference
from .theme import MockIconTheme

__all__ = [
    "MemoryFavoritesPreference",
    "MockIconTheme",
    "MockImageCodec",
    "RecordingIconLoader",
    "mock_data_url",
    "mock_image",
]
