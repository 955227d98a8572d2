"""Protocol stubs for the collaborators the engine talks to.

The production implementations live in :mod:`webapp_desktop.platform` and
are backed by PyGObject (GdkPixbuf, Gtk.IconTheme, Gio.Settings). The
:mod:`webapp_desktop.mock` package provides in-memory versions for
development sessions without a GNOME Shell and for tests.
"""

from __future__ import annotations

from typing import Callable, Protocol

from .models import IconAsset

# Scalable entries in an icon theme's size index
SCALABLE_ICON_SIZE = -1


class ImageCodec(Protocol):
    """Decode, scale and encode images."""

    def decode(self, data: bytes) -> IconAsset:
        """Decode *data*. Raises IconDecodeError on failure."""
        ...

    def decode_file(self, path: str) -> IconAsset:
        """Decode the image at *path*. Raises IconDecodeError on failure."""
        ...

    def scale(self, image: IconAsset, size: int) -> IconAsset:
        """Return a *size* x *size* copy of *image*."""
        ...

    def encode_png(self, image: IconAsset) -> bytes: ...


class IconThemeLookup(Protocol):
    def icon_sizes(self, icon_name: str) -> list[int]:
        """Return the sizes the active theme advertises for *icon_name*.

        ``SCALABLE_ICON_SIZE`` marks a scalable variant. Empty when the
        theme has no icon of that name.
        """
        ...


class FavoritesPreference(Protocol):
    """Persisted ordered list of launcher basenames."""

    def read(self) -> list[str]: ...

    def write(self, values: list[str]) -> None: ...


# Called with the application URL; must return without waiting for the icon.
IconLoader = Callable[[str], None]
