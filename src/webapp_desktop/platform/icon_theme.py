from __future__ import annotations

import logging

import gi

gi.require_version("Gtk", "4.0")
gi.require_version("Gdk", "4.0")

from gi.repository import Gdk, Gtk

logger = logging.getLogger(__name__)


class GtkIconThemeLookup:
    """Size index of the active GTK icon theme.

    GTK needs a display for theme lookups. Without one (a headless session)
    every lookup reports no sizes, so icons are treated as low resolution.
    """

    def __init__(self) -> None:
        self._theme: Gtk.IconTheme | None = None
        self._unavailable = False

    def _get_theme(self) -> Gtk.IconTheme | None:
        if self._theme is not None or self._unavailable:
            return self._theme
        display = Gdk.Display.get_default() if Gtk.init_check() else None
        if display is None:
            logger.warning("no display available, icon theme lookups disabled")
            self._unavailable = True
            return None
        self._theme = Gtk.IconTheme.get_for_display(display)
        return self._theme

    def icon_sizes(self, icon_name: str) -> list[int]:
        theme = self._get_theme()
        if theme is None:
            return []
        sizes = list(theme.get_icon_sizes(icon_name) or [])
        logger.debug("theme sizes for %s: %s", icon_name, sizes)
        return sizes
