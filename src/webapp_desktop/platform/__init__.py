"""PyGObject-backed collaborators (GdkPixbuf, Gtk.IconTheme, Gio.Settings)."""
