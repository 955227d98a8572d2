"""Image codec backed by GdkPixbuf."""

from __future__ import annotations

import gi

gi.require_version("GdkPixbuf", "2.0")

from gi.repository import GdkPixbuf, GLib

from webapp_desktop.core.errors import IconDecodeError
from webapp_desktop.core.models import IconAsset


def _asset(pixbuf: GdkPixbuf.Pixbuf) -> IconAsset:
    return IconAsset(pixels=pixbuf, width=pixbuf.get_width(), height=pixbuf.get_height())


class PixbufCodec:
    def decode(self, data: bytes) -> IconAsset:
        loader = GdkPixbuf.PixbufLoader()
        try:
            loader.write(data)
            loader.close()
        except GLib.Error as exc:
            try:
                loader.close()
            except GLib.Error:
                pass  # Already reported by write()
            raise IconDecodeError(exc.message) from exc
        pixbuf = loader.get_pixbuf()
        if pixbuf is None:
            raise IconDecodeError("no image data")
        return _asset(pixbuf)

    def decode_file(self, path: str) -> IconAsset:
        try:
            pixbuf = GdkPixbuf.Pixbuf.new_from_file(path)
        except GLib.Error as exc:
            raise IconDecodeError(exc.message) from exc
        return _asset(pixbuf)

    def scale(self, image: IconAsset, size: int) -> IconAsset:
        pixbuf = image.pixels
        if not isinstance(pixbuf, GdkPixbuf.Pixbuf):
            raise IconDecodeError("not a pixbuf")
        if pixbuf.get_width() == size and pixbuf.get_height() == size:
            return image
        scaled = pixbuf.scale_simple(size, size, GdkPixbuf.InterpType.BILINEAR)
        if scaled is None:
            raise IconDecodeError(f"could not scale to {size}x{size}")
        return _asset(scaled)

    def encode_png(self, image: IconAsset) -> bytes:
        pixbuf = image.pixels
        if not isinstance(pixbuf, GdkPixbuf.Pixbuf):
            raise IconDecodeError("not a pixbuf")
        try:
            _ok, buffer = pixbuf.save_to_bufferv("png", [], [])
        except GLib.Error as exc:
            raise IconDecodeError(exc.message) from exc
        return bytes(buffer)
