"""High-resolution icon resolution and persistence.

Launchers written by the browser usually reference small (16-48px) icons.
The resolver measures the icon a launcher currently has and, when it is
below the high-resolution threshold, asks the icon loader (the browser side)
for a better one. Replies arrive later through :meth:`IconResolver.persist_icon`
and are stored in the per-user ``hicolor`` theme so the shell picks them up.
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
from pathlib import Path

from webapp_desktop.core.enums import PipelineOutcome
from webapp_desktop.core.errors import IconDecodeError
from webapp_desktop.core.models import LauncherEntry
from webapp_desktop.core.types import (
    SCALABLE_ICON_SIZE,
    IconLoader,
    IconThemeLookup,
    ImageCodec,
)

from .command_line import extract_app_url
from .config import IntegrationSettings
from .launcher_file import LAUNCHER_PREFIX

logger = logging.getLogger(__name__)

ICON_SIZE_LADDER = (256, 128, 48, 32, 24, 16)
SCALABLE_SIZE_PX = 256
DATA_URL_PREFIX = "data:image/png;base64,"


def bucket_size(min_dimension: int) -> int:
    """Largest theme size bucket not exceeding *min_dimension* (at least 16)."""
    for size in ICON_SIZE_LADDER:
        if min_dimension >= size:
            return size
    return ICON_SIZE_LADDER[-1]


def decode_data_url(text: str) -> bytes | None:
    """Return the bytes of a ``data:image/png;base64,`` URL, or None."""
    if not text.startswith(DATA_URL_PREFIX):
        logger.debug("not a PNG data URL: %.40s", text)
        return None
    try:
        return base64.b64decode(text[len(DATA_URL_PREFIX) :], validate=True)
    except (binascii.Error, ValueError) as exc:
        logger.warning("invalid base64 icon payload: %s", exc)
        return None


def flat_icon_name(app_id: str) -> str:
    return f"{LAUNCHER_PREFIX}{app_id}"


class IconResolver:
    def __init__(
        self,
        settings: IntegrationSettings,
        codec: ImageCodec,
        theme: IconThemeLookup,
    ) -> None:
        self._settings = settings
        self._codec = codec
        self._theme = theme
        self._pending: set[str] = set()

    # -- measuring ---------------------------------------------------------

    def current_icon_size_px(self, entry: LauncherEntry) -> int:
        icon_ref = entry.icon_ref
        if not icon_ref:
            return 0
        if os.path.isabs(icon_ref):
            try:
                asset = self._codec.decode_file(icon_ref)
            except IconDecodeError as exc:
                logger.debug("could not load icon %s: %s", icon_ref, exc)
                return 0
            return asset.min_dimension

        sizes = self._theme.icon_sizes(icon_ref)
        if not sizes:
            return 0
        return max(SCALABLE_SIZE_PX if s == SCALABLE_ICON_SIZE else s for s in sizes)

    def is_high_resolution(self, size_px: int) -> bool:
        return size_px >= self._settings.high_res_threshold

    # -- requesting --------------------------------------------------------

    def resolve(self, entry: LauncherEntry, loader: IconLoader | None) -> PipelineOutcome:
        """Ask *loader* for a better icon when *entry*'s icon is too small."""
        size = self.current_icon_size_px(entry)
        if self.is_high_resolution(size):
            logger.debug("%s already has a %dpx icon", entry.basename, size)
            return PipelineOutcome.HIGH_RESOLUTION

        url = extract_app_url(entry.exec_command)
        if url is None:
            return PipelineOutcome.NO_URL
        if loader is None:
            logger.info("no icon loader registered, cannot request icon for %s", url)
            return PipelineOutcome.NO_LOADER

        try:
            loader(url)
        except Exception as exc:  # noqa: BLE001
            logger.warning("icon loader failed for %s: %s", url, exc)
            return PipelineOutcome.REQUEST_FAILED
        self._pending.add(url)
        logger.info("requested icon for %s (current size %dpx)", url, size)
        return PipelineOutcome.ICON_REQUESTED

    def take_pending(self, url: str) -> bool:
        """Forget *url* as outstanding. Returns False for unsolicited replies."""
        if url in self._pending:
            self._pending.discard(url)
            return True
        return False

    def clear_pending(self) -> None:
        self._pending.clear()

    @property
    def pending(self) -> frozenset[str]:
        return frozenset(self._pending)

    # -- persisting --------------------------------------------------------

    def themed_icon_path(self, name: str, size: int) -> Path:
        return self._settings.icons_dir / "hicolor" / f"{size}x{size}" / "apps" / f"{name}.png"

    def flat_icon_path(self, app_id: str) -> Path:
        return self._settings.icons_dir / f"{flat_icon_name(app_id)}.png"

    def persist_icon(
        self, name: str, payload: str | bytes, is_base64_data_url: bool
    ) -> Path | None:
        """Store *payload* as theme icon *name* in the matching size bucket.

        Never raises; failures are logged and yield None.
        """
        if is_base64_data_url:
            if not isinstance(payload, str):
                logger.warning("icon payload for %s is not a data URL", name)
                return None
            data = decode_data_url(payload)
            if data is None:
                return None
        elif isinstance(payload, bytes):
            data = payload
        else:
            logger.warning("icon payload for %s is not bytes", name)
            return None

        try:
            asset = self._codec.decode(data)
            size = bucket_size(asset.min_dimension)
            png = self._codec.encode_png(self._codec.scale(asset, size))
        except IconDecodeError as exc:
            logger.warning("could not decode icon for %s: %s", name, exc)
            return None

        target = self.themed_icon_path(name, size)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(png)
        except OSError as exc:
            logger.warning("could not write icon %s: %s", target, exc)
            return None
        logger.info("saved %dx%d icon %s", size, size, target)
        return target

    def save_flat_icon(self, app_id: str, data_url: str) -> str | None:
        """Save an install-time icon as ``icons/chrome-<app_id>.png``.

        Returns the icon name to reference from the launcher, or None.
        """
        data = decode_data_url(data_url)
        if data is None:
            return None
        target = self.flat_icon_path(app_id)
        try:
            png = self._codec.encode_png(self._codec.decode(data))
        except IconDecodeError as exc:
            logger.debug("could not decode install icon for %s: %s", app_id, exc)
            return None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(png)
        except OSError as exc:
            logger.debug("failed saving %s: %s", target, exc)
            return None
        return flat_icon_name(app_id)
