"""JSON-lines channel between the monitor and the browser side.

Icon requests go out on stdout::

    {"type": "icon-request", "url": "https://example.com/"}

and the browser answers (and drives installs) on stdin::

    {"type": "icon", "url": "https://example.com/", "data": "data:image/png;base64,..."}
    {"type": "install", "app_id": "...", "name": "...", "description": "...",
     "url": "https://...", "icon": "data:image/png;base64,..."}
    {"type": "uninstall", "app_id": "..."}

Replies are matched by URL only; there is no request id.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Callable, TextIO

from gi.repository import GLib

from webapp_desktop.core.services import WebappService

logger = logging.getLogger(__name__)


class StdioBridge:
    def __init__(self, service: WebappService, out: TextIO | None = None) -> None:
        self._service = service
        self._out = out if out is not None else sys.stdout
        self._watch_id: int | None = None

    def request_icon(self, url: str) -> None:
        """Icon loader: announce *url* and return immediately."""
        self._out.write(json.dumps({"type": "icon-request", "url": url}) + "\n")
        self._out.flush()

    def handle_line(self, line: str) -> bool:
        """Dispatch one inbound message. Returns False when it was rejected."""
        line = line.strip()
        if not line:
            return False
        try:
            message = json.loads(line)
        except json.JSONDecodeError as exc:
            logger.warning("malformed bridge message: %s", exc)
            return False
        if not isinstance(message, dict):
            logger.warning("bridge message is not an object: %.80s", line)
            return False

        kind = message.get("type")
        if kind == "icon":
            self._service.set_icon_for_url(message.get("url"), message.get("data"))
        elif kind == "install":
            self._service.install(
                message.get("app_id"),
                message.get("name"),
                message.get("description"),
                message.get("url"),
                message.get("icon", ""),
            )
        elif kind == "uninstall":
            self._service.uninstall(message.get("app_id"))
        else:
            logger.warning("unknown bridge message type %r", kind)
            return False
        return True

    def attach(self, fd: int, on_eof: Callable[[], None]) -> None:
        """Read messages from *fd* on the GLib main loop until it closes."""
        channel = GLib.IOChannel.unix_new(fd)

        def on_readable(source: GLib.IOChannel, condition: GLib.IOCondition) -> bool:
            if condition & GLib.IOCondition.IN:
                try:
                    status, line, _length, _terminator = source.read_line()
                except GLib.Error as exc:
                    logger.warning("bridge read failed: %s", exc.message)
                    status, line = GLib.IOStatus.ERROR, None
                if status == GLib.IOStatus.NORMAL and line:
                    self.handle_line(line)
                    return True
                if status == GLib.IOStatus.AGAIN:
                    return True
            logger.info("bridge input closed")
            self._watch_id = None
            on_eof()
            return False

        self._watch_id = GLib.io_add_watch(
            channel,
            GLib.PRIORITY_DEFAULT,
            GLib.IOCondition.IN | GLib.IOCondition.HUP | GLib.IOCondition.ERR,
            on_readable,
        )

    def detach(self) -> None:
        if self._watch_id is not None:
            GLib.source_remove(self._watch_id)
            self._watch_id = None
