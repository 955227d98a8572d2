from __future__ import annotations

import logging
import signal
import sys
from typing import Sequence

from gi.repository import Gio, GLib

from webapp_desktop.bridge import StdioBridge
from webapp_desktop.core.errors import MonitorSetupError
from webapp_desktop.desktop.integration import WebappIntegration

logger = logging.getLogger(__name__)

APP_ID = "org.desktopwebapp.Monitor"


class WebappMonitorApplication(Gio.Application):
    """Keeps the directory monitor alive on the GLib main loop.

    Only the primary instance runs ``do_startup``, so a second ``watch``
    in the same session exits instead of watching twice.
    """

    def __init__(self, integration: WebappIntegration, *, use_stdio: bool = True) -> None:
        super().__init__(application_id=APP_ID, flags=Gio.ApplicationFlags.FLAGS_NONE)
        self.integration = integration
        self.bridge = StdioBridge(integration) if use_stdio else None
        self.exit_status = 0

    def do_startup(self) -> None:
        Gio.Application.do_startup(self)
        self.hold()
        loader = self.bridge.request_icon if self.bridge is not None else None
        try:
            self.integration.start_monitor(loader)
        except MonitorSetupError as exc:
            logger.critical("cannot watch launcher directories: %s", exc)
            self.exit_status = 1
            GLib.idle_add(self.quit)
            return
        if self.bridge is not None:
            self.bridge.attach(sys.stdin.fileno(), self.quit)

    def do_activate(self) -> None:
        logger.debug("monitor state: %s", self.integration.monitor_state())

    def do_shutdown(self) -> None:
        if self.bridge is not None:
            self.bridge.detach()
        self.integration.stop_monitor()
        Gio.Application.do_shutdown(self)


def run(
    integration: WebappIntegration, *, use_stdio: bool = True, argv: Sequence[str] | None = None
) -> int:
    app = WebappMonitorApplication(integration, use_stdio=use_stdio)
    for signum in (signal.SIGINT, signal.SIGTERM):
        GLib.unix_signal_add(GLib.PRIORITY_HIGH, signum, lambda: app.quit() or True)
    status = app.run(argv)
    return app.exit_status or status
