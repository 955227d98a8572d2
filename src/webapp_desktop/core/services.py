from __future__ import annotations

from pathlib import Path
from typing import Protocol

from webapp_desktop.core.enums import MonitorState
from webapp_desktop.core.types import IconLoader


class WebappService(Protocol):
    """Operations a browser-side caller can invoke.

    All string arguments come from untrusted script code. Missing or
    wrongly-typed arguments turn the call into a logged no-op.
    """

    def install(
        self,
        app_id: object,
        name: object,
        description: object,
        command: object,
        icon_data_url: object,
    ) -> None:
        """Write a launcher for *app_id* and pin it in the favorites list."""
        ...

    def uninstall(self, app_id: object) -> None:
        """Remove the launcher and icon of *app_id* and unpin it."""
        ...

    def set_icon_for_url(self, url: object, icon_data_url: object) -> list[Path]:
        """Persist a high-resolution icon for every launcher opening *url*.

        Returns the icon files written; empty when the reply was dropped.
        """
        ...

    def set_icon_loader_callback(self, callback: object) -> None:
        """Register the collaborator that fetches icons for URLs."""
        ...

    def start_monitor(self, icon_loader: IconLoader | None = None) -> None: ...

    def stop_monitor(self) -> None: ...

    def monitor_state(self) -> MonitorState: ...
