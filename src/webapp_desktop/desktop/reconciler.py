"""Directory reconciliation: the heart of the desktop integration.

The browser writes launcher files straight into the user's applications
directory, and sometimes stages them on the Desktop first. The reconciler
watches both directories with ``Gio.FileMonitor``, repairs the files the
browser gets wrong, moves staged shortcuts into place, pins them in the
favorites list and asks for a better icon when the installed one is small.

Everything runs on the GLib main context: monitor signals are delivered one
at a time, so the reconciler keeps no locks.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from gi.repository import Gio, GLib

from webapp_desktop.core.enums import MonitorState, PipelineOutcome, WatchDirectory
from webapp_desktop.core.errors import LauncherParseError, MonitorSetupError
from webapp_desktop.core.models import WatchEvent
from webapp_desktop.core.types import IconLoader

from . import launcher_file
from .config import IntegrationSettings
from .favorites import FavoritesListManager
from .icons import IconResolver
from .shebang import repair

logger = logging.getLogger(__name__)


def _open_monitor(path: Path) -> Gio.FileMonitor:
    return Gio.File.new_for_path(str(path)).monitor_directory(Gio.FileMonitorFlags.NONE, None)


def _digest(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class DirectoryReconciler:
    def __init__(
        self,
        settings: IntegrationSettings,
        resolver: IconResolver,
        favorites: FavoritesListManager,
    ) -> None:
        self._settings = settings
        self._resolver = resolver
        self._favorites = favorites
        self._state = MonitorState.UNINITIALIZED
        self._monitors: dict[WatchDirectory, Gio.FileMonitor] = {}
        self._handler_ids: dict[WatchDirectory, int] = {}
        self._icon_loader: IconLoader | None = None
        # basename -> digest of a staged file this reconciler copied in itself
        self._relocated: dict[str, str] = {}

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def icon_loader(self) -> IconLoader | None:
        return self._icon_loader

    # -- lifecycle ---------------------------------------------------------

    def start(self, icon_loader: IconLoader | None = None) -> None:
        """Scan the applications directory, then watch both directories.

        Raises MonitorSetupError when either directory cannot be watched or
        the applications directory cannot be listed.
        """
        if self._state is MonitorState.WATCHING:
            logger.info("monitor already initialized")
            return
        if self._state is MonitorState.STOPPED:
            logger.info("monitor was stopped; create a new integration to watch again")
            return

        apps_dir = self._settings.applications_dir
        roots = {
            WatchDirectory.APPLICATIONS: apps_dir,
            WatchDirectory.DESKTOP_STAGING: self._settings.staging_dir,
        }
        try:
            apps_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise MonitorSetupError(f"cannot create {apps_dir}: {exc}") from exc

        # Monitors exist before the scan so files created during it are not lost
        monitors: dict[WatchDirectory, Gio.FileMonitor] = {}
        for directory, path in roots.items():
            try:
                monitors[directory] = _open_monitor(path)
            except GLib.Error as exc:
                for monitor in monitors.values():
                    monitor.cancel()
                raise MonitorSetupError(f"error monitoring {path}: {exc.message}") from exc

        try:
            names = sorted(p.name for p in apps_dir.iterdir())
        except OSError as exc:
            for monitor in monitors.values():
                monitor.cancel()
            raise MonitorSetupError(f"error opening directory {apps_dir}: {exc}") from exc

        self._monitors = monitors
        self._icon_loader = icon_loader
        self._state = MonitorState.WATCHING
        logger.info("watching %s and %s", apps_dir, self._settings.staging_dir)

        for name in names:
            if launcher_file.is_launcher_name(name):
                self.process_application_file(apps_dir / name)

        for directory, monitor in monitors.items():
            self._handler_ids[directory] = monitor.connect(
                "changed", self._on_directory_changed, directory
            )

    def stop(self) -> None:
        if self._state is not MonitorState.WATCHING:
            logger.debug("monitor not running (state=%s)", self._state)
            return
        for directory, monitor in self._monitors.items():
            handler_id = self._handler_ids.get(directory)
            if handler_id is not None:
                monitor.disconnect(handler_id)
            monitor.cancel()
        self._monitors.clear()
        self._handler_ids.clear()
        self._relocated.clear()
        self._icon_loader = None
        self._resolver.clear_pending()
        self._state = MonitorState.STOPPED
        logger.info("monitor stopped")

    def set_icon_loader(self, callback: IconLoader | None) -> None:
        if self._state is not MonitorState.WATCHING:
            logger.info("monitor not initialized, ignoring icon loader")
            return
        self._icon_loader = callback

    def accept_icon_response(self, url: str) -> bool:
        """Whether an icon reply for *url* should still be acted on."""
        if self._state is MonitorState.STOPPED:
            logger.info("monitor stopped, dropping late icon for %s", url)
            return False
        if not self._resolver.take_pending(url):
            logger.debug("icon for %s was not requested by the monitor", url)
        return True

    # -- events ------------------------------------------------------------

    def _on_directory_changed(
        self,
        _monitor: Gio.FileMonitor,
        file: Gio.File,
        _other_file: Gio.File | None,
        event_type: Gio.FileMonitorEvent,
        directory: WatchDirectory,
    ) -> None:
        if event_type != Gio.FileMonitorEvent.CREATED:
            return
        path = file.get_path()
        if path is None:
            return
        self.handle_event(WatchEvent(directory=directory, path=Path(path)))

    def handle_event(self, event: WatchEvent) -> PipelineOutcome:
        if self._state is not MonitorState.WATCHING:
            logger.debug("monitor not watching, ignoring %s", event.path)
            return PipelineOutcome.IGNORED
        if not event.created:
            return PipelineOutcome.IGNORED
        if event.directory is WatchDirectory.DESKTOP_STAGING:
            return self.process_staging_file(event.path)
        return self.process_application_file(event.path)

    # -- pipelines ---------------------------------------------------------

    def process_application_file(self, path: Path) -> PipelineOutcome:
        if not launcher_file.is_launcher_name(path.name):
            return PipelineOutcome.IGNORED

        try:
            raw = path.read_bytes()
            text = raw.decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("could not read %s: %s", path, exc)
            return PipelineOutcome.READ_FAILED

        # One-shot: only the first event after a relocation can be its echo
        relocated = self._relocated.pop(path.name, None)
        if relocated is not None and relocated == _digest(raw):
            logger.debug("%s already handled when it was relocated", path.name)
            return PipelineOutcome.DUPLICATE

        result = repair(text)
        if result.needs_rewrite:
            fixed = result.fixed_text.encode("utf-8")
            try:
                path.write_bytes(fixed)
            except OSError as exc:
                logger.warning("could not write %s: %s", path, exc)
            else:
                logger.info("repaired shebang in %s", path.name)
            return PipelineOutcome.REPAIRED

        try:
            entry = launcher_file.parse(text, path)
        except LauncherParseError as exc:
            logger.warning("could not parse desktop file %s: %s", path, exc)
            return PipelineOutcome.PARSE_FAILED
        return self._resolver.resolve(entry, self._icon_loader)

    def process_staging_file(self, path: Path) -> PipelineOutcome:
        name = path.name
        if not (launcher_file.is_launcher_name(name) and name.endswith(".desktop")):
            return PipelineOutcome.IGNORED

        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.warning("could not read %s: %s", path, exc)
            return PipelineOutcome.READ_FAILED

        target = self._settings.applications_dir / name
        try:
            target.write_bytes(data)
        except OSError as exc:
            logger.warning("could not write %s: %s", target, exc)
            return PipelineOutcome.RELOCATE_FAILED

        try:
            path.unlink()
        except OSError as exc:
            logger.warning("could not delete %s: %s", path, exc)
        logger.info("moved %s into %s", name, self._settings.applications_dir)

        self._favorites.add(name)
        self.process_application_file(target)
        # The applications monitor reports the write as well
        self._relocated[name] = _digest(data)
        return PipelineOutcome.RELOCATED
