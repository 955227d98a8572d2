"""Enums for watched directories, monitor lifecycle and pipeline results."""

from enum import StrEnum


class WatchDirectory(StrEnum):
    """Directories observed by the reconciler."""

    APPLICATIONS = "applications"
    DESKTOP_STAGING = "desktop-staging"


class MonitorState(StrEnum):
    """Lifecycle of a DirectoryReconciler.

    UNINITIALIZED -> WATCHING -> STOPPED. A stopped reconciler is never
    restarted; build a new integration context instead.
    """

    UNINITIALIZED = "uninitialized"
    WATCHING = "watching"
    STOPPED = "stopped"


class PipelineOutcome(StrEnum):
    """What the per-file pipeline did with a launcher file."""

    IGNORED = "ignored"
    DUPLICATE = "duplicate"
    READ_FAILED = "read-failed"
    REPAIRED = "repaired"
    PARSE_FAILED = "parse-failed"
    HIGH_RESOLUTION = "high-resolution"
    NO_URL = "no-url"
    NO_LOADER = "no-loader"
    ICON_REQUESTED = "icon-requested"
    REQUEST_FAILED = "request-failed"
    RELOCATED = "relocated"
    RELOCATE_FAILED = "relocate-failed"
