"""Logging for the monitor process and the one-shot CLI commands.

The ``watch`` command runs for a whole desktop session with nobody looking
at its stderr, so everything at DEBUG also goes to ``monitor.log`` under
the XDG state directory. ``webapp-desktop export-logs`` stitches the rotated
files back together for bug reports.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TextIO

from .paths import state_dir

LOG_DIR = state_dir()
LOG_FILE = LOG_DIR / "monitor.log"
CONSOLE_FORMAT = "%(levelname)s [%(name)s] %(message)s"
FILE_FORMAT = "%(asctime)s %(process)d %(levelname)s [%(name)s] %(message)s"
ROTATE_BYTES = 512 * 1024
ROTATED_FILES = 2

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_stderr_handler: logging.StreamHandler | None = None
_configured = False


def _console_level(requested: str | None) -> int:
    for candidate in (os.environ.get("LOG_LEVEL"), requested):
        if candidate and candidate.upper() in LEVEL_NAMES:
            return getattr(logging, candidate.upper())
    return logging.INFO


def configure_logging(console_level: str | None = None) -> None:
    """Attach the stderr and file handlers to the root logger, once.

    ``LOG_LEVEL`` in the environment beats *console_level*; INFO otherwise.
    """
    global _stderr_handler, _configured  # noqa: PLW0603

    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    _stderr_handler = logging.StreamHandler(sys.stderr)
    _stderr_handler.setLevel(_console_level(console_level))
    _stderr_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(_stderr_handler)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_FILE, maxBytes=ROTATE_BYTES, backupCount=ROTATED_FILES
        )
    except OSError as exc:
        logging.getLogger(__name__).warning("file logging disabled: %s", exc)
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(file_handler)

    _configured = True


def set_stderr_level(level_name: str) -> None:
    """Change the stderr threshold; unknown names are ignored."""
    if _stderr_handler is not None and level_name.upper() in LEVEL_NAMES:
        _stderr_handler.setLevel(getattr(logging, level_name.upper()))


def log_files() -> list[Path]:
    """Existing log files, oldest rotation first."""
    rotated = [Path(f"{LOG_FILE}.{n}") for n in range(ROTATED_FILES, 0, -1)]
    return [p for p in (*rotated, LOG_FILE) if p.exists()]


def _copy_logs(out: TextIO) -> None:
    for log_file in log_files():
        with log_file.open(encoding="utf-8", errors="replace") as f:
            shutil.copyfileobj(f, out)


def export_logs(dest: str | Path | None = None) -> Path | None:
    """Write all logs to *dest*, or to stdout when no destination is given."""
    if dest is None:
        _copy_logs(sys.stdout)
        return None
    dest = Path(dest)
    with dest.open("w", encoding="utf-8") as out:
        _copy_logs(out)
    return dest
