from __future__ import annotations

import logging
import shlex

logger = logging.getLogger(__name__)

APP_FLAG = "--app="


def extract_app_url(exec_value: str) -> str | None:
    """Return the URL passed as ``--app=<url>`` in a launcher Exec line.

    The line is split with POSIX shell quoting. Returns None when the line
    cannot be tokenized or carries no ``--app=`` argument.
    """
    logger.debug("parsing command line %s", exec_value)
    try:
        args = shlex.split(exec_value)
    except ValueError as exc:
        logger.debug("failed parsing command line %r: %s", exec_value, exc)
        return None

    for arg in args:
        if arg.startswith(APP_FLAG):
            url = arg[len(APP_FLAG) :]
            logger.debug("found URL %s", url)
            return url
    logger.debug("no %s argument in %r", APP_FLAG, exec_value)
    return None
