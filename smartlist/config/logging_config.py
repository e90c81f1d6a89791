# smartlist/config/logging_config.py

"""Logging for a smartlist run.

A run writes everything under the ``smartlist`` namespace to
``logs/run_<timestamp>.log``.  Stderr shares the terminal with the rich
status console, so it only shows records at ``Settings.LOG_LEVEL``
(``SMARTLIST_LOG_LEVEL``, default WARNING) or INFO with ``--verbose``.
Chatty third-party loggers (``Settings.QUIET_LOGGERS``) are capped at
WARNING so HTTP internals never drown the price output.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from smartlist.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


def console_level(verbose: bool = False) -> int:
    """Resolve the stderr level from ``Settings.LOG_LEVEL`` and *verbose*."""
    level = logging.getLevelName(Settings.LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.WARNING
    if verbose:
        level = min(level, logging.INFO)
    return level


def setup_logging(verbose: bool = False) -> Path:
    """Attach the run file and stderr handlers to the ``smartlist`` logger.

    Returns the path of this run's log file.  When handlers are already
    attached only the stderr level is updated.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    root_logger = logging.getLogger("smartlist")
    root_logger.setLevel(logging.DEBUG)

    for name in Settings.QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if root_logger.handlers:
        for handler in root_logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(console_level(verbose))
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level(verbose))
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.debug(
        "Logging to %s (stderr level %s)",
        log_file,
        logging.getLevelName(console_handler.level),
    )
    return log_file
