# jewelry_admin/config/logging_config.py

"""Per-run logging for the admin console.

Every launch gets its own ``logs/run_YYYYMMDD_HHMMSS.log``.  All
``jewelry_admin.*`` loggers write there; how much each area records is set
by ``Settings.LOG_LEVELS`` so a noisy area (the per-keystroke record filter)
can be quietened without losing Cosmic request detail.

Headless commands also echo warnings to stderr.  The TUI owns the terminal,
so it runs with the file handler only.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from jewelry_admin.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_STDERR_FORMAT = "%(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "jewelry_admin"


def _run_log_path() -> Path:
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return logs_dir / f"run_{stamp}.log"


def _apply_area_levels() -> None:
    """Set each configured ``jewelry_admin.<area>`` logger's level."""
    for name, level_name in Settings.LOG_LEVELS.items():
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            logging.getLogger(ROOT_LOGGER).warning(
                "Ignoring unknown log level %r for %s", level_name, name
            )
            continue
        logging.getLogger(name).setLevel(level)


def setup_logging(console: bool = True) -> Path:
    """Attach the run's handlers to the ``jewelry_admin`` logger.

    Args:
        console: Also echo WARNING and above to stderr.  Pass ``False`` when
            a full-screen UI is running.

    Returns:
        Path of this run's log file.  When handlers are already attached
        (a second call in the same process) they are kept and no new file
        is opened.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG)
    _apply_area_levels()

    log_file = _run_log_path()
    if root.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, _DATE_FORMAT))
    root.addHandler(file_handler)

    if console:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(Settings.CONSOLE_LOG_LEVEL.upper())
        stderr_handler.setFormatter(logging.Formatter(_STDERR_FORMAT))
        root.addHandler(stderr_handler)

    root.info(
        "Logging to %s (console echo %s)", log_file, "on" if console else "off"
    )
    return log_file
