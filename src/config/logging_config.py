# src/config/logging_config.py

"""Per-run logging for veggie_finder.

Each launch writes one file in ``logs/`` named after the command that
was run and its start time, e.g. ``logs/run_search_20261018_093015.log``
for a headless search or ``logs/run_tui_20261018_093512.log`` for an
interactive session.  Only the newest ``Settings.LOG_RETENTION`` run
logs are kept; older ones are deleted when a new run starts.

The console only receives records at ``Settings.CONSOLE_LOG_LEVEL``
and above so that JSON written to stdout by the CLI stays clean.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "veggie_finder"

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_level_from_settings() -> int:
    level = logging.getLevelName(Settings.CONSOLE_LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.WARNING


def _active_log_file(root_logger: logging.Logger) -> Path | None:
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def prune_run_logs(
    logs_dir: Path, keep: int, current: Path | None = None,
) -> int:
    """Delete all but the newest *keep* run logs in *logs_dir*.

    *current* is never deleted.  A non-positive *keep* disables
    pruning.

    Returns:
        The number of files removed.
    """
    if keep <= 0:
        return 0
    run_logs = sorted(
        (p for p in logs_dir.glob("run_*.log") if p != current),
        key=lambda p: (p.stat().st_mtime, p.name),
        reverse=True,
    )
    # The current run's file counts towards the retained total
    budget = keep - 1 if current is not None else keep
    stale = run_logs[max(budget, 0):]
    for path in stale:
        path.unlink(missing_ok=True)
    return len(stale)


def setup_logging(
    command: str = "tui",
    logs_dir: Path | None = None,
    console_level: int | None = None,
) -> Path:
    """Initialise the ``veggie_finder`` logger for the current run.

    Args:
        command: Name of the command being run (``tui``, ``search``,
            ``vegetables`` or ``directions``); it becomes part of the
            log file name.
        logs_dir: Directory for run logs. Defaults to
            ``Settings.LOGS_DIR``.
        console_level: Minimum level echoed to stderr. Defaults to
            ``Settings.CONSOLE_LOG_LEVEL``.

    Returns:
        The :class:`~pathlib.Path` of the log file this run writes to.
        When logging is already configured that is the existing file.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    existing = _active_log_file(root_logger)
    if existing is not None:
        return existing

    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{command}_{stamp}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(
        console_level
        if console_level is not None
        else _console_level_from_settings()
    )
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    removed = prune_run_logs(target_dir, Settings.LOG_RETENTION, log_file)
    root_logger.info(
        "Logging initialised for '%s', run log at %s (%d old logs removed)",
        command,
        log_file,
        removed,
    )
    return log_file
