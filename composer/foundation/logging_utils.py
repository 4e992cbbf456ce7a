"""Operational logger setup for chain runs."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def close_operational_logger(logger: logging.Logger) -> None:
    """Detach and close every handler on `logger`, releasing any open log file."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_operational_logger(
    run_id: str,
    *,
    logger_name: str = "composer",
    level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    log_dir: str | None = None,
    fmt: str = DEFAULT_LOG_FORMAT,
) -> tuple[logging.Logger, str | None]:
    """
    Configure the logger for a single chain run.

    Logs go to stderr and, when `log_dir` is set, to `<log_dir>/<run_id>_oplog.log`
    (UTF-8). Existing handlers on the run logger are replaced.
    """

    if not run_id or not isinstance(run_id, str):
        raise ValueError("run_id must be a non-empty string")

    logger = logging.getLogger(f"{logger_name}.{run_id}")
    logger.setLevel(min(level, file_level) if log_dir else level)
    close_operational_logger(logger)

    formatter = logging.Formatter(fmt)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    log_file: str | None = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"{run_id}_oplog.log")
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    logger.info("Operational logging initialized for run %s", run_id)
    if log_file:
        logger.debug("Operational log file: %s", log_file)

    return logger, log_file
