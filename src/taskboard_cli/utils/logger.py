"""Application-wide logger writing to platformdirs user_log_dir.

All modules log through children of one ``taskboard_cli`` logger, so a
single rotating file collects command, session and board activity.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "taskboard_cli"
_LOG_FILE = "taskboard.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_LEVEL_ENV = "TASKBOARD_LOG_LEVEL"

_root_logger: logging.Logger | None = None


def _configure_root() -> logging.Logger:
    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(_APP_NAME)
    level_name = os.environ.get(_LEVEL_ENV, "DEBUG").upper()
    logger.setLevel(getattr(logging, level_name, logging.DEBUG))
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, or one of its named children.

    The file handler is attached on first call.
    """
    global _root_logger
    if _root_logger is None:
        _root_logger = _configure_root()
    if name:
        return _root_logger.getChild(name)
    return _root_logger
