"""
Logging for the restaurant directory.

Everything under ``restaurant_directory_api`` logs through one package
logger.  ``setup_logging`` gives that logger a console handler and,
when ``LOG_FILE`` is set, a file handler.  Records still propagate to
the root logger, so an embedding server (uvicorn, pytest) sees them too.

``create_app`` calls this once per application.  Handlers are tagged
by name, so building several apps in one process (as the tests do)
updates the existing handlers instead of stacking duplicates.  Each
call applies the requested level, and a new ``LOG_FILE`` replaces the
old file handler.
"""

import logging
from pathlib import Path
from typing import Optional


PACKAGE_LOGGER = "restaurant_directory_api"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_CONSOLE = "restaurant-directory-console"
_FILE = "restaurant-directory-file"


def _handler(logger: logging.Logger, name: str) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if handler.get_name() == name:
            return handler
    return None


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure the package logger and return it.

    Parameters
    ----------
    level : str
        Level name from ``LOG_LEVEL`` (e.g. ``"DEBUG"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path from ``LOG_FILE``.  When empty, any file handler added by
        an earlier call is removed.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if _handler(logger, _CONSOLE) is None:
        console_handler = logging.StreamHandler()
        console_handler.set_name(_CONSOLE)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    log_path = str(Path(logfile).resolve()) if logfile else None
    file_handler = _handler(logger, _FILE)
    if file_handler is not None and getattr(file_handler, "baseFilename", None) != log_path:
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
    if log_path and file_handler is None:
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(_FILE)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
