"""
Logging Configuration Module.

Sets up the root logger once per process: a size-rotated log file under the
log directory plus an optional stderr stream. Modules log through
``logging.getLogger(__name__)``.
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import List, Optional

LOG_DIR = "logs"
LOG_FILENAME = "rerail.log"
MAX_BYTES = 2 * 1024 * 1024  # 2 MB per file
BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LockTolerantRotatingFileHandler(RotatingFileHandler):
    """
    RotatingFileHandler whose rollover survives a locked log file.

    On Windows another process (an editor, a second instance) may still hold
    the file open, and renaming it raises PermissionError. The current file
    then keeps growing until the next rollover attempt succeeds.
    """

    def doRollover(self) -> None:
        try:
            super().doRollover()
        except PermissionError:
            if sys.platform != "win32":
                raise
            if self.stream is None:
                self.stream = self._open()


def _log_path(log_dir: str) -> str:
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError as e:
        print(f"Cannot create log directory {log_dir!r} ({e}); using the working dir")
        return LOG_FILENAME
    return os.path.join(log_dir, LOG_FILENAME)


def _build_handlers(
    log_path: str, level: int, log_to_console: bool
) -> List[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = []

    try:
        file_handler = LockTolerantRotatingFileHandler(
            log_path,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        print(f"File logging disabled, cannot open {log_path!r}: {e}")
    else:
        handlers.append(file_handler)

    if log_to_console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
    return handlers


def setup_logging(
    debug_mode: bool = False,
    log_to_console: bool = True,
    log_dir: Optional[str] = None,
) -> None:
    """
    Configures the root logger for an editor session.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        debug_mode: Log at DEBUG instead of INFO.
        log_to_console: Also log to stderr.
        log_dir: Directory of the rotating log file. Defaults to LOG_DIR.
    """
    level = logging.DEBUG if debug_mode else logging.INFO
    handlers = _build_handlers(_log_path(log_dir or LOG_DIR), level, log_to_console)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        if isinstance(old, LockTolerantRotatingFileHandler):
            old.close()
    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)

    root.info(
        f"Rerail session started {datetime.now().isoformat(timespec='seconds')} "
        f"(level {logging.getLevelName(level)})"
    )


def get_logger(name: str) -> logging.Logger:
    """Returns the named logger; a shorthand for entry-point scripts."""
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Flushes and closes all handlers so the log file is released."""
    logging.shutdown()
