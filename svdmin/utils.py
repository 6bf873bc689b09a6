import logging
from logging.handlers import RotatingFileHandler
from typing import List, Optional

LOG_FILE_PATH = "svdmin.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3


def setup_logging(verbose: bool = False, log_file: Optional[str] = LOG_FILE_PATH) -> None:
    """Route svdmin logs to stderr and, unless ``log_file`` is empty, a rotating log.

    Safe to call repeatedly: handlers from a previous call are replaced, so
    the console stays free of duplicate lines and stdout stays reserved for
    minified output.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
        )

    formatter = logging.Formatter(fmt=LOG_FORMAT)
    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger(__name__).debug("Logging configured (level=%s, file=%s)", logging.getLevelName(level), log_file or "-")
