import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path


# A universal logging format that we can use
class GhStatusesLogFormatter(logging.Formatter):
    def __init__(self, include_exceptions: bool = True) -> None:
        super().__init__("%(levelname)s %(asctime)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        self.include_exceptions = include_exceptions

    def format(self, record: logging.LogRecord) -> str:
        if not self.include_exceptions:
            record.exc_info = None
            record.exc_text = None
        return super().format(record)


lg = logging.Logger("gh_statuses", level=logging.DEBUG)


# Override the logging level for a bunch of noisy library loggers
_LOGGERS_TO_MUTE = ["httpx", "httpcore", "asyncio"]
for other_logger_name in _LOGGERS_TO_MUTE:
    logging.getLogger(other_logger_name).setLevel(logging.WARNING)


def setup_file_logging(logfile_path: Path, max_bytes: int, backup_count: int) -> None:
    """Attach a rotating file handler to the gh_statuses logger"""
    if any(
        isinstance(handler, RotatingFileHandler) and handler.baseFilename == os.path.abspath(logfile_path)
        for handler in lg.handlers
    ):
        return

    try:
        logfile_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(filename=logfile_path, maxBytes=max_bytes, backupCount=backup_count)
        file_handler.setFormatter(GhStatusesLogFormatter())
        lg.addHandler(file_handler)
    except OSError:
        lg.exception("Failed to setup file logger for gh-statuses")
