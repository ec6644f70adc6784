import logging
import os
import sys
from datetime import datetime

from .utils.constants import LogConfig


def setup_logging(log_level: str = "INFO", log_dir: str = "") -> None:
    """Configure global logging with a stderr handler and an optional daily file.

    When ``log_dir`` is given, creates <log_dir>/<YYYY-MM-DD>.log. Call once
    at startup.
    """
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        today = datetime.now().strftime(LogConfig.FILE_DATE_FORMAT)
        handlers.append(logging.FileHandler(
            os.path.join(log_dir, f"{today}.log"), encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LogConfig.LOG_FORMAT,
        handlers=handlers,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
