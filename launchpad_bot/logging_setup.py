"""Logging configuration.

Console logging everywhere; in production also a daily-rotating combined log
and a separate error log. Modules obtain loggers with
``logging.getLogger(__name__)``.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at DEBUG/INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "aiohttp.access", "apscheduler")


def setup_logging(level: str = "INFO", logs_dir: str | None = None, environment: str = "development") -> None:
    """Configure the root logger.

    Args:
        level: Minimum level name for the root logger.
        logs_dir: Directory of the rotating log files.
        environment: File handlers are added only in ``production``.
    """
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers: list[logging.Handler] = []

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    handlers.append(console)

    if environment == "production" and logs_dir:
        log_path = Path(logs_dir).resolve()
        log_path.mkdir(parents=True, exist_ok=True)

        combined = TimedRotatingFileHandler(
            log_path / "combined.log", when="midnight", backupCount=14, encoding="utf-8"
        )
        combined.setFormatter(formatter)
        handlers.append(combined)

        errors = TimedRotatingFileHandler(
            log_path / "error.log", when="midnight", backupCount=30, encoding="utf-8"
        )
        errors.setLevel(logging.ERROR)
        errors.setFormatter(formatter)
        handlers.append(errors)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
