"""
Logging configuration for the job tracker.

Console output plus a rotating file, and a helper that strips secrets from
values before they are logged.
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

REDACTED = "***REDACTED***"
SENSITIVE_KEYS = ("password", "token", "secret", "authorization")

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "sqlalchemy.engine", "alembic")


def setup_logging(log_level: str = "INFO", log_dir: str = "logs", log_file: str = "jobtracker.log"):
    """
    Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the rotating log file, created if missing
        log_file: File name inside log_dir
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    file_handler = RotatingFileHandler(
        log_path / log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=DATE_FORMAT))

    root.addHandler(console_handler)
    root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _mask_url(value: str) -> str:
    try:
        return make_url(value).render_as_string(hide_password=True)
    except ArgumentError:
        return REDACTED


def sanitize_log_data(data: dict) -> dict:
    """
    Copy `data` with secrets removed.

    Keys naming a credential are replaced outright; `*_url` values keep
    their host and database but lose the password. Nested dicts are
    sanitized too.
    """
    sanitized = {}
    for key, value in data.items():
        lowered = key.lower()
        if isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)
        elif any(sensitive in lowered for sensitive in SENSITIVE_KEYS):
            sanitized[key] = REDACTED
        elif lowered.endswith("_url") and isinstance(value, str):
            sanitized[key] = _mask_url(value)
        else:
            sanitized[key] = value
    return sanitized
