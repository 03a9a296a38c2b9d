from __future__ import annotations

import logging
import logging.config
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
LOG_DIR = PROJECT_ROOT / "logs"
LOG_FILENAME = "carsearch.log"

_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
# ReportLab and Pillow are chatty at DEBUG level.
_QUIET_LOGGERS = ("PIL", "reportlab")


def _rotating_file(path: Path) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": "DEBUG",
        "formatter": "verbose",
        "filename": str(path),
        "maxBytes": 5 * 1024 * 1024,
        "backupCount": 5,
        "encoding": "utf-8",
    }


def build_logging_config(log_dir: Path = LOG_DIR, *, debug: bool = False) -> dict:
    """Return the ``dictConfig`` payload used by :func:`configure_logging`."""

    handlers = ["console", "app_file"]
    loggers: dict[str, dict] = {"": {"handlers": handlers, "level": "DEBUG"}}
    loggers.update(
        {name: {"handlers": handlers, "level": "INFO", "propagate": False} for name in _SERVER_LOGGERS}
    )
    loggers.update({name: {"level": "INFO"} for name in _QUIET_LOGGERS})
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG" if debug else "INFO",
                "formatter": "verbose",
            },
            "app_file": _rotating_file(log_dir / LOG_FILENAME),
        },
        "loggers": loggers,
    }


def configure_logging(log_dir: Path = LOG_DIR, *, debug: bool = False) -> None:
    """Configure application-wide logging with a rotating file handler."""

    log_dir.mkdir(parents=True, exist_ok=True)
    logging.captureWarnings(True)
    logging.config.dictConfig(build_logging_config(log_dir, debug=debug))


__all__ = ["build_logging_config", "configure_logging", "LOG_DIR"]
