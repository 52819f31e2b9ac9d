import copy
import logging
import logging.config
from pathlib import Path
from typing import Any

from logparams.app.core.settings import settings

FORMATTERS = {
    "dev": {
        "format": "%(asctime)s | %(levelname)-7s | %(request_id)s | %(class_method)s - %(message)s",
    },
    "json": {
        "()": "pythonjsonlogger.json.JsonFormatter",
        "fmt": "%(asctime)s %(levelname)s %(name)s %(class_method)s %(request_id)s %(message)s",
    },
}

FILTERS = {
    "class_method": {"()": "logparams.utils.logging_filters.ClassMethodFilter"},
    "request_id": {"()": "logparams.utils.logging_filters.RequestIdFilter"},
}


def build_logging_config() -> dict[str, Any]:
    """Assemble a dictConfig mapping from the current settings."""
    log_format = settings.log_format if settings.log_format in FORMATTERS else "dev"
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": log_format,
            "filters": ["class_method", "request_id"],
        },
    }
    if settings.enable_file_logging:
        handlers["file_app"] = {
            "class": "logging.FileHandler",
            "level": "INFO",
            "filename": settings.log_file_path,
            "formatter": "json",
            "filters": ["class_method", "request_id"],
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": copy.deepcopy(FORMATTERS),
        "filters": copy.deepcopy(FILTERS),
        "handlers": handlers,
        "loggers": {
            # Per-module control Example
            # "logparams.params": {
            #     "level": "DEBUG",
            #     "handlers": ["console"],
            #     "propagate": False,
            # },
            # Default
            "": {"level": settings.log_level.upper(), "handlers": list(handlers)},
        },
    }


def configure_logging():
    if settings.enable_file_logging:
        Path(settings.log_file_path).parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config())
