"""Logging setup shared by the API process and the maintenance scripts."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from citizen_portal.core.config import Settings

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log aggregation in production."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def build_logging_config(settings: Settings) -> dict[str, Any]:
    formatter = "json" if settings.logging.json_output else "plain"
    level = settings.logging.level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": PLAIN_FORMAT},
            "json": {"()": JSONFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
            },
        },
        "loggers": {
            "citizen_portal": {"level": level, "handlers": ["console"], "propagate": False},
            "sqlalchemy.engine": {"level": "INFO" if settings.database.echo else "WARNING"},
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
    }


def configure_logging(settings: Settings) -> None:
    logging.config.dictConfig(build_logging_config(settings))


__all__ = ["JSONFormatter", "build_logging_config", "configure_logging"]
