"""
Logging setup for the service and the seed script.
`LOG_FORMAT=json` switches the stdout handler to one JSON object per line.
"""

from typing import Any, Dict
import logging.config

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def build_logging_config(level: str = "INFO", fmt: str = "text") -> Dict[str, Any]:
    formatter = "json" if fmt == "json" else "text"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {"format": TEXT_FORMAT},
            "json": {"()": "catalog.core.monitoring.JSONFormatter"},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "catalog": {"handlers": ["stdout"], "level": level.upper(), "propagate": False},
            "uvicorn": {"handlers": ["stdout"], "level": "INFO", "propagate": False},
            # SQL echo stays off unless something is wrong
            "sqlalchemy.engine": {"handlers": ["stdout"], "level": "WARNING", "propagate": False},
        },
    }


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    logging.config.dictConfig(build_logging_config(level, fmt))
