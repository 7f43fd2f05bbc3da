"""
Logging setup shared by both transports.

Everything goes to a single stderr handler: in stdio mode stdout carries
the MCP protocol. Load balancer polling of the health endpoints is dropped
from the uvicorn access log.
"""

import logging
import logging.config
from typing import Any, Dict

HEALTH_PATHS = ("/health", "/healthz")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers pinned independently of LOG_LEVEL
FIXED_LEVELS = {
    "uvicorn": "INFO",
    "uvicorn.error": "INFO",
    "uvicorn.access": "INFO",
    # kubernetes client logs full request bodies at DEBUG
    "kubernetes": "WARNING",
}


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access lines for GET requests on the health endpoints."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        message = record.getMessage()
        return not ("GET" in message and any(f"{path} " in message for path in HEALTH_PATHS))


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """dictConfig mapping for the given root level; also passed to uvicorn.run."""
    level = level.upper()
    loggers: Dict[str, Dict[str, Any]] = {name: {"level": lvl} for name, lvl in FIXED_LEVELS.items()}
    loggers["uvicorn.access"]["filters"] = ["health_check"]
    loggers["miniatlas"] = {"level": level}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"health_check": {"()": HealthCheckFilter}},
        "formatters": {"standard": {"format": LOG_FORMAT}},
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": loggers,
        "root": {"level": level, "handlers": ["stderr"]},
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
