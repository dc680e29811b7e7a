"""
Custom logging configuration to suppress health check logs
"""

import logging
import logging.config
from typing import Dict, Any


class HealthCheckFilter(logging.Filter):
    """Filter to suppress health check endpoint logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter out health check requests from uvicorn access logs."""
        if record.name == "uvicorn.access":
            message = record.getMessage()
            if "/health" in message and "GET" in message:
                return False
        return True


def get_logging_config(level: str = "INFO", stream: str = "ext://sys.stderr") -> Dict[str, Any]:
    """
    Get logging configuration with health check suppression.

    Args:
        level: Level applied to the application and uvicorn loggers
        stream: Stream handlers write to. The stdio transport owns stdout,
            so everything goes to stderr unless told otherwise.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {
                "()": HealthCheckFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": stream
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": stream,
                "filters": ["health_check_filter"]
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": level,
                "propagate": False
            },
            "mcp": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            },
            "vpp_mcp": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO", stream: str = "ext://sys.stderr") -> logging.Logger:
    """Apply the logging configuration and return the application root logger."""
    logging.config.dictConfig(get_logging_config(level, stream))
    return logging.getLogger("vpp_mcp")
