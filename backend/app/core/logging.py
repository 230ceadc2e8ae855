"""
Logging configuration shared by the API process and the Celery worker.

Application code keeps using ``logging.getLogger(__name__)``; structlog only
renders the records, as JSON for log shippers or as plain console lines.
"""

import logging
import logging.config

import structlog

from app.core.config import settings

# Applied to every stdlib record before rendering
SHARED_PROCESSORS = [
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.PositionalArgumentsFormatter(),
]


def setup_logging(level: str = None, json_logs: bool = None) -> None:
    """Configure root logging once per process"""
    level = (level or settings.LOG_LEVEL).upper()
    json_logs = settings.LOG_JSON if json_logs is None else json_logs

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.dev.ConsoleRenderer(colors=False),
                ],
                "foreign_pre_chain": SHARED_PROCESSORS,
            },
            "json": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.format_exc_info,
                    structlog.processors.JSONRenderer(),
                ],
                "foreign_pre_chain": SHARED_PROCESSORS,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_logs else "default",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        "loggers": {
            # Third-party clients are chatty at INFO
            "httpx": {"level": "WARNING"},
            "botocore": {"level": "WARNING"},
            "anthropic": {"level": "WARNING"},
        },
    })
