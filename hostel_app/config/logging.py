"""
Logging configuration for the hostel booking backend.
Provides console logging with colored, plain or JSON formatting.
"""

import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from hostel_app.config.settings import Settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def __init__(self, *args: Any, environment: str = "development", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.environment = environment

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        """Add custom fields to the log record"""
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['environment'] = self.environment

        if getattr(record, 'request_id', None):
            log_record['request_id'] = record.request_id

        if record.exc_info:
            log_record['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """Build the dictConfig mapping for the given settings."""
    if settings.LOG_FORMAT == "json":
        console_formatter = 'json'
    elif settings.is_development():
        console_formatter = 'colored'
    else:
        console_formatter = 'standard'

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {
            'request_context': {
                '()': 'hostel_app.core.logging.RequestContextFilter',
            },
        },
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s'
            },
            'json': {
                '()': CustomJsonFormatter,
                'format': '%(timestamp)s %(level)s %(logger)s %(message)s',
                'environment': settings.ENVIRONMENT,
            },
            'colored': {
                '()': 'colorlog.ColoredFormatter',
                'format': '%(log_color)s%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s',
                'log_colors': {
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white',
                }
            }
        },
        'handlers': {
            'console': {
                'level': 'DEBUG' if settings.DEBUG else settings.LOG_LEVEL,
                'class': 'logging.StreamHandler',
                'formatter': console_formatter,
                'filters': ['request_context'],
            },
        },
        'loggers': {
            '': {
                'handlers': ['console'],
                'level': settings.LOG_LEVEL,
            },
            'hostel_app': {
                'handlers': ['console'],
                'level': 'DEBUG' if settings.DEBUG else settings.LOG_LEVEL,
                'propagate': False,
            },
            'sqlalchemy.engine': {
                'handlers': ['console'],
                'level': 'INFO' if settings.DB_ECHO else 'WARNING',
                'propagate': False,
            },
            'uvicorn.access': {
                'handlers': ['console'],
                'level': 'WARNING',
                'propagate': False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(build_logging_config(settings))
    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"log_level": settings.LOG_LEVEL, "log_format": settings.LOG_FORMAT},
    )
