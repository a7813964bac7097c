"""Logging setup shared by the aggregator service and the dashboard."""
import json
import logging
import logging.config
from typing import Any, Dict

# SDK and HTTP client loggers that only matter when something goes wrong
QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3', 'httpx')

# Attributes present on every LogRecord; anything else came in via ``extra``.
_STANDARD_ATTRS = frozenset([
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'exc_info', 'exc_text',
    'stack_info', 'pathname', 'process', 'processName', 'relativeCreated',
    'thread', 'threadName', 'taskName', 'message', 'asctime',
])


def _console_logger(level: str) -> Dict[str, Any]:
    return {'level': level, 'handlers': ['console'], 'propagate': False}


def build_logging_config(log_level: str = 'INFO', log_format: str = 'text') -> Dict[str, Any]:
    """
    Build the dictConfig mapping for the given level and format.

    Everything goes to stderr so the dashboard's own output on stdout stays
    readable. SDK loggers are held at WARNING whatever ``log_level`` says.
    """
    loggers = {'waste_manager': _console_logger(log_level)}
    loggers.update({name: _console_logger('WARNING') for name in QUIET_LOGGERS})

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'text': {
                'format': '%(asctime)s %(levelname)-7s [%(name)s] %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'json': {
                '()': 'waste_manager.logger.JSONFormatter'
            }
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': log_level,
                'formatter': log_format,
                'stream': 'ext://sys.stderr'
            }
        },
        'loggers': loggers,
        'root': {
            'level': log_level,
            'handlers': ['console']
        }
    }


def setup_logging(log_level: str = 'INFO', log_format: str = 'text') -> None:
    """
    Configure logging for the process.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR
        log_format: 'text' or 'json'
    """
    logging.config.dictConfig(build_logging_config(log_level, log_format))


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    Structured fields passed through ``extra`` (source, region,
    resource_count, duration, ...) are copied to the top level.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and key not in entry
        )
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
