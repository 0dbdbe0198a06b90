"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the handler module before any other
logging is done.

Output depends on the application environment (APP_ENV):
    local       human-readable text, DEBUG
    dev         JSON, DEBUG
    prod/other  JSON, INFO

LOG_LEVEL overrides the level in every environment.

JSON format:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkalias.services.save_service",
    "message": "url added",
    "op": "lambdas.shorten_url.lambda_handler",
    "request_id": "c6af9ac6-7b61-11e6-9a41-93e8deadbeef"
}

Text format:
2025-12-26T12:00:00.000Z INFO linkalias.services.save_service: url added op=lambdas.shorten_url.lambda_handler request_id=...
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from linkalias.utils.config import app_env
from linkalias.utils.constants import LOG_LEVEL_ENV


STANDARD_ATTRS = frozenset(
    {
        'args',
        'asctime',
        'created',
        'exc_info',
        'exc_text',
        'filename',
        'funcName',
        'levelname',
        'levelno',
        'lineno',
        'module',
        'msecs',
        'message',
        'msg',
        'name',
        'pathname',
        'process',
        'processName',
        'relativeCreated',
        'stack_info',
        'thread',
        'threadName',
        'taskName',
    }
)


def _timestamp(record: logging.LogRecord) -> str:
    # fmt: off
    return datetime.fromtimestamp(record.created, tz=UTC) \
                   .isoformat(timespec='milliseconds') \
                   .replace('+00:00', 'Z')
    # fmt: on


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in record.__dict__.items() if key not in STANDARD_ATTRS}


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': _timestamp(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        log.update(_extras(record))

        if record.exc_info:
            log['exc_info'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text formatter appending LogRecord extras as key=value pairs"""

    def format(self, record: logging.LogRecord) -> str:
        line = f'{_timestamp(record)} {record.levelname} {record.name}: {record.getMessage()}'

        extras = ' '.join(f'{key}={value}' for key, value in _extras(record).items())
        if extras:
            line = f'{line} {extras}'

        if record.exc_info:
            line = f'{line}\n{self.formatException(record.exc_info)}'

        return line


class ContextAdapter(logging.LoggerAdapter):
    """LoggerAdapter which merges its context with per-call `extra` fields

    Per-call fields win over the adapter's context on key collisions.
    """

    def process(self, msg, kwargs):
        kwargs['extra'] = {**self.extra, **(kwargs.get('extra') or {})}
        return msg, kwargs


def with_context(logger: logging.Logger | logging.LoggerAdapter, **fields: Any) -> ContextAdapter:
    """Bind context fields (e.g. op, request_id) to every record of a logger

    Example:
        >>> log = with_context(logging.getLogger(__name__), op='shorten_url', request_id='abc')
        >>> log.info('url added', extra={'id': 42})  # carries op, request_id and id
    """
    if isinstance(logger, ContextAdapter):
        return ContextAdapter(logger.logger, {**logger.extra, **fields})
    return ContextAdapter(logger, fields)


def initialize_logging() -> None:
    env = app_env()
    if env == 'local':
        formatter, default_level = 'text', 'DEBUG'
    elif env == 'dev':
        formatter, default_level = 'json', 'DEBUG'
    else:
        formatter, default_level = 'json', 'INFO'

    log_level = os.getenv(LOG_LEVEL_ENV, default_level).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                },
                'text': {
                    '()': TextFormatter,
                },
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': formatter,
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
