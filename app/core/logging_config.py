"""
Logging setup for the API.

JSON lines (python-json-logger) when JSON_LOGS is on, plain text otherwise.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

# Third-party loggers and the level they are held at
LIBRARY_LOG_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "passlib": logging.ERROR,
    "uvicorn.access": logging.WARNING,
}


class JoblyJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that stamps every record with time, level, origin and
    the service name.
    """

    def __init__(self, *args, service: str = "jobly-api", **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = self.service

        if record.levelno >= logging.WARNING:
            log_record['location'] = f"{record.pathname}:{record.lineno} in {record.funcName}"


def setup_logging(log_level: str = "INFO", json_logs: bool = True, service: str = "jobly-api") -> None:
    """
    Configure the root logger to write to stdout.

    Args:
        log_level: Name of the root level, e.g. "DEBUG"
        json_logs: Emit JSON lines instead of plain text
        service: Value of the ``service`` field in JSON records
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(JoblyJsonFormatter('%(message)s', service=service))
    else:
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)-8s [%(name)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

    root_logger.setLevel(log_level.upper())
    root_logger.addHandler(handler)

    for name, level in LIBRARY_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(level)
