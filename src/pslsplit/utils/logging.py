"""JSON logging for applications that embed pslsplit.

Library modules only log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. An application calls ``setup_logging()``
once at startup to get the compile and refresh events as JSON lines.
"""
import logging
import sys
from typing import Optional, TextIO

from pythonjsonlogger import jsonlogger

from pslsplit.config import settings

LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d'


def json_handler(stream: Optional[TextIO] = None) -> logging.Handler:
    """Stream handler emitting one JSON object per record."""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(
        LOG_FORMAT,
        datefmt='%Y-%m-%dT%H:%M:%S%z',
        rename_fields={'asctime': 'timestamp', 'levelname': 'level'},
    ))
    return handler


def setup_logging(
    level: Optional[str] = None,
    stream: Optional[TextIO] = None,
    logger_name: Optional[str] = None,
) -> logging.Handler:
    """
    Route log records to a JSON handler.

    Configures the root logger by default, replacing its handlers. Pass
    logger_name="pslsplit" to leave the host application's root handlers
    alone and only capture this package's records.

    Returns:
        The installed handler
    """
    logger = logging.getLogger(logger_name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = json_handler(stream)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, (level or settings.log_level).upper()))
    if logger_name:
        logger.propagate = False
    return handler
