"""
Logging setup

loguru sinks plus helpers for request and sync lifecycle logging.
A sync id is the only credential guarding a sync's bookmarks, so ids are
masked in everything these helpers write, request paths included.
"""
import logging
import os
import re
import sys
from typing import Optional

from loguru import logger

# Requests slower than this are logged as warnings
SLOW_REQUEST_MS = 1000

# Visible prefix of a masked sync id
SYNC_ID_VISIBLE_CHARS = 8

# Libraries logging through the stdlib; capped to WARNING unless debugging
LIBRARY_LOGGERS = ('werkzeug', 'apscheduler', 'sqlalchemy.engine')

# Markup is stripped for sinks added with colorize=False
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_SYNC_PATH_RE = re.compile(r'(/bookmarks/)([^/?]+)')


def setup_logger(
    log_level: str = 'INFO',
    log_file: Optional[str] = None,
    rotation: str = '10 MB',
    retention: str = '7 days'
) -> None:
    """
    Configure the logging sinks

    Replaces any earlier sinks, so calling it once per app is safe.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path, rotated and zipped
        rotation: Log file rotation size
        retention: Log file retention period
    """
    logger.remove()

    level = os.environ.get('LOG_LEVEL', log_level).upper()

    logger.configure(extra={'name': 'bookmark_sync'})
    logger.add(sys.stderr, format=LOG_FORMAT, level=level, colorize=True, backtrace=True, diagnose=False)

    if log_file:
        logger.add(
            log_file,
            format=LOG_FORMAT,
            level=level,
            colorize=False,
            rotation=rotation,
            retention=retention,
            compression='zip',
            encoding='utf-8',
        )

    _cap_library_loggers(level)
    logger.info(f"Logger initialized with level: {level}")


def _cap_library_loggers(level: str) -> None:
    # werkzeug's access lines duplicate log_api_request and show raw sync ids
    library_level = logging.DEBUG if level == 'DEBUG' else logging.WARNING
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str = None):
    """Get a logger bound to a component name"""
    if name:
        return logger.bind(name=name)
    return logger


def mask_sync_id(sync_id: Optional[str]) -> str:
    """'0123456789abcdef' -> '01234567...'"""
    if not sync_id:
        return '-'
    if len(sync_id) <= SYNC_ID_VISIBLE_CHARS:
        return '...'
    return f'{sync_id[:SYNC_ID_VISIBLE_CHARS]}...'


def mask_path(path: str) -> str:
    """Mask the sync id segment of a /bookmarks/<id>/... path."""
    return _SYNC_PATH_RE.sub(lambda m: m.group(1) + mask_sync_id(m.group(2)), path)


def log_api_request(method: str, path: str, client_address: str, user_agent: str):
    logger.bind(name='request').debug(
        f"API Request: {method} {mask_path(path)} - IP: {client_address} - UA: {user_agent}"
    )


def log_api_response(method: str, path: str, status: int, duration_ms: float):
    """Log a finished request, as a warning when it was slow"""
    request_logger = logger.bind(name='request')
    message = f"{method} {mask_path(path)} -> {status} ({duration_ms:.2f}ms)"
    if duration_ms > SLOW_REQUEST_MS:
        request_logger.warning(f"Slow request: {message}")
    else:
        request_logger.debug(f"API Response: {message}")


def log_sync_event(sync_id: str, event: str, details: dict = None):
    """Log a sync lifecycle event (created, updated)"""
    msg = f"Sync Event: sync={mask_sync_id(sync_id)}, event={event}"
    if details:
        msg += f", details={details}"
    logger.bind(name='sync').info(msg)
