"""
Service information for the /info endpoint
"""
import re
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional

from ..config import DEFAULT_MAX_SYNC_SIZE, DEFAULT_VERSION
from ..utils.logger import get_logger

logger = get_logger('info_service')

_SCRIPT_TAG = re.compile(r'<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>', re.IGNORECASE)

FALLBACK_MESSAGE = 'xBrowserSync Service - Status unavailable'


class ServiceStatus(IntEnum):
    OFFLINE = 0
    ONLINE = 1
    DEGRADED = 2
    MAINTENANCE = 3


def strip_scripts_from_html(html: Optional[str]) -> Optional[str]:
    if not html:
        return html
    return _SCRIPT_TAG.sub('', html)


def fallback_service_info() -> Dict[str, Any]:
    return {
        'location': None,
        'maxSyncSize': DEFAULT_MAX_SYNC_SIZE,
        'message': FALLBACK_MESSAGE,
        'status': int(ServiceStatus.DEGRADED),
        'version': DEFAULT_VERSION,
    }


def get_service_info(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Build the service info payload from app config.

    Never raises; any failure yields the degraded fallback payload.
    """
    try:
        location = config.get('LOCATION')
        return {
            'location': location.upper() if location else None,
            'maxSyncSize': int(config['MAX_SYNC_SIZE']),
            'message': strip_scripts_from_html(config['STATUS_MESSAGE']),
            'status': int(ServiceStatus.ONLINE),
            'version': config['VERSION'],
        }
    except Exception as e:
        logger.opt(exception=e).error("Failed to build service info, returning fallback")
        return fallback_service_info()
