"""
Request middleware
"""
from .client_address import get_client_ip_address
from .quota import require_new_sync_allowed, record_new_sync, add_rate_limit_headers
from .security import add_security_headers

__all__ = [
    'get_client_ip_address',
    'require_new_sync_allowed',
    'record_new_sync',
    'add_rate_limit_headers',
    'add_security_headers',
]
