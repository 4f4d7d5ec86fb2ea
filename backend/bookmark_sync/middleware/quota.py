"""
New sync gate
Protects sync creation endpoints with the enabled flag and the daily quota
"""
from dataclasses import replace
from functools import wraps

from flask import current_app, g

from ..services import get_quota_service
from ..utils.errors import NewSyncsForbiddenError, NewSyncsLimitExceededError
from ..utils.timeutils import to_iso_utc
from .client_address import get_client_ip_address


def require_new_sync_allowed(f):
    """
    Gate a sync creation endpoint

    Rejects with 403 when the service is not accepting new syncs and with
    429 when the caller's daily quota is used up. The quota result is kept
    on ``g.quota`` for the rate limit headers.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        if not current_app.config.get('NEW_SYNCS_ENABLED', True):
            raise NewSyncsForbiddenError()

        client_address = get_client_ip_address()
        daily_limit = current_app.config.get('DAILY_NEW_SYNCS_LIMIT', 0)
        quota = get_quota_service().check_quota(client_address, daily_limit)

        g.client_address = client_address
        g.quota = quota

        if not quota.allowed:
            raise NewSyncsLimitExceededError(
                f'Daily new syncs limit exceeded. Limit: {quota.limit}, Remaining: {quota.remaining}'
            )

        return f(*args, **kwargs)
    return decorated


def record_new_sync():
    """
    Record a successful sync creation against the caller's quota

    Must only be called after the sync record was stored. Does nothing when
    the daily limit is disabled.
    """
    quota = g.get('quota')
    if quota is None or not quota.enabled:
        return None

    entry = get_quota_service().record_creation(g.client_address)
    if entry is not None:
        g.quota = replace(quota, remaining=max(0, quota.remaining - 1))
    return entry


def add_rate_limit_headers(response):
    """after_request hook: expose the quota state on gated requests"""
    quota = g.get('quota')
    if quota is None or not quota.enabled:
        return response

    reset = get_quota_service().reset_time()
    response.headers['X-RateLimit-Limit'] = str(quota.limit)
    response.headers['X-RateLimit-Remaining'] = str(quota.remaining)
    response.headers['X-RateLimit-Reset'] = to_iso_utc(reset)
    return response
