"""
New sync statistics API
"""
from flask import Blueprint, current_app

from ..middleware import get_client_ip_address
from ..services import get_quota_service
from ..utils.responses import success_response

sync_logs_bp = Blueprint('sync_logs', __name__)


@sync_logs_bp.route('/sync-logs/stats', methods=['GET'])
def get_sync_stats():
    """
    New sync counts for the calling address

    Returns:
        {"todayCount": int, "weeklyCount": int, "totalCount": int, "dailyLimit": int}
    """
    stats = get_quota_service().get_sync_stats(
        get_client_ip_address(),
        current_app.config.get('DAILY_NEW_SYNCS_LIMIT', 0),
    )
    return success_response(stats)
