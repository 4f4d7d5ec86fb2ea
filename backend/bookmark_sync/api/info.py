"""
Service info API
"""
from flask import Blueprint, current_app

from ..services import get_service_info
from ..utils.responses import ApiResponse

info_bp = Blueprint('info', __name__)


@info_bp.route('/info', methods=['GET'])
def service_info():
    """
    Service information

    Returns:
        {"location": ..., "maxSyncSize": ..., "message": ..., "status": ..., "version": ...}

    status: 0 offline, 1 online, 2 degraded, 3 maintenance
    """
    return ApiResponse.success(get_service_info(current_app.config))
