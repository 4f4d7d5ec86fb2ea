"""
Utilities
"""
from .responses import success_response, ApiResponse
from .validators import validate_required_data, validate_string_field, validate_sync_size
from .logger import setup_logger, get_logger

__all__ = [
    'success_response',
    'ApiResponse',
    'validate_required_data',
    'validate_string_field',
    'validate_sync_size',
    'setup_logger',
    'get_logger',
]
