"""
API blueprints
"""
from .bookmarks import bookmarks_bp
from .info import info_bp
from .sync_logs import sync_logs_bp

__all__ = ['bookmarks_bp', 'info_bp', 'sync_logs_bp']
