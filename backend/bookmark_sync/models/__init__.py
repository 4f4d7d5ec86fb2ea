"""
Database models
"""
from .bookmarks import Bookmarks
from .sync_log import NewSyncLog

__all__ = ['Bookmarks', 'NewSyncLog']
