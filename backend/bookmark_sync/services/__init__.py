"""
Service Layer

Stores and services are created per application by ``init_services`` and
reached through the accessor functions below.
"""
from datetime import datetime

from flask import current_app

from .bookmarks_store import BookmarksStore, generate_sync_id
from .sync_log_store import SyncLogStore
from .quota_service import QuotaService, QuotaCheck, UNLIMITED
from .info_service import ServiceStatus, get_service_info, fallback_service_info

EXTENSION_KEY = 'bookmark_sync'


class Services:
    """Application-owned store and service instances"""

    def __init__(self, clock=datetime.now):
        self.bookmarks_store = BookmarksStore(clock=clock)
        self.sync_log_store = SyncLogStore(clock=clock)
        self.quota_service = QuotaService(self.sync_log_store)

    def clear(self):
        """Empty both stores."""
        self.bookmarks_store.clear()
        self.sync_log_store.clear()


def init_services(app, clock=datetime.now) -> Services:
    services = Services(clock=clock)
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services(app=None) -> Services:
    app = app or current_app
    return app.extensions[EXTENSION_KEY]


def get_bookmarks_store() -> BookmarksStore:
    return get_services().bookmarks_store


def get_sync_log_store() -> SyncLogStore:
    return get_services().sync_log_store


def get_quota_service() -> QuotaService:
    return get_services().quota_service


__all__ = [
    'BookmarksStore',
    'generate_sync_id',
    'SyncLogStore',
    'QuotaService',
    'QuotaCheck',
    'UNLIMITED',
    'ServiceStatus',
    'get_service_info',
    'fallback_service_info',
    'Services',
    'init_services',
    'get_services',
    'get_bookmarks_store',
    'get_sync_log_store',
    'get_quota_service',
]
