"""
Pytest Configuration and Fixtures

This module provides shared fixtures for all tests.
"""
import os
import sys
from datetime import datetime, timedelta

import pytest

# Add the backend directory to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bookmark_sync import create_app
from bookmark_sync.config import TestingConfig
from bookmark_sync.services import get_services


class FakeClock:
    """Controllable replacement for datetime.now"""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current

    def set(self, moment: datetime) -> datetime:
        self.current = moment
        return self.current


@pytest.fixture
def clock():
    """Clock starting at a fixed mid-morning local time."""
    return FakeClock(datetime(2024, 3, 14, 10, 30, 0))


@pytest.fixture
def app_config():
    """Configuration class; override in a test module to change settings."""
    return TestingConfig


@pytest.fixture
def app(app_config, clock):
    """Create application for testing (fresh in-memory database)."""
    app = create_app(app_config, clock=clock)

    with app.app_context():
        yield app
        get_services(app).clear()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def services(app):
    return get_services(app)


@pytest.fixture
def bookmarks_store(services):
    return services.bookmarks_store


@pytest.fixture
def sync_log_store(services):
    return services.sync_log_store


@pytest.fixture
def quota_service(services):
    return services.quota_service


@pytest.fixture
def sample_bookmarks():
    """Sample (client-side encrypted) bookmarks payload."""
    return '{"bookmarks":[{"title":"Example","url":"https://example.com"}]}'
