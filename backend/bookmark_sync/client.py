"""
Bookmark Sync API Client

Thin HTTP client for the bookmarks sync API, sharing one pooled
requests.Session across calls.
"""
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter

from .utils.logger import get_logger, mask_path

logger = get_logger('sync_client')


class SyncApiError(Exception):
    """Non-2xx response from the sync API"""

    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.code = code
        super().__init__(f'API Error: {status_code} - {message}')


class SyncApiClient:
    """Client for the bookmarks sync API.

    Example:
        >>> client = SyncApiClient('http://localhost:8000/api')
        >>> created = client.create_bookmarks(version='1.0.0')
        >>> client.update_bookmarks(created['id'], encrypted_payload, version='1.0.1')
        >>> client.get_bookmarks(created['id'])['bookmarks']
    """

    POOL_CONNECTIONS = 4
    POOL_MAXSIZE = 4
    MAX_RETRIES = 3
    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        api_url: str = 'http://localhost:8000/api',
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.POOL_CONNECTIONS,
                pool_maxsize=self.POOL_MAXSIZE,
                max_retries=self.MAX_RETRIES,
            )
            session.mount('http://', adapter)
            session.mount('https://', adapter)
        self._session = session

    def close(self) -> None:
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _request(self, method: str, endpoint: str, body: Optional[Dict] = None) -> Dict[str, Any]:
        url = f'{self.api_url}{endpoint}'
        try:
            response = self._session.request(
                method,
                url,
                json=body,
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"API request failed: {method} {mask_path(endpoint)}: {e}")
            raise

        if not response.ok:
            message, code = response.text, None
            try:
                error_body = response.json()
                message = error_body.get('error', message)
                code = error_body.get('code')
            except ValueError:
                pass
            logger.warning(f"API request failed: {method} {mask_path(endpoint)} -> {response.status_code} {message}")
            raise SyncApiError(response.status_code, message, code)

        return response.json()

    @staticmethod
    def _sync_path(sync_id: str, suffix: str = '') -> str:
        return f'/bookmarks/{quote(sync_id, safe="")}{suffix}'

    def create_bookmarks(
        self,
        bookmarks: Optional[str] = None,
        version: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a sync. Returns {id, version, lastUpdated}."""
        body = {}
        if bookmarks:
            body['bookmarks'] = bookmarks
        if version:
            body['version'] = version
        return self._request('POST', '/bookmarks', body)

    def get_bookmarks(self, sync_id: str) -> Dict[str, Any]:
        """Returns {bookmarks, version, lastUpdated}."""
        return self._request('GET', self._sync_path(sync_id))

    def update_bookmarks(
        self,
        sync_id: str,
        bookmarks: str,
        version: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Replace the bookmarks payload. Returns {version, lastUpdated}."""
        body = {'bookmarks': bookmarks}
        if version:
            body['version'] = version
        return self._request('PUT', self._sync_path(sync_id), body)

    def get_last_updated(self, sync_id: str) -> Dict[str, Any]:
        return self._request('GET', self._sync_path(sync_id, '/lastUpdated'))

    def get_version(self, sync_id: str) -> Dict[str, Any]:
        return self._request('GET', self._sync_path(sync_id, '/version'))

    def check_sync_health(self, sync_id: str) -> bool:
        """True if the sync exists and is reachable."""
        try:
            self.get_version(sync_id)
            return True
        except (SyncApiError, requests.RequestException):
            return False

    def get_service_info(self) -> Dict[str, Any]:
        """Returns {location, maxSyncSize, message, status, version}."""
        return self._request('GET', '/info')
