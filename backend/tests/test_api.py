"""
API Tests

Tests for REST API endpoints.
"""
import json
from types import SimpleNamespace

import pytest

import bookmark_sync.services.sync_log_store as sync_log_module
from bookmark_sync.config import TestingConfig
from bookmark_sync.extensions import db
from bookmark_sync.services import get_services


def post_json(client, url, body, **kwargs):
    return client.post(url, data=json.dumps(body), content_type='application/json', **kwargs)


def put_json(client, url, body, **kwargs):
    return client.put(url, data=json.dumps(body), content_type='application/json', **kwargs)


class TestHealthCheck:
    """Tests for health check endpoint."""

    def test_health_check(self, client):
        response = client.get('/api/health')

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['status'] == 'healthy'


class TestCreateBookmarks:
    """Tests for POST /api/bookmarks."""

    def test_create_with_version_only(self, client):
        """Test creating an empty sync from a version."""
        response = post_json(client, '/api/bookmarks', {'version': '1.0.0'})

        assert response.status_code == 201
        data = json.loads(response.data)
        assert len(data['id']) == 32
        assert data['version'] == '1.0.0'
        assert data['lastUpdated'].endswith('Z')

        get_response = client.get(f"/api/bookmarks/{data['id']}")
        assert get_response.status_code == 200
        assert json.loads(get_response.data) == {
            'bookmarks': '',
            'version': '1.0.0',
            'lastUpdated': data['lastUpdated'],
        }

    def test_create_with_bookmarks(self, client, sample_bookmarks):
        """Test creating a sync with data round trips."""
        response = post_json(client, '/api/bookmarks', {
            'bookmarks': sample_bookmarks,
            'version': '1.0.0',
        })

        assert response.status_code == 201
        sync_id = json.loads(response.data)['id']

        data = json.loads(client.get(f'/api/bookmarks/{sync_id}').data)
        assert data['bookmarks'] == sample_bookmarks
        assert data['version'] == '1.0.0'

    def test_create_with_bookmarks_no_version(self, client, sample_bookmarks):
        response = post_json(client, '/api/bookmarks', {'bookmarks': sample_bookmarks})

        assert response.status_code == 201
        assert json.loads(response.data)['version'] is None

    def test_create_missing_fields(self, client):
        """Test creating without version or bookmarks fails."""
        response = post_json(client, '/api/bookmarks', {})

        assert response.status_code == 400
        assert json.loads(response.data) == {
            'error': 'bookmarks is required',
            'code': 'VALIDATION_ERROR',
        }

    def test_create_empty_body(self, client):
        response = client.post('/api/bookmarks')

        assert response.status_code == 400
        assert json.loads(response.data)['code'] == 'VALIDATION_ERROR'

    def test_create_invalid_json(self, client):
        response = client.post('/api/bookmarks', data='{not json', content_type='application/json')

        assert response.status_code == 400
        assert json.loads(response.data)['code'] == 'VALIDATION_ERROR'

    def test_create_non_string_version(self, client):
        response = post_json(client, '/api/bookmarks', {'version': 2})

        assert response.status_code == 400

    def test_create_oversized(self, app, client):
        """Test a payload over the byte limit is rejected and nothing is stored."""
        app.config['MAX_SYNC_SIZE'] = 10

        response = post_json(client, '/api/bookmarks', {'bookmarks': 'x' * 11})

        assert response.status_code == 400
        assert 'maximum allowed size of 10 bytes' in json.loads(response.data)['error']
        assert json.loads(client.get('/api/sync-logs/stats').data)['todayCount'] == 0

    def test_create_size_counts_utf8_bytes(self, app, client):
        """Test the limit applies to encoded bytes, not characters."""
        app.config['MAX_SYNC_SIZE'] = 4

        assert post_json(client, '/api/bookmarks', {'bookmarks': 'éé'}).status_code == 201
        assert post_json(client, '/api/bookmarks', {'bookmarks': 'ééé'}).status_code == 400

    def test_create_forbidden_when_disabled(self, app, client):
        app.config['NEW_SYNCS_ENABLED'] = False

        response = post_json(client, '/api/bookmarks', {'version': '1.0.0'})

        assert response.status_code == 403
        assert json.loads(response.data)['code'] == 'NEW_SYNCS_FORBIDDEN'

    def test_daily_limit(self, app, client):
        """Test the N+1th creation from one address is rejected."""
        app.config['DAILY_NEW_SYNCS_LIMIT'] = 2
        headers = {'X-Forwarded-For': '203.0.113.7'}

        for _ in range(2):
            assert post_json(client, '/api/bookmarks', {'version': '1.0.0'}, headers=headers).status_code == 201

        response = post_json(client, '/api/bookmarks', {'version': '1.0.0'}, headers=headers)

        assert response.status_code == 429
        data = json.loads(response.data)
        assert data['code'] == 'RATE_LIMIT_EXCEEDED'
        assert 'Limit: 2' in data['error']

        other = post_json(client, '/api/bookmarks', {'version': '1.0.0'},
                          headers={'X-Forwarded-For': '198.51.100.1'})
        assert other.status_code == 201

    def test_daily_limit_resets_next_day(self, app, client, clock):
        app.config['DAILY_NEW_SYNCS_LIMIT'] = 1

        assert post_json(client, '/api/bookmarks', {'version': '1.0.0'}).status_code == 201
        assert post_json(client, '/api/bookmarks', {'version': '1.0.0'}).status_code == 429

        clock.advance(days=1)
        assert post_json(client, '/api/bookmarks', {'version': '1.0.0'}).status_code == 201

    def test_failed_creation_not_counted(self, app, client):
        app.config['DAILY_NEW_SYNCS_LIMIT'] = 1

        assert post_json(client, '/api/bookmarks', {}).status_code == 400
        assert post_json(client, '/api/bookmarks', {'version': '1.0.0'}).status_code == 201

    def test_limit_disabled(self, app, client):
        """Test unlimited creations when the limit is 0."""
        app.config['DAILY_NEW_SYNCS_LIMIT'] = 0

        for _ in range(10):
            response = post_json(client, '/api/bookmarks', {'version': '1.0.0'})
            assert response.status_code == 201
            assert 'X-RateLimit-Limit' not in response.headers

    def test_rate_limit_headers(self, client):
        response = post_json(client, '/api/bookmarks', {'version': '1.0.0'})

        assert response.headers['X-RateLimit-Limit'] == '3'
        assert response.headers['X-RateLimit-Remaining'] == '2'
        assert response.headers['X-RateLimit-Reset'].endswith('Z')


class TestQuotaFailures:
    """Quota bookkeeping errors must not fail sync creation."""

    def test_create_when_sync_log_write_fails(self, client, sync_log_store, monkeypatch):
        """Test a duplicate sync log id (integrity error) still returns 201."""
        taken_id = sync_log_store.create('198.51.100.1').id
        monkeypatch.setattr(sync_log_module, 'uuid',
                            SimpleNamespace(uuid4=lambda: SimpleNamespace(hex=taken_id)))

        response = post_json(client, '/api/bookmarks', {'version': '1.0.0'})

        assert response.status_code == 201
        data = json.loads(response.data)
        assert response.headers['X-RateLimit-Remaining'] == '3'

        fetched = client.get(f"/api/bookmarks/{data['id']}")
        assert fetched.status_code == 200
        assert json.loads(fetched.data)['version'] == '1.0.0'
        assert len(sync_log_store.get_all()) == 1

    def test_create_when_quota_check_fails(self, app, client, monkeypatch):
        """Test a failing quota query lets the request through."""
        app.config['DAILY_NEW_SYNCS_LIMIT'] = 1
        assert post_json(client, '/api/bookmarks', {'version': '1.0.0'}).status_code == 201

        def broken_count(ip_address):
            db.session.execute(db.text('SELECT count(*) FROM missing_table'))

        monkeypatch.setattr(get_services(app).sync_log_store, 'count_for_address_today', broken_count)

        response = post_json(client, '/api/bookmarks', {'version': '1.0.0'})

        assert response.status_code == 201
        assert 'X-RateLimit-Limit' not in response.headers
        sync_id = json.loads(response.data)['id']
        assert client.get(f'/api/bookmarks/{sync_id}/version').status_code == 200


class TestGetBookmarks:
    """Tests for GET endpoints of a sync."""

    @pytest.fixture
    def sync_id(self, client):
        response = post_json(client, '/api/bookmarks', {'version': '1.0.0'})
        return json.loads(response.data)['id']

    def test_not_found(self, client):
        response = client.get('/api/bookmarks/does-not-exist')

        assert response.status_code == 404
        data = json.loads(response.data)
        assert data['code'] == 'NOT_FOUND'
        assert data['error']

    def test_last_updated(self, client, sync_id):
        response = client.get(f'/api/bookmarks/{sync_id}/lastUpdated')

        assert response.status_code == 200
        assert json.loads(response.data)['lastUpdated'].endswith('Z')

    def test_version(self, client, sync_id):
        response = client.get(f'/api/bookmarks/{sync_id}/version')

        assert response.status_code == 200
        assert json.loads(response.data) == {'version': '1.0.0'}

    @pytest.mark.parametrize('suffix', ['', '/lastUpdated', '/version'])
    def test_unknown_id(self, client, suffix):
        response = client.get(f'/api/bookmarks/does-not-exist{suffix}')

        assert response.status_code == 404


class TestUpdateBookmarks:
    """Tests for PUT /api/bookmarks/<id>."""

    @pytest.fixture
    def sync_id(self, client):
        response = post_json(client, '/api/bookmarks', {'version': '1.0.0'})
        return json.loads(response.data)['id']

    def test_update(self, client, clock, sync_id):
        """Test an update stores the payload, version and a newer timestamp."""
        before = json.loads(client.get(f'/api/bookmarks/{sync_id}/lastUpdated').data)['lastUpdated']
        clock.advance(seconds=2)

        response = put_json(client, f'/api/bookmarks/{sync_id}', {
            'bookmarks': '{"bookmarks":[]}',
            'version': '1.0.1',
        })

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['version'] == '1.0.1'
        assert data['lastUpdated'] > before

        stored = json.loads(client.get(f'/api/bookmarks/{sync_id}').data)
        assert stored['bookmarks'] == '{"bookmarks":[]}'
        assert stored['lastUpdated'] == data['lastUpdated']

    def test_update_keeps_version_when_omitted(self, client, sync_id):
        response = put_json(client, f'/api/bookmarks/{sync_id}', {'bookmarks': 'payload'})

        assert response.status_code == 200
        assert json.loads(response.data)['version'] == '1.0.0'

    def test_update_ignores_client_last_updated(self, client, sync_id):
        response = put_json(client, f'/api/bookmarks/{sync_id}', {
            'bookmarks': 'payload',
            'lastUpdated': '2000-01-01T00:00:00.000Z',
        })

        assert response.status_code == 200

    def test_update_not_found(self, client):
        response = put_json(client, '/api/bookmarks/does-not-exist', {'bookmarks': 'payload'})

        assert response.status_code == 404
        assert json.loads(response.data)['code'] == 'NOT_FOUND'

    @pytest.mark.parametrize('body', [{}, {'bookmarks': ''}, {'version': '1.0.1'}])
    def test_update_missing_bookmarks(self, client, sync_id, body):
        response = put_json(client, f'/api/bookmarks/{sync_id}', body)

        assert response.status_code == 400

    def test_update_oversized_leaves_record(self, app, client, sync_id):
        """Test an oversized update is rejected and the record is unchanged."""
        put_json(client, f'/api/bookmarks/{sync_id}', {'bookmarks': 'small'})
        app.config['MAX_SYNC_SIZE'] = 8

        response = put_json(client, f'/api/bookmarks/{sync_id}', {
            'bookmarks': 'much too large',
            'version': '9.9.9',
        })

        assert response.status_code == 400
        assert json.loads(response.data)['code'] == 'VALIDATION_ERROR'
        stored = json.loads(client.get(f'/api/bookmarks/{sync_id}').data)
        assert stored['bookmarks'] == 'small'
        assert stored['version'] == '1.0.0'

    def test_update_not_quota_gated(self, app, client, sync_id):
        app.config['NEW_SYNCS_ENABLED'] = False
        app.config['DAILY_NEW_SYNCS_LIMIT'] = 1

        for i in range(3):
            response = put_json(client, f'/api/bookmarks/{sync_id}', {'bookmarks': f'payload-{i}'})
            assert response.status_code == 200


class TestSyncStats:
    """Tests for GET /api/sync-logs/stats."""

    def test_stats_for_caller(self, client):
        headers = {'X-Forwarded-For': '203.0.113.7, 10.0.0.1'}
        post_json(client, '/api/bookmarks', {'version': '1.0.0'}, headers=headers)
        post_json(client, '/api/bookmarks', {'version': '1.0.0'}, headers={'X-Real-IP': '198.51.100.1'})

        data = json.loads(client.get('/api/sync-logs/stats', headers=headers).data)

        assert data == {'todayCount': 1, 'weeklyCount': 1, 'totalCount': 1, 'dailyLimit': 3}


class TestErrorsAndHeaders:
    """Tests for uniform errors and response headers."""

    def test_unknown_route(self, client):
        response = client.get('/api/nothing-here')

        assert response.status_code == 404
        assert json.loads(response.data)['code'] == 'NOT_FOUND'

    def test_method_not_allowed(self, client):
        response = client.delete('/api/bookmarks/abc')

        assert response.status_code == 405
        assert json.loads(response.data)['code'] == 'METHOD_NOT_ALLOWED'

    def test_security_headers(self, client):
        response = client.get('/api/info')

        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'

    def test_cors_headers(self, client):
        response = client.get('/api/info', headers={'Origin': 'https://example.com'})

        assert response.headers['Access-Control-Allow-Origin'] in ('*', 'https://example.com')


class CustomPrefixConfig(TestingConfig):
    API_PREFIX = '/sync'


class TestCustomPrefix:
    """Tests for a non-default API prefix."""

    @pytest.fixture
    def app_config(self):
        return CustomPrefixConfig

    def test_routes_use_prefix(self, client):
        assert client.get('/sync/info').status_code == 200
        assert client.get('/api/info').status_code == 404
