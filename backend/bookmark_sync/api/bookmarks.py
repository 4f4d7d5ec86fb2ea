"""
Bookmarks sync API

Routes:
    POST /bookmarks                    create a sync
    GET  /bookmarks/<id>               fetch bookmarks
    PUT  /bookmarks/<id>               update bookmarks
    GET  /bookmarks/<id>/lastUpdated   last updated timestamp
    GET  /bookmarks/<id>/version       sync version
"""
from flask import Blueprint, current_app, request

from ..middleware import require_new_sync_allowed, record_new_sync
from ..services import get_bookmarks_store
from ..utils.errors import NotFoundError, RequiredDataError, ValidationError
from ..utils.logger import log_sync_event
from ..utils.responses import ApiResponse
from ..utils.timeutils import to_iso_utc
from ..utils.validators import validate_required_data, validate_string_field, validate_sync_size

bookmarks_bp = Blueprint('bookmarks', __name__)


def _get_json_body() -> dict:
    """Parsed JSON object body, {} when the body is empty."""
    if not request.get_data(cache=True):
        return {}
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise ValidationError('Request body must be a JSON object')
    return body


def _require(data, field_name: str):
    is_valid, _ = validate_required_data(data, field_name)
    if not is_valid:
        raise RequiredDataError(field_name)


def _check_string(data, field_name: str):
    is_valid, error = validate_string_field(data, field_name)
    if not is_valid:
        raise ValidationError(error)


def _check_sync_size(bookmarks_data: str):
    is_valid, error = validate_sync_size(bookmarks_data, current_app.config['MAX_SYNC_SIZE'])
    if not is_valid:
        raise ValidationError(error)


def _find_or_404(sync_id: str):
    record = get_bookmarks_store().find_by_id(sync_id)
    if record is None:
        raise NotFoundError('Bookmarks not found')
    return record


@bookmarks_bp.route('/bookmarks', methods=['POST'])
@require_new_sync_allowed
def create_bookmarks():
    """
    Create a new sync

    Request body:
        {"version": "1.0.0"}                       empty sync with a version
        {"bookmarks": "<payload>", "version": ...} sync with data

    Returns (201):
        {"id": ..., "version": ..., "lastUpdated": ...}
    """
    body = _get_json_body()
    version = body.get('version')
    bookmarks_data = body.get('bookmarks')

    _check_string(version, 'version')
    _check_string(bookmarks_data, 'bookmarks')

    if version and not bookmarks_data:
        record = get_bookmarks_store().create(bookmarks='', version=version)
    else:
        _require(bookmarks_data, 'bookmarks')
        _check_sync_size(bookmarks_data)
        record = get_bookmarks_store().create(bookmarks=bookmarks_data, version=version)

    record_new_sync()
    log_sync_event(record.id, 'created', {'version': record.version})

    return ApiResponse.created({
        'id': record.id,
        'version': record.version,
        'lastUpdated': to_iso_utc(record.last_updated),
    })


@bookmarks_bp.route('/bookmarks/<sync_id>', methods=['GET'])
def get_bookmarks(sync_id):
    """Fetch the bookmarks payload of a sync"""
    record = _find_or_404(sync_id)
    return ApiResponse.success({
        'bookmarks': record.bookmarks,
        'version': record.version,
        'lastUpdated': to_iso_utc(record.last_updated),
    })


@bookmarks_bp.route('/bookmarks/<sync_id>', methods=['PUT'])
def update_bookmarks(sync_id):
    """
    Update the bookmarks payload of a sync

    Request body:
        {"bookmarks": "<payload>", "version": "1.0.1", "lastUpdated": ...}

    ``version`` is only replaced when provided. ``lastUpdated`` is accepted
    for client compatibility and not checked.
    """
    body = _get_json_body()
    bookmarks_data = body.get('bookmarks')
    version = body.get('version')

    _check_string(bookmarks_data, 'bookmarks')
    _check_string(version, 'version')
    _require(bookmarks_data, 'bookmarks')
    _check_sync_size(bookmarks_data)

    changes = {'bookmarks': bookmarks_data}
    if version:
        changes['version'] = version

    record = get_bookmarks_store().update(sync_id, **changes)
    if record is None:
        raise NotFoundError('Bookmarks not found')

    log_sync_event(record.id, 'updated', {'version': record.version})

    return ApiResponse.success({
        'version': record.version,
        'lastUpdated': to_iso_utc(record.last_updated),
    })


@bookmarks_bp.route('/bookmarks/<sync_id>/lastUpdated', methods=['GET'])
def get_last_updated(sync_id):
    """Last updated timestamp of a sync"""
    record = _find_or_404(sync_id)
    return ApiResponse.success({'lastUpdated': to_iso_utc(record.last_updated)})


@bookmarks_bp.route('/bookmarks/<sync_id>/version', methods=['GET'])
def get_version(sync_id):
    """Version of a sync"""
    record = _find_or_404(sync_id)
    return ApiResponse.success({'version': record.version})
