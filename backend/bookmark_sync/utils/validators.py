"""
Input validation helpers
"""
from typing import Any, Optional, Tuple


def validate_required_data(data: Any, field_name: str) -> Tuple[bool, Optional[str]]:
    """
    Check that a required field is present and non-empty

    Args:
        data: Field value
        field_name: Field name (used in the error message)

    Returns:
        (is_valid, error_message)
    """
    if data is None or data == '':
        return False, f'{field_name} is required'
    return True, None


def validate_string_field(data: Any, field_name: str) -> Tuple[bool, Optional[str]]:
    """
    Check that an optional field, when present, is a string

    Returns:
        (is_valid, error_message)
    """
    if data is not None and not isinstance(data, str):
        return False, f'{field_name} must be a string'
    return True, None


def validate_sync_size(bookmarks_data: Any, max_size: int) -> Tuple[bool, Optional[str]]:
    """
    Check the UTF-8 byte length of a bookmarks payload

    Args:
        bookmarks_data: Payload string
        max_size: Maximum allowed size in bytes

    Returns:
        (is_valid, error_message)
    """
    if bookmarks_data and len(bookmarks_data.encode('utf-8')) > max_size:
        return False, f'Sync size exceeds maximum allowed size of {max_size} bytes'
    return True, None
