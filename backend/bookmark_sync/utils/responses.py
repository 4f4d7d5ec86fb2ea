"""
Uniform API response format

Successful responses are the bare JSON payload; errors are always
``{"error": <message>, "code": <error code>}``.
"""
from flask import jsonify
from typing import Any

from .errors import APIError


class ApiResponse:
    """API response builder"""

    @staticmethod
    def success(data: Any = None, status: int = 200) -> tuple:
        """
        Successful response

        Args:
            data: Response payload
            status: HTTP status code

        Returns:
            (Flask Response, status) tuple
        """
        return jsonify(data if data is not None else {}), status

    @staticmethod
    def created(data: Any = None) -> tuple:
        """Created response (201)"""
        return ApiResponse.success(data, 201)

    @staticmethod
    def error(
        message: str,
        code: int = 400,
        error_code: str = 'BAD_REQUEST',
    ) -> tuple:
        """
        Error response

        Args:
            message: Error message
            code: HTTP status code
            error_code: Machine readable error code

        Returns:
            (Flask Response, status) tuple
        """
        return jsonify({'error': message, 'code': error_code}), code

    @staticmethod
    def from_exception(error: APIError) -> tuple:
        """Render an APIError with its own status and code"""
        return ApiResponse.error(error.message, error.status_code, error.code)

    @staticmethod
    def not_found(message: str = 'Resource not found') -> tuple:
        """404 response"""
        return ApiResponse.error(message, 404, 'NOT_FOUND')

    @staticmethod
    def server_error(message: str = 'Internal server error') -> tuple:
        """500 response"""
        return ApiResponse.error(message, 500, 'INTERNAL_ERROR')


def success_response(data: Any = None, status: int = 200) -> tuple:
    """Shortcut for a successful response"""
    return ApiResponse.success(data, status)
