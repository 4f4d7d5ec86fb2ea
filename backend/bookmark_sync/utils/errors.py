"""
API exceptions

Each exception carries the HTTP status and error code it is rendered with.
"""


class APIError(Exception):
    """Base class for errors returned to API callers"""

    status_code = 500
    code = 'INTERNAL_ERROR'
    default_message = 'An unexpected error occurred'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(APIError):
    status_code = 400
    code = 'VALIDATION_ERROR'
    default_message = 'Invalid request data'


class RequiredDataError(ValidationError):
    """A required field is missing or empty"""

    def __init__(self, field_name: str = 'required data'):
        self.field_name = field_name
        super().__init__(f'{field_name} is required')


class NotFoundError(APIError):
    status_code = 404
    code = 'NOT_FOUND'
    default_message = 'Resource not found'


class ConflictError(APIError):
    status_code = 409
    code = 'CONFLICT'
    default_message = 'Resource conflict'


class RateLimitError(APIError):
    status_code = 429
    code = 'RATE_LIMIT_EXCEEDED'
    default_message = 'Rate limit exceeded'


class NewSyncsLimitExceededError(RateLimitError):
    default_message = 'Daily new syncs limit exceeded'


class NewSyncsForbiddenError(APIError):
    status_code = 403
    code = 'NEW_SYNCS_FORBIDDEN'
    default_message = 'New syncs are currently disabled'


class ServiceUnavailableError(APIError):
    status_code = 503
    code = 'SERVICE_UNAVAILABLE'
    default_message = 'Service temporarily unavailable'
