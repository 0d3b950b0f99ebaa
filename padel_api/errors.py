"""Error taxonomy shared by services and routes.

Every error carries the HTTP status it maps to; the handlers registered in
``create_app`` render it as ``{"error": message}``.
"""


class ApiError(Exception):
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = 'Invalid request'


class AuthenticationError(ApiError):
    status_code = 401
    default_message = 'Authentication required'


class AuthorizationError(ApiError):
    status_code = 403
    default_message = 'Not allowed'


class NotFoundError(ApiError):
    status_code = 404
    default_message = 'Not found'


class ConflictError(ApiError):
    status_code = 409
    default_message = 'Conflicting record'


class InternalError(ApiError):
    pass
