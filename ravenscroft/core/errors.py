"""
Callable Errors
===============

Error taxonomy shared by the callable endpoints. Handlers raise
CallableError subclasses; the Flask error handler renders them as

    {"error": {"status": "INVALID_ARGUMENT", "code": "invalid-argument", "message": "..."}}

with the matching HTTP status code.
"""

import logging
from flask import jsonify

logger = logging.getLogger(__name__)

# code -> (HTTP status, canonical status name)
ERROR_CODES = {
    'invalid-argument': (400, 'INVALID_ARGUMENT'),
    'unauthenticated': (401, 'UNAUTHENTICATED'),
    'permission-denied': (403, 'PERMISSION_DENIED'),
    'not-found': (404, 'NOT_FOUND'),
    'internal': (500, 'INTERNAL'),
}


class CallableError(Exception):
    """Error surfaced to the caller with a stable code and message"""

    code = 'internal'

    def __init__(self, message, code=None, details=None):
        super().__init__(message)
        if code is not None:
            if code not in ERROR_CODES:
                raise ValueError(f"Unknown callable error code: {code}")
            self.code = code
        self.message = message
        self.details = details

    @property
    def http_status(self):
        return ERROR_CODES[self.code][0]

    @property
    def status(self):
        return ERROR_CODES[self.code][1]

    def to_dict(self):
        body = {
            'status': self.status,
            'code': self.code,
            'message': self.message,
        }
        if self.details is not None:
            body['details'] = self.details
        return body

    def __repr__(self):
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


class InvalidArgument(CallableError):
    code = 'invalid-argument'


class Unauthenticated(CallableError):
    code = 'unauthenticated'


class PermissionDenied(CallableError):
    code = 'permission-denied'


class NotFound(CallableError):
    code = 'not-found'


class Internal(CallableError):
    code = 'internal'


def register_error_handlers(app):
    """Render CallableError as JSON on every blueprint of the app"""

    @app.errorhandler(CallableError)
    def handle_callable_error(error):
        if error.code == 'internal':
            logger.error(f"Callable failed: {error.message}")
        else:
            logger.info(f"Callable rejected ({error.code}): {error.message}")
        return jsonify({'error': error.to_dict()}), error.http_status
