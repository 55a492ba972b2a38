"""Domain errors raised by the services and rendered as JSON by the app."""


class ServiceError(Exception):
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationFailed(ServiceError):
    def __init__(self, errors):
        super().__init__('Validation failed')
        self.errors = errors

    def to_dict(self):
        return {'errors': self.errors}


class NotFound(ServiceError):
    status_code = 404


class Forbidden(ServiceError):
    """A membership rule was violated."""
    status_code = 400


class Unauthorized(ServiceError):
    status_code = 401


class Conflict(ServiceError):
    status_code = 400


class InvalidArgument(ServiceError):
    status_code = 400
