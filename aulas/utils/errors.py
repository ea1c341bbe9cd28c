class ServiceError(Exception):
    """Base class for errors a route turns into a JSON ``{'error': ...}`` body."""
    status_code = 500
    message = 'Server Error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(ServiceError):
    status_code = 400
    message = 'Missing data'


class AuthError(ServiceError):
    status_code = 401
    message = 'Invalid credentials'


class NotFoundError(ServiceError):
    status_code = 404
    message = 'Not found'


class ConflictError(ServiceError):
    status_code = 409
    message = 'Already exists'


class StoreError(ServiceError):
    # Never carries driver details, those only go to the log
    status_code = 500
    message = 'Server Error'
