# app/core/exceptions.py


class PixieError(Exception):
    """Base class for errors raised by the service layer"""

    status_code = 500
    public_message = "Action failed"


class ValidationError(PixieError):
    """Malformed input; nothing was written"""

    status_code = 422
    public_message = "Invalid input"


class UnauthorizedError(PixieError):
    """Token subject does not match the acting user"""

    status_code = 401
    public_message = "Unauthorized"


class NotFoundError(PixieError):
    """A referenced entity does not exist"""

    status_code = 404
    public_message = "Not found"


class ConflictError(PixieError):
    """A concurrent toggle already created the same edge"""

    status_code = 409
    public_message = "Action failed"


class TransientInfraError(PixieError):
    """Cache or database unavailable"""

    status_code = 503
    public_message = "Service temporarily unavailable"
