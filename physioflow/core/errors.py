"""
Error taxonomy shared by the stores and the API layer

Every error carries the HTTP status it maps to; the app installs one
handler that renders them as {"error": <message>}.
"""


class PhysioFlowError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(PhysioFlowError):
    """Missing required identifier"""
    status_code = 400


class Unauthorized(PhysioFlowError):
    status_code = 401


class Forbidden(PhysioFlowError):
    status_code = 403


class NotFound(PhysioFlowError):
    status_code = 404


class Conflict(PhysioFlowError):
    status_code = 409


class ValidationFailed(PhysioFlowError):
    """Required field absent or invalid on create"""
    status_code = 422


class StoreUnavailable(PhysioFlowError):
    """Persistence layer I/O failure"""
    status_code = 500
