"""Error types raised by the plate, parser and workflow helpers.

Each error carries the HTTP status code and machine-readable code a route
handler should answer with. Both subclass ValueError so callers that only
care about "bad input" can catch that.
"""


class LabflowError(ValueError):
    """Base class for errors with a user-facing message."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Return the error response body for this error."""
        body = {
            "statusCode": self.status_code,
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
        }
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(LabflowError):
    """Malformed input: bad CSV structure, invalid or duplicate well position."""

    status_code = 400
    code = "VALIDATION_ERROR"


class ConflictError(LabflowError):
    """A well-formed request that the current workflow state does not allow."""

    status_code = 409
    code = "CONFLICT"
