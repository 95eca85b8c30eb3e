from typing import Any, Mapping, Optional


class DailyDietError(Exception):
    """Base class for errors the API turns into an error envelope.

    Subclasses pick the HTTP status and the default machine-readable code;
    the exception handlers read both from the instance.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context
        code: machine-readable error code, defaults to the class's default_code
        http_status: HTTP status code the handlers answer with
    """

    http_status = 500
    default_code = "INTERNAL_SERVER_ERROR"
    default_message = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        """The ``error`` member of the response envelope"""
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(DailyDietError):
    """Raised when the meal store is handed input it cannot accept.

    Same unprocessable-entity class as a rejected request body.
    """

    http_status = 422
    default_code = "SERVICE_VALIDATION_ERROR"
    default_message = "Invalid input"


class NotFoundError(DailyDietError):
    """Raised when a meal does not exist or belongs to another session.

    Both cases carry the same message so callers cannot tell them apart.
    """

    http_status = 404
    default_code = "NOT_FOUND"
    default_message = "Not found"


class UnauthorizedError(DailyDietError):
    """Raised when a request carries no usable session identifier"""

    http_status = 401
    default_code = "UNAUTHORIZED"
    default_message = "Unauthorized"
