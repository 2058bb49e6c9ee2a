"""
Error types for the employee resource.

Validation failures use src.core.validators.ValidationError; the classes
here cover the remaining request outcomes.
"""


class EmployeeError(Exception):
    """Base class for employee resource errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(EmployeeError):
    """Raised when a referenced employee id is not in the store."""

    def __init__(self, employee_id: str, message: str | None = None):
        self.employee_id = employee_id
        super().__init__(message or f"Resource with id [{employee_id}] not found.")


class InvalidPayloadError(EmployeeError):
    """Raised when a request body is not a JSON object."""

    def __init__(self, message: str = "The request payload must be a JSON object."):
        super().__init__(message)


class ExternalServiceDegraded(Exception):
    """Raised when a content service returns an unusable response.

    Never leaves the content client; it is replaced by a fallback value.
    """

    def __init__(self, service: str, reason: str):
        self.service = service
        self.reason = reason
        super().__init__(f"{service}: {reason}")
