from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base exception for service layer failures."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class NotFoundError(ServiceError):
    """Raised when a remote or stored resource does not exist."""

    status_code = 404
    error = "Not Found"

    def __init__(self, resource: str, field: str, value: Any) -> None:
        super().__init__(f"{resource} not found with {field}: '{value}'")
        self.resource = resource
        self.field = field
        self.value = value


class ValidationFailure(ServiceError):
    """Raised when a fetched record lacks a field the pipeline requires."""

    status_code = 400
    error = "Validation Failed"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field

    @property
    def field_errors(self) -> dict[str, str]:
        return {self.field: str(self)}


class UpstreamFailure(ServiceError):
    """Raised when the booking service fails or returns an unusable response."""

    error = "Booking Service Failure"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.upstream_status = status_code


class RenderFailure(ServiceError):
    """Raised when the invoice template or PDF conversion fails."""

    error = "PDF Generation Failed"


class StorageFailure(ServiceError):
    """Raised when the generated document cannot be stored."""

    error = "Storage Upload Failed"


class PersistenceFailure(ServiceError):
    """Raised when an invoice record cannot be written to the database."""

    error = "Persistence Failure"


class ConfigurationError(ServiceError):
    """Raised when an operation needs a collaborator the service was built without."""

    error = "Service Misconfigured"
