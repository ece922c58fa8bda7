"""Custom exception classes for the wedding page service."""

from typing import Any


class AppError(Exception):
    """Base exception for all service errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int = 500,
        details: Any = None,
        hint: str | None = None,
    ):
        """Initialize AppError.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            status_code: HTTP status code for API responses.
            details: Additional error details.
            hint: Operator-facing hint for resolving the error.
        """
        super().__init__(message)
        self.message = message
        self.code = code or "INTERNAL_ERROR"
        self.status_code = status_code
        self.details = details
        self.hint = hint

    def to_dict(self) -> dict:
        """Convert exception to the response envelope."""
        result: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        if self.hint:
            result["hint"] = self.hint
        return result


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        message: str | None = None,
    ):
        """Initialize NotFoundError.

        Args:
            resource_type: Type of resource (e.g., "Page", "Account").
            resource_id: Identifier that was not found.
            message: Optional custom message.
        """
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            message=message or f"{resource_type} '{resource_id}' not found",
            code="NOT_FOUND",
            status_code=404,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: list[dict] | None = None,
    ):
        """Initialize ValidationError.

        Args:
            message: Error message.
            errors: List of validation errors with field and message.
        """
        self.errors = errors or []
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"errors": self.errors} if self.errors else None,
        )

    @classmethod
    def from_pydantic(cls, exc: Exception) -> "ValidationError":
        """Create ValidationError from a Pydantic ValidationError."""
        errors = []
        if hasattr(exc, "errors"):
            for error in exc.errors():
                errors.append(
                    {
                        "field": ".".join(str(loc) for loc in error.get("loc", [])),
                        "message": error.get("msg", "Invalid value"),
                        "type": error.get("type", "unknown"),
                    }
                )
        return cls(message="Validation failed", errors=errors)


class UnauthorizedError(AppError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication required"):
        """Initialize UnauthorizedError."""
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
        )


class ForbiddenError(AppError):
    """Raised when the caller lacks permission for an action."""

    def __init__(self, message: str = "You don't have permission to perform this action"):
        """Initialize ForbiddenError."""
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
        )


class ConflictError(AppError):
    """Raised when a conditional write loses to an existing item."""

    def __init__(self, message: str = "Resource conflict"):
        """Initialize ConflictError."""
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=409,
        )


class StoreError(AppError):
    """Raised when the underlying data store rejects a read or write."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: Any = None,
        hint: str | None = None,
    ):
        """Initialize StoreError."""
        super().__init__(
            message=message,
            code=code or "STORE_ERROR",
            status_code=500,
            details=details,
            hint=hint,
        )

    @classmethod
    def from_client_error(cls, exc: Exception, operation: str) -> "StoreError":
        """Create StoreError from a botocore ClientError.

        Args:
            exc: The ClientError raised by boto3.
            operation: Short name of the failed operation.

        Returns:
            StoreError carrying the store's message, code and request id.
        """
        response = getattr(exc, "response", None) or {}
        err = response.get("Error", {})
        metadata = response.get("ResponseMetadata", {})
        details = {"operation": operation}
        if metadata.get("RequestId"):
            details["request_id"] = metadata["RequestId"]
        return cls(
            message=err.get("Message") or str(exc),
            code=err.get("Code"),
            details=details,
            hint=f"DynamoDB {operation} failed; check table and IAM configuration",
        )
