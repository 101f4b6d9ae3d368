"""
Domain Exceptions

Error taxonomy shared by the factories, the management services and the HTTP
adapter. Every error carries a discriminating ``error_type`` so callers can
branch on the kind of failure without inspecting messages.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PRECONDITION_FAILED = "precondition_failed"
    IDENTIFIER_COLLISION = "identifier_collision"
    TRANSACTION_FAILURE = "transaction_failure"
    CONSTRAINT_VIOLATION = "constraint_violation"
    REPOSITORY = "repository"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
        }


class ValidationError(DomainError):
    """Raised when an input field breaks a validation rule."""

    def __init__(
        self,
        field_name: str,
        value: object,
        message: str,
        error_code: str | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"
        self.reason = message

        full_message = f"Validation failed for field '{field_name}': {message}"
        details = details or {}
        details.update(
            {
                "field": field_name,
                "value": str(value) if value is not None else None,
                "error_code": self.error_code,
            }
        )

        super().__init__(full_message, ErrorType.VALIDATION, details)

    def to_violation(self) -> dict[str, str | None]:
        return {
            "field": self.field_name,
            "message": self.reason,
            "error_code": self.error_code,
        }


class MultipleValidationError(ValidationError):
    """Raised with every violated rule, not just the first one found."""

    def __init__(self, validation_errors: list[ValidationError]) -> None:
        self.validation_errors = validation_errors
        messages = [error.message for error in validation_errors]
        combined_message = "Multiple validation errors: " + "; ".join(messages)

        super().__init__(
            "multiple_fields",
            None,
            combined_message,
            "MULTIPLE_VALIDATION_ERRORS",
            {"error_count": len(validation_errors)},
        )
        self.message = combined_message

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.validation_errors)

    @property
    def fields(self) -> list[str]:
        return [error.field_name for error in self.validation_errors]

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["violations"] = [
            error.to_violation() for error in self.validation_errors
        ]
        return result


class NotFoundError(DomainError):
    """Raised when an id or code does not resolve to a live entity."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            ErrorType.NOT_FOUND,
            {"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(DomainError):
    """Raised on uniqueness or exclusivity violations."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.CONFLICT, details)


class PreconditionFailedError(DomainError):
    """Raised when the operation is valid but the target state disallows it."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.PRECONDITION_FAILED, details)


class IdentifierCollisionError(DomainError):
    """Raised when a generated identifier collides. The whole operation may be retried."""

    retryable = True

    def __init__(self, message: str, identifier: str | None = None) -> None:
        super().__init__(
            message, ErrorType.IDENTIFIER_COLLISION, {"identifier": identifier}
        )
        self.identifier = identifier


class TransactionFailureError(DomainError):
    """Raised when the store could not commit. No partial effect is observable."""

    retryable = True

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.TRANSACTION_FAILURE, details)


# Persistence-level errors. Repositories raise these; management services
# translate them into the taxonomy above before they reach a caller.
class RepositoryError(DomainError):
    """Raised when a repository operation fails."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.REPOSITORY, details)


class ConstraintViolationError(RepositoryError):
    """Raised when a write breaks a database constraint."""

    def __init__(self, message: str, constraint_name: str | None = None) -> None:
        super().__init__(message, {"constraint": constraint_name})
        self.error_type = ErrorType.CONSTRAINT_VIOLATION
        self.constraint_name = constraint_name
