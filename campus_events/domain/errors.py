"""Domain error codes for the campus events engine."""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INVALID_STATE = "INVALID_STATE"
    ALREADY_MEMBER = "ALREADY_MEMBER"
    NOT_MEMBER = "NOT_MEMBER"
    ADMIN_CANNOT_LEAVE = "ADMIN_CANNOT_LEAVE"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationFailedError(DomainError):
    """Raised when required fields are missing or malformed."""

    code = ErrorCode.VALIDATION_ERROR


class ForbiddenError(DomainError):
    """Raised when the principal's role or ownership does not allow the action."""

    code = ErrorCode.FORBIDDEN


class NotFoundError(DomainError):
    """Raised when a referenced entity is absent or outside the principal's reach."""

    code = ErrorCode.NOT_FOUND


class ConflictError(DomainError):
    """Raised when a unique key is already taken."""

    code = ErrorCode.CONFLICT


class InvalidStateError(DomainError):
    """Raised when the current lifecycle state does not allow the operation."""

    code = ErrorCode.INVALID_STATE


class AlreadyMemberError(ConflictError):
    code = ErrorCode.ALREADY_MEMBER

    def __init__(self, rso_id: int) -> None:
        super().__init__("You are already a member of this RSO")
        self.rso_id = rso_id


class NotMemberError(InvalidStateError):
    code = ErrorCode.NOT_MEMBER

    def __init__(self, rso_id: int) -> None:
        super().__init__("You are not a member of this RSO")
        self.rso_id = rso_id


class AdminCannotLeaveError(ForbiddenError):
    code = ErrorCode.ADMIN_CANNOT_LEAVE

    def __init__(self, rso_id: int) -> None:
        super().__init__("As the admin, you cannot leave the RSO")
        self.rso_id = rso_id
