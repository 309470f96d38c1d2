"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    IDENTITY_CONFLICT = "IDENTITY_CONFLICT"

    # Authorization errors (403)
    NOT_A_MEMBER = "NOT_A_MEMBER"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    WORKSPACE_NOT_FOUND = "WORKSPACE_NOT_FOUND"
    TEAM_NOT_FOUND = "TEAM_NOT_FOUND"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    SECTION_NOT_FOUND = "SECTION_NOT_FOUND"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"

    # Collapsed form of NOT_A_MEMBER and *_NOT_FOUND shown to end users
    NOT_ACCESSIBLE = "NOT_ACCESSIBLE"

    # Validation errors (422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    CONFLICT = "CONFLICT"
    WORKSPACE_SLUG_TAKEN = "WORKSPACE_SLUG_TAKEN"
    ALREADY_A_MEMBER = "ALREADY_A_MEMBER"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORE_FAILURE = "STORE_FAILURE"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """No usable caller identity."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AccessDeniedError(AppException):
    """Caller has no membership in the target's workspace."""

    def __init__(self, workspace_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_A_MEMBER,
            message="You are not a member of this workspace",
            status_code=403,
            details={"workspace_id": workspace_id},
        )


class NotFoundError(AppException):
    """Target entity does not exist."""

    def __init__(self, error_code: ErrorCode, entity: str, entity_id: str) -> None:
        super().__init__(
            error_code=error_code,
            message=f"{entity.capitalize()} not found: {entity_id}",
            status_code=404,
            details={f"{entity}_id": entity_id},
        )


class WorkspaceNotFoundError(NotFoundError):
    """Workspace not found."""

    def __init__(self, workspace_id: str) -> None:
        super().__init__(ErrorCode.WORKSPACE_NOT_FOUND, "workspace", workspace_id)


class TeamNotFoundError(NotFoundError):
    """Team not found (or not in the expected workspace)."""

    def __init__(self, team_id: str) -> None:
        super().__init__(ErrorCode.TEAM_NOT_FOUND, "team", team_id)


class ProjectNotFoundError(NotFoundError):
    """Project not found."""

    def __init__(self, project_id: str) -> None:
        super().__init__(ErrorCode.PROJECT_NOT_FOUND, "project", project_id)


class SectionNotFoundError(NotFoundError):
    """Section not found."""

    def __init__(self, section_id: str) -> None:
        super().__init__(ErrorCode.SECTION_NOT_FOUND, "section", section_id)


class TaskNotFoundError(NotFoundError):
    """Task not found."""

    def __init__(self, task_id: str) -> None:
        super().__init__(ErrorCode.TASK_NOT_FOUND, "task", task_id)


class ValidationFailedError(AppException):
    """Input content violates a domain rule."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=422,
            details=[{"field": field, "message": message}] if field else None,
        )


class ConflictError(AppException):
    """Unique-constraint violation."""

    def __init__(
        self,
        message: str = "Resource already exists",
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=409,
            details=details,
        )


class WorkspaceSlugTakenError(ConflictError):
    """Workspace slug is already taken."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            message=f"Workspace slug already taken: {slug}",
            error_code=ErrorCode.WORKSPACE_SLUG_TAKEN,
            details={"slug": slug},
        )


class AlreadyAMemberError(ConflictError):
    """User is already a member of the workspace."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            message="User is already a member of this workspace",
            error_code=ErrorCode.ALREADY_A_MEMBER,
            details={"user_id": user_id},
        )


class StoreFailureError(AppException):
    """The transactional store failed; fatal to the current request."""

    def __init__(self, message: str = "The data store failed to complete the operation") -> None:
        super().__init__(
            error_code=ErrorCode.STORE_FAILURE,
            message=message,
            status_code=500,
        )


def is_access_error(exc: AppException) -> bool:
    """Whether the error reveals existence or membership of a resource."""
    return isinstance(exc, (AccessDeniedError, NotFoundError))
