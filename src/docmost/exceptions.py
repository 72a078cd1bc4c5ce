"""
Docmost - Custom Exceptions.

Domain failures carry a stable string code and an HTTP status. Routes let
them propagate to the app-level handler; the MCP dispatcher maps the same
codes into the JSON-RPC application range instead.
"""

from typing import Any


class DocmostException(Exception):
    """Base exception for Docmost application."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(
        self,
        code: str | None = None,
        message: str = "An unexpected error occurred",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(message)

    def to_content(self, request_id: str | None = None) -> dict[str, Any]:
        """Render the standard error body."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "request_id": request_id,
            }
        }


class UnauthorizedException(DocmostException):
    code = "UNAUTHORIZED"
    status_code = 401

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(message=message)


class ForbiddenException(DocmostException):
    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, message: str = "Insufficient permissions", required_role: str | None = None):
        super().__init__(message=message, details={"required_role": required_role} if required_role else None)


class NotFoundException(DocmostException):
    """A resource id that does not exist, or exists in another workspace."""

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            message=f"{resource_type} not found: {resource_id}",
            details={"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class WorkspaceNotFoundException(DocmostException):
    code = "WORKSPACE_NOT_FOUND"
    status_code = 404

    def __init__(self, workspace_id: str | None = None):
        super().__init__(
            message="Workspace not found",
            details={"workspace_id": workspace_id} if workspace_id else None,
        )


class ConflictException(DocmostException):
    """Duplicate resource, or a state change that is not allowed."""

    code = "CONFLICT"
    status_code = 409

    def __init__(self, message: str, current_state: str | None = None, target_state: str | None = None):
        details = {
            key: value
            for key, value in (("current_state", current_state), ("target_state", target_state))
            if value
        }
        super().__init__(message=message, details=details or None)


class ValidationException(DocmostException):
    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message=message, details={"errors": errors} if errors else None)


class BadRequestException(DocmostException):
    """Well formed but unusable; the client can correct it."""

    code = "BAD_REQUEST"
    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, details=details)
