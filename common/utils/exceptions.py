"""
HTTP exceptions carrying a machine-readable error code.

The application's HTTPException handler renders `detail` into the
standard error envelope:

    {"success": false, "error": {"message": ..., "code": ...}}

Example:
    from common.utils import NotFoundException

    mood = await repo.get_owned(mood_id, uid)
    if not mood:
        raise NotFoundException("Mood entry not found", code="MOOD_NOT_FOUND")
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class APIException(HTTPException):
    """Base API exception with error code support."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            status_code: HTTP status code
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
            headers: Optional response headers
        """
        detail: Dict[str, Any] = {"message": message}
        if code:
            detail["code"] = code
        if details is not None:
            detail["details"] = details

        self.message = message
        self.code = code
        self.details = details

        super().__init__(status_code=status_code, detail=detail, headers=headers)


class UnauthorizedException(APIException):
    """401 - missing, malformed or rejected bearer token."""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(401, message, code, headers={"WWW-Authenticate": "Bearer"})


class NotFoundException(APIException):
    """404 - resource doesn't exist or isn't owned by the caller."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(404, message, code)


class ValidationException(APIException):
    """422 - a field failed domain validation."""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(422, message, code, details)
