"""
Application error taxonomy.

Services raise these; the exception handlers registered in ``main.py`` turn
them into ``{"message": ..., "errors": [...]}`` JSON responses.
"""
from typing import Any, Dict, List, Optional

from fastapi import status


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    # Carries per-field problems in ``errors``
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class Conflict(AppError):
    # Duplicate usernames are reported as a plain bad request
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    pass
