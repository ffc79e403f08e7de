"""
baucrew/core/exceptions.py

Description:
Defines a standard error response format for the API and the typed
failures raised by the service layer:
- AuthorizationError (403): missing role or not the resource owner
- NotFoundError (404): referenced record does not exist
- ConflictError (409): record is not in a state that allows the action
- BusinessRuleError (422): request is well-formed but not allowed right now
"""

from typing import Any

from fastapi import HTTPException, status


class APIError(HTTPException):
    """Custom exception with standardized error response."""

    def __init__(self, status_code: int, message: str, headers: dict[str, Any] | None = None):
        super().__init__(status_code=status_code, detail={"error": message}, headers=headers)
        self.message = message


class AuthorizationError(APIError):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, message=message)


class NotFoundError(APIError):
    def __init__(self, message: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, message=message)


class ConflictError(APIError):
    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, message=message)


class BusinessRuleError(APIError):
    def __init__(self, message: str):
        super().__init__(status_code=422, message=message)
