from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base for errors that map directly onto an HTTP status.

    Subclasses carry a default status code and message so handlers can
    simply ``raise NotFound("Task not found")``.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, detail=None, headers=None):
        super().__init__(
            status_code=type(self).status_code,
            detail=detail if detail is not None else type(self).message,
            headers=headers,
        )


class ValidationFailed(AppError):
    status_code = 422
    message = "Validation failed"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class Conflict(AppError):
    # The API reports duplicate usernames as 400, not 409
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Conflict"


class Internal(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"
