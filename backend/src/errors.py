"""
Exception taxonomy for the errand backend.

Boot-time errors are fatal and stop the process: invalid configuration
surfaces as the settings ``ValidationError``, database connectivity as
``DatabaseConnectionError``. Domain errors raised by controllers carry the HTTP status the
route boundary should answer with; anything else becomes a 500.
"""

from fastapi import status


class DatabaseConnectionError(Exception):
    """A database handle could not be established at startup."""

    def __init__(self, handle: str, reason: str):
        self.handle = handle
        self.reason = reason
        super().__init__(f"{handle} connection failed: {reason}")


class ErrandError(Exception):
    """Base class for errors a controller reports to the client."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ResourceNotFoundError(ErrandError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ErrandError):
    status_code = status.HTTP_409_CONFLICT


class InvalidCredentialsError(ErrandError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message)
