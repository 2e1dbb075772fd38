"""Errors raised by the event store client."""
from typing import Optional


class StoreClientError(Exception):
    """Base class for failed event store operations."""

    def __init__(self, operation: str, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.operation = operation
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.operation}: {super().__str__()}"


class TransportError(StoreClientError):
    """Network failure or unreadable response body."""


class HttpStatusError(StoreClientError):
    """The API answered with a non-2xx status."""

    def __init__(self, operation: str, status_code: int, body: str = ''):
        message = f"HTTP {status_code}: {body}" if body else f"HTTP {status_code}"
        super().__init__(operation, message)
        self.status_code = status_code


class AuthenticationError(StoreClientError):
    """No bearer token was available for an authenticated request."""
