"""Typed failures of the notes client."""
from typing import Optional


class NoteStoreError(Exception):
    """Base for every failure returned by `NoteStore` operations."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(NoteStoreError):
    """Transport failure: connection refused, DNS, timeout."""


class AuthorizationError(NoteStoreError):
    """401/403 from the API (missing, invalid or foreign token)."""


class ServerError(NoteStoreError):
    """Any other non-2xx answer."""


class ParseError(NoteStoreError):
    """Body is not JSON or does not have the expected shape."""
