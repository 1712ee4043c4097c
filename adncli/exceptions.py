"""Errors raised while selecting, fetching and parsing feeds."""

from __future__ import annotations


class ReaderError(Exception):
    """Base class for recoverable reader failures."""


class TransportError(ReaderError):
    """Raised when a feed cannot be retrieved (timeout, network failure)."""


class HTTPStatusError(ReaderError):
    """Raised when the feed server answers with a non-success status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason or ""
        message = f"unexpected status code: {status_code}"
        if self.reason:
            message += f" {self.reason}"
        super().__init__(message)


class MalformedDocumentError(ReaderError):
    """Raised when the response body is not a complete RSS document."""


class InputFormatError(ReaderError):
    """Raised when a menu selection is not a number."""


class UnknownCategoryError(ReaderError):
    """Raised when a menu selection has no matching category."""

    def __init__(self, category_id: int) -> None:
        self.category_id = category_id
        super().__init__(f"invalid category number: {category_id}")
