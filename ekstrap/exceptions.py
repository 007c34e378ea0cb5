"""Exceptions raised by ekstrap."""

from __future__ import annotations


class EkstrapError(Exception):
    """Base exception for ekstrap failures."""

    pass


class FetchError(EkstrapError):
    """Raised when a source document cannot be retrieved.

    Parameters
    ----------
    message : str
        Human-readable error message
    url : str
        URL that was requested
    status_code : int | None
        HTTP status code, or None when no response was received
    """

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MetadataError(FetchError):
    """Raised when the EC2 instance metadata service cannot be read."""

    pass


class ParseError(EkstrapError):
    """Raised when a source document lacks the expected structure."""

    pass


class MalformedRowWarning(UserWarning):
    """Issued when an ENI table row has too few cells and is skipped."""

    pass
