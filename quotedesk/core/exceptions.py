"""Errors raised while talking to the quote API."""


class FetchError(Exception):
    """Base error for a failed directory, quote or logo request."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NetworkError(FetchError):
    """Transport failure, timeout, non-200 status or empty body."""


class MalformedResponseError(FetchError):
    """Body is not valid JSON or lacks a required, correctly typed field."""
