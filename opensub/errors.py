"""Exceptions raised by the search pipeline.

Every failure that aborts a run derives from OpenSubError, so the entry point
can report it and exit with a non-zero status.
"""


class OpenSubError(Exception):
    """Base exception for all opensub errors."""

    pass


class UrlBuildError(OpenSubError):
    """The search URL built from the query path is malformed."""

    pass


class TransportError(OpenSubError):
    """The request could not be completed (connection error, timeout)."""

    pass


class HttpStatusError(OpenSubError):
    """The server answered with a non-success HTTP status."""

    def __init__(self, status_code: int, url: str, reason: str = ""):
        self.status_code = status_code
        self.url = url
        self.reason = reason
        message = f"HTTP {status_code}"
        if reason:
            message += f" {reason}"
        super().__init__(f"{message} for {url}")


class ResponseFormatError(OpenSubError):
    """The response body is not a JSON array of subtitle records."""

    pass


class ConfigError(OpenSubError):
    """The configuration file could not be read or has the wrong shape."""

    pass


class MovieHashError(OpenSubError):
    """The movie hash could not be computed for a file."""

    pass
