"""
Errors delivered through the completion channel of a dispatch.
"""

from typing import Optional


class LogSendError(Exception):
    """Base class for every failure a log call can report."""


class ConfigurationError(LogSendError):
    """Token missing or client settings invalid."""


class EncodingError(LogSendError):
    """Event could not be turned into a JSON payload."""


class TransportError(LogSendError):
    """Network-level failure, including timeouts."""


class ServerError(LogSendError):
    """
    Collector answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the collector
        body: Response text, kept for diagnostics
    """

    def __init__(self, status_code: int, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        message = f"collector returned HTTP {status_code}"
        if body:
            message = f"{message}: {body[:200]}"
        super().__init__(message)
