"""
Non-blocking client for shipping log events to Loggly over HTTPS.
"""

from .config import ClientConfig, load_config
from .errors import (
    ConfigurationError,
    EncodingError,
    LogSendError,
    ServerError,
    TransportError,
)
from .handler import LogglyHandler
from .logger import LogglyClient
from .sender import CompletionResult

__version__ = "0.1.0"
__all__ = [
    "LogglyClient",
    "LogglyHandler",
    "ClientConfig",
    "load_config",
    "CompletionResult",
    "LogSendError",
    "ConfigurationError",
    "EncodingError",
    "TransportError",
    "ServerError",
]
