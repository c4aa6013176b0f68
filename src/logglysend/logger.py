"""
Main client class for logglysend.
"""

import threading
from concurrent.futures import Future
from typing import Any, Callable, FrozenSet, Mapping, Optional, Tuple

import requests

from .config import ClientConfig
from .encoder import LogEvent, encode_event
from .errors import LogSendError
from .request import DEFAULT_ENDPOINT, build_request, require_token
from .sender import Completion, CompletionResult, LogSender
from .tags import TagInput, merge_tags


class LogglyClient:
    """
    Client that ships log events to Loggly over HTTPS without blocking.

    Every log call returns a Future resolving to a CompletionResult and
    optionally invokes ``on_complete`` with the same result. Failures never
    raise from the log call itself.

    Example:
        client = LogglyClient(token="your-customer-token", tags=["web"])

        client.log_message("Application started")
        client.log_record({"event": "login", "user_id": 123}, tags=["auth"])
        client.log_message("checkout", on_complete=lambda r: print(r.ok))

        # Waits for in-flight events
        client.close()
    """

    def __init__(
        self,
        token: Optional[str] = None,
        tags: TagInput = None,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 10.0,
        max_workers: int = 4,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize LogglyClient.

        Args:
            token: Customer token; required before any event can be sent.
                Surrounding whitespace is stripped before use
            tags: Default tags attached to every event
            endpoint: Collector base URL
            timeout: Request timeout in seconds
            max_workers: Maximum number of requests in flight
            session: Custom requests.Session to use (e.g., shared by application)
        """
        self.endpoint = endpoint
        self._config_lock = threading.Lock()
        self._token = token
        self._tags = merge_tags(tags, None)
        self._sender = LogSender(
            timeout=timeout, max_workers=max_workers, session=session
        )

    @classmethod
    def from_config(
        cls, config: ClientConfig, session: Optional[requests.Session] = None
    ) -> "LogglyClient":
        return cls(
            token=config.token,
            tags=config.tags,
            endpoint=config.endpoint,
            timeout=config.timeout,
            max_workers=config.max_workers,
            session=session,
        )

    @property
    def token(self) -> Optional[str]:
        return self._token

    @token.setter
    def token(self, value: Optional[str]) -> None:
        with self._config_lock:
            self._token = value

    @property
    def tags(self) -> FrozenSet[str]:
        return self._tags

    @tags.setter
    def tags(self, value: TagInput) -> None:
        merged = merge_tags(value, None)
        with self._config_lock:
            self._tags = merged

    def _snapshot(self) -> Tuple[Optional[str], FrozenSet[str]]:
        with self._config_lock:
            return self._token, self._tags

    def _log(
        self,
        make_event: Callable[[Any], LogEvent],
        value: Any,
        tags: TagInput,
        on_complete: Optional[Completion],
    ) -> "Future[CompletionResult]":
        """Internal logging method."""
        token, default_tags = self._snapshot()
        try:
            event = make_event(value)
            require_token(token)
            request = build_request(
                encode_event(event),
                merge_tags(tags, default_tags),
                token,
                self.endpoint,
            )
        except LogSendError as exc:
            return self._sender.complete(exc, on_complete)
        return self._sender.dispatch(request, on_complete)

    def log_message(
        self,
        message: str,
        tags: TagInput = None,
        on_complete: Optional[Completion] = None,
    ) -> "Future[CompletionResult]":
        """Send a free-text message as ``{"message": message}``."""
        return self._log(LogEvent.from_message, message, tags, on_complete)

    def log_record(
        self,
        record: Mapping[str, Any],
        tags: TagInput = None,
        on_complete: Optional[Completion] = None,
    ) -> "Future[CompletionResult]":
        """Send a structured record verbatim as a JSON object."""
        return self._log(LogEvent.from_record, record, tags, on_complete)

    def close(self, wait: bool = True) -> None:
        """Close the client, waiting for in-flight events by default."""
        self._sender.close(wait=wait)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
