"""
Non-blocking HTTP sender for the log collector.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from .errors import LogSendError, ServerError, TransportError
from .request import OutboundRequest

logger = logging.getLogger(__name__)

USER_AGENT = "logglysend"


@dataclass(frozen=True)
class CompletionResult:
    """
    Outcome of one dispatch.

    ``value`` holds the decoded response body on success; ``error`` holds
    the failure otherwise.
    """

    value: Any = None
    error: Optional[LogSendError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


Completion = Callable[[CompletionResult], None]


class LogSender:
    """
    Sends one request per dispatch on a background thread pool.

    No retries and no queueing beyond the executor: each call to
    :meth:`dispatch` makes exactly one network attempt.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        max_workers: int = 4,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize LogSender.

        Args:
            timeout: Request timeout in seconds
            max_workers: Maximum number of requests in flight
            session: Custom requests.Session to use (e.g., shared by application)
        """
        self.timeout = timeout
        self._owns_session = session is None
        self._session = self._prepare_session(
            requests.Session() if session is None else session
        )
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="logglysend"
        )
        self._lock = threading.Lock()
        self._closed = False

    def _prepare_session(self, session: requests.Session) -> requests.Session:
        session.headers.setdefault("User-Agent", USER_AGENT)
        return session

    def dispatch(
        self,
        request: OutboundRequest,
        on_complete: Optional[Completion] = None,
    ) -> "Future[CompletionResult]":
        """
        Start sending ``request`` and return without waiting.

        The returned future always resolves to a CompletionResult; it never
        carries an exception.
        """
        with self._lock:
            if not self._closed:
                return self._executor.submit(self._send, request, on_complete)
        return self.complete(TransportError("sender is closed"), on_complete)

    def complete(
        self,
        error: LogSendError,
        on_complete: Optional[Completion] = None,
    ) -> "Future[CompletionResult]":
        """Resolve a failure detected before any network attempt."""
        logger.debug("Log event not dispatched: %s", error)
        result = CompletionResult(error=error)
        self._notify(on_complete, result)
        future: "Future[CompletionResult]" = Future()
        future.set_result(result)
        return future

    def _send(
        self, request: OutboundRequest, on_complete: Optional[Completion]
    ) -> CompletionResult:
        try:
            result = self._perform(request)
        except Exception as exc:
            logger.debug("Unexpected error sending log event", exc_info=True)
            error = TransportError(f"{type(exc).__name__}: {exc}")
            error.__cause__ = exc
            result = CompletionResult(error=error)
        if result.ok:
            logger.debug("Log event delivered to %s", request.url)
        else:
            logger.debug("Log event delivery failed: %s", result.error)
        self._notify(on_complete, result)
        return result

    def _perform(self, request: OutboundRequest) -> CompletionResult:
        try:
            response = self._session.request(
                request.method,
                request.url,
                data=request.body,
                headers=request.headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as exc:
            error = TransportError(f"request timed out after {self.timeout}s")
            error.__cause__ = exc
            return CompletionResult(error=error)
        except requests.exceptions.RequestException as exc:
            error = TransportError(str(exc) or type(exc).__name__)
            error.__cause__ = exc
            return CompletionResult(error=error)

        if 200 <= response.status_code < 300:
            return CompletionResult(value=_decode_body(response))
        return CompletionResult(error=ServerError(response.status_code, response.text))

    @staticmethod
    def _notify(on_complete: Optional[Completion], result: CompletionResult) -> None:
        if on_complete is None:
            return
        try:
            on_complete(result)
        except Exception:
            logger.exception("Log completion callback raised")

    def close(self, wait: bool = True) -> None:
        """Stop accepting dispatches and close the HTTP session if owned."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait)
        if self._owns_session:
            self._session.close()


def _decode_body(response: requests.Response) -> Any:
    if not response.content:
        return ""
    try:
        return response.json()
    except ValueError:
        return response.text
