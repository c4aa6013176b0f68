"""
Standard logging handler for integration with Python's logging module.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .logger import LogglyClient
from .tags import TagInput

# Attributes every LogRecord carries; anything else came in via ``extra=``
_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "asctime", "taskName", "tags",
))

_OWN_LOGGER_PREFIX = __name__.split(".")[0]


class LogglyHandler(logging.Handler):
    """
    Python logging handler that ships each record to Loggly as a
    structured event.

    Records are sent one by one, without buffering. Pass ``tags=[...]``
    through ``extra`` to add tags to a single record.

    Example:
        import logging
        from logglysend import LogglyHandler

        handler = LogglyHandler(
            token="your-customer-token",
            tags=["my-app"],
            extra_fields={"environment": "production"},
        )

        logger = logging.getLogger("my_app")
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

        logger.info("Hello from standard logging!")

        # Waits for in-flight events
        handler.close()
    """

    def __init__(
        self,
        token: Optional[str] = None,
        tags: TagInput = None,
        client: Optional[LogglyClient] = None,
        extra_fields: Optional[Dict[str, Any]] = None,
        level: int = logging.NOTSET,
        **client_kwargs: Any,
    ):
        """
        Initialize LogglyHandler.

        Args:
            token: Customer token, used when no client is given
            tags: Default tags, used when no client is given
            client: Existing client to send through; it is not closed by the handler
            extra_fields: Extra fields to include in every log entry
            level: Minimum log level to process
            client_kwargs: Further LogglyClient arguments (endpoint, timeout, ...)
        """
        super().__init__(level)

        self._owns_client = client is None
        self.client = (
            LogglyClient(token=token, tags=tags, **client_kwargs)
            if client is None
            else client
        )
        self.extra_fields = extra_fields or {}

    def _format_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        """Convert LogRecord to dictionary."""
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            **self.extra_fields,
        }

        if record.exc_info:
            formatter = self.formatter or logging.Formatter()
            entry["exception"] = formatter.formatException(record.exc_info)

        extra_attrs = {}
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value)
                extra_attrs[key] = value
            except (TypeError, ValueError):
                extra_attrs[key] = str(value)

        if extra_attrs:
            entry["extra"] = extra_attrs

        return entry

    def emit(self, record: logging.LogRecord) -> None:
        """Process a log record."""
        # Our own debug output must not loop back into the collector
        if record.name == _OWN_LOGGER_PREFIX or record.name.startswith(_OWN_LOGGER_PREFIX + "."):
            return
        try:
            entry = self._format_record(record)
            self.client.log_record(entry, tags=getattr(record, "tags", None))
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the handler."""
        if self._owns_client:
            self.client.close()
        super().close()
