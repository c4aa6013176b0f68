"""
Event model and JSON encoding.
"""

import json
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from .errors import EncodingError

MESSAGE_FIELD = "message"


@dataclass(frozen=True)
class LogEvent:
    """
    A single unit of log data: free text or a structured record.

    Exactly one of ``message`` and ``record`` is set. Use
    :meth:`from_message` or :meth:`from_record` to build one.
    """

    message: Optional[str] = None
    record: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        if (self.message is None) == (self.record is None):
            raise EncodingError("Invalid parameter to log.")
        if self.record is not None:
            # Detach from the caller's mapping
            object.__setattr__(self, "record", dict(self.record))

    @classmethod
    def from_message(cls, message: str) -> "LogEvent":
        if not isinstance(message, str):
            raise EncodingError(
                f"Invalid parameter to log: expected str, got {type(message).__name__}"
            )
        return cls(message=message)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "LogEvent":
        if not isinstance(record, Mapping):
            raise EncodingError(
                f"Invalid parameter to log: expected mapping, got {type(record).__name__}"
            )
        bad_keys = _non_string_keys(record)
        if bad_keys:
            raise EncodingError(f"Record keys must be strings: {bad_keys!r}")
        return cls(record=record)

    @property
    def is_record(self) -> bool:
        return self.record is not None


def _non_string_keys(record: Mapping[str, Any]) -> List[Any]:
    """Collect non-str keys at any depth, walking without recursion."""
    bad: List[Any] = []
    seen = set()
    stack: List[Any] = [record]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        if isinstance(node, Mapping):
            seen.add(id(node))
            bad.extend(k for k in node if not isinstance(k, str))
            stack.extend(node.values())
        elif isinstance(node, (list, tuple)):
            seen.add(id(node))
            stack.extend(node)
    return bad


def encode_event(event: LogEvent) -> bytes:
    """
    Serialize an event to UTF-8 JSON.

    A message becomes ``{"message": text}``; a record is written verbatim.

    Raises:
        EncodingError: If the record holds values JSON cannot represent,
            or nests too deeply to serialize
    """
    if event.record is not None:
        payload: Mapping[str, Any] = event.record
    else:
        payload = {MESSAGE_FIELD: event.message}

    try:
        text = json.dumps(payload, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise EncodingError(f"Record is not JSON serializable: {exc}") from exc
    return text.encode("utf-8")
