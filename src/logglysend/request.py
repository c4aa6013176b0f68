"""
Construction of outbound collector requests.
"""

from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Optional
from urllib.parse import quote

from .errors import ConfigurationError, EncodingError

DEFAULT_ENDPOINT = "https://logs-01.loggly.com"
INPUTS_PATH = "/inputs/{token}/"
TAG_HEADER = "X-LOGGLY-TAG"
CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class OutboundRequest:
    """A fully built POST, ready for the sender."""

    url: str
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "POST"

    @property
    def tags(self) -> Optional[str]:
        return self.headers.get(TAG_HEADER)


def require_token(token: Optional[str]) -> str:
    """Return the token without surrounding whitespace, or fail if blank."""
    if not token or not token.strip():
        raise ConfigurationError("Loggly client token required.")
    return token.strip()


def _check_tag(tag: str) -> None:
    # Header values go out as Latin-1; commas separate tags
    try:
        tag.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Tag {tag!r} is not valid in a header") from exc
    if "," in tag or any(ord(c) < 32 or ord(c) == 127 for c in tag):
        raise EncodingError(f"Tag {tag!r} is not valid in a header")


def build_request(
    payload: bytes,
    tags: AbstractSet[str],
    token: Optional[str],
    endpoint: str = DEFAULT_ENDPOINT,
) -> OutboundRequest:
    """
    Build the request for one encoded event. Performs no I/O.

    Args:
        payload: Encoded JSON body
        tags: Merged tag set for this event
        token: Customer token, embedded in the URL path
        endpoint: Collector base URL

    Raises:
        ConfigurationError: If the token is missing or blank
        EncodingError: If a tag cannot be carried in the tag header
    """
    token = require_token(token)
    url = endpoint.rstrip("/") + INPUTS_PATH.format(token=quote(token, safe=""))
    headers = {"Content-Type": CONTENT_TYPE}
    if tags:
        for tag in tags:
            _check_tag(tag)
        headers[TAG_HEADER] = ",".join(sorted(tags))

    return OutboundRequest(url=url, body=payload, headers=headers)
