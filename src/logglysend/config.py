"""Client configuration, loaded from keyword arguments or environment variables."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .errors import ConfigurationError
from .request import DEFAULT_ENDPOINT


def _parse_tags(value: str) -> Tuple[str, ...]:
    return tuple(t.strip() for t in value.split(",") if t.strip())


@dataclass(frozen=True)
class ClientConfig:
    token: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = 10.0
    max_workers: int = 4

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.max_workers <= 0:
            raise ConfigurationError("max_workers must be positive")
        if isinstance(self.tags, str):
            object.__setattr__(self, "tags", _parse_tags(self.tags))
        else:
            object.__setattr__(self, "tags", tuple(self.tags))


def load_config(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Build ClientConfig from defaults overridden by LOGGLY_* env vars."""
    if environ is None:
        environ = os.environ

    try:
        return ClientConfig(
            token=environ.get("LOGGLY_TOKEN") or None,
            tags=_parse_tags(environ.get("LOGGLY_TAGS", "")),
            endpoint=environ.get("LOGGLY_ENDPOINT", DEFAULT_ENDPOINT),
            timeout=float(environ.get("LOGGLY_TIMEOUT", str(ClientConfig.timeout))),
            max_workers=int(
                environ.get("LOGGLY_MAX_WORKERS", str(ClientConfig.max_workers))
            ),
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid LOGGLY_* setting: {exc}") from exc
