"""
Tag merging for outgoing events.
"""

from typing import FrozenSet, Iterable, Optional, Union

from .errors import EncodingError

TagInput = Optional[Union[str, Iterable[str]]]


def _normalize(tags: TagInput) -> FrozenSet[str]:
    if not tags:
        return frozenset()
    if isinstance(tags, str):
        tags = [tags]
    try:
        items = list(tags)
    except TypeError as exc:
        raise EncodingError(f"Tags must be strings, got {tags!r}") from exc
    bad = [t for t in items if not isinstance(t, str)]
    if bad:
        raise EncodingError(f"Tags must be strings, got {bad!r}")
    return frozenset(t.strip() for t in items if t.strip())


def merge_tags(call_tags: TagInput, default_tags: TagInput) -> FrozenSet[str]:
    """
    Combine per-call tags with the client's default tags.

    Args:
        call_tags: Tags passed to a single log call (may be None)
        default_tags: Tags configured on the client (may be None)

    Returns:
        Union of both, without duplicates or blank tags

    Raises:
        EncodingError: If a tag is not a string
    """
    return _normalize(call_tags) | _normalize(default_tags)
