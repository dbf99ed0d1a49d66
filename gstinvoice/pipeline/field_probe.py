"""Ordered accessor probing for records written under different schema versions."""

from typing import Any, Callable, Mapping, Optional, Sequence

Accessor = Callable[[Mapping[str, Any]], Any]


def key(name: str) -> Accessor:
    """Accessor reading a top-level key."""
    return lambda record: record.get(name)


def nested(parent: str, name: str) -> Accessor:
    """Accessor reading ``record[parent][name]`` when parent is a populated sub-document."""
    def _read(record: Mapping[str, Any]) -> Any:
        sub = record.get(parent)
        if isinstance(sub, Mapping):
            return sub.get(name)
        return None
    return _read


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def probe(record: Optional[Mapping[str, Any]], accessors: Sequence[Accessor]) -> Any:
    """Return the first non-blank value produced by accessors, in order.

    Args:
        record: Record to read (None or non-mapping reads as empty)
        accessors: Accessors tried in priority order

    Returns:
        First value that is neither None nor a blank string, else None
    """
    if not isinstance(record, Mapping):
        return None
    for accessor in accessors:
        value = accessor(record)
        if not _is_blank(value):
            return value
    return None


def probe_str(record: Optional[Mapping[str, Any]], accessors: Sequence[Accessor]) -> Optional[str]:
    """Like probe() but returns a stripped string."""
    value = probe(record, accessors)
    if value is None:
        return None
    return str(value).strip()
