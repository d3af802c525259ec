"""Key path normalization and composition."""

from collections.abc import Iterable, Mapping
from typing import Any, Sequence, Tuple


def to_path(value: Any) -> Sequence:
    """Normalize a key or a sequence of keys into a key path.

    Lists and tuples are already paths and are returned as they are. Other
    iterables are materialized into a tuple. Strings, bytes and mappings count
    as single keys, as does anything that is not iterable.
    """
    if isinstance(value, (list, tuple)):
        return value
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray, Mapping)):
        return tuple(value)
    return (value,)


def join_path(head: Sequence, tail: Any) -> Tuple:
    """Append the normalized ``tail`` to ``head``."""
    return tuple(head) + tuple(to_path(tail))
