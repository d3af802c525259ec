"""
Accessor protocol between cursors and the persistent tree they point into.

A cursor never touches the tree directly. Every read, write, delete and
traversal goes through an accessor factory: a callable taking the unboxed
value and returning the operation to run on it.

    get_in(root)     -> (path, not_set) -> value
    set_in(root)     -> (path, value)   -> new_root
    delete_in(root)  -> (path)          -> new_root
    for_each(value)  -> (callback, *extra)
    reduce(value)    -> (callback, seed, *extra)

The defaults below delegate get_in/set_in/delete_in to methods of the same
name on the root (see PersistentTree). The traversal defaults work on any
mapping or iterable, and defer to the value's own for_each/reduce when it has
them.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Protocol, Sequence, Tuple, runtime_checkable

from treecursor.sentinel import NOT_SET

AccessorFactory = Callable[[Any], Callable[..., Any]]


@runtime_checkable
class PersistentTree(Protocol):
    """What the default accessors expect from an unboxed root.

    Implementations must return a new tree from set_in/delete_in and share
    untouched branches with the old one. delete_in on a missing path must
    return the tree itself.
    """

    def get_in(self, path: Sequence, not_set: Any = None) -> Any: ...

    def set_in(self, path: Sequence, value: Any) -> Any: ...

    def delete_in(self, path: Sequence) -> Any: ...


# =============================================================================
# BOX / UNBOX
# =============================================================================

def identity(value: Any) -> Any:
    return value


def identity_box(new_unboxed: Any, prev_boxed: Any = None) -> Any:
    """Default box: store the new unboxed root as is."""
    return new_unboxed


# =============================================================================
# DEFAULT ACCESSOR FACTORIES
# =============================================================================

def default_get_in(root: Any) -> Callable[[Sequence, Any], Any]:
    return root.get_in


def default_set_in(root: Any) -> Callable[[Sequence, Any], Any]:
    return root.set_in


def default_delete_in(root: Any) -> Callable[[Sequence], Any]:
    return root.delete_in


def _entries(collection: Any) -> Iterator[Tuple[Any, Any]]:
    """Yield (key, value) pairs of a mapping or an indexed iterable."""
    if isinstance(collection, Mapping):
        return iter(collection.items())
    if isinstance(collection, Iterable) and not isinstance(collection, (str, bytes, bytearray)):
        return enumerate(collection)
    raise TypeError(f"{type(collection).__name__} object is not traversable")


def default_for_each(value: Any) -> Callable[..., Any]:
    """Iterate ``value``, calling ``callback(item, key, value)`` per entry.

    Iteration stops as soon as the callback returns ``False``. The returned
    operation gives back the number of entries visited. Trailing context
    arguments are accepted and ignored.

    Values that are neither mappings nor non-string iterables break the
    collaborator contract; the operation raises TypeError for them.
    """
    native = getattr(value, 'for_each', None)
    if callable(native):
        return native

    def for_each(callback: Callable[..., Any], *_context: Any) -> int:
        visited = 0
        for key, item in _entries(value):
            visited += 1
            if callback(item, key, value) is False:
                break
        return visited

    return for_each


def default_reduce(value: Any) -> Callable[..., Any]:
    """Fold ``value`` with ``callback(acc, item, key, value)``.

    Without a seed the first item seeds the fold; an empty collection without
    a seed folds to NOT_SET. Trailing context arguments are ignored, and
    non-traversable values raise TypeError as in default_for_each.
    """
    native = getattr(value, 'reduce', None)
    if callable(native):
        return native

    def reduce(callback: Callable[..., Any], seed: Any = NOT_SET, *_context: Any) -> Any:
        entries = _entries(value)
        acc = seed
        if acc is NOT_SET:
            first = next(entries, None)
            if first is None:
                return NOT_SET
            acc = first[1]
        for key, item in entries:
            acc = callback(acc, item, key, value)
        return acc

    return reduce


@dataclass(frozen=True)
class AccessorSet:
    """The five accessor factories a cursor uses, chosen together."""
    get_in: AccessorFactory = default_get_in
    set_in: AccessorFactory = default_set_in
    delete_in: AccessorFactory = default_delete_in
    for_each: AccessorFactory = default_for_each
    reduce: AccessorFactory = default_reduce


DEFAULT_ACCESSORS = AccessorSet()

ACCESSOR_FIELDS = ('get_in', 'set_in', 'delete_in', 'for_each', 'reduce')
