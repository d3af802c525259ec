"""
Cursor: a path-addressed handle onto a location inside a persistent tree.

A cursor wraps one CursorOptions record. Reading unboxes the root data and
resolves the value at the cursor's path through the get_in accessor. Writing
(update/delete) goes through set_in/delete_in, boxes the resulting root, fires
the update hooks and hands back a new cursor over the new root data. The
original tree and the original cursor are never modified.

Every operation that derives a cursor builds it through the runtime type of
the cursor it started from (Cursor.create_from), so subclasses keep their
extra behaviour on every descendant.

Usage:
    cursor = Cursor({'root': {'data': tree}})
    leaf = cursor.cursor(['x', 'y'])
    leaf.deref()                                   # value at ('x', 'y')
    updated = leaf.update(lambda m, *_: m.set_in(['z'], 'bar'))
    updated.root().deref()                         # whole new tree
"""

import logging
from typing import Any, Callable, Optional, Sequence, Tuple

from treecursor.errors import MissingRootData
from treecursor.options_model import CursorOptions, process_options
from treecursor.path_utils import join_path, to_path
from treecursor.sentinel import NOT_SET

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (int, float, complex, str, bytes, bool, type(None))


def _unchanged(previous: Any, new: Any) -> bool:
    """Whether an updater result counts as no change at all.

    Same object, or an equal scalar of the same type. Containers are never
    compared by value.
    """
    if previous is new:
        return True
    return type(previous) is type(new) and isinstance(new, _SCALAR_TYPES) and previous == new


def _unbox_root_data(options: CursorOptions) -> Tuple[Any, Any]:
    root_data = options.root.data
    return root_data, options.root.unbox(root_data)


def _call_on_update(options: CursorOptions, path: Sequence, new_root: Any, old_root: Any) -> None:
    if options._on_update is not None:
        options._on_update(options, path, new_root, old_root)
    if options.on_update is not None:
        options.on_update(options, path, new_root, old_root)


class Cursor:
    """Immutable handle onto the value at ``path`` inside a boxed root.

    Args:
        options: Plain configuration mapping or CursorOptions
        skip_data_check: Allow construction without root data
        skip_process_options: Trust ``options`` as an already processed CursorOptions

    Raises:
        MissingOptions, InvalidOptionsType, InvalidConfigurationType, MissingRootData
    """

    def __init__(self, options: Any = NOT_SET, skip_data_check: bool = False,
                 skip_process_options: bool = False):
        if skip_process_options:
            self._options = options
            if not skip_data_check and options.root.data is NOT_SET:
                raise MissingRootData("Value at ('root', 'data') is required")
        else:
            self._options = process_options(options, skip_data_check=skip_data_check)

        # Read-through cache for deref. While the unboxed root is the same
        # object as _ref_unboxed_root, _cached_value is the value at path.
        self._ref_unboxed_root = NOT_SET
        self._cached_value = NOT_SET

    @classmethod
    def create_from(cls, options: CursorOptions) -> 'Cursor':
        """Build a cursor of this type from options a previous cursor produced."""
        return cls(options, skip_data_check=True, skip_process_options=True)

    def new(self, options: Any) -> 'Cursor':
        """Build a cursor of this cursor's type from fresh options."""
        return type(self)(options)

    def options(self) -> CursorOptions:
        return self._options

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={tuple(self.path())!r})"

    def __str__(self) -> str:
        return str(self.deref())

    def __copy__(self) -> 'Cursor':
        return self.create_from(self._options)

    def __deepcopy__(self, memo) -> 'Cursor':
        # Options are immutable; only the cache is per instance.
        return self.create_from(self._options)

    # =========================================================================
    # READING
    # =========================================================================

    def deref(self, not_set_value: Any = None) -> Any:
        """Return the value at this cursor's path, or ``not_set_value`` if absent."""
        options = self._options
        _, unboxed = _unbox_root_data(options)

        if self._ref_unboxed_root is unboxed:
            resolved = self._cached_value
            return not_set_value if resolved is NOT_SET else resolved

        get_in = options.get_in(unboxed)
        resolved = get_in(options.path, NOT_SET)

        self._ref_unboxed_root = unboxed
        self._cached_value = resolved

        return not_set_value if resolved is NOT_SET else resolved

    dereference = deref

    def cached_value(self, not_set_value: Any = None) -> Any:
        """Return the last dereferenced value without reading the tree."""
        resolved = self._cached_value
        return not_set_value if resolved is NOT_SET else resolved

    def exists(self) -> bool:
        return self.deref(NOT_SET) is not NOT_SET

    def path(self) -> Sequence:
        return self._options.path

    key_path = keypath = path

    # =========================================================================
    # NAVIGATION
    # =========================================================================

    def cursor(self, key_or_path: Any = NOT_SET) -> 'Cursor':
        """Return a cursor at this path extended by a key or a sequence of keys.

        Without an argument, or with an empty path, returns this cursor.
        """
        if key_or_path is NOT_SET:
            return self

        sub_path = to_path(key_or_path)
        if len(sub_path) == 0:
            return self

        options = self._options
        return self.create_from(options.with_path(join_path(options.path, sub_path)))

    navigate = cursor

    def root(self) -> 'Cursor':
        return self.create_from(self._options.with_path(()))

    # =========================================================================
    # WRITING
    # =========================================================================

    def update(self, not_set_value: Any = None, updater: Optional[Callable[..., Any]] = None) -> 'Cursor':
        """Replace the value at this path with ``updater``'s result.

        Called as ``update(updater)`` or ``update(not_set_value, updater)``.
        The updater receives ``(current_value, unboxed_root, boxed_root)``,
        where current_value is ``not_set_value`` when the path holds nothing.
        Returns this cursor when the updater hands back the current value.
        """
        if updater is None:
            updater, not_set_value = not_set_value, None
        if updater is None:
            raise TypeError("update() requires an updater")

        options = self._options
        root_data, unboxed = _unbox_root_data(options)
        path = options.path

        state = options.get_in(unboxed)(path, not_set_value)
        new_state = updater(state, unboxed, root_data)

        if _unchanged(state, new_state):
            logger.debug(f"update at {path!r} returned the current value; nothing committed")
            return self

        new_root = options.set_in(unboxed)(path, new_state)
        return self._commit('update', root_data, unboxed, new_root)

    def delete(self) -> 'Cursor':
        """Remove the value at this path. Returns this cursor if nothing was there."""
        options = self._options
        root_data, unboxed = _unbox_root_data(options)

        new_root = options.delete_in(unboxed)(options.path)

        if new_root is unboxed:
            logger.debug(f"delete at {options.path!r} left the root unchanged; nothing committed")
            return self

        return self._commit('delete', root_data, unboxed, new_root)

    remove = delete

    def _commit(self, operation: str, root_data: Any, unboxed: Any, new_root: Any) -> 'Cursor':
        options = self._options
        boxed = options.root.box(new_root, root_data)

        _call_on_update(options, options.path, new_root, unboxed)
        logger.debug(f"Committed {operation} at {options.path!r}")

        return self.create_from(options.with_root_data(boxed))

    # =========================================================================
    # TRAVERSAL
    # =========================================================================

    def for_each(self, side_effect: Callable[..., Any], *args: Any) -> Any:
        """Call ``side_effect(child_cursor, key, *rest)`` for every entry here.

        Returns None when this path holds nothing; otherwise whatever the
        for_each accessor returns.
        """
        value = self.deref(NOT_SET)
        if value is NOT_SET:
            return None

        def visit(item, key, *rest):
            return side_effect(self.cursor([key]), key, *rest)

        return self._options.for_each(value)(visit, *args)

    def reduce(self, reducer: Callable[..., Any], *args: Any) -> Any:
        """Fold the entries here with ``reducer(acc, child_cursor, key, *rest)``.

        Extra arguments (typically the seed) go to the reduce accessor.
        Returns None when this path holds nothing.
        """
        value = self.deref(NOT_SET)
        if value is NOT_SET:
            return None

        def fold(acc, item, key, *rest):
            return reducer(acc, self.cursor([key]), key, *rest)

        return self._options.reduce(value)(fold, *args)
