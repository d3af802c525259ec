"""
Path-addressed cursors over persistent, tree-shaped data.

A cursor points at one location inside a larger immutable value. It can read
the value there, write a new one (yielding a new, structurally shared root and
a new cursor), delete it, and hand out cursors for sub-locations. The tree
itself is never modified in place.

Key Features:
- Pluggable accessors (get_in, set_in, delete_in, for_each, reduce) so any
  persistent tree can sit underneath
- Box/unbox transforms between the stored root and the working tree
- Memoized dereference, invalidated by root identity
- Update hooks fired synchronously on every commit
- Subclass closure: derived cursors keep the caller's cursor type

Quick Start:
    >>> from treecursor import Cursor
    >>>
    >>> cursor = Cursor({'root': {'data': tree}, 'on_update': record})
    >>> leaf = cursor.cursor(['x', 'y'])
    >>> new_leaf = leaf.update(lambda value, *_: value.set_in(['z'], 'bar'))
    >>> new_leaf.root().deref()     # the new tree; `tree` is unchanged

Modules:
    - cursor: The Cursor type
    - options_model: Immutable options record and option processing
    - accessors: Accessor protocol and default accessor factories
    - config: Library-wide default accessors
    - path_utils: Key path normalization and composition
    - errors: Construction errors
    - sentinel: The NOT_SET absent marker
"""

from treecursor.sentinel import NOT_SET, NotSetType

from treecursor.errors import (
    CursorOptionsError,
    MissingOptions,
    InvalidOptionsType,
    InvalidConfigurationType,
    MissingRootData,
)

from treecursor.path_utils import to_path, join_path

from treecursor.accessors import (
    AccessorSet,
    DEFAULT_ACCESSORS,
    PersistentTree,
    default_get_in,
    default_set_in,
    default_delete_in,
    default_for_each,
    default_reduce,
    identity,
    identity_box,
)

from treecursor.config import (
    set_default_accessors,
    get_default_accessors,
    reset_default_accessors,
)

from treecursor.options_model import CursorOptions, RootOptions, process_options

from treecursor.cursor import Cursor

__all__ = [
    # Sentinel
    'NOT_SET',
    'NotSetType',
    # Errors
    'CursorOptionsError',
    'MissingOptions',
    'InvalidOptionsType',
    'InvalidConfigurationType',
    'MissingRootData',
    # Paths
    'to_path',
    'join_path',
    # Accessors
    'AccessorSet',
    'DEFAULT_ACCESSORS',
    'PersistentTree',
    'default_get_in',
    'default_set_in',
    'default_delete_in',
    'default_for_each',
    'default_reduce',
    'identity',
    'identity_box',
    # Configuration
    'set_default_accessors',
    'get_default_accessors',
    'reset_default_accessors',
    # Options
    'CursorOptions',
    'RootOptions',
    'process_options',
    # Cursor
    'Cursor',
]

__version__ = '1.0.0'
__description__ = 'Path-addressed cursors over persistent tree data'
