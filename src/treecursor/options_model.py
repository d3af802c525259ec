"""
Cursor options: the immutable configuration record every cursor carries.

Options are frozen dataclasses. A derived cursor gets a copy made with
dataclasses.replace, which changes the one field that differs (usually the
path or the root data) and shares every other field by reference, the
RootOptions record included.

Processing turns whatever the caller handed in (a plain mapping or an
already built CursorOptions) into a complete record:
- unset fields receive their defaults (identity box/unbox, empty path, the
  configured default accessors)
- caller-supplied callables, root data and path are kept by reference
- root data must be present unless the caller explicitly skips the check
"""

from collections.abc import Collection, Mapping, MappingView, MutableSequence, MutableSet
from dataclasses import dataclass, field, replace
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from treecursor.accessors import ACCESSOR_FIELDS, AccessorFactory, AccessorSet, identity, identity_box
from treecursor.config import get_default_accessors
from treecursor.errors import (
    InvalidConfigurationType,
    InvalidOptionsType,
    MissingOptions,
    MissingRootData,
)
from treecursor.sentinel import NOT_SET

logger = logging.getLogger(__name__)

# (options, path, new_unboxed_root, old_unboxed_root) -> None
UpdateHook = Callable[['CursorOptions', Sequence, Any, Any], None]

_HOOK_FIELDS = ('on_update', '_on_update')
_KNOWN_KEYS = frozenset(('root', 'path', 'accessors') + ACCESSOR_FIELDS + _HOOK_FIELDS)


def _is_unset(value: Any) -> bool:
    return value is NOT_SET or value is None


def _is_immutable_collection(value: Any) -> bool:
    """Tuples, frozensets and other read-only non-mapping collections."""
    if isinstance(value, (str, bytes, MutableSequence, MutableSet, MappingView)):
        return False
    return isinstance(value, Collection)


@dataclass(frozen=True)
class RootOptions:
    """Boxed root data plus the transforms between stored and working form.

    ``unbox(data)`` yields the value the accessors operate on; after a commit
    ``box(new_unboxed, data)`` yields the data stored in the next options.
    """
    data: Any = NOT_SET
    unbox: Callable[[Any], Any] = NOT_SET
    box: Callable[[Any, Any], Any] = NOT_SET

    @classmethod
    def from_value(cls, value: Any) -> 'RootOptions':
        if value is NOT_SET:
            return cls()
        if isinstance(value, RootOptions):
            return value
        if isinstance(value, Mapping):
            return cls(
                data=value.get('data', NOT_SET),
                unbox=value.get('unbox', NOT_SET),
                box=value.get('box', NOT_SET),
            )
        raise InvalidOptionsType(
            f"Expected 'root' to be a mapping or RootOptions, got {type(value).__name__}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in ('data', 'unbox', 'box')
            if getattr(self, name) is not NOT_SET
        }


@dataclass(frozen=True)
class CursorOptions:
    """Complete configuration of a cursor.

    Fields left as NOT_SET are filled in by process_options. The hooks have
    no default and stay None when not given. Unrecognised configuration keys
    are kept read-only in ``extra``.
    """
    root: RootOptions = field(default_factory=RootOptions)
    path: Sequence = NOT_SET
    get_in: AccessorFactory = NOT_SET
    set_in: AccessorFactory = NOT_SET
    delete_in: AccessorFactory = NOT_SET
    for_each: AccessorFactory = NOT_SET
    reduce: AccessorFactory = NOT_SET
    on_update: Optional[UpdateHook] = None
    _on_update: Optional[UpdateHook] = None
    extra: Mapping = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, config: Mapping) -> 'CursorOptions':
        """Build unprocessed options from a plain configuration mapping.

        Args:
            config: Mapping shaped like ``{'root': {'data': ...}, 'path': [...], ...}``

        Returns:
            CursorOptions with every given value kept by reference
        """
        values: Dict[str, Any] = {
            name: config[name]
            for name in ('path',) + ACCESSOR_FIELDS + _HOOK_FIELDS
            if name in config
        }

        accessors = config.get('accessors')
        if accessors is not None:
            if not isinstance(accessors, AccessorSet):
                raise InvalidOptionsType(
                    f"Expected 'accessors' to be an AccessorSet, got {type(accessors).__name__}"
                )
            for name in ACCESSOR_FIELDS:
                if _is_unset(values.get(name)):
                    values[name] = getattr(accessors, name)

        extra = {key: value for key, value in config.items() if key not in _KNOWN_KEYS}

        return cls(
            root=RootOptions.from_value(config.get('root', NOT_SET)),
            extra=MappingProxyType(extra),
            **values,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export to a plain configuration mapping accepted by from_dict."""
        result: Dict[str, Any] = {'root': self.root.to_dict()}
        for name in ('path',) + ACCESSOR_FIELDS:
            value = getattr(self, name)
            if value is not NOT_SET:
                result[name] = value
        for name in _HOOK_FIELDS:
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        result.update(self.extra)
        return result

    def with_path(self, path: Sequence) -> 'CursorOptions':
        return replace(self, path=path)

    def with_root_data(self, data: Any) -> 'CursorOptions':
        return replace(self, root=replace(self.root, data=data))

    def with_hooks(self, on_update: Any = NOT_SET, _on_update: Any = NOT_SET) -> 'CursorOptions':
        """Replace either update hook; hooks not passed are kept."""
        changes = {}
        if on_update is not NOT_SET:
            changes['on_update'] = on_update
        if _on_update is not NOT_SET:
            changes['_on_update'] = _on_update
        return replace(self, **changes) if changes else self


def _defaults(accessors: AccessorSet) -> Tuple[Tuple[Tuple[str, ...], Any], ...]:
    """Defaults table: (field path, default value), in declaration order."""
    return (
        (('root', 'unbox'), identity),
        (('root', 'box'), identity_box),
        (('path',), ()),
        (('get_in',), accessors.get_in),
        (('set_in',), accessors.set_in),
        (('delete_in',), accessors.delete_in),
        (('for_each',), accessors.for_each),
        (('reduce',), accessors.reduce),
    )


def _apply_defaults(options: CursorOptions) -> CursorOptions:
    root_changes: Dict[str, Any] = {}
    changes: Dict[str, Any] = {}

    for field_path, default in reversed(_defaults(get_default_accessors())):
        if field_path[0] == 'root':
            if _is_unset(getattr(options.root, field_path[1])):
                root_changes[field_path[1]] = default
        elif _is_unset(getattr(options, field_path[0])):
            changes[field_path[0]] = default

    if root_changes:
        changes['root'] = replace(options.root, **root_changes)
    if not changes:
        return options

    logger.debug(f"Applied option defaults: {sorted(changes)} (root: {sorted(root_changes)})")
    return replace(options, **changes)


def process_options(options: Any = NOT_SET, skip_data_check: bool = False) -> CursorOptions:
    """Validate caller configuration and fill in defaults.

    Args:
        options: Plain mapping or CursorOptions
        skip_data_check: Allow options without root data (deferred initialization)

    Returns:
        Fully defaulted CursorOptions; the same instance when nothing was missing

    Raises:
        MissingOptions: options were not supplied
        InvalidConfigurationType: options are an immutable non-mapping collection
        InvalidOptionsType: options are anything else that is neither a mapping
            nor CursorOptions (scalars, lists, sets, generators, ...)
        MissingRootData: no root data after defaulting
    """
    if options is NOT_SET:
        raise MissingOptions("Expected options to be a mapping or CursorOptions")

    if isinstance(options, CursorOptions):
        processed = options
    elif isinstance(options, Mapping):
        processed = CursorOptions.from_dict(options)
    elif _is_immutable_collection(options):
        raise InvalidConfigurationType(
            f"Expected options to be a mapping, got collection {type(options).__name__}"
        )
    else:
        raise InvalidOptionsType(
            f"Expected options to be a mapping or CursorOptions, got {type(options).__name__}"
        )

    processed = _apply_defaults(processed)

    if processed.root.data is NOT_SET:
        if not skip_data_check:
            raise MissingRootData("Value at ('root', 'data') is required")
        logger.debug("Root data check skipped; options carry no root data")

    return processed
