"""
Library-wide cursor configuration.

Holds the AccessorSet used to fill accessor fields that cursor options leave
unset. Options pick the defaults up when they are processed, so changing them
only affects cursors built afterwards.
"""

import logging

from treecursor.accessors import AccessorSet, DEFAULT_ACCESSORS

logger = logging.getLogger(__name__)

_default_accessors: AccessorSet = DEFAULT_ACCESSORS


def set_default_accessors(accessors: AccessorSet) -> None:
    """Set the accessors used when options do not supply their own.

    Args:
        accessors: AccessorSet whose factories become the new defaults
    """
    global _default_accessors
    if not isinstance(accessors, AccessorSet):
        raise TypeError(f"Expected an AccessorSet, got {type(accessors).__name__}")
    _default_accessors = accessors
    logger.debug(f"Default accessors set to {accessors!r}")


def get_default_accessors() -> AccessorSet:
    """Get the accessors used when options do not supply their own."""
    return _default_accessors


def reset_default_accessors() -> None:
    """Restore the built-in accessors, which delegate to the root's own methods."""
    set_default_accessors(DEFAULT_ACCESSORS)
