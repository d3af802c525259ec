"""
Errors raised while building cursor options.

Only construction can fail on its own account. Everything a cursor does at
runtime delegates to caller-supplied functions, whose exceptions propagate
untouched.
"""


class CursorOptionsError(Exception):
    """Base class for invalid cursor configuration."""


class MissingOptions(CursorOptionsError, TypeError):
    """No configuration was supplied at all."""


class InvalidOptionsType(CursorOptionsError, TypeError):
    """Configuration is neither a mapping nor a CursorOptions record."""


class InvalidConfigurationType(CursorOptionsError, TypeError):
    """Configuration is a collection, but not a map-like one."""


class MissingRootData(CursorOptionsError, ValueError):
    """Options were processed but no root data is present."""
