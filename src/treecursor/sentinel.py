"""
Absent-value marker shared by the whole package.

NOT_SET stands for "nothing here": options that were never given, a path with
no value behind it, a memo cell that has not been filled yet. It is a proper
singleton, so copying or pickling it gives back the very same object and
identity checks (``value is NOT_SET``) keep working across those boundaries.
"""


class NotSetType:
    """Type of the NOT_SET singleton."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'NOT_SET'

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return 'NOT_SET'

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


NOT_SET = NotSetType()
