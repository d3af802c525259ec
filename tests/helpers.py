"""Test-only persistent map standing in for the tree collaborator.

FrozenTree is a read-only Mapping with path-copying get_in/set_in/delete_in:
every write copies the nodes along the path and shares all other branches
with the previous version. Writes that change nothing return the tree itself.
"""
from collections.abc import Mapping
from types import MappingProxyType

_MISSING = object()


class FrozenTree(Mapping):

    def __init__(self, entries=None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def of(cls, plain):
        """Convert nested dicts into nested FrozenTrees."""
        if isinstance(plain, Mapping):
            return cls({key: cls.of(value) for key, value in plain.items()})
        return plain

    def __getitem__(self, key):
        return self._entries[key]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"FrozenTree({dict(self._entries)!r})"

    def set(self, key, value):
        if self._entries.get(key, _MISSING) is value:
            return self
        entries = dict(self._entries)
        entries[key] = value
        return FrozenTree(entries)

    def remove(self, key):
        if key not in self._entries:
            return self
        entries = dict(self._entries)
        del entries[key]
        return FrozenTree(entries)

    def get_in(self, path, not_set=None):
        node = self
        for key in path:
            if not isinstance(node, Mapping) or key not in node:
                return not_set
            node = node[key]
        return node

    def set_in(self, path, value):
        path = tuple(path)
        if not path:
            return value
        head, rest = path[0], path[1:]
        if not rest:
            return self.set(head, value)
        child = self._entries.get(head, _MISSING)
        if not isinstance(child, FrozenTree):
            child = FrozenTree()
        return self.set(head, child.set_in(rest, value))

    def delete_in(self, path):
        path = tuple(path)
        if not path:
            return self
        head, rest = path[0], path[1:]
        if not rest:
            return self.remove(head)
        child = self._entries.get(head, _MISSING)
        if not isinstance(child, FrozenTree):
            return self
        return self.set(head, child.delete_in(rest))
