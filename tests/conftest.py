"""Pytest configuration and shared fixtures."""
import pytest

import treecursor.config as config_module
from treecursor import Cursor

from helpers import FrozenTree


@pytest.fixture(autouse=True)
def restore_default_accessors():
    """Restore the library-wide default accessors after each test."""
    original_accessors = config_module._default_accessors

    yield

    config_module._default_accessors = original_accessors


@pytest.fixture
def tree():
    """Provide the nested tree {x: {y: {z: 'foo'}}}."""
    return FrozenTree.of({'x': {'y': {'z': 'foo'}}})


@pytest.fixture
def cursor(tree):
    """Provide a root cursor over the shared tree."""
    return Cursor({'root': {'data': tree}})


@pytest.fixture
def update_log():
    """Provide a list and two hooks that record (hook_name, path, new, old)."""
    log = []

    def on_update(options, path, new_root, old_root):
        log.append(('on_update', tuple(path), new_root, old_root))

    def _on_update(options, path, new_root, old_root):
        log.append(('_on_update', tuple(path), new_root, old_root))

    return log, on_update, _on_update
