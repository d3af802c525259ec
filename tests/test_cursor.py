"""Tests for cursor construction, dereference and navigation."""
import copy

import pytest

from treecursor import (
    NOT_SET,
    Cursor,
    CursorOptions,
    MissingOptions,
    InvalidConfigurationType,
    InvalidOptionsType,
    MissingRootData,
)

from helpers import FrozenTree

SENTINEL = object()


class TestConstruction:
    """Test Cursor construction."""

    def test_requires_options(self):
        with pytest.raises(MissingOptions):
            Cursor()

    def test_rejects_list_as_invalid_type(self):
        with pytest.raises(InvalidOptionsType):
            Cursor([])

    def test_rejects_immutable_non_mapping_collection(self):
        with pytest.raises(InvalidConfigurationType):
            Cursor(())

    def test_requires_root_data(self):
        with pytest.raises(MissingRootData):
            Cursor({'path': ['a']})

    def test_skip_data_check(self):
        cursor = Cursor({}, skip_data_check=True)
        assert cursor.options().root.data is NOT_SET

    def test_skip_process_options_trusts_options(self):
        options = CursorOptions()
        cursor = Cursor(options, skip_data_check=True, skip_process_options=True)
        assert cursor.options() is options

    def test_trusted_options_still_require_root_data(self):
        """Skipping processing alone does not skip the root data check."""
        with pytest.raises(MissingRootData):
            Cursor(CursorOptions(), skip_process_options=True)

    def test_trusted_options_with_root_data(self, cursor):
        trusted = Cursor(cursor.options(), skip_process_options=True)
        assert trusted.options() is cursor.options()

    def test_options_is_a_cursor_options(self, cursor, tree):
        assert isinstance(cursor.options(), CursorOptions)
        assert cursor.options().root.data is tree

    def test_new_processes_options(self, cursor):
        with pytest.raises(MissingRootData):
            cursor.new({})

    def test_new_reuses_processed_options(self, cursor):
        other = cursor.new(cursor.options())
        assert other is not cursor
        assert other.options() is cursor.options()


class TestDeref:
    """Test deref(), exists() and the memo cell."""

    def test_deref_root(self, cursor, tree):
        assert cursor.deref() is tree
        assert cursor.dereference() is tree

    def test_deref_path(self, cursor):
        assert cursor.cursor(['x', 'y', 'z']).deref() == 'foo'

    def test_deref_unset_path(self, cursor):
        missing = cursor.cursor(['x', 'nope'])
        assert missing.deref() is None
        assert missing.deref(SENTINEL) is SENTINEL

    def test_deref_uses_unbox(self, tree):
        boxed = {'tree': tree}
        cursor = Cursor({'root': {'data': boxed, 'unbox': lambda data: data['tree']}, 'path': ['x']})
        assert cursor.deref() == {'y': {'z': 'foo'}}

    def test_deref_uses_custom_get_in(self, tree):
        calls = []

        def get_in(root):
            def read(path, not_set):
                calls.append(tuple(path))
                return 'custom'
            return read

        cursor = Cursor({'root': {'data': tree}, 'path': ['x'], 'get_in': get_in})
        assert cursor.deref() == 'custom'
        assert calls == [('x',)]

    def test_deref_reads_once_between_commits(self, tree):
        calls = []

        def get_in(root):
            calls.append(root)
            return root.get_in

        cursor = Cursor({'root': {'data': tree}, 'get_in': get_in}).cursor(['x', 'y', 'z'])
        assert cursor.deref() == 'foo'
        assert cursor.deref() == 'foo'
        assert cursor.deref(SENTINEL) == 'foo'
        assert len(calls) == 1

    def test_memoized_absent_value_honours_not_set_value(self, cursor):
        missing = cursor.cursor('nope')
        assert missing.deref(1) == 1
        assert missing.deref(2) == 2

    def test_new_root_is_read_again(self, tree):
        calls = []

        def get_in(root):
            calls.append(root)
            return root.get_in

        cursor = Cursor({'root': {'data': tree}, 'get_in': get_in}).cursor(['x', 'y', 'z'])
        cursor.deref()
        updated = cursor.update(lambda value, *_: 'bar')
        assert updated.deref() == 'bar'
        assert calls[-1] is updated.options().root.data
        assert cursor.deref() == 'foo'

    def test_cached_value(self, cursor):
        leaf = cursor.cursor(['x', 'y', 'z'])
        assert leaf.cached_value(SENTINEL) is SENTINEL
        leaf.deref()
        assert leaf.cached_value(SENTINEL) == 'foo'
        assert leaf.cached_value() == 'foo'

    def test_exists(self, cursor):
        assert cursor.cursor(['x', 'y']).exists()
        assert not cursor.cursor(['x', 'nope']).exists()

    def test_exists_with_none_value(self):
        cursor = Cursor({'root': {'data': FrozenTree({'a': None})}})
        assert cursor.cursor('a').exists()

    def test_str(self, cursor):
        assert str(cursor.cursor(['x', 'y', 'z'])) == 'foo'

    def test_copy_has_fresh_memo(self, cursor):
        leaf = cursor.cursor(['x', 'y', 'z'])
        leaf.deref()
        for duplicate in (copy.copy(leaf), copy.deepcopy(leaf)):
            assert type(duplicate) is type(leaf)
            assert duplicate is not leaf
            assert duplicate.options() is leaf.options()
            assert duplicate.cached_value(SENTINEL) is SENTINEL


class TestNavigation:
    """Test cursor()/navigate(), path() and root()."""

    def test_default_path(self, cursor):
        assert cursor.path() == ()
        assert cursor.key_path() == ()
        assert cursor.keypath() == ()

    def test_configured_path(self, tree):
        path = ['x', 'y']
        assert Cursor({'root': {'data': tree}, 'path': path}).path() is path

    def test_no_argument_returns_self(self, cursor):
        assert cursor.cursor() is cursor
        assert cursor.navigate() is cursor

    def test_empty_path_returns_self(self, cursor):
        assert cursor.cursor([]) is cursor
        assert cursor.cursor(()) is cursor
        assert cursor.cursor(iter([])) is cursor

    def test_key(self, cursor):
        assert cursor.cursor('x').cursor('a').path() == ('x', 'a')

    def test_sequence(self, cursor):
        assert cursor.cursor(['x']).cursor(['y', 'z']).path() == ('x', 'y', 'z')

    def test_composition(self, cursor):
        start = cursor.cursor(['a'])
        assert start.cursor(['b', 'c']).cursor('d').path() == tuple(start.path()) + ('b', 'c', 'd')

    def test_only_path_changes(self, cursor):
        child = cursor.cursor('x')
        assert child.options().root is cursor.options().root
        assert child.options().get_in is cursor.options().get_in
        assert cursor.path() == ()

    def test_navigation_skips_processing(self, cursor, monkeypatch):
        import treecursor.cursor as cursor_module

        def fail(*args, **kwargs):
            raise AssertionError('options processed again')

        monkeypatch.setattr(cursor_module, 'process_options', fail)
        assert cursor.cursor('x').path() == ('x',)

    def test_navigation_skips_data_check(self):
        cursor = Cursor({}, skip_data_check=True)
        assert cursor.cursor('a').path() == ('a',)

    def test_root(self, cursor, tree):
        leaf = cursor.cursor(['x', 'y'])
        root = leaf.root()
        assert root.path() == ()
        assert root.deref() is tree
        assert root.options().root is leaf.options().root

    def test_repr(self, cursor):
        assert repr(cursor.cursor(['x', 'y'])) == "Cursor(path=('x', 'y'))"
