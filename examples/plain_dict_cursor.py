"""
Cursors over plain nested dicts.

Plain dicts have no get_in/set_in/delete_in of their own, so this example
supplies an AccessorSet that copies the dicts along the written path and
shares every other branch. The root is boxed in a small versioned record, and
an on_update hook logs each commit.

Run:
    python examples/plain_dict_cursor.py
"""

import logging
from typing import Any, Dict, Sequence

from treecursor import AccessorSet, Cursor

logger = logging.getLogger(__name__)


def dict_get_in(root: Dict) -> Any:
    def get_in(path: Sequence, not_set: Any = None) -> Any:
        node = root
        for key in path:
            if not isinstance(node, dict) or key not in node:
                return not_set
            node = node[key]
        return node
    return get_in


def _assoc_in(node: Dict, path: Sequence, value: Any) -> Dict:
    if not path:
        return value
    head, rest = path[0], path[1:]
    copied = dict(node)
    if rest:
        child = node.get(head)
        copied[head] = _assoc_in(child if isinstance(child, dict) else {}, rest, value)
    else:
        copied[head] = value
    return copied


def _dissoc_in(node: Dict, path: Sequence) -> Dict:
    head, rest = path[0], path[1:]
    if head not in node:
        return node
    if rest:
        child = node[head]
        if not isinstance(child, dict):
            return node
        new_child = _dissoc_in(child, rest)
        if new_child is child:
            return node
        copied = dict(node)
        copied[head] = new_child
        return copied
    copied = dict(node)
    del copied[head]
    return copied


DICT_ACCESSORS = AccessorSet(
    get_in=dict_get_in,
    set_in=lambda root: (lambda path, value: _assoc_in(root, tuple(path), value)),
    delete_in=lambda root: (lambda path: _dissoc_in(root, tuple(path)) if path else root),
)


def box(new_tree: Dict, previous: Dict) -> Dict:
    return {'tree': new_tree, 'version': previous['version'] + 1}


def log_commit(options, path, new_root, old_root) -> None:
    logger.info(f"Committed at {tuple(path)!r}: {old_root!r} -> {new_root!r}")


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    store = {'tree': {'user': {'name': 'ada', 'langs': {'python': 3}}}, 'version': 0}
    cursor = Cursor({
        'root': {'data': store, 'unbox': lambda boxed: boxed['tree'], 'box': box},
        'accessors': DICT_ACCESSORS,
        'on_update': log_commit,
    })

    name = cursor.cursor(['user', 'name'])
    renamed = name.update(lambda value, *_: value.title())
    print(renamed.deref(), renamed.options().root.data['version'])

    langs = renamed.root().cursor(['user', 'langs'])
    print(langs.reduce(lambda acc, child, key, *rest: acc + [f"{key}={child.deref()}"], []))

    removed = langs.cursor('python').delete()
    print(removed.root().deref(), removed.exists())

    print(store)


if __name__ == '__main__':
    main()
