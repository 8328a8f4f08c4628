"""Turn flat ruleset paths into the nested tree shown in the navigation sidebar.

For the paths ``a/b``, ``a/c`` and ``a/d/e`` the forest is::

    [{"name": "a", "path": "a", "children": [
        {"name": "b", "path": "a/b"},
        {"name": "c", "path": "a/c"},
        {"name": "d", "path": "a/d", "children": [{"name": "e", "path": "a/d/e"}]},
    ]}]

Siblings are ordered by Unicode code point, which keeps the output identical
across platforms and locales.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

DEFAULT_SEPARATOR = "/"


class InvalidPathError(ValueError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"invalid ruleset path {path!r}: {reason}")
        self.path = path
        self.reason = reason


@dataclass
class TreeNode:
    name: str
    path: str
    children: list[TreeNode] | None = None

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "path": self.path}
        if self.children is not None:
            out["children"] = [child.to_dict() for child in self.children]
        return out


def build_tree(
    name: str = "",
    parents: Sequence[str] = (),
    rest: Sequence[str] = (),
    separator: str = DEFAULT_SEPARATOR,
) -> TreeNode:
    """Build a single chain of nodes, one per segment in ``[name, *rest]``."""
    lineage = [*parents, name]
    node = TreeNode(name=name, path=separator.join(lineage))
    if rest:
        node.children = [build_tree(rest[0], lineage, rest[1:], separator)]
    return node


def merge_trees(trees: Iterable[TreeNode]) -> list[TreeNode]:
    """Unify same-named siblings and merge their children recursively.

    Input nodes are left untouched; the returned forest is made of new nodes.
    """
    merged: list[TreeNode] = []
    current: TreeNode | None = None

    for node in sorted(trees, key=lambda n: n.name):
        if current is not None and node.name == current.name:
            if not current.path and node.path:
                current.path = node.path
            if current.children is not None or node.children is not None:
                current.children = merge_trees([*(current.children or []), *(node.children or [])])
            continue

        if current is not None:
            merged.append(current)
        current = TreeNode(name=node.name, path=node.path, children=node.children)
        if node.children is not None:
            # re-merge so nested lists are fresh copies and ordered
            current.children = merge_trees(node.children)

    if current is not None:
        merged.append(current)
    return merged


def _record_path(item: Any) -> str | None:
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        return item.get("path")
    return getattr(item, "path", None)


def split_ruleset_path(path: str, separator: str = DEFAULT_SEPARATOR, strict: bool = False) -> list[str]:
    if not separator:
        raise ValueError("separator must not be empty")
    chunks = path.split(separator)
    if strict:
        if not path:
            raise InvalidPathError(path, "path is empty")
        if any(not chunk for chunk in chunks):
            raise InvalidPathError(path, "path contains an empty segment")
    return chunks


def rulesets_to_tree(
    rulesets: Iterable[Any],
    separator: str = DEFAULT_SEPARATOR,
    strict: bool = False,
) -> list[TreeNode]:
    """Build the navigation forest for ruleset paths.

    ``rulesets`` holds path strings or ruleset records (mappings or objects
    with a ``path`` attribute); records without a path are ignored. With
    ``strict`` set, empty paths and paths with empty segments raise
    :class:`InvalidPathError` instead of producing empty-named nodes.
    """
    trees: list[TreeNode] = []
    for item in rulesets:
        path = _record_path(item)
        if path is None:
            continue
        chunks = split_ruleset_path(path, separator, strict=strict)
        trees.append(build_tree(chunks[0], [], chunks[1:], separator))
    return merge_trees(trees)


def tree_to_dicts(forest: Iterable[TreeNode]) -> list[dict[str, Any]]:
    return [node.to_dict() for node in forest]


def forest_stats(paths: Sequence[str], separator: str = DEFAULT_SEPARATOR) -> dict[str, Any]:
    roots = [path.split(separator)[0] for path in paths]
    root_counts = {key: roots.count(key) for key in sorted(set(roots))}
    return {
        "ruleset_count": len(paths),
        "root_counts": root_counts,
    }


def render_tree_text(forest: Sequence[TreeNode]) -> str:
    lines = ["."]

    def _walk(nodes: Sequence[TreeNode], prefix: str) -> None:
        for idx, node in enumerate(nodes):
            is_last = idx == len(nodes) - 1
            branch = "`-- " if is_last else "|-- "
            lines.append(f"{prefix}{branch}{node.name}")
            child_prefix = f"{prefix}{'    ' if is_last else '|   '}"
            _walk(node.children or [], child_prefix)

    _walk(forest, "")
    return "\n".join(lines)
