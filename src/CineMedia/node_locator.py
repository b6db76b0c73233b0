"""Path lookup and navigation helpers over a built folder tree.

Paths always start with the literal ``"root"`` segment and are walked from
the wrapper returned by ``build_tree``. ``normalize_path`` turns any caller
path into that form, so every lookup goes through the same entry point.
"""

from __future__ import annotations

from typing import Sequence

from CineMedia.models import ROOT, TreeNode


def normalize_path(path: Sequence[str] | None) -> list[str]:
    """Return *path* anchored at ``"root"``.

    ``[]`` and ``None`` mean the root itself; ``["Posters"]`` becomes
    ``["root", "Posters"]``.
    """
    parts = [p for p in (path or []) if p]
    if not parts or parts[0] != ROOT:
        parts.insert(0, ROOT)
    return parts


def locate(tree: TreeNode, path: Sequence[str] | None) -> TreeNode:
    """Return the node at *path*, or a fresh empty node if any segment is missing."""
    node = tree
    for part in normalize_path(path):
        child = node.children.get(part)
        if child is None:
            return TreeNode()
        node = child
    return node


def is_root_path(path: Sequence[str] | None) -> bool:
    return normalize_path(path) == [ROOT]


def sorted_child_names(node: TreeNode) -> list[str]:
    """Child folder names with ``"root"`` first and the rest alphabetical."""
    return sorted(node.children, key=lambda name: (name != ROOT, name.casefold(), name))


def walk_paths(tree: TreeNode) -> list[list[str]]:
    """Every folder path in the tree, depth-first in display order.

    Used to fill folder pickers (move target, upload target).
    """
    paths: list[list[str]] = []

    def _walk(node: TreeNode, prefix: list[str]) -> None:
        for name in sorted_child_names(node):
            path = prefix + [name]
            paths.append(path)
            _walk(node.children[name], path)

    _walk(tree, [])
    return paths


def breadcrumbs(path: Sequence[str] | None) -> list[tuple[str, list[str]]]:
    """Return ``(label, target_path)`` pairs for a breadcrumb bar.

    The first crumb is always ``("Root", ["root"])``; each following crumb
    navigates to the path ending at that folder.
    """
    parts = normalize_path(path)
    crumbs: list[tuple[str, list[str]]] = [("Root", [ROOT])]
    for i in range(1, len(parts)):
        crumbs.append((parts[i], parts[: i + 1]))
    return crumbs


def current_folder_name(path: Sequence[str] | None) -> str:
    return normalize_path(path)[-1]
