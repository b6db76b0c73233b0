"""ASCII rendering of the folder tree."""

from __future__ import annotations

from CineMedia.capacity import MAX_IMAGES_PER_FOLDER, capacity_label
from CineMedia.models import ROOT, TreeNode
from CineMedia.node_locator import sorted_child_names


def render_tree(tree: TreeNode, limit: int = MAX_IMAGES_PER_FOLDER) -> str:
    """Render the folder tree with a capacity label on each folder.

    Example output:
        └── Root/ (3 images)
            ├── Banners/ (0/10)
            └── Posters/ (10/10 Full)
                └── Teasers/ (2/10)
    """
    if ROOT not in tree.children:
        return ""

    lines: list[str] = []
    _render_tree(tree, tree, [], lines, prefix="", limit=limit)
    return "\n".join(lines)


def _render_tree(
    tree: TreeNode,
    node: TreeNode,
    path: list[str],
    lines: list[str],
    prefix: str,
    limit: int,
) -> None:
    """Recursively render the children of *node* into lines."""
    names = sorted_child_names(node)
    for i, name in enumerate(names):
        is_last = i == len(names) - 1
        connector = "└── " if is_last else "├── "
        this_path = path + [name]

        display_name = "Root" if this_path == [ROOT] else name
        label = capacity_label(tree, this_path, limit)
        lines.append(f"{prefix}{connector}{display_name}/ ({label})")

        child = node.children[name]
        if child.children:
            extension = "    " if is_last else "│   "
            _render_tree(tree, child, this_path, lines, prefix + extension, limit)
