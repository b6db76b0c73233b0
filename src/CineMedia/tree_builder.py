"""Folder tree builder for the media library."""

from __future__ import annotations

import logging
from typing import Iterable

from CineMedia.folder_index import FolderIndex
from CineMedia.models import ROOT, FolderRecord, ImageRecord, TreeAudit, TreeNode
from CineMedia.path_resolver import resolve_path

logger = logging.getLogger(__name__)


def build_tree(
    images: Iterable[ImageRecord],
    folders: Iterable[FolderRecord],
) -> TreeNode:
    """Build a nested folder tree from the flat folder and image lists.

    The returned wrapper always holds ``children["root"]``; parent-less
    folders hang directly under it and images are attached afterwards.

    Example structure:
        wrapper
        └── root
            ├── Posters
            │   └── Teasers
            └── Banners
    """
    folder_list = list(folders)
    index = FolderIndex(folder_list)

    tree = TreeNode()
    tree.children[ROOT] = TreeNode(
        children=_build_subtree(None, folder_list, index, frozenset()).children,
        items=[],
    )

    assign_images(tree, images, index)
    return tree


def _build_subtree(
    parent_name: str | None,
    folder_list: list[FolderRecord],
    index: FolderIndex,
    ancestors: frozenset[str],
) -> TreeNode:
    """Recursively collect the folders that belong under *parent_name*."""
    node = TreeNode(items=[])
    parent_id = index.id_of(parent_name) if parent_name is not None else None

    for folder in folder_list:
        if parent_name is None:
            if folder.parent_id or folder.name == ROOT:
                continue
        elif parent_id is None or folder.parent_id != parent_id:
            continue

        if folder.name in ancestors:
            # Duplicate names can close a loop; never descend into one
            logger.warning("Skipping %r: already an ancestor", folder.name)
            continue

        node.children[folder.name] = _build_subtree(
            folder.name, folder_list, index, ancestors | {folder.name}
        )

    return node


def assign_images(
    tree: TreeNode,
    images: Iterable[ImageRecord],
    index: FolderIndex,
) -> None:
    """Attach each image to the node at its folder's resolved path.

    Missing nodes along the way are created, so an image tagged with a
    folder the list does not know about still lands somewhere reachable.
    Input order is kept within each node.
    """
    root = tree.children.setdefault(ROOT, TreeNode(items=[]))

    for img in images:
        folder = img.folder_name or ROOT
        path = [ROOT] if folder == ROOT else resolve_path(folder, index)

        node = root
        for part in path[1:]:
            node = node.children.setdefault(part, TreeNode(items=[]))

        if node.items is None:
            node.items = []
        node.items.append(img)


def audit_tree(
    images: Iterable[ImageRecord],
    folders: Iterable[FolderRecord],
) -> TreeAudit:
    """Report folders and image tags the tree can only place by fallback.

    Orphan folders are those never reached from a parent-less folder, either
    through a dangling parent id or a cycle. Unknown image folders are tags
    that match no folder at all.
    """
    folder_list = list(folders)
    index = FolderIndex(folder_list)
    audit = TreeAudit()

    reachable: set[str] = set()
    _collect_names(
        _build_subtree(None, folder_list, index, frozenset()), reachable
    )
    for folder in folder_list:
        if folder.name != ROOT and folder.name not in reachable:
            logger.warning(
                "Folder %r (id=%s) is not reachable from root (parent_id=%s)",
                folder.name, folder.id, folder.parent_id,
            )
            audit.orphan_folders.append(folder.name)

    for img in images:
        folder = img.folder_name or ROOT
        if folder == ROOT or folder in index:
            continue
        if folder not in audit.unknown_image_folders:
            logger.warning("Image %s is tagged with unknown folder %r", img.id, folder)
            audit.unknown_image_folders.append(folder)

    return audit


def _collect_names(node: TreeNode, names: set[str]) -> None:
    for name, child in node.children.items():
        names.add(name)
        _collect_names(child, names)
