"""Per-folder image limits: occupancy, badges, upload and move checks."""

from __future__ import annotations

import logging
from typing import Sequence

from CineMedia.models import TreeNode, UploadPlan
from CineMedia.node_locator import current_folder_name, is_root_path, locate

logger = logging.getLogger(__name__)

MAX_IMAGES_PER_FOLDER = 10


class CapacityError(Exception):
    """Raised when an operation would break a folder's image limit."""


class FolderFullError(CapacityError):
    """Raised when a target folder cannot take the requested images."""

    def __init__(self, folder: str, count: int, limit: int, incoming: int):
        self.folder = folder
        self.count = count
        self.limit = limit
        self.incoming = incoming
        free = max(0, limit - count)
        super().__init__(
            f'Folder "{folder}" has {count}/{limit} images; '
            f"cannot add {incoming} more (room for {free})."
        )


def occupancy(tree: TreeNode, path: Sequence[str] | None) -> int:
    return locate(tree, path).count


def is_full(
    tree: TreeNode,
    path: Sequence[str] | None,
    limit: int = MAX_IMAGES_PER_FOLDER,
) -> bool:
    """Root is never full."""
    if is_root_path(path):
        return False
    return occupancy(tree, path) >= limit


def capacity_label(
    tree: TreeNode,
    path: Sequence[str] | None,
    limit: int = MAX_IMAGES_PER_FOLDER,
) -> str:
    """Badge text: ``"3 images"`` for root, ``"3/10"`` or ``"10/10 Full"`` elsewhere."""
    count = occupancy(tree, path)
    if is_root_path(path):
        return f"{count} images"
    label = f"{count}/{limit}"
    if count >= limit:
        label += " Full"
    return label


def plan_upload(
    tree: TreeNode,
    path: Sequence[str] | None,
    file_names: Sequence[str],
    limit: int = MAX_IMAGES_PER_FOLDER,
) -> UploadPlan:
    """Split *file_names* into those the folder can take and those it cannot.

    Files are accepted in order until the folder reaches *limit*.
    """
    if is_root_path(path):
        return UploadPlan(accepted=list(file_names))

    free = max(0, limit - occupancy(tree, path))
    plan = UploadPlan(
        accepted=list(file_names[:free]),
        rejected=list(file_names[free:]),
    )
    plan.remaining = free - len(plan.accepted)
    if plan.rejected:
        logger.info(
            "Folder %r can take %d of %d files",
            current_folder_name(path), len(plan.accepted), len(file_names),
        )
    return plan


def check_move_target(
    tree: TreeNode,
    path: Sequence[str] | None,
    incoming: int,
    limit: int = MAX_IMAGES_PER_FOLDER,
) -> TreeNode:
    """Return the target node, raising FolderFullError if it would overflow."""
    node = locate(tree, path)
    if not is_root_path(path) and node.count + incoming > limit:
        raise FolderFullError(current_folder_name(path), node.count, limit, incoming)
    return node
