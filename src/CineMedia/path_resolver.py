"""Ancestor path resolution for folders."""

from __future__ import annotations

import logging

from CineMedia.folder_index import FolderIndex
from CineMedia.models import ROOT

logger = logging.getLogger(__name__)


def resolve_path(folder_name: str, index: FolderIndex) -> list[str]:
    """Return the path from the synthetic root down to *folder_name*.

    The walk follows parent links upward and stops at a root-level folder,
    an unknown folder, or a parent id that matches nothing. A name seen twice
    ends the walk as well, leaving the last folder reached at root level.

    Example:
        resolve_path("Teasers", index) -> ["root", "Posters", "Teasers"]
    """
    if folder_name == ROOT:
        return [ROOT]

    path: list[str] = []
    visited: set[str] = set()
    current: str | None = folder_name

    while current and current not in visited:
        visited.add(current)
        path.insert(0, current)
        parent = index.parent_of(current)
        if parent is None:
            break
        if parent.name in visited:
            logger.warning(
                "Cycle in folder parents at %r -> %r; treating %r as root-level",
                current, parent.name, current,
            )
            break
        current = parent.name

    return [ROOT, *path]
