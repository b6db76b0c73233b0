"""Name-keyed lookups over the flat folder list."""

from __future__ import annotations

from typing import Iterable

from CineMedia.models import FolderRecord


class FolderIndex:
    """Single-pass index of folders by name and by id.

    Folder names are unique on the backend. If a duplicate slips through,
    the last record wins.
    """

    def __init__(self, folders: Iterable[FolderRecord]):
        self.by_name: dict[str, FolderRecord] = {}
        self.by_id: dict[int, FolderRecord] = {}
        for folder in folders:
            self.by_name[folder.name] = folder
            self.by_id[folder.id] = folder

    def __contains__(self, name: object) -> bool:
        return name in self.by_name

    def __len__(self) -> int:
        return len(self.by_name)

    def get(self, name: str) -> FolderRecord | None:
        return self.by_name.get(name)

    def id_of(self, name: str) -> int | None:
        folder = self.by_name.get(name)
        return folder.id if folder else None

    def parent_of(self, name: str) -> FolderRecord | None:
        """Return the parent record, or None for root-level or dangling links."""
        folder = self.by_name.get(name)
        if folder is None or not folder.parent_id:
            return None
        return self.by_id.get(folder.parent_id)


def create_folder_id_map(folders: Iterable[FolderRecord]) -> dict[str, int]:
    """Map folder names to ids, as the backend addresses folders by id."""
    return {f.name: f.id for f in folders}
