"""Data classes for CineMedia."""

from __future__ import annotations

from dataclasses import dataclass, field

ROOT = "root"


@dataclass(frozen=True)
class FolderRecord:
    id: int
    name: str
    parent_id: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> FolderRecord:
        return cls(
            id=data["id"],
            name=data["name"],
            parent_id=data.get("parentId"),
        )


@dataclass(frozen=True)
class ImageRecord:
    id: int
    name: str
    size: int = 0
    content_type: str = ""
    folder_name: str | None = None  # None means the synthetic root
    url: str | None = None
    etag: str | None = None

    @classmethod
    def from_dict(cls, data: dict, folder_name: str | None = None) -> ImageRecord:
        return cls(
            id=data["id"],
            name=data.get("name", str(data["id"])),
            size=data.get("size", 0),
            content_type=data.get("contentType", ""),
            folder_name=folder_name
            or data.get("folderName")
            or data.get("folder"),
            url=data.get("url"),
            etag=data.get("eTag"),
        )


@dataclass
class TreeNode:
    children: dict[str, TreeNode] = field(default_factory=dict)
    items: list[ImageRecord] | None = None

    @property
    def count(self) -> int:
        return len(self.items) if self.items else 0


@dataclass
class TreeAudit:
    orphan_folders: list[str] = field(default_factory=list)
    unknown_image_folders: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.orphan_folders and not self.unknown_image_folders


@dataclass
class UploadPlan:
    accepted: list[str] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)
    remaining: int | None = None  # None when the folder has no limit
