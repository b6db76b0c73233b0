"""REST client for the media backend (folders and images)."""

from __future__ import annotations

import logging
from typing import Sequence

import requests

from CineMedia.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from CineMedia.image_url import DEFAULT_IMAGE_ENDPOINT, normalize_image_url, strip_raw_suffix
from CineMedia.models import ROOT, FolderRecord, ImageRecord

logger = logging.getLogger(__name__)


class MediaApiError(Exception):
    """Raised for media backend errors."""


class FileTooLargeError(MediaApiError):
    """Raised when the backend rejects an upload as too large (HTTP 413)."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(
            f'File "{filename}" exceeds the maximum size limit. '
            "Please upload a smaller file."
        )


class MediaApiClient:
    """Client for the ``/folders`` and ``/images`` endpoints."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        token: str | None = None,
        image_endpoint: str = DEFAULT_IMAGE_ENDPOINT,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.api_url = api_url.rstrip("/")
        self.image_endpoint = image_endpoint
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers["Accept"] = "*/*"
        self.session.headers["User-Agent"] = "CineMedia/1.0"
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self.api_url}{path}"
        logger.debug("%s %s", method, url)
        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)

        if resp.status_code == 401:
            raise MediaApiError("Authentication failed. Sign in again.")
        if resp.status_code == 403:
            raise MediaApiError("Access denied. Your account may lack permissions.")
        if resp.status_code == 404:
            raise MediaApiError(f"Not found: {path}")
        resp.raise_for_status()

        if not resp.content:
            return {}
        return resp.json()

    @staticmethod
    def _data(payload: dict):
        """Unwrap the ``{"data": ..., "message": ..., "status": ...}`` envelope."""
        return payload.get("data") if isinstance(payload, dict) else None

    def _image_from_dto(self, dto: dict, folder_name: str | None = None) -> ImageRecord:
        raw_url = dto.get("url") or f"{self.api_url}/images/{dto['id']}"
        record = ImageRecord.from_dict(dto, folder_name=folder_name)
        return ImageRecord(
            id=record.id,
            name=record.name,
            size=record.size,
            content_type=record.content_type,
            folder_name=record.folder_name,
            url=normalize_image_url(
                strip_raw_suffix(raw_url), record.id, self.image_endpoint
            ),
            etag=record.etag,
        )

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    def _folder_content(self) -> list[dict]:
        data = self._data(self._request("GET", "/folders")) or {}
        return data.get("content") or []

    def list_folders(self) -> list[FolderRecord]:
        return [FolderRecord.from_dict(f) for f in self._folder_content()]

    def list_images(self) -> list[ImageRecord]:
        return self.fetch_snapshot()[0]

    def fetch_snapshot(self) -> tuple[list[ImageRecord], list[FolderRecord]]:
        """Fetch images and folders from a single ``GET /folders`` call.

        Images are flattened out of their folders, tagged with the folder
        name, and sorted by id so the order is stable across refreshes.
        """
        content = self._folder_content()
        folders = [FolderRecord.from_dict(f) for f in content]
        images = [
            self._image_from_dto(dto, folder_name=f["name"])
            for f in content
            for dto in f.get("images") or []
        ]
        images.sort(key=lambda img: img.id)
        return images, folders

    def create_folder(self, name: str, parent_id: int | None = None) -> FolderRecord:
        body: dict = {"name": name}
        if parent_id:
            body["parentId"] = parent_id
        data = self._data(self._request("POST", "/folders", json=body))
        if not data:
            return FolderRecord(id=0, name=name, parent_id=parent_id)
        return FolderRecord.from_dict(data)

    def delete_folder(self, folder_id: int, delete_items: bool = False) -> int:
        params = {"deleteItem": "true" if delete_items else "false"}
        data = self._data(
            self._request("DELETE", f"/folders/{folder_id}", params=params)
        )
        return (data or {}).get("id", folder_id)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def upload_image(
        self,
        filename: str,
        content: bytes,
        folder_name: str | None = None,
        content_type: str = "application/octet-stream",
    ) -> ImageRecord:
        form: dict[str, str] = {}
        if folder_name and folder_name != ROOT:
            # Backends differ on the field name; send both
            form["folder"] = folder_name
            form["folderName"] = folder_name

        try:
            payload = self._request(
                "POST",
                "/images",
                files={"file": (filename, content, content_type)},
                data=form,
            )
        except requests.HTTPError as exc:
            if exc.response is not None and exc.response.status_code == 413:
                raise FileTooLargeError(filename) from exc
            raise

        dto = self._data(payload) or {}
        if not isinstance(dto, dict) or dto.get("id") is None:
            raise MediaApiError(f'Upload response missing image id for "{filename}"')
        dto.setdefault("name", filename)
        dto.setdefault("size", len(content))
        folder = dto.get("folder") or dto.get("folderName") or folder_name or ROOT
        return self._image_from_dto(dto, folder_name=folder)

    def delete_image(self, image_id: int) -> int:
        data = self._data(self._request("DELETE", f"/images/{image_id}"))
        return (data or {}).get("id", image_id)

    def move_images(
        self, image_ids: Sequence[int], target_folder_name: str
    ) -> list[ImageRecord]:
        payload = {
            "imageIds": list(image_ids),
            "targetFolderName": target_folder_name or ROOT,
        }
        try:
            result = self._request("POST", "/images/move", json=payload)
        except (MediaApiError, requests.RequestException) as first_exc:
            logger.info("/images/move failed (%s); trying /images/move-to-folder", first_exc)
            try:
                result = self._request("POST", "/images/move-to-folder", json=payload)
            except (MediaApiError, requests.RequestException):
                raise first_exc

        dtos = self._data(result)
        if not isinstance(dtos, list):
            return []
        return [self._image_from_dto(d) for d in dtos]
