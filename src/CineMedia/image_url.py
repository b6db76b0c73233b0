"""Image URL normalization for backend-reported image links."""

from __future__ import annotations

import re
from urllib.parse import urlparse

DEFAULT_IMAGE_ENDPOINT = "http://localhost:17002"
IMAGES_PATH = "/api/v1/images"


def strip_raw_suffix(url: str) -> str:
    """Drop a trailing ``/raw`` the backend appends to some image links."""
    return re.sub(r"/raw$", "", url)


def normalize_image_url(
    url: str | None,
    image_id: int | None = None,
    image_endpoint: str = DEFAULT_IMAGE_ENDPOINT,
) -> str | None:
    """Return an absolute URL for an image.

    Supported inputs:
      - https://cdn.example.com/a.png      -> unchanged
      - /api/v1/images/5                   -> endpoint origin + path
      - images/5                           -> endpoint + "/" + path
      - empty url with an id               -> endpoint base + /api/v1/images/<id>/raw
    """
    base = image_endpoint.rstrip("/")

    if url and url.strip():
        url = url.strip()
        if re.match(r"^https?://", url, re.IGNORECASE):
            return url
        if url.startswith("/"):
            return f"{_origin(base)}{url}"
        return f"{base}/{url.lstrip('/')}"

    if image_id is not None:
        root = re.sub(r"/api/v1/?$", "", base)
        return f"{root}{IMAGES_PATH}/{image_id}/raw"

    return None


def _origin(endpoint: str) -> str:
    parsed = urlparse(endpoint)
    if parsed.scheme and parsed.netloc:
        return f"{parsed.scheme}://{parsed.netloc}"
    # Not a full URL; keep everything before the first path separator
    return endpoint.split("/", 1)[0]
