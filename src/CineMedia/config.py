"""Runtime settings read from the environment (and an optional .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from CineMedia.capacity import MAX_IMAGES_PER_FOLDER
from CineMedia.image_url import DEFAULT_IMAGE_ENDPOINT

DEFAULT_API_URL = "http://localhost:17000/api/v1"
DEFAULT_TIMEOUT = 30


class ConfigError(Exception):
    """Raised when an environment setting has an invalid value."""


@dataclass
class Settings:
    api_url: str = DEFAULT_API_URL
    image_endpoint: str = DEFAULT_IMAGE_ENDPOINT
    max_images_per_folder: int = MAX_IMAGES_PER_FOLDER
    timeout: int = DEFAULT_TIMEOUT


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_settings(dotenv: bool = True) -> Settings:
    """Build Settings from ``CINEMEDIA_*`` environment variables."""
    if dotenv:
        load_dotenv()

    return Settings(
        api_url=(os.getenv("CINEMEDIA_API_URL") or DEFAULT_API_URL).rstrip("/"),
        image_endpoint=os.getenv("CINEMEDIA_IMAGE_ENDPOINT") or DEFAULT_IMAGE_ENDPOINT,
        max_images_per_folder=_positive_int(
            "CINEMEDIA_MAX_IMAGES_PER_FOLDER", MAX_IMAGES_PER_FOLDER
        ),
        timeout=_positive_int("CINEMEDIA_TIMEOUT", DEFAULT_TIMEOUT),
    )
