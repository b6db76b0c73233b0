"""Per-backend access-token storage in the OS keychain.

Every media backend gets its own keychain entry, keyed by its normalized
API URL. The entry records the URL it was saved for, so a token issued by
one backend is never handed to another.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

_SERVICE_NAME = "CineMedia"
_AVAILABLE = False

try:
    import keyring
    from keyring.backends import fail

    # The fail backend is what keyring picks when no real keychain exists
    _AVAILABLE = not isinstance(keyring.get_keyring(), fail.Keyring)
    if not _AVAILABLE:
        logger.warning("no usable keychain backend; token persistence disabled")
except Exception:
    logger.warning("keyring not available; token persistence disabled")


@dataclass(frozen=True)
class StoredToken:
    api_url: str
    token: str


def is_available() -> bool:
    """Return True if the OS keychain is usable."""
    return _AVAILABLE


def backend_key(api_url: str) -> str:
    """Keychain username for a backend.

    Scheme and host are case-folded and trailing slashes dropped, so
    ``HTTP://Api.Test/api/v1/`` and ``http://api.test/api/v1`` share a key.
    """
    parsed = urlparse(api_url.strip())
    scheme = parsed.scheme.lower()
    host = parsed.netloc.lower()
    path = parsed.path.rstrip("/")
    return f"token:{scheme}://{host}{path}"


def load(api_url: str) -> str | None:
    """Return the token saved for *api_url*, or None."""
    if not _AVAILABLE:
        return None
    key = backend_key(api_url)
    try:
        raw = keyring.get_password(_SERVICE_NAME, key)
    except Exception:
        logger.debug("Failed to read %s from keyring", key, exc_info=True)
        return None
    if not raw:
        return None

    try:
        data = json.loads(raw)
        stored = StoredToken(api_url=data["api_url"], token=data["token"])
    except (ValueError, KeyError, TypeError):
        logger.warning("Ignoring unreadable keychain entry %s", key)
        return None

    if backend_key(stored.api_url) != key:
        logger.warning("Keychain entry %s was saved for %s; ignoring", key, stored.api_url)
        return None
    return stored.token or None


def save(api_url: str, token: str) -> bool:
    """Save *token* for *api_url*. Returns True on success."""
    token = token.strip() if token else ""
    if not _AVAILABLE or not token:
        return False
    payload = json.dumps({"api_url": api_url, "token": token})
    try:
        keyring.set_password(_SERVICE_NAME, backend_key(api_url), payload)
        return True
    except Exception:
        logger.warning("Failed to save token for %s to keyring", api_url)
        return False


def delete(api_url: str) -> bool:
    """Forget the token saved for *api_url*. Returns True on success."""
    if not _AVAILABLE:
        return False
    try:
        keyring.delete_password(_SERVICE_NAME, backend_key(api_url))
        return True
    except Exception:
        return False
