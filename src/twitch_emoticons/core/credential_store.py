"""Keyring storage for the Twitch client secret and app access token.

When a keyring backend is configured, settings.json only keeps the client
id; the secret and token live under the "twitch-emoticons" service.
"""

import logging
import os
import stat
from typing import TYPE_CHECKING

import keyring
from keyring.backends.fail import Keyring as FailKeyring
from keyring.errors import KeyringError, PasswordDeleteError

if TYPE_CHECKING:
    from .settings import TwitchSettings

logger = logging.getLogger(__name__)

SERVICE_NAME = "twitch-emoticons"

CLIENT_SECRET = "twitch_client_secret"
ACCESS_TOKEN = "twitch_access_token"

_keyring_available: bool | None = None


def is_available() -> bool:
    """Whether a keyring backend is configured.

    Only the backend is inspected; nothing is written to the keyring here.
    """
    global _keyring_available
    if _keyring_available is None:
        backend = keyring.get_keyring()
        _keyring_available = not isinstance(backend, FailKeyring)
        logger.debug(f"Keyring backend {type(backend).__name__}, usable: {_keyring_available}")
    return _keyring_available


def _read(key: str) -> str:
    try:
        return keyring.get_password(SERVICE_NAME, key) or ""
    except KeyringError as e:
        logger.warning(f"Failed to read '{key}' from keyring: {e}")
        return ""


def _write(key: str, value: str) -> bool:
    """Store a value, or delete the entry for an empty one."""
    try:
        if value:
            keyring.set_password(SERVICE_NAME, key, value)
        else:
            keyring.delete_password(SERVICE_NAME, key)
    except PasswordDeleteError:
        pass
    except KeyringError as e:
        logger.warning(f"Failed to update '{key}' in keyring: {e}")
        return False
    return True


def load_twitch_secrets(twitch: "TwitchSettings") -> None:
    """Fill in the client secret and access token stored in the keyring.

    Values missing from the keyring leave the settings as they are.
    """
    if not is_available():
        return
    secret = _read(CLIENT_SECRET)
    if secret:
        twitch.client_secret = secret
    token = _read(ACCESS_TOKEN)
    if token:
        twitch.access_token = token


def save_twitch_secrets(twitch: "TwitchSettings") -> bool:
    """Store the client secret and access token in the keyring.

    Returns False when the keyring is unavailable or refused either value;
    the caller then keeps both in the settings file.
    """
    if not is_available():
        return False
    stored_secret = _write(CLIENT_SECRET, twitch.client_secret)
    stored_token = _write(ACCESS_TOKEN, twitch.access_token)
    return stored_secret and stored_token


def secure_file_permissions(filepath: str) -> None:
    """Set file permissions to owner-only (chmod 600)."""
    try:
        os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        logger.debug(f"Could not set permissions on {filepath}: {e}")
