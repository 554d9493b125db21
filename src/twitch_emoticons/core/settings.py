"""Settings for the emote fetcher and parser."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from appdirs import user_config_dir

from .constants import DEFAULT_SEVENTV_FORMAT, SEVENTV_FORMATS, TEMPLATES

logger = logging.getLogger(__name__)

APP_NAME = "twitch-emoticons"
APP_AUTHOR = "twitch-emoticons"

# Environment overrides for the Twitch app credentials
ENV_TWITCH_ID = "TWITCH_ID"
ENV_TWITCH_SECRET = "TWITCH_SECRET"


def get_config_dir() -> Path:
    """Get the configuration directory."""
    path = Path(user_config_dir(APP_NAME, APP_AUTHOR))
    path.mkdir(parents=True, exist_ok=True)
    return path


@dataclass
class TwitchSettings:
    """Twitch application credentials (client credentials flow)."""

    client_id: str = ""
    client_secret: str = ""
    access_token: str = ""  # App access token, refreshed on demand

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)


@dataclass
class FetcherSettings:
    """Fetcher and parser settings."""

    twitch: TwitchSettings = field(default_factory=TwitchSettings)
    seventv_format: str = DEFAULT_SEVENTV_FORMAT  # webp or avif
    request_timeout: int = 15  # seconds, passed to aiohttp
    parser_type: str = "html"  # default EmoteParser template type

    @classmethod
    def load(cls, path: Path | None = None) -> "FetcherSettings":
        """Load settings from file, falling back to defaults."""
        from .credential_store import load_twitch_secrets

        if path is None:
            path = get_config_dir() / "settings.json"

        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            settings = cls._from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable settings file {path}: {e}")
            return cls()

        # Keyring values override whatever the file holds
        load_twitch_secrets(settings.twitch)

        return settings

    def save(self, path: Path | None = None) -> None:
        """Save settings to file."""
        from .credential_store import save_twitch_secrets, secure_file_permissions

        if path is None:
            path = get_config_dir() / "settings.json"

        path.parent.mkdir(parents=True, exist_ok=True)

        use_keyring = save_twitch_secrets(self.twitch)

        # Atomic write: write to temp file then rename
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix="settings_")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._to_dict(exclude_secrets=use_keyring), f, indent=2)
            os.replace(tmp_path, path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

        if not use_keyring:
            secure_file_permissions(str(path))

    def apply_env(self, environ: dict[str, str] | None = None) -> "FetcherSettings":
        """Override Twitch credentials from TWITCH_ID / TWITCH_SECRET."""
        environ = os.environ if environ is None else environ
        client_id = environ.get(ENV_TWITCH_ID, "")
        client_secret = environ.get(ENV_TWITCH_SECRET, "")
        if client_id and client_secret:
            self.twitch.client_id = client_id
            self.twitch.client_secret = client_secret
        return self

    @staticmethod
    def _validate_int(value, default: int, min_val: int = 0, max_val: int | None = None) -> int:
        """Validate and constrain an integer value."""
        if not isinstance(value, int) or isinstance(value, bool):
            return default
        if value < min_val:
            return min_val
        if max_val is not None and value > max_val:
            return max_val
        return value

    @classmethod
    def _from_dict(cls, data: dict) -> "FetcherSettings":
        """Create settings from a dictionary with validation."""
        settings = cls()

        twitch = data.get("twitch", {})
        settings.twitch = TwitchSettings(
            client_id=str(twitch.get("client_id", "")),
            client_secret=str(twitch.get("client_secret", "")),
            access_token=str(twitch.get("access_token", "")),
        )

        seventv_format = str(data.get("seventv_format", settings.seventv_format)).lower()
        if seventv_format in SEVENTV_FORMATS:
            settings.seventv_format = seventv_format

        settings.request_timeout = cls._validate_int(
            data.get("request_timeout"), 15, min_val=1, max_val=300
        )

        parser_type = data.get("parser_type", settings.parser_type)
        if parser_type in TEMPLATES:
            settings.parser_type = parser_type

        return settings

    def _to_dict(self, exclude_secrets: bool = False) -> dict:
        """Convert settings to a dictionary.

        With exclude_secrets, the client secret and access token are left
        out (they live in the system keyring instead).
        """
        return {
            "twitch": {
                "client_id": self.twitch.client_id,
                **(
                    {
                        "client_secret": self.twitch.client_secret,
                        "access_token": self.twitch.access_token,
                    }
                    if not exclude_secrets
                    else {}
                ),
            },
            "seventv_format": self.seventv_format,
            "request_timeout": self.request_timeout,
            "parser_type": self.parser_type,
        }
