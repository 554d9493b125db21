"""Twitch Helix API client for emote lookups."""

import logging
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ..core.constants import TWITCH_AUTH_URL, TWITCH_HELIX_URL
from ..core.errors import MissingCredentials, TwitchApiError
from ..core.settings import TwitchSettings
from .base import DEFAULT_TIMEOUT, BaseApiClient, safe_json

logger = logging.getLogger(__name__)


@dataclass
class HelixEmote:
    """One emote as returned by the Helix chat emotes endpoints."""

    id: str
    name: str
    formats: list[str] = field(default_factory=list)  # "static", "animated"
    emote_set_id: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "HelixEmote":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            formats=list(data.get("format", [])),
            emote_set_id=str(data.get("emote_set_id", "")),
        )


class TwitchApiClient(BaseApiClient):
    """Client for the Helix chat emote endpoints.

    Authenticates with an app access token obtained through the client
    credentials flow.
    """

    BASE_URL = TWITCH_HELIX_URL
    AUTH_URL = TWITCH_AUTH_URL

    def __init__(self, settings: TwitchSettings, timeout: int = DEFAULT_TIMEOUT) -> None:
        super().__init__(timeout=timeout)
        if not settings.configured:
            raise MissingCredentials()
        self.settings = settings

    def _get_headers(self) -> dict[str, str]:
        return {
            "Client-ID": self.settings.client_id,
            "Authorization": f"Bearer {self.settings.access_token}",
        }

    async def authorize(self) -> None:
        """Fetch a fresh app access token."""
        try:
            async with self.session.post(
                f"{self.AUTH_URL}/token",
                data={
                    "client_id": self.settings.client_id,
                    "client_secret": self.settings.client_secret,
                    "grant_type": "client_credentials",
                },
            ) as resp:
                if resp.status != 200:
                    logger.warning(f"Twitch token request failed: {resp.status}")
                    raise TwitchApiError("Could not obtain an app access token", resp.status)
                data = await safe_json(resp)
        except aiohttp.ClientError as e:
            raise TwitchApiError(f"Twitch token request failed: {e}") from e

        if not isinstance(data, dict) or "access_token" not in data:
            raise TwitchApiError("Token response did not contain an access token")
        self.settings.access_token = data["access_token"]
        logger.debug("Obtained Twitch app access token")

    async def _get(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """GET a Helix endpoint, re-authorizing once on 401."""
        if not self.settings.access_token:
            await self.authorize()

        for attempt in range(2):
            try:
                async with self.session.get(
                    f"{self.BASE_URL}{path}",
                    params=params,
                    headers=self._get_headers(),
                ) as resp:
                    if resp.status == 401 and attempt == 0:
                        logger.debug("Twitch access token rejected, re-authorizing")
                        await self.authorize()
                        continue
                    if resp.status != 200:
                        raise TwitchApiError(f"Twitch GET {path} failed", resp.status)
                    data = await safe_json(resp)
                    if not isinstance(data, dict):
                        raise TwitchApiError(f"Twitch GET {path} returned no JSON object")
                    return data
            except aiohttp.ClientError as e:
                raise TwitchApiError(f"Twitch GET {path} failed: {e}") from e

        raise TwitchApiError(f"Twitch GET {path} unauthorized", 401)

    async def get_global_emotes(self) -> list[HelixEmote]:
        data = await self._get("/chat/emotes/global")
        return [HelixEmote.from_api(e) for e in data.get("data", [])]

    async def get_channel_emotes(self, broadcaster_id) -> list[HelixEmote]:
        """Get the subscriber, follower and bits emotes of a broadcaster."""
        data = await self._get("/chat/emotes", params={"broadcaster_id": str(broadcaster_id)})
        return [HelixEmote.from_api(e) for e in data.get("data", [])]
