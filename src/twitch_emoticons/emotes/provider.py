"""Emote providers for Twitch, BTTV, FFZ and 7TV.

Each provider turns its API's payload into a list of ``EmoteData``. Network
and parse failures of the third-party providers are logged and reported as
``None`` ("no emotes"), the same as an empty result.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ..api.base import DEFAULT_TIMEOUT, safe_json
from ..api.twitch import HelixEmote, TwitchApiClient
from ..core import constants
from ..core.errors import ProviderUnavailable
from .models import EmoteData

logger = logging.getLogger(__name__)


@dataclass
class FFZEmoteSets:
    """FFZ emotes split into regular and modifier emotes."""

    emotes: list[EmoteData] = field(default_factory=list)
    modifiers: list[EmoteData] = field(default_factory=list)


class BaseEmoteProvider(ABC):
    """Base class for emote providers."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session
        self._timeout = timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""

    @abstractmethod
    async def fetch_raw(self, channel_id: Any = None) -> Any:
        """Fetch the emotes of a channel, or the global ones for None."""

    async def _get_json(self, url: str) -> Any:
        """GET a JSON document, raising ProviderUnavailable on any failure."""
        try:
            if self._session is not None:
                return await self._request(self._session, url)
            async with aiohttp.ClientSession() as session:
                return await self._request(session, url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ProviderUnavailable(f"{self.name}: {e}") from e

    async def _request(self, session: aiohttp.ClientSession, url: str) -> Any:
        async with session.get(url, timeout=aiohttp.ClientTimeout(total=self._timeout)) as resp:
            if resp.status != 200:
                raise ProviderUnavailable(f"{self.name}: {url} returned {resp.status}")
            data = await safe_json(resp)
        if data is None:
            raise ProviderUnavailable(f"{self.name}: {url} returned no JSON")
        return data


class TwitchProvider(BaseEmoteProvider):
    """Native Twitch emotes through the Helix API.

    Errors from the API client are not swallowed.
    """

    def __init__(self, api_client: TwitchApiClient) -> None:
        super().__init__()
        self.api_client = api_client

    @property
    def name(self) -> str:
        return "twitch"

    async def fetch_raw(self, channel_id: Any = None) -> list[EmoteData] | None:
        if channel_id:
            emotes = await self.api_client.get_channel_emotes(channel_id)
        else:
            emotes = await self.api_client.get_global_emotes()

        logger.debug(f"Twitch returned {len(emotes)} emotes for {channel_id or 'global'}")
        return [self._parse_emote(e) for e in emotes] or None

    @staticmethod
    def _parse_emote(emote: HelixEmote) -> EmoteData:
        return EmoteData(
            id=emote.id,
            code=emote.name,
            animated="animated" in emote.formats,
            image_type="png",
            emote_set=emote.emote_set_id or None,
        )


class BTTVProvider(BaseEmoteProvider):
    """BetterTTV emote provider."""

    @property
    def name(self) -> str:
        return "bttv"

    async def fetch_raw(self, channel_id: Any = None) -> list[EmoteData] | None:
        url = constants.bttv_channel_url(channel_id) if channel_id else constants.BTTV_GLOBAL_URL
        try:
            data = await self._get_json(url)
        except ProviderUnavailable as e:
            logger.debug(f"BTTV emotes error for {channel_id or 'global'}: {e}")
            return None

        try:
            raw: list[dict] = []
            if isinstance(data, list):
                # Global emotes
                raw = data
            elif isinstance(data, dict):
                # Channel emotes: owned ones, then ones shared from other channels
                for key in ("channelEmotes", "sharedEmotes"):
                    if isinstance(data.get(key), list):
                        raw.extend(data[key])

            emotes = [emote for emote in map(self._parse_emote, raw) if emote]
        except (KeyError, TypeError, AttributeError) as e:
            logger.debug(f"BTTV returned an unexpected payload for {channel_id or 'global'}: {e}")
            return None
        return emotes or None

    @staticmethod
    def _parse_emote(data: dict) -> EmoteData | None:
        emote_id = data.get("id", "")
        code = data.get("code", "")
        if not emote_id or not code:
            return None

        user = data.get("user") or {}
        return EmoteData(
            id=emote_id,
            code=code,
            animated=bool(data.get("animated", False)),
            owner_name=user.get("name"),
            image_type=data.get("imageType"),
        )


class FFZProvider(BaseEmoteProvider):
    """FrankerFaceZ emote provider."""

    @property
    def name(self) -> str:
        return "ffz"

    async def fetch_raw(self, channel_id: Any = None) -> FFZEmoteSets | None:
        url = constants.ffz_channel_url(channel_id) if channel_id else constants.FFZ_GLOBAL_URL
        try:
            data = await self._get_json(url)
            sets = data["sets"]
            result = FFZEmoteSets()
            for emote_set in sets.values():
                for raw in emote_set.get("emoticons", []):
                    emote = self._parse_emote(raw)
                    if emote is None:
                        continue
                    if emote.modifier:
                        result.modifiers.append(emote)
                    else:
                        result.emotes.append(emote)
        except ProviderUnavailable as e:
            logger.debug(f"FFZ emotes error for {channel_id or 'global'}: {e}")
            return None
        except (KeyError, TypeError, AttributeError) as e:
            logger.debug(f"FFZ returned an unexpected payload for {channel_id or 'global'}: {e}")
            return None

        if not result.emotes and not result.modifiers:
            return None
        return result

    @staticmethod
    def _parse_emote(data: dict) -> EmoteData | None:
        emote_id = data.get("id")
        name = data.get("name", "")
        if emote_id is None or not name:
            return None

        owner = data.get("owner") or {}
        # "animated" holds the animated URLs and is absent or null otherwise
        animated = "animated" in data and data["animated"] is not None
        return EmoteData(
            id=emote_id,
            code=name,
            animated=animated,
            owner_name=owner.get("name"),
            sizes=sorted((data.get("urls") or {}).keys(), key=_size_order),
            image_type="webp" if animated else "png",
            modifier=bool(data.get("modifier", False)),
        )


class SevenTVProvider(BaseEmoteProvider):
    """7TV emote provider."""

    @property
    def name(self) -> str:
        return "7tv"

    async def fetch_raw(
        self, channel_id: Any = None, format: str = constants.DEFAULT_SEVENTV_FORMAT
    ) -> list[EmoteData] | None:
        url = (
            constants.seventv_channel_url(channel_id)
            if channel_id
            else constants.SEVENTV_GLOBAL_URL
        )
        try:
            data = await self._get_json(url)
        except ProviderUnavailable as e:
            logger.debug(f"7TV emotes error for {channel_id or 'global'}: {e}")
            return None

        try:
            if not isinstance(data, dict):
                return None
            if "emotes" in data:
                # An emote set, like the global one
                raw = data["emotes"] or []
            else:
                # A user; channels without an emote set have a null/missing emote_set
                emote_set = data.get("emote_set") or {}
                raw = emote_set.get("emotes") or []

            emotes = [emote for emote in (self._parse_emote(e, format) for e in raw) if emote]
        except (KeyError, TypeError, AttributeError) as e:
            logger.debug(f"7TV returned an unexpected payload for {channel_id or 'global'}: {e}")
            return None
        return emotes or None

    @staticmethod
    def _parse_emote(data: dict, format: str) -> EmoteData | None:
        emote_data = data.get("data") or {}
        emote_id = emote_data.get("id", data.get("id", ""))
        # The set entry name is the alias used in chat; it wins over the emote's own name
        name = data.get("name") or emote_data.get("name", "")
        if not emote_id or not name:
            return None

        owner = emote_data.get("owner") or {}
        files = (emote_data.get("host") or {}).get("files", [])
        sizes = [f["name"] for f in files if f.get("format", "").upper() == format.upper()]
        return EmoteData(
            id=emote_id,
            code=name,
            animated=bool(emote_data.get("animated", False)),
            owner_name=owner.get("display_name"),
            sizes=sizes,
            image_type=format,
        )


def _size_order(key: str) -> float:
    try:
        return float(key)
    except ValueError:
        return float("inf")
