"""Emote fetcher - fetches emotes from every provider and caches them."""

import dataclasses
import logging
from collections.abc import Awaitable, Iterable
from typing import Any

import aiohttp

from ..api.twitch import TwitchApiClient
from ..core.collection import Collection
from ..core.constants import ProviderType
from ..core.errors import MissingCredentials, UnknownProviderType
from ..core.settings import FetcherSettings
from .models import BTTVEmote, Channel, Emote, EmoteData, FFZEmote, SevenTVEmote, TwitchEmote
from .provider import BTTVProvider, FFZProvider, SevenTVProvider, TwitchProvider

logger = logging.getLogger(__name__)

# provider tag -> (emote class, key of the serialized emote holding its channel's format)
_RESTORE_TABLE: dict[str, tuple[type[Emote], str | None]] = {
    ProviderType.TWITCH.value: (TwitchEmote, None),
    ProviderType.BTTV.value: (BTTVEmote, None),
    ProviderType.FFZ.value: (FFZEmote, None),
    ProviderType.SEVENTV.value: (SevenTVEmote, "image_type"),
}


class EmoteFetcher:
    """Fetches and caches emotes.

    ``emotes`` maps every cached code to its emote across all channels; a
    code cached later replaces the earlier one. ``channels`` maps a channel
    id (None for the global channel) to its ``Channel``, whose own index
    holds the same instances.

    Args:
        client_id: Twitch application client id.
        client_secret: Twitch application client secret.
        api_client: A ready Twitch API client to use instead of building one.
        settings: Fetcher settings; credentials passed as arguments win.
        session: aiohttp session for the BTTV, FFZ and 7TV requests. A
            short-lived session is opened per request when omitted.
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        *,
        api_client: Any = None,
        settings: FetcherSettings | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        settings = settings or FetcherSettings()
        if client_id and client_secret:
            # Leave the caller's settings untouched
            settings = dataclasses.replace(
                settings,
                twitch=dataclasses.replace(
                    settings.twitch, client_id=client_id, client_secret=client_secret
                ),
            )
        self.settings = settings

        if api_client is not None:
            self.api_client = api_client
        elif self.settings.twitch.configured:
            self.api_client = TwitchApiClient(
                self.settings.twitch, timeout=self.settings.request_timeout
            )
        else:
            self.api_client = None

        self.emotes: Collection = Collection()
        self.channels: Collection = Collection()
        self.ffz_modifiers_fetched = False

        timeout = self.settings.request_timeout
        self._twitch = TwitchProvider(self.api_client) if self.api_client is not None else None
        self._bttv = BTTVProvider(session, timeout)
        self._ffz = FFZProvider(session, timeout)
        self._seventv = SevenTVProvider(session, timeout)

    @property
    def global_channel(self) -> Channel | None:
        """The channel holding the global Twitch, BTTV, FFZ and 7TV emotes."""
        return self.channels.get(None)

    def _setup_channel(self, channel_id: Any, format: str | None = None) -> Channel:
        """Get or create a channel, applying a format when one is given."""
        channel = self.channels.get(channel_id)
        if channel is None:
            channel = Channel(self, channel_id)
            self.channels[channel_id] = channel
        if format:
            channel.format = format
        return channel

    def _cache_emote(self, channel: Channel, emote: Emote) -> Emote:
        """Insert an emote into its channel and the global index, replacing by code."""
        channel.emotes[emote.code] = emote
        self.emotes[emote.code] = emote
        return emote

    def _cache_all(
        self,
        channel_id: Any,
        emote_class: type[Emote],
        emotes: Iterable[EmoteData],
        format: str | None = None,
    ) -> Collection:
        channel = self._setup_channel(channel_id, format)
        cached = Collection()
        for data in emotes:
            emote = self._cache_emote(channel, emote_class(channel, data))
            cached[emote.code] = emote
        logger.debug(
            f"Cached {len(cached)} {emote_class.type.value} emotes for "
            f"{channel_id or 'global'} ({len(self.emotes)} total)"
        )
        return cached

    def fetch_twitch_emotes(self, channel_id: Any = None) -> Awaitable[Collection | None]:
        """Fetch the Twitch emotes of a channel, or the global ones for None.

        Raises MissingCredentials right away, before anything is awaited,
        when the fetcher has no Twitch client.
        """
        if self._twitch is None:
            raise MissingCredentials()
        return self._fetch_twitch_emotes(channel_id)

    async def _fetch_twitch_emotes(self, channel_id: Any) -> Collection | None:
        raw = await self._twitch.fetch_raw(channel_id)
        if not raw:
            return None
        return self._cache_all(channel_id, TwitchEmote, raw)

    async def fetch_bttv_emotes(self, channel_id: Any = None) -> Collection | None:
        """Fetch the BTTV emotes of a channel, or the global ones for None."""
        raw = await self._bttv.fetch_raw(channel_id)
        if not raw:
            return None
        return self._cache_all(channel_id, BTTVEmote, raw)

    async def fetch_ffz_emotes(self, channel_id: Any = None) -> Collection | None:
        """Fetch the FFZ emotes of a channel, or the global ones for None.

        Modifier emotes are cached too, but left out of the returned
        collection. The global modifiers are fetched once along with the
        first channel.
        """
        raw = await self._ffz.fetch_raw(channel_id)
        if raw is None:
            return None

        cached = self._cache_all(channel_id, FFZEmote, raw.emotes)
        if raw.modifiers:
            self._cache_all(channel_id, FFZEmote, raw.modifiers)

        if channel_id is None:
            self.ffz_modifiers_fetched = True
        elif not self.ffz_modifiers_fetched:
            await self._fetch_ffz_modifiers()
        return cached

    async def _fetch_ffz_modifiers(self) -> None:
        self.ffz_modifiers_fetched = True
        raw = await self._ffz.fetch_raw(None)
        if raw is None:
            # Try again with the next channel
            self.ffz_modifiers_fetched = False
            return
        self._cache_all(None, FFZEmote, raw.modifiers)

    async def fetch_seventv_emotes(
        self, channel_id: Any = None, format: str | None = None
    ) -> Collection | None:
        """Fetch the 7TV emotes of a channel, or the global ones for None.

        Args:
            channel_id: Twitch user id of the channel.
            format: Image format, "webp" or "avif". Defaults to the
                ``seventv_format`` setting.
        """
        format = (format or self.settings.seventv_format).lower()
        raw = await self._seventv.fetch_raw(channel_id, format)
        if not raw:
            return None
        return self._cache_all(channel_id, SevenTVEmote, raw, format)

    def from_object(self, objects: Iterable[dict[str, Any]]) -> list[Emote]:
        """Rebuild and cache emotes from their ``to_object`` form.

        Emotes are cached one by one: when an object has an unknown type,
        UnknownProviderType is raised and the emotes before it stay cached.
        """
        emotes: list[Emote] = []
        for obj in objects:
            provider_type = obj.get("type")
            if provider_type not in _RESTORE_TABLE:
                raise UnknownProviderType(provider_type)

            emote_class, format_key = _RESTORE_TABLE[provider_type]
            channel = self._setup_channel(
                obj.get("channel_id"), obj.get(format_key) if format_key else None
            )
            emotes.append(self._cache_emote(channel, emote_class.from_object(obj, channel)))
        return emotes

    def to_object(self) -> list[dict[str, Any]]:
        """Serialize the global index for ``from_object``."""
        return [emote.to_object() for emote in self.emotes.values()]

    async def close(self) -> None:
        """Close the Twitch client's HTTP session."""
        close = getattr(self.api_client, "close", None)
        if close is not None:
            await close()
