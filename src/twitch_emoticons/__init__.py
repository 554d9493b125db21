"""Fetch, cache and parse Twitch, BTTV, FFZ and 7TV emotes."""

from .core.collection import Collection
from .core.constants import ProviderType
from .core.errors import (
    EmoteError,
    MissingCredentials,
    ProviderUnavailable,
    TwitchApiError,
    UnknownProviderType,
)
from .core.settings import FetcherSettings, TwitchSettings
from .emotes.fetcher import EmoteFetcher
from .emotes.models import (
    BTTVEmote,
    Channel,
    Emote,
    EmoteData,
    FFZEmote,
    SevenTVEmote,
    TwitchEmote,
)
from .emotes.parser import EmoteParser

__version__ = "2.9.0"

__all__ = [
    "BTTVEmote",
    "Channel",
    "Collection",
    "Emote",
    "EmoteData",
    "EmoteError",
    "EmoteFetcher",
    "EmoteParser",
    "FFZEmote",
    "FetcherSettings",
    "MissingCredentials",
    "ProviderType",
    "ProviderUnavailable",
    "SevenTVEmote",
    "TwitchApiError",
    "TwitchEmote",
    "TwitchSettings",
    "UnknownProviderType",
]
