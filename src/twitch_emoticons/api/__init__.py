"""HTTP clients used by the emote providers."""

from .base import BaseApiClient
from .twitch import HelixEmote, TwitchApiClient

__all__ = [
    "BaseApiClient",
    "HelixEmote",
    "TwitchApiClient",
]
