"""Emote and channel models."""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..core.collection import Collection
from ..core.constants import (
    DEFAULT_SEVENTV_FORMAT,
    ProviderType,
    bttv_cdn,
    ffz_cdn,
    ffz_cdn_animated,
    seventv_cdn,
    twitch_cdn,
)

if TYPE_CHECKING:
    from .fetcher import EmoteFetcher


@dataclass
class EmoteData:
    """Provider-independent description of one emote, as adapters return it."""

    id: Any  # str for most providers, int for FFZ
    code: str
    animated: bool = False
    owner_name: str | None = None
    sizes: list[str] = field(default_factory=list)  # provider size keys, smallest first
    image_type: str | None = None
    modifier: bool = False  # FFZ overlay emotes
    emote_set: str | None = None  # Twitch emote set id


class Channel:
    """A channel (or the global scope, ``channel_id=None``) and its cached emotes."""

    def __init__(
        self,
        fetcher: EmoteFetcher | None,
        channel_id: Any = None,
        format: str | None = None,
    ) -> None:
        self._fetcher_ref = weakref.ref(fetcher) if fetcher is not None else None
        self.channel_id = channel_id
        self.format = format  # image format preference, used by 7TV
        self.emotes: Collection = Collection()

    @property
    def fetcher(self) -> EmoteFetcher | None:
        return self._fetcher_ref() if self._fetcher_ref else None

    @property
    def is_global(self) -> bool:
        return self.channel_id is None

    def __repr__(self) -> str:
        return f"<Channel id={self.channel_id!r} emotes={len(self.emotes)} format={self.format!r}>"


class Emote(ABC):
    """Base class for emotes of every provider.

    Emotes are read-only once built; re-fetching replaces the cached instance
    instead of updating it. The owning channel is held by weak reference.
    """

    type: ProviderType
    _frozen = False

    def __init__(self, channel: Channel, data: EmoteData) -> None:
        self._channel_ref = weakref.ref(channel)
        self.channel_id = channel.channel_id
        self.id = data.id
        self.code = data.code
        self.animated = data.animated
        self.owner_name = data.owner_name
        self.image_type = data.image_type
        self._setup(channel, data)
        self._frozen = True

    def _setup(self, channel: Channel, data: EmoteData) -> None:
        """Set provider-specific attributes."""

    def __setattr__(self, name: str, value: Any) -> None:
        if self._frozen:
            raise AttributeError(f"{type(self).__name__} is read-only")
        super().__setattr__(name, value)

    @property
    def channel(self) -> Channel | None:
        return self._channel_ref()

    @property
    def fetcher(self) -> EmoteFetcher | None:
        channel = self.channel
        return channel.fetcher if channel is not None else None

    @abstractmethod
    def to_link(self, size: int = 0) -> str:
        """Return the image URL for a size index (0 is the smallest)."""

    def to_object(self) -> dict[str, Any]:
        """Return a plain, JSON-serializable description of this emote."""
        return {
            "type": self.type.value,
            "code": self.code,
            "id": self.id,
            "channel_id": self.channel_id,
            "animated": self.animated,
            "owner_name": self.owner_name,
            "image_type": self.image_type,
        }

    @classmethod
    def from_object(cls, obj: dict[str, Any], channel: Channel) -> Emote:
        """Rebuild an emote from the output of ``to_object``."""
        data = EmoteData(
            id=obj["id"],
            code=obj["code"],
            animated=bool(obj.get("animated", False)),
            owner_name=obj.get("owner_name"),
            sizes=list(obj.get("sizes") or []),
            image_type=obj.get("image_type"),
            modifier=bool(obj.get("modifier", False)),
            emote_set=obj.get("emote_set"),
        )
        return cls(channel, data)

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} code={self.code!r} id={self.id!r} "
            f"channel={self.channel_id!r}>"
        )


class _SizedEmote(Emote):
    """Emote whose CDN sizes are named by the provider."""

    def _setup(self, channel: Channel, data: EmoteData) -> None:
        self.sizes = tuple(data.sizes)

    def _default_size(self, size: int) -> str:
        raise NotImplementedError

    def _size_key(self, size: int) -> str:
        if not self.sizes:
            return self._default_size(size)
        # Past the largest size, use the largest
        return self.sizes[min(max(size, 0), len(self.sizes) - 1)]

    def to_object(self) -> dict[str, Any]:
        return {**super().to_object(), "sizes": list(self.sizes)}


class TwitchEmote(Emote):
    type = ProviderType.TWITCH

    def _setup(self, channel: Channel, data: EmoteData) -> None:
        self.emote_set = data.emote_set
        if self.image_type is None:
            self.image_type = "png"

    def to_link(self, size: int = 0) -> str:
        return twitch_cdn(self.id, size)

    def to_object(self) -> dict[str, Any]:
        return {**super().to_object(), "emote_set": self.emote_set}


class BTTVEmote(Emote):
    type = ProviderType.BTTV

    def to_link(self, size: int = 0) -> str:
        return bttv_cdn(self.id, size)


class FFZEmote(_SizedEmote):
    type = ProviderType.FFZ

    def _setup(self, channel: Channel, data: EmoteData) -> None:
        super()._setup(channel, data)
        self.modifier = data.modifier
        if self.image_type is None:
            self.image_type = "webp" if self.animated else "png"

    def _default_size(self, size: int) -> str:
        return str(size + 1)

    def to_link(self, size: int = 0) -> str:
        if self.animated:
            return ffz_cdn_animated(self.id, self._size_key(size))
        return ffz_cdn(self.id, self._size_key(size))

    def to_object(self) -> dict[str, Any]:
        return {**super().to_object(), "modifier": self.modifier}


class SevenTVEmote(_SizedEmote):
    type = ProviderType.SEVENTV

    def _setup(self, channel: Channel, data: EmoteData) -> None:
        super()._setup(channel, data)
        self.image_type = channel.format or self.image_type or DEFAULT_SEVENTV_FORMAT

    def _default_size(self, size: int) -> str:
        return f"{size + 1}x.{self.image_type}"

    def to_link(self, size: int = 0) -> str:
        return seventv_cdn(self.id, self._size_key(size))
