"""Provider endpoints, CDN URL builders and output templates."""

from enum import Enum


class ProviderType(str, Enum):
    """Emote providers, valued by the tag used in serialized emotes."""

    TWITCH = "twitch"
    BTTV = "bttv"
    FFZ = "ffz"
    SEVENTV = "7tv"


# Twitch
TWITCH_HELIX_URL = "https://api.twitch.tv/helix"
TWITCH_AUTH_URL = "https://id.twitch.tv/oauth2"


def twitch_cdn(emote_id: str, size: int) -> str:
    return f"https://static-cdn.jtvnw.net/emoticons/v2/{emote_id}/default/dark/{size + 1}.0"


# BetterTTV
BTTV_GLOBAL_URL = "https://api.betterttv.net/3/cached/emotes/global"


def bttv_channel_url(channel_id) -> str:
    return f"https://api.betterttv.net/3/cached/users/twitch/{channel_id}"


def bttv_cdn(emote_id: str, size: int) -> str:
    return f"https://cdn.betterttv.net/emote/{emote_id}/{size + 1}x.webp"


# 7TV
SEVENTV_GLOBAL_URL = "https://7tv.io/v3/emote-sets/global"


def seventv_channel_url(channel_id) -> str:
    return f"https://7tv.io/v3/users/twitch/{channel_id}"


def seventv_cdn(emote_id: str, size: str) -> str:
    # size is a file name from the emote host, e.g. "2x.webp"
    return f"https://cdn.7tv.app/emote/{emote_id}/{size}"


# FrankerFaceZ
FFZ_GLOBAL_URL = "https://api.frankerfacez.com/v1/set/global"


def ffz_channel_url(channel_id) -> str:
    return f"https://api.frankerfacez.com/v1/room/id/{channel_id}"


def ffz_cdn(emote_id, size: str) -> str:
    return f"https://cdn.frankerfacez.com/emote/{emote_id}/{size}"


def ffz_cdn_animated(emote_id, size: str) -> str:
    return f"https://cdn.frankerfacez.com/emote/{emote_id}/animated/{size}.webp"


# Image formats 7TV serves
SEVENTV_FORMATS = ("webp", "avif")
DEFAULT_SEVENTV_FORMAT = "webp"

# Output templates for EmoteParser, keyed by type
TEMPLATES = {
    "html": (
        '<img alt="{name}" title="{name}" '
        'class="twitch-emote twitch-emote-{size}" src="{link}">'
    ),
    "markdown": '![{name}]({link} "{name}")',
    "bbcode": "[img]{link}[/img]",
    "plain": "{link}",
}
