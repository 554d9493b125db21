"""Shared test fixtures for twitch_emoticons tests."""

import pytest
from fakes import FakeTwitchApi

from twitch_emoticons.api.twitch import HelixEmote
from twitch_emoticons.core import credential_store
from twitch_emoticons.emotes.fetcher import EmoteFetcher


@pytest.fixture(autouse=True)
def no_keyring(monkeypatch):
    monkeypatch.setattr(credential_store, "_keyring_available", False)


@pytest.fixture
def twitch_api():
    return FakeTwitchApi(
        global_emotes=[
            HelixEmote(id="25", name="Kappa", formats=["static"]),
            HelixEmote(id="58127", name="CoolCat", formats=["static"]),
            HelixEmote(id="emotesv2_abc", name="PogChamp", formats=["static", "animated"]),
        ],
        channel_emotes={
            "56648155": [
                HelixEmote(
                    id="307609315", name="tppD", formats=["static"], emote_set_id="300374282"
                ),
            ],
        },
    )


@pytest.fixture
def fetcher():
    return EmoteFetcher()


@pytest.fixture
def twitch_fetcher(twitch_api):
    return EmoteFetcher(api_client=twitch_api)


@pytest.fixture
def bttv_global_payload():
    return [
        {"id": "54fa925e01e468494b85b54d", "code": "OhMyGoodness", "imageType": "png",
         "animated": False, "userId": "5561169bd6b9d206222a8c19"},
        {"id": "54fa8f1401e468494b85b537", "code": ":tf:", "imageType": "png",
         "animated": False, "userId": "5561169bd6b9d206222a8c19"},
    ]


@pytest.fixture
def bttv_channel_payload():
    return {
        "id": "5a1a8cc6a8ae0d5b6d1c5e3f",
        "channelEmotes": [
            {"id": "5ba6d5ba6ee0c23989d52b10", "code": "tppCrit", "imageType": "png",
             "animated": False, "userId": "5a1a8cc6a8ae0d5b6d1c5e3f"},
        ],
        "sharedEmotes": [
            {"id": "566ca04265dbbdab32ec054a", "code": "FeelsGoodMan", "imageType": "png",
             "animated": False, "user": {"id": "1", "name": "wolfofthewinds"}},
            {"id": "5e76d338d6581c3724c0f0b2", "code": "catJAM", "imageType": "gif",
             "animated": True, "user": {"id": "2", "name": "monkasjenkins"}},
        ],
    }


@pytest.fixture
def ffz_payload():
    return {
        "room": {"_id": 11785, "id": "twitchplayspokemon"},
        "sets": {
            "3": {
                "id": 3,
                "emoticons": [
                    {"id": 25927, "name": "CatBag", "owner": {"name": "sirstendec"},
                     "urls": {"1": "//cdn.frankerfacez.com/emote/25927/1",
                              "2": "//cdn.frankerfacez.com/emote/25927/2",
                              "4": "//cdn.frankerfacez.com/emote/25927/4"}},
                    {"id": 720507, "name": "ffzWide", "modifier": True,
                     "owner": {"name": "sirstendec"},
                     "urls": {"1": "//cdn.frankerfacez.com/emote/720507/1"}},
                    {"id": 381875, "name": "LilZ", "owner": {"name": "sirstendec"},
                     "animated": {"1": "https://cdn.frankerfacez.com/emote/381875/animated/1"},
                     "urls": {"1": "//cdn.frankerfacez.com/emote/381875/1",
                              "2": "//cdn.frankerfacez.com/emote/381875/2"}},
                ],
            },
        },
    }


def _seventv_entry(emote_id, name, alias=None, animated=False):
    return {
        "id": emote_id,
        "name": alias or name,
        "data": {
            "id": emote_id,
            "name": name,
            "animated": animated,
            "owner": {"display_name": "Someone"},
            "host": {
                "url": f"//cdn.7tv.app/emote/{emote_id}",
                "files": [
                    {"name": "1x.avif", "format": "AVIF"},
                    {"name": "1x.webp", "format": "WEBP"},
                    {"name": "2x.avif", "format": "AVIF"},
                    {"name": "2x.webp", "format": "WEBP"},
                ],
            },
        },
    }


@pytest.fixture
def seventv_global_payload():
    return {
        "id": "global",
        "emotes": [
            _seventv_entry("60ae958e229664e8667aea38", "EZ"),
            _seventv_entry("60aea4074b1ea4526d3c97a9", "Clap", animated=True),
        ],
    }


@pytest.fixture
def seventv_user_payload():
    return {
        "id": "56648155",
        "emote_set": {
            "id": "set1",
            "emotes": [
                _seventv_entry("60ae7316f7c927fad14e6ca2", "modCheck", alias="tppCheck"),
            ],
        },
    }
