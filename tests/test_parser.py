"""Tests for EmoteParser."""

import re

import pytest
from fakes import patch_json

from twitch_emoticons.core.settings import FetcherSettings
from twitch_emoticons.emotes.fetcher import EmoteFetcher
from twitch_emoticons.emotes.models import BTTVEmote, Channel, EmoteData
from twitch_emoticons.emotes.parser import EmoteParser, render_template


@pytest.mark.asyncio
async def test_parse_markdown_end_to_end(twitch_fetcher):
    await twitch_fetcher.fetch_twitch_emotes()
    parser = EmoteParser(twitch_fetcher, type="markdown", match=r":(.+?):")
    text = parser.parse("This is a test string with :CoolCat: in it.")
    assert text == (
        "This is a test string with "
        '![CoolCat](https://static-cdn.jtvnw.net/emoticons/v2/58127/default/dark/1.0 "CoolCat")'
        " in it."
    )


@pytest.mark.asyncio
async def test_parse_channel_emote(twitch_fetcher):
    await twitch_fetcher.fetch_twitch_emotes("56648155")
    parser = EmoteParser(twitch_fetcher, type="markdown")
    text = parser.parse("This is a test string with :tppD: in it.")
    assert text == (
        "This is a test string with "
        '![tppD](https://static-cdn.jtvnw.net/emoticons/v2/307609315/default/dark/1.0 "tppD")'
        " in it."
    )


@pytest.mark.asyncio
async def test_parse_without_matches_is_noop(twitch_fetcher):
    await twitch_fetcher.fetch_twitch_emotes()
    parser = EmoteParser(twitch_fetcher)
    text = "Nothing to see here, Kappa without colons."
    assert parser.parse(text) == text


@pytest.mark.asyncio
async def test_unknown_codes_left_verbatim(twitch_fetcher):
    await twitch_fetcher.fetch_twitch_emotes()
    parser = EmoteParser(twitch_fetcher, type="plain")
    text = parser.parse(":NotAnEmote: then :Kappa: then :alsoNot:")
    assert text == (
        ":NotAnEmote: then "
        "https://static-cdn.jtvnw.net/emoticons/v2/25/default/dark/1.0"
        " then :alsoNot:"
    )


@pytest.mark.asyncio
async def test_parse_size_and_templates(twitch_fetcher):
    await twitch_fetcher.fetch_twitch_emotes()
    link = "https://static-cdn.jtvnw.net/emoticons/v2/25/default/dark/2.0"

    assert EmoteParser(twitch_fetcher, type="bbcode").parse(":Kappa:", size=1) == (
        f"[img]{link}[/img]"
    )
    assert EmoteParser(twitch_fetcher, type="html").parse(":Kappa:", size=1) == (
        f'<img alt="Kappa" title="Kappa" class="twitch-emote twitch-emote-1" src="{link}">'
    )


@pytest.mark.asyncio
async def test_custom_template_and_creator(monkeypatch, fetcher, bttv_channel_payload):
    patch_json(monkeypatch, fetcher._bttv, bttv_channel_payload)
    await fetcher.fetch_bttv_emotes("56648155")
    parser = EmoteParser(fetcher, template="{name} by {creator}")
    assert parser.parse(":FeelsGoodMan: :tppCrit:") == (
        "FeelsGoodMan by wolfofthewinds tppCrit by global"
    )


@pytest.mark.asyncio
async def test_callable_template(twitch_fetcher):
    await twitch_fetcher.fetch_twitch_emotes()
    parser = EmoteParser(twitch_fetcher, template=lambda emote, size: f"<{emote.code}:{size}>")
    assert parser.parse("a :Kappa: b", size=2) == "a <Kappa:2> b"


@pytest.mark.asyncio
async def test_word_match_without_groups(twitch_fetcher):
    await twitch_fetcher.fetch_twitch_emotes()
    parser = EmoteParser(twitch_fetcher, type="bbcode", match=re.compile(r"\b\w+\b"))
    assert parser.parse("hello Kappa world") == (
        "hello [img]https://static-cdn.jtvnw.net/emoticons/v2/25/default/dark/1.0[/img] world"
    )


@pytest.mark.asyncio
async def test_codes_with_colons(monkeypatch, fetcher, bttv_global_payload):
    patch_json(monkeypatch, fetcher._bttv, bttv_global_payload)
    await fetcher.fetch_bttv_emotes()
    parser = EmoteParser(fetcher, type="plain", match=r"(\S+)")
    assert parser.parse("lol :tf:") == (
        "lol https://cdn.betterttv.net/emote/54fa8f1401e468494b85b537/1x.webp"
    )


def test_unknown_type_raises(fetcher):
    with pytest.raises(ValueError):
        EmoteParser(fetcher, type="rtf")


def test_empty_cache_leaves_text(fetcher):
    parser = EmoteParser(fetcher)
    assert parser.parse("hi :Kappa:") == "hi :Kappa:"


def test_type_defaults_to_settings(twitch_api):
    fetcher = EmoteFetcher(api_client=twitch_api, settings=FetcherSettings(parser_type="bbcode"))
    parser = EmoteParser(fetcher)
    assert parser.type == "bbcode"
    assert parser.template == "[img]{link}[/img]"
    assert EmoteParser(fetcher, type="plain").type == "plain"


def test_placeholders_in_values_are_not_expanded():
    emote = BTTVEmote(
        Channel(None, "1"), EmoteData(id="abc", code="a{size}", owner_name="{creator}")
    )
    assert render_template("{name}|{creator}|{size}", emote, 1) == "a{size}|{creator}|1"
    assert render_template("{link} {unknown}", emote) == (
        "https://cdn.betterttv.net/emote/abc/1x.webp {unknown}"
    )
