"""Emote parser - replaces emote codes in text with rendered emotes."""

import re
from collections.abc import Callable
from typing import TYPE_CHECKING, Union

from ..core.constants import TEMPLATES
from .models import Emote

if TYPE_CHECKING:
    from .fetcher import EmoteFetcher

DEFAULT_MATCH = r":(.+?):"

Template = Union[str, Callable[[Emote, int], str]]


_PLACEHOLDER = re.compile(r"\{(link|name|size|creator)\}")


def render_template(template: str, emote: Emote, size: int = 0) -> str:
    """Fill the {link}, {name}, {size} and {creator} placeholders.

    All placeholders are filled in one pass, so codes or owner names that
    look like placeholders are inserted as they are.
    """
    values = {
        "link": emote.to_link(size),
        "name": emote.code,
        "size": str(size),
        "creator": emote.owner_name or "global",
    }
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template)


class EmoteParser:
    """Parses text, replacing emote codes with links or markup.

    Args:
        fetcher: The fetcher whose cached emotes are looked up.
        type: Built-in template, one of "html", "markdown", "bbcode" or
            "plain". Defaults to the fetcher's ``parser_type`` setting.
        template: Custom template string, or a callable taking the emote
            and size and returning the replacement. Overrides ``type``.
        match: Pattern finding candidate codes. The first group is the
            code; without groups the whole match is.
    """

    def __init__(
        self,
        fetcher: "EmoteFetcher",
        *,
        type: str | None = None,
        template: Template | None = None,
        match: str | re.Pattern = DEFAULT_MATCH,
    ) -> None:
        if type is None:
            type = fetcher.settings.parser_type
        if template is None and type not in TEMPLATES:
            raise ValueError(f"Unknown template type {type!r}, expected one of {list(TEMPLATES)}")

        self.fetcher = fetcher
        self.type = type
        self.template: Template = template if template is not None else TEMPLATES[type]
        self.match = re.compile(match) if isinstance(match, str) else match

    def render(self, emote: Emote, size: int = 0) -> str:
        """Render one emote with the parser's template."""
        if callable(self.template):
            return self.template(emote, size)
        return render_template(self.template, emote, size)

    def parse(self, text: str, size: int = 0) -> str:
        """Replace every cached emote code in ``text``.

        Candidates without a cached emote are left as they are, delimiters
        included.
        """
        group = 1 if self.match.groups else 0

        def replace(m: re.Match) -> str:
            emote = self.fetcher.emotes.get(m.group(group))
            if emote is None:
                return m.group(0)
            return self.render(emote, size)

        return self.match.sub(replace, text)
