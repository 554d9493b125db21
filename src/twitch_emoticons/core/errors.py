"""Exceptions raised by the emote fetcher and parser."""


class EmoteError(Exception):
    """Base class for twitch_emoticons errors."""


class MissingCredentials(EmoteError):
    """Twitch emotes were requested but no client id/secret or API client was set."""

    def __init__(self, message: str = "Client id or client secret not provided.") -> None:
        super().__init__(message)


class UnknownProviderType(EmoteError, TypeError):
    """A serialized emote carries a provider tag that is not recognized."""

    def __init__(self, provider_type) -> None:
        self.provider_type = provider_type
        super().__init__(f"Unknown type: {provider_type}")


class ProviderUnavailable(EmoteError):
    """A provider request failed or returned something unusable.

    Raised inside the provider adapters only; ``fetch_raw`` turns it into a
    ``None`` result.
    """


class TwitchApiError(EmoteError):
    """The Twitch API rejected a request or could not be authorized."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)
