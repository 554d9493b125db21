"""Constants, errors, settings and the emote collection type."""
