"""Emote models, providers, fetcher and parser."""
