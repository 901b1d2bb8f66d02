"""Crazy Eights: a human-vs-bot card game engine."""

__version__ = "1.0.0"
