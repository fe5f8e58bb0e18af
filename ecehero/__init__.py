"""A terminal match-3 puzzle game with a pattern lab and a save file."""

__version__ = "1.0.0"