"""A small terminal text editor with grapheme-aware editing."""

__version__ = "0.1.0"