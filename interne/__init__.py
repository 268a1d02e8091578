"""Spaced-repetition bookmark manager."""

__version__ = "0.1.0"
