"""Gemini Gateway HTTP service."""

from gemini_gateway import __version__

__all__ = ["__version__"]
