"""Transcript Pro: structured output salvage, SRT codec, chunked translation and archive."""

__version__ = "0.3.0"
