"""Data models for ordered objects."""

from .entry import Entry

__all__ = ["Entry"]
