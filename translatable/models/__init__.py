"""Database models for translatable content."""

from .translation import Translation

__all__ = ['Translation']
