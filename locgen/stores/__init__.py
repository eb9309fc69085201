"""Caches used across generation runs."""

from .source_cache import SourceCache

__all__ = ["SourceCache"]
