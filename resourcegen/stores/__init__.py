"""Persistent stores used between builds."""

from .cache import CacheManager

__all__ = ["CacheManager"]
