"""Local storage for collected clone URLs."""

from .cache import CacheStore

__all__ = ["CacheStore"]
