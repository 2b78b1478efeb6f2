"""Cache implementation."""

from reply_thread.core.cache.message_cache import CacheEntry, MessageCache

__all__ = [
    "CacheEntry",
    "MessageCache"
]
