import asyncio
import logging
import time

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional

from reply_thread.core.conversation.data_classes import Message
from reply_thread.core.utils.config import Config

@dataclass
class CacheEntry:
    """State of a single message id in the cache

    fetched=False marks a pending or negative lookup,
    fetched=True means that message holds the resolved message.
    """
    message: Optional[Message] = None
    fetched: bool = False
    created_at: float = field(default_factory=time.time)

    @property
    def is_resolved(self) -> bool:
        return self.fetched and self.message is not None

class MessageCache:
    """Message id to cache entry map with LRU eviction"""

    _instance = None

    @classmethod
    def get_instance(cls, config: Optional[Config] = None, start_maintenance: Optional[bool] = False):
        """Get or create the process-wide instance

        Args:
            config: Configuration object (only used during first initialization)
            start_maintenance: Whether to start the maintenance loop

        Returns:
            The shared MessageCache instance
        """
        if cls._instance is None:
            cls._instance = cls(config, start_maintenance=start_maintenance)
        return cls._instance

    def __init__(self,
                 config: Config,
                 max_entries: Optional[int] = None,
                 start_maintenance: bool = False):
        """Initialize the MessageCache

        Args:
            config: Config instance
            max_entries: Maximum number of entries kept, overrides the config value
            start_maintenance: Whether to start the maintenance loop
        """
        self.config = config
        self.entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self.max_entries = max_entries or self.config.get_setting("caching", "max_cached_messages")
        max_age_hours = self.config.get_setting("caching", "max_age_hours")
        self.max_age_seconds = max_age_hours * 3600 if max_age_hours else None
        self.maintenance_task = asyncio.create_task(self._maintenance_loop()) if start_maintenance else None

    def __del__(self):
        """Cleanup when object is garbage collected"""
        task = getattr(self, "maintenance_task", None)
        if task and not task.done():
            task.cancel()

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, message_id: str) -> bool:
        return message_id in self.entries

    def get(self, message_id: str) -> Optional[CacheEntry]:
        """Get the cache entry for a message id

        Args:
            message_id: Message ID

        Returns:
            CacheEntry or None if the id is unknown
        """
        entry = self.entries.get(message_id)
        if entry is not None:
            self.entries.move_to_end(message_id)
        return entry

    def get_message(self, message_id: str) -> Optional[Message]:
        """Get a resolved message by id

        Args:
            message_id: Message ID

        Returns:
            Message or None if the id is unknown or not resolved
        """
        entry = self.get(message_id)
        if entry and entry.is_resolved:
            return entry.message
        return None

    def put(self, message_id: str, entry: CacheEntry) -> None:
        """Store an entry, overwriting whatever was there

        Args:
            message_id: Message ID
            entry: Cache entry
        """
        self.entries[message_id] = entry
        self.entries.move_to_end(message_id)
        self._enforce_size_limit()

    def mark_pending(self, message_id: str) -> None:
        """Record that a lookup for the id is in progress or found nothing

        Args:
            message_id: Message ID
        """
        self.put(message_id, CacheEntry(fetched=False))

    def mark_resolved(self, message: Message) -> None:
        """Record a materialized message

        Args:
            message: Message to store
        """
        self.put(message.message_id, CacheEntry(message=message, fetched=True))

    def clear(self) -> None:
        """Drop every entry"""
        self.entries.clear()

    def _enforce_size_limit(self) -> None:
        """Evict least recently used entries above the limit"""
        while len(self.entries) > self.max_entries:
            message_id, _ = self.entries.popitem(last=False)
            logging.debug(f"Evicted message {message_id} from cache")

    def _remove_expired(self) -> int:
        """Remove entries older than the configured age

        Returns:
            Number of removed entries
        """
        if not self.max_age_seconds:
            return 0

        cutoff = time.time() - self.max_age_seconds
        expired = [
            message_id for message_id, entry in self.entries.items()
            if entry.created_at < cutoff
        ]
        for message_id in expired:
            del self.entries[message_id]
        return len(expired)

    async def _maintenance_loop(self) -> None:
        """Periodically perform cache maintenance"""
        try:
            while True:
                await asyncio.sleep(
                    int(self.config.get_setting("caching", "cache_maintenance_interval"))
                )
                removed = self._remove_expired()
                logging.debug(
                    f"Cache maintenance completed. Removed {removed} entries, "
                    f"current size: {len(self.entries)}"
                )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logging.error(f"Error in cache maintenance: {e}")
