import logging

from typing import Any, List, Optional

from reply_thread.core.cache.message_cache import MessageCache
from reply_thread.core.conversation.data_classes import Message
from reply_thread.core.utils.config import Config

class ThreadReconstructor:
    """Reconstructs the chain of replies leading to a message

    The thread is built newest first: the requested message, the message
    it replies to, and so on up to the root. Once a root is reached, the
    few messages sent right before it are checked: if the root's author
    sent an explicit reply among them, the walk resumes from that reply
    and the author's plain messages in between are added to the thread.
    """

    def __init__(self,
                 config: Config,
                 message_store: Any,
                 message_fetcher: Any,
                 message_cache: MessageCache):
        """Initialize the ThreadReconstructor

        Args:
            config: Config instance
            message_store: Store of locally materialized messages
            message_fetcher: Fetcher used when a message is not known locally
            message_cache: MessageCache instance
        """
        self.config = config
        self.message_store = message_store
        self.message_fetcher = message_fetcher
        self.message_cache = message_cache
        self.max_length = self.config.get_setting("thread", "max_length")
        self.nearby_messages_limit = self.config.get_setting("thread", "nearby_messages_limit")

    async def reconstruct(self, message: Message) -> List[Message]:
        """Reconstruct the thread of a message

        Args:
            message: Message to start from

        Returns:
            List of messages, from the given message back towards the root
        """
        thread: List[Message] = []
        anchor: Optional[Message] = message

        while anchor:
            anchor = await self._walk(anchor, thread)

        logging.debug(f"Reconstructed thread of {len(thread)} messages for message {message.message_id}")
        return thread

    async def resolve(self, channel_id: str, message_id: str) -> Optional[Message]:
        """Find a message by id: cache first, then the local store, then the API

        Args:
            channel_id: Channel ID
            message_id: Message ID

        Returns:
            Message object or None if it could not be found
        """
        cached_message = self.message_cache.get_message(message_id)
        if cached_message:
            return cached_message

        stored_message = self.message_store.get_message(channel_id, message_id)
        if stored_message:
            return stored_message

        self.message_cache.mark_pending(message_id)

        fetched_message = await self.message_fetcher.fetch_one(channel_id, message_id)
        if not fetched_message:
            logging.info(f"Message {message_id} in channel {channel_id} could not be fetched")
            return None

        self.message_cache.mark_resolved(fetched_message)
        return fetched_message

    async def _walk(self, message: Message, thread: List[Message]) -> Optional[Message]:
        """Follow reply references from a message and look around the root

        Args:
            message: Message to start from
            thread: Accumulated thread, extended in place

        Returns:
            Message to resume the walk from, or None when the thread is complete
        """
        current: Optional[Message] = message

        while current and current.reference:
            if self._is_full(thread):
                return None
            thread.append(current)
            current = await self.resolve(
                current.reference.channel_id, current.reference.message_id
            )

        if not current or self._is_full(thread):
            return None
        thread.append(current)

        if self._is_full(thread):
            return None

        messages_before = await self.message_fetcher.fetch_before(
            current, self.nearby_messages_limit
        )
        return self._find_continuation(current, messages_before or [], thread)

    def _find_continuation(self,
                           root: Message,
                           messages_before: List[Message],
                           thread: List[Message]) -> Optional[Message]:
        """Look for an earlier reply by the root's author among preceding messages

        Args:
            root: Root of the thread walked so far
            messages_before: Messages preceding the root, newest first
            thread: Accumulated thread, extended in place

        Returns:
            The earlier reply to resume from, or None
        """
        potential_messages: List[Message] = []

        for msg in messages_before:
            if self._is_full(thread):
                break
            if msg.author.user_id != root.author.user_id:
                continue

            if msg.reference:
                # Newest first from the API, oldest first in the thread
                potential_messages.reverse()
                thread.extend(potential_messages[:self.max_length - len(thread)])
                return msg

            potential_messages.append(msg)

        return None

    def _is_full(self, thread: List[Message]) -> bool:
        """Check if the thread reached the maximum length"""
        return len(thread) >= self.max_length
