import asyncio
import logging

from typing import Any, Dict, List, Optional

from reply_thread.adapters.discord_adapter.client import Client
from reply_thread.adapters.discord_adapter.message_store import MessageStore
from reply_thread.core.cache.message_cache import MessageCache
from reply_thread.core.conversation.data_classes import Message
from reply_thread.core.utils.config import Config

class MessageFetcher:
    """Fetches single messages and short runs of preceding messages from Discord"""

    def __init__(self,
                 config: Config,
                 client: Client,
                 message_store: MessageStore,
                 message_cache: MessageCache):
        """Initialize the MessageFetcher

        Args:
            config: Config instance
            client: Discord REST client
            message_store: MessageStore instance used to materialize payloads
            message_cache: MessageCache instance
        """
        self.config = config
        self.client = client
        self.message_store = message_store
        self.message_cache = message_cache
        self.retries = self.config.get_setting("adapter", "fetch_retries")
        self.retry_delay = self.config.get_setting("adapter", "retry_delay")

    async def fetch_one(self, channel_id: str, message_id: str) -> Optional[Message]:
        """Fetch the message with the given id

        Args:
            channel_id: Channel ID
            message_id: Message ID

        Returns:
            Message object or None if nothing could be fetched
        """
        body = await self._make_api_request(channel_id, {"limit": 1, "around": message_id})
        if not body:
            return None

        message = self.message_store.receive_message(body[0])
        if message and message.message_id != message_id:
            logging.debug(f"Requested message {message_id}, nearest available is {message.message_id}")

        return message

    async def fetch_before(self, message: Message, limit: int = 3) -> Optional[List[Message]]:
        """Fetch up to limit messages sent right before the given one

        Args:
            message: Anchor message
            limit: Maximum number of messages

        Returns:
            Messages newest first, or None if nothing could be fetched
        """
        body = await self._make_api_request(
            message.channel_id, {"limit": limit, "before": message.message_id}
        )
        if not body:
            return None

        received_messages = []
        for payload in body:
            received_message = self.message_store.receive_message(payload)
            if not received_message:
                continue

            received_messages.append(received_message)
            self.message_cache.mark_resolved(received_message)

        return received_messages or None

    async def _make_api_request(self, channel_id: str, params: Dict[str, Any]) -> Optional[List[Any]]:
        """Make a messages request with retries

        Args:
            channel_id: Channel ID
            params: Query parameters

        Returns:
            List of raw messages or None if every attempt failed
        """
        attempts = self.retries + 1

        for attempt in range(1, attempts + 1):
            try:
                logging.debug(f"Fetching messages of channel {channel_id} with {params}")
                body = await self.client.get_messages(channel_id, params)
                return body if isinstance(body, list) else None
            except Exception as e:
                if attempt >= attempts:
                    logging.error(
                        f"Error fetching messages of channel {channel_id} "
                        f"after {attempts} attempts: {e}"
                    )
                    return None

                logging.warning(
                    f"Fetching messages of channel {channel_id} failed ({e}), "
                    f"retrying (attempt {attempt}/{attempts})"
                )
                if self.retry_delay:
                    await asyncio.sleep(self.retry_delay)

        return None
