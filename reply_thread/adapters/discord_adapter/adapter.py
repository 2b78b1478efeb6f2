import logging

from typing import Any, List, Optional

from reply_thread.adapters.discord_adapter.client import Client
from reply_thread.adapters.discord_adapter.message_fetcher import MessageFetcher
from reply_thread.adapters.discord_adapter.message_store import MessageStore
from reply_thread.core.cache.message_cache import MessageCache
from reply_thread.core.conversation.data_classes import Message
from reply_thread.core.conversation.thread_reconstructor import ThreadReconstructor
from reply_thread.core.conversation.thread_view import ThreadView
from reply_thread.core.utils.config import Config

class Adapter:
    """Wires the Discord client, store, cache and reconstructor together"""

    def __init__(self,
                 config: Config,
                 discord_client: Optional[Any] = None,
                 message_cache: Optional[MessageCache] = None):
        """Initialize the Discord adapter

        Args:
            config: Config instance
            discord_client: Optional discord.py client whose message cache is used as local store
            message_cache: MessageCache instance, the process-wide one by default
        """
        self.config = config
        self.client = Client(self.config)
        self.message_store = MessageStore(self.config, discord_client)
        self.message_cache = message_cache or MessageCache.get_instance(self.config)
        self.message_fetcher = MessageFetcher(
            self.config, self.client, self.message_store, self.message_cache
        )
        self.thread_reconstructor = ThreadReconstructor(
            self.config, self.message_store, self.message_fetcher, self.message_cache
        )
        self.thread_view = ThreadView(self.config)
        self.running = False

    async def start(self) -> bool:
        """Start the adapter

        Returns:
            bool: True if the REST client is ready
        """
        self.running = await self.client.connect()
        if self.running:
            logging.info("Adapter started successfully")
        return self.running

    async def stop(self) -> None:
        """Stop the adapter"""
        await self.client.disconnect()
        self.running = False
        logging.info("Adapter stopped")

    async def get_message(self, channel_id: str, message_id: str) -> Optional[Message]:
        """Look up a message by id

        Args:
            channel_id: Channel ID
            message_id: Message ID

        Returns:
            Message object or None if not found
        """
        return await self.thread_reconstructor.resolve(channel_id, message_id)

    async def get_thread(self, message: Message) -> List[Message]:
        """Reconstruct the reply thread of a message

        Args:
            message: Message to start from

        Returns:
            List of messages, newest first
        """
        return await self.thread_reconstructor.reconstruct(message)

    async def render_thread(self, message: Message) -> List[str]:
        """Reconstruct the thread of a message and render it chronologically

        Args:
            message: Message to start from

        Returns:
            List of text chunks, empty if there is nothing to show
        """
        thread = await self.get_thread(message)
        if len(thread) <= 1:
            logging.info(f"No messages found for the thread of message {message.message_id}")
            return []

        return self.thread_view.render(self.thread_view.build(thread))
