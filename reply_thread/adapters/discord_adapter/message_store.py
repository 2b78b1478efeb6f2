import discord
import logging

from pydantic import ValidationError
from typing import Any, Dict, Optional

from reply_thread.adapters.discord_adapter.conversation.message_builder import MessageBuilder
from reply_thread.adapters.discord_adapter.models import RawMessage
from reply_thread.core.conversation.data_classes import Message
from reply_thread.core.utils.config import Config

class MessageStore:
    """Messages already materialized in memory

    Does not keep messages of its own: fetched messages live in the
    MessageCache. When a discord.py client is attached, the messages its
    gateway connection has cached are looked up here.
    """

    def __init__(self, config: Config, client: Optional[Any] = None):
        """Initialize the MessageStore

        Args:
            config: Config instance
            client: Optional discord.py client whose message cache is consulted
        """
        self.config = config
        self.client = client
        self.message_builder = MessageBuilder()

    def get_message(self, channel_id: str, message_id: str) -> Optional[Message]:
        """Get a message from the gateway cache

        Args:
            channel_id: Channel ID
            message_id: Message ID

        Returns:
            Message object or None if not found
        """
        if not self.client or not message_id.isdigit():
            return None

        cached = discord.utils.get(self.client.cached_messages, id=int(message_id))
        if not cached or str(cached.channel.id) != channel_id:
            return None

        return self.message_builder.build_from_discord_message(cached)

    def receive_message(self, payload: Dict[str, Any]) -> Optional[Message]:
        """Materialize a raw REST payload into a Message

        Args:
            payload: Message object as returned by the Discord API

        Returns:
            Message object or None if the payload is not a valid message
        """
        try:
            raw_message = RawMessage.model_validate(payload)
        except ValidationError as e:
            logging.warning(f"Skipping invalid message payload: {e}")
            return None

        return self.message_builder.build_from_payload(raw_message)
