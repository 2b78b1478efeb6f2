from datetime import datetime
from typing import Any, Dict, Optional

from reply_thread.adapters.discord_adapter.models import RawMessage
from reply_thread.core.conversation.data_classes import AuthorInfo, Message, MessageReference

class MessageBuilder:
    """Builds Message objects from Discord REST payloads and discord.py messages"""

    def __init__(self):
        self.reset()

    def reset(self) -> 'MessageBuilder':
        """Reset the builder to its initial state"""
        self.message_data: Dict[str, Any] = {}
        return self

    def with_basic_info(self,
                        message_id: Any,
                        channel_id: Any,
                        guild_id: Optional[Any] = None,
                        created_at: Optional[datetime] = None) -> 'MessageBuilder':
        """Add basic message info"""
        self.message_data["message_id"] = str(message_id)
        self.message_data["channel_id"] = str(channel_id)
        self.message_data["guild_id"] = str(guild_id) if guild_id else None
        self.message_data["timestamp"] = int(created_at.timestamp() * 1e3) if created_at else None
        return self

    def with_author(self, author: AuthorInfo) -> 'MessageBuilder':
        """Add author info"""
        self.message_data["author"] = author
        return self

    def with_content(self, content: Optional[str]) -> 'MessageBuilder':
        """Add message content"""
        self.message_data["content"] = content or ""
        return self

    def with_reference(self,
                       message_id: Optional[Any],
                       channel_id: Optional[Any],
                       guild_id: Optional[Any] = None) -> 'MessageBuilder':
        """Add the reply reference

        A reference without a message id (forwards, pins, crossposts)
        does not point to a parent message and is dropped.
        """
        if message_id:
            self.message_data["reference"] = MessageReference(
                channel_id=str(channel_id or self.message_data.get("channel_id")),
                message_id=str(message_id),
                guild_id=str(guild_id) if guild_id else None
            )
        return self

    def build(self) -> Message:
        """Build the final message object"""
        return Message(**self.message_data)

    def build_from_payload(self, payload: RawMessage) -> Message:
        """Build a message from a validated REST payload

        Args:
            payload: RawMessage instance

        Returns:
            Message object
        """
        self.reset()
        self.with_basic_info(
            payload.id, payload.channel_id, payload.guild_id, payload.timestamp
        ).with_author(
            AuthorInfo(
                user_id=payload.author.id,
                username=payload.author.username,
                display_name=payload.author.global_name,
                is_bot=payload.author.bot,
                public_flags=payload.author.public_flags
            )
        ).with_content(payload.content)

        reference = payload.message_reference
        if reference:
            self.with_reference(reference.message_id, reference.channel_id, reference.guild_id)

        return self.build()

    def build_from_discord_message(self, message: Any) -> Message:
        """Build a message from a discord.py message object

        Args:
            message: discord.Message instance

        Returns:
            Message object
        """
        self.reset()
        guild = getattr(message, "guild", None)
        author = message.author
        public_flags = getattr(author, "public_flags", None)

        self.with_basic_info(
            message.id,
            message.channel.id,
            guild.id if guild else None,
            getattr(message, "created_at", None)
        ).with_author(
            AuthorInfo(
                user_id=str(author.id),
                username=getattr(author, "name", None),
                display_name=getattr(author, "global_name", None),
                is_bot=bool(getattr(author, "bot", False)),
                public_flags=int(getattr(public_flags, "value", 0) or 0)
            )
        ).with_content(getattr(message, "content", ""))

        reference = getattr(message, "reference", None)
        if reference:
            self.with_reference(reference.message_id, reference.channel_id, reference.guild_id)

        return self.build()
