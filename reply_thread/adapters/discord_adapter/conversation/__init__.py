"""Discord message conversion."""

from reply_thread.adapters.discord_adapter.conversation.message_builder import MessageBuilder

__all__ = [
    "MessageBuilder"
]
