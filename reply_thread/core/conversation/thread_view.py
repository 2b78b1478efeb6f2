from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from reply_thread.core.conversation.data_classes import AuthorInfo, Message
from reply_thread.core.utils.config import Config

VERIFIED_BOT_FLAG = 1 << 16

def can_view_thread(message: Optional[Message]) -> bool:
    """Check if a thread can be shown for the message

    Args:
        message: Message object

    Returns:
        True if the message replies to another message
    """
    return bool(message and message.is_reply)

@dataclass
class DisplayMessage:
    """Message prepared for display, without its reply reference"""
    message_id: str
    channel_id: str
    author_id: str
    author_name: str
    content: str
    timestamp: Optional[int] = None
    is_last: bool = False
    author_badge: Optional[str] = None

class ThreadView:
    """Turns a reconstructed thread into displayable text"""

    def __init__(self, config: Config):
        """Initialize the ThreadView

        Args:
            config: Config instance
        """
        self.config = config
        self.max_message_length = self.config.get_setting("adapter", "max_message_length")

    def build(self, thread: List[Message]) -> List[DisplayMessage]:
        """Build display records in chronological order

        Args:
            thread: Thread as returned by the reconstructor, newest first

        Returns:
            List of DisplayMessage objects, oldest first
        """
        display_messages = [
            DisplayMessage(
                message_id=message.message_id,
                channel_id=message.channel_id,
                author_id=message.author.user_id,
                author_name=message.author.name,
                content=message.content,
                timestamp=message.timestamp,
                author_badge=self._author_badge(message.author)
            )
            for message in reversed(thread)
        ]
        if display_messages:
            display_messages[-1].is_last = True
        return display_messages

    def render(self, display_messages: List[DisplayMessage]) -> List[str]:
        """Render display records as text chunks

        Args:
            display_messages: List of DisplayMessage objects

        Returns:
            List of text chunks, each at most max_message_length long
        """
        chunks = []
        current = ""

        for block in (self._format_message(msg) for msg in display_messages):
            for part in self._split_block(block):
                candidate = f"{current}\n\n{part}" if current else part
                if len(candidate) <= self.max_message_length:
                    current = candidate
                    continue
                chunks.append(current)
                current = part

        if current:
            chunks.append(current)
        return chunks

    def _format_message(self, message: DisplayMessage) -> str:
        """Format a single message block"""
        header = f"**{message.author_name}**"
        if message.author_badge:
            header += f" [{message.author_badge}]"
        if message.timestamp is not None:
            sent_at = datetime.fromtimestamp(message.timestamp / 1e3, tz=timezone.utc)
            header += f" ({sent_at.strftime('%Y-%m-%d %H:%M')} UTC)"
        return f"{header}\n{message.content}" if message.content else header

    def _author_badge(self, author: AuthorInfo) -> Optional[str]:
        """Badge shown next to bot authors"""
        if author.has_flag(VERIFIED_BOT_FLAG):
            return "BOT ✓"
        if author.is_bot:
            return "BOT"
        return None

    def _split_block(self, block: str) -> List[str]:
        """Split a block that does not fit in one chunk at line or space boundaries"""
        parts = []
        remaining = block

        while len(remaining) > self.max_message_length:
            cut_point = remaining.rfind("\n", 0, self.max_message_length)
            if cut_point <= self.max_message_length // 2:
                cut_point = remaining.rfind(" ", self.max_message_length // 2, self.max_message_length)
            if cut_point <= 0:
                cut_point = self.max_message_length

            parts.append(remaining[:cut_point])
            remaining = remaining[cut_point:].lstrip("\n ")

        if remaining:
            parts.append(remaining)
        return parts
