from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class AuthorInfo:
    """Information about a message author"""
    user_id: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    is_bot: bool = False
    public_flags: int = 0

    @property
    def name(self) -> str:
        """Get a human-readable name"""
        return self.display_name or self.username or f"User {self.user_id}"

    def has_flag(self, flag: int) -> bool:
        """Check whether the author carries a public flag

        Args:
            flag: Flag bit (or combination of bits) to check

        Returns:
            True if all the bits of the flag are set
        """
        return flag != 0 and (self.public_flags & flag) == flag

@dataclass(frozen=True)
class MessageReference:
    """Pointer from a reply to the message it replies to"""
    channel_id: str
    message_id: str
    guild_id: Optional[str] = None

@dataclass(frozen=True)
class Message:
    """A chat message as seen by the thread reconstructor"""
    message_id: str
    channel_id: str
    author: AuthorInfo
    content: str = ""
    timestamp: Optional[int] = None  # milliseconds since epoch
    reference: Optional[MessageReference] = None
    guild_id: Optional[str] = None

    @property
    def is_reply(self) -> bool:
        """Check if the message replies to another message"""
        return self.reference is not None
