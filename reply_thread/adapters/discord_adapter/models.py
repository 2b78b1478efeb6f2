from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import Optional

class RawUser(BaseModel):
    """Author object of a Discord REST message"""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    username: Optional[str] = None
    global_name: Optional[str] = None
    bot: bool = False
    public_flags: int = 0

class RawMessageReference(BaseModel):
    """Reference object of a Discord REST message"""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    message_id: Optional[str] = None
    channel_id: Optional[str] = None
    guild_id: Optional[str] = None

class RawMessage(BaseModel):
    """Discord REST message, only the fields used for thread reconstruction"""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    channel_id: str
    guild_id: Optional[str] = None
    author: RawUser
    content: str = ""
    timestamp: Optional[datetime] = None
    message_reference: Optional[RawMessageReference] = None
