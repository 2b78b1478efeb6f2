"""Conversation data and thread display."""

from reply_thread.core.conversation.data_classes import AuthorInfo, Message, MessageReference
from reply_thread.core.conversation.thread_view import DisplayMessage, ThreadView, can_view_thread

__all__ = [
    "AuthorInfo",
    "Message",
    "MessageReference",
    "DisplayMessage",
    "ThreadView",
    "can_view_thread"
]
