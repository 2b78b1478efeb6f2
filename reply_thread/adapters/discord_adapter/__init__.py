"""Discord adapter implementation."""

from reply_thread.adapters.discord_adapter.adapter import Adapter
from reply_thread.adapters.discord_adapter.client import Client

__all__ = [
    "Adapter",
    "Client"
]
