import aiohttp
import logging

from typing import Any, Dict, Optional

from reply_thread import __version__
from reply_thread.core.utils.config import Config

class Client:
    """Discord REST client used for message lookups"""

    def __init__(self, config: Config):
        """Initialize the Discord REST client

        Args:
            config (Config): The configuration for the client
        """
        self.config = config
        self.api_base = self.config.get_setting("adapter", "api_base").rstrip("/")
        self.timeout = aiohttp.ClientTimeout(
            total=self.config.get_setting("adapter", "request_timeout")
        )
        self.session: Optional[aiohttp.ClientSession] = None

    @property
    def connected(self) -> bool:
        return self.session is not None and not self.session.closed

    async def connect(self) -> bool:
        """Initialize HTTP session

        Returns:
            bool: True if connection successful
        """
        try:
            if not self.connected:
                self.session = aiohttp.ClientSession(
                    headers=self._headers(), timeout=self.timeout
                )
            logging.info("Discord REST client initialized")
            return True
        except Exception as e:
            logging.error(f"Error initializing REST client: {e}")
            return False

    async def disconnect(self) -> None:
        """Close HTTP session"""
        try:
            if self.connected:
                await self.session.close()
            logging.info("Discord REST client session closed")
        except Exception as e:
            logging.error(f"Error closing REST client session: {e}")

    async def get_messages(self, channel_id: str, params: Dict[str, Any]) -> Any:
        """Get messages of a channel

        Args:
            channel_id: Channel ID
            params: Query parameters (limit, around, before, after)

        Returns:
            Decoded JSON body

        Raises:
            aiohttp.ClientError: On transport errors and non-2xx responses
            RuntimeError: When the client is not connected
        """
        if not self.connected:
            raise RuntimeError("Discord REST client is not connected")

        url = f"{self.api_base}/channels/{channel_id}/messages"
        query = {key: str(value) for key, value in params.items() if value is not None}

        async with self.session.get(url, params=query) as response:
            response.raise_for_status()
            return await response.json()

    def _headers(self) -> Dict[str, str]:
        """Build request headers"""
        token = self.config.get_setting("adapter", "bot_token")
        if not token:
            raise ValueError("Bot token not available in configuration")

        return {
            "Authorization": f"Bot {token}",
            "Accept": "application/json",
            "User-Agent": f"DiscordBot (reply-thread, {__version__})"
        }
