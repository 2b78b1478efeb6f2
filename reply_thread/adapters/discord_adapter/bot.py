import asyncio
import discord
import logging

from discord import app_commands
from discord.ext import commands
from typing import Optional

from reply_thread.adapters.discord_adapter.adapter import Adapter
from reply_thread.adapters.discord_adapter.conversation.message_builder import MessageBuilder
from reply_thread.core.conversation.thread_view import can_view_thread
from reply_thread.core.utils.config import Config

class Bot:
    """Discord bot offering a "View Thread" message context menu"""

    def __init__(self, config: Config):
        """Initialize the Discord bot

        Args:
            config (Config): The configuration for the bot
        """
        self.config = config

        intents = discord.Intents.default()
        intents.message_content = True  # Needed to read message content
        intents.guilds = True

        self.bot = commands.Bot(
            command_prefix="!",
            intents=intents,
            application_id=int(self.config.get_setting("adapter", "application_id"))
        )
        self.adapter = Adapter(self.config, self.bot)
        self.message_builder = MessageBuilder()
        self._setup_event_handlers()
        self._setup_commands()

        self.running = False
        self._synced = False
        self._connection_task: Optional[asyncio.Task] = None

    def _setup_event_handlers(self) -> None:
        """Set up Discord event handlers"""
        @self.bot.event
        async def on_ready():
            self.running = True
            if not self._synced:
                await self.bot.tree.sync()
                self._synced = True
            logging.info(f"Connected to Discord as {self.bot.user}")

    def _setup_commands(self) -> None:
        """Register application commands"""
        @app_commands.context_menu(name="View Thread")
        async def view_thread(interaction: discord.Interaction, message: discord.Message):
            await self.handle_view_thread(interaction, message)

        self.bot.tree.add_command(view_thread)

    async def handle_view_thread(self, interaction: discord.Interaction, message: discord.Message) -> None:
        """Reply to a "View Thread" invocation with the thread of the message

        Args:
            interaction: Discord interaction
            message: Message the context menu was opened on
        """
        start_message = self.message_builder.build_from_discord_message(message)
        if not can_view_thread(start_message):
            await interaction.response.send_message(
                "This message is not a reply.", ephemeral=True
            )
            return

        await interaction.response.defer(ephemeral=True, thinking=True)

        try:
            chunks = await self.adapter.render_thread(start_message)
            if not chunks:
                await interaction.followup.send("No messages found.", ephemeral=True)
                return

            for chunk in chunks:
                await interaction.followup.send(chunk, ephemeral=True)
        except Exception as e:
            logging.error(f"Error showing thread for message {message.id}: {e}", exc_info=True)
            await interaction.followup.send("Could not load the thread.", ephemeral=True)

    async def connect(self) -> bool:
        """Connect to Discord"""
        try:
            if not await self.adapter.start():
                return False

            self._connection_task = asyncio.create_task(
                self.bot.start(self.config.get_setting("adapter", "bot_token"))
            )
            await asyncio.sleep(1)

            if self._connection_task.done():
                raise Exception(self._connection_task.exception())

            logging.info("Discord connection initiated successfully")
            return True
        except Exception as e:
            logging.error(f"Error initiating Discord connection: {e}")
            return False

    async def disconnect(self) -> None:
        """Disconnect from Discord"""
        self.running = False

        try:
            await self.bot.close()

            if self._connection_task and not self._connection_task.done():
                self._connection_task.cancel()
                try:
                    await self._connection_task
                except asyncio.CancelledError:
                    pass  # Expected

            await self.adapter.stop()
            logging.info("Disconnected from Discord")
        except Exception as e:
            logging.error(f"Error disconnecting from Discord: {e}")
