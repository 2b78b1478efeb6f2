import asyncio
import click
import logging

from reply_thread.adapters.discord_adapter.adapter import Adapter
from reply_thread.adapters.discord_adapter.main import main as run_bot
from reply_thread.core.utils.config import Config, DEFAULT_CONFIG_PATH
from reply_thread.core.utils.logger import setup_logging

@click.group()
def cli():
    """View Discord reply threads.

    Follows the reply references of a message back to the message that
    started the conversation and shows the whole thread in order.
    """

@cli.command()
@click.argument("channel_id")
@click.argument("message_id")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Path to the YAML configuration file.")
def view(channel_id: str, message_id: str, config_path: str):
    """Print the reply thread leading to MESSAGE_ID in CHANNEL_ID."""
    try:
        config = Config(config_path)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))

    setup_logging(config)

    chunks = asyncio.run(_render_thread(config, channel_id, message_id))
    if chunks is None:
        raise click.ClickException(f"Message {message_id} not found in channel {channel_id}")
    if not chunks:
        click.echo("No messages found.")
        return

    for chunk in chunks:
        click.echo(chunk)
        click.echo()

@cli.command()
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Path to the YAML configuration file.")
def bot(config_path: str):
    """Run the Discord bot with the "View Thread" context menu."""
    asyncio.run(run_bot(config_path))

async def _render_thread(config: Config, channel_id: str, message_id: str):
    """Fetch the starting message and render its thread

    Returns:
        List of text chunks, or None if the starting message was not found
    """
    adapter = Adapter(config)
    if not await adapter.start():
        raise click.ClickException("Could not initialize the Discord REST client")

    try:
        message = await adapter.get_message(channel_id, message_id)
        if not message:
            return None

        logging.info(f"Rendering thread of message {message_id}")
        return await adapter.render_thread(message)
    finally:
        await adapter.stop()

def main():
    """Entry point for the reply-thread command."""
    cli()

if __name__ == "__main__":
    main()
