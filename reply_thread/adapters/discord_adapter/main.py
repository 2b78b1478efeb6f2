import asyncio
import logging
import signal
import sys

from reply_thread.adapters.discord_adapter.bot import Bot
from reply_thread.core.cache.message_cache import MessageCache
from reply_thread.core.utils.logger import setup_logging
from reply_thread.core.utils.config import Config, DEFAULT_CONFIG_PATH

should_shutdown = False

def shutdown():
    """Perform graceful shutdown when signal is received"""
    global should_shutdown
    logging.warning("Shutdown signal received, initiating shutdown...")
    should_shutdown = True

async def main(config_path: str = DEFAULT_CONFIG_PATH):
    bot = None

    try:
        config = Config(config_path)
        setup_logging(config)
        MessageCache.get_instance(config, True)

        logging.info("Starting reply thread bot")

        bot = Bot(config)

        if sys.platform != "win32":
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGTERM, signal.SIGINT):
                loop.add_signal_handler(sig, shutdown)
        else:
            signal.signal(signal.SIGINT, lambda s, f: shutdown())
            signal.signal(signal.SIGTERM, lambda s, f: shutdown())

        if not await bot.connect():
            return

        while not should_shutdown and not bot.bot.is_closed():
            await asyncio.sleep(1)
    except (ValueError, FileNotFoundError) as e:
        print(f"Configuration error: {e}")
        print("Please ensure the configuration file exists with required settings")
    except Exception as e:
        logging.error(f"Unexpected error: {e}", exc_info=True)
    finally:
        if bot:
            await bot.disconnect()

if __name__ == "__main__":
    asyncio.run(main())
