"""
Factocord
=========

A Discord bot for the Factorio modding community. It answers slash commands
with entries from the Factorio modding API documentation, shows pages of the
official Factorio wiki and keeps a small per-server FAQ.
"""

import os
import sys
from pathlib import Path


def resolve_base_dir() -> Path:
    """Determine the base directory of the project.

    Resolution order:
    1. FACTOCORD_HOME environment variable, if set.
    2. If running in a frozen/compiled context, use the executable's directory.
    3. Otherwise, assume running from source and use the grandparent of this file's directory.
    """
    if env_home := os.getenv("FACTOCORD_HOME"):
        return Path(env_home).resolve()

    if getattr(sys, "frozen", False) or getattr(sys, "compiled", False):
        return Path(sys.argv[0]).resolve().parent

    return Path(__file__).resolve().parents[2]


BASE_DIR = resolve_base_dir()
os.chdir(BASE_DIR)

import asyncio
import discord
from dotenv import load_dotenv

from factocord.api.api_cache import data_api_cache, runtime_api_cache
from factocord.configuration.app_configuration import app_config
from factocord.database.db_connection import db_connection
from factocord.faq.faq_service import faq_titles_cache
from factocord.util.logger import get_logger, handle_exception


logger = get_logger("main")


def load_environment() -> str:
    """Load environment variables and return the Discord bot token.

    Raises
    ------
    SystemExit
        If the required ``DISCORD_BOT_TOKEN`` variable is missing.
    """
    load_dotenv(dotenv_path=BASE_DIR / ".env")
    token = os.getenv("DISCORD_BOT_TOKEN")
    if not token:
        logger.critical("'DISCORD_BOT_TOKEN' environment variable not set. Bot cannot start.")
        sys.exit(1)
    return token


def build_intents() -> discord.Intents:
    """Intents for guild events and reading message content for inline wiki searches."""
    intents = discord.Intents.default()
    intents.message_content = True
    intents.guilds = True
    intents.messages = True
    return intents


def load_cogs(discord_bot_instance: discord.Bot) -> None:
    """Register all cogs with the provided Discord bot instance."""
    from factocord.bot.cogs import (
        api_cmds,
        events_listener,
        faq_cmds,
        fff_cmds,
        general_cmds,
        message_listener,
        mod_cmds,
        refresh_cogs,
        wiki_cmds,
    )

    events_listener.setup(discord_bot_instance)
    message_listener.setup(discord_bot_instance)
    api_cmds.setup(discord_bot_instance)
    wiki_cmds.setup(discord_bot_instance)
    faq_cmds.setup(discord_bot_instance)
    fff_cmds.setup(discord_bot_instance)
    mod_cmds.setup(discord_bot_instance)
    general_cmds.setup(discord_bot_instance)
    refresh_cogs.setup(discord_bot_instance)

    logger.info("All cogs loaded successfully.")


def create_bot() -> discord.Bot:
    """Instantiate the Discord bot and register all cogs."""
    bot = discord.Bot(intents=build_intents())
    load_cogs(bot)
    return bot


async def load_documentation() -> None:
    """Download both API documentation corpora.

    Failures propagate: the bot is useless without the documentation, so
    startup aborts instead of connecting with empty caches.
    """
    logger.info("Downloading API documentation before bot startup…")
    await runtime_api_cache.prime()
    await data_api_cache.prime()


async def start_bot(bot: discord.Bot, token: str) -> None:
    """Start the Discord bot and handle lifecycle logging around the connection."""
    logger.info("Attempting to connect to Discord…")
    try:
        await bot.start(token)
    except asyncio.CancelledError:
        logger.info("Discord bot start cancelled; shutting down")
    finally:
        logger.info("Discord bot start routine finished.")


async def shutdown_runtime(bot: discord.Bot | None = None) -> None:
    """Close the Discord connection and the database."""
    if bot is not None and not bot.is_closed():
        try:
            await bot.close()
        except Exception as exc:
            logger.exception("Error while closing the Discord bot: %s", exc)

    try:
        await db_connection.close()
    except Exception as exc:
        logger.exception("Error during database shutdown: %s", exc)

    logger.info("Shutdown complete.")


async def async_main() -> int:
    """Bootstrap the database, caches and bot, returning an exit code."""
    token = load_environment()

    try:
        logger.info("Initializing database...")
        await db_connection.open(app_config.database_path)
        await faq_titles_cache.prime()
    except Exception as exc:
        logger.critical("Failed to initialize database: %s", exc)
        await shutdown_runtime()
        return 1

    try:
        await load_documentation()
    except Exception as exc:
        logger.critical("Failed to load API documentation: %s", exc)
        await shutdown_runtime()
        return 1

    try:
        bot = create_bot()
    except Exception as exc:
        logger.critical("Failed to initialize Discord bot: %s", exc)
        await shutdown_runtime()
        return 1

    exit_code = 0
    try:
        await start_bot(bot, token)
    except Exception as exc:
        logger.critical("Discord bot runtime error: %s", exc)
        exit_code = 1
    finally:
        await shutdown_runtime(bot)

    return exit_code


def main() -> int:
    """Entrypoint that runs the async runtime and returns the process exit code."""
    logger.info("Starting Factocord…")
    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
        return 0
    except SystemExit as exit_exc:
        code = exit_exc.code
        if isinstance(code, int):
            return code
        if code is None:
            return 1
        try:
            return int(code)
        except (ValueError, TypeError):
            logger.warning("SystemExit.code is not an int (%r); defaulting to 1", code)
            return 1
    except Exception as exc:
        logger.critical("An unexpected error occurred while running the bot: %s", exc)
        return 1


if __name__ == "__main__":
    sys.excepthook = handle_exception
    sys.exit(main())
