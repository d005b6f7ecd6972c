"""Event listener Cog for Factocord.

Handles bot lifecycle events (on_ready, on_guild_remove) and is the single
place where application command errors are turned into replies.
"""

import discord
from discord.ext import commands

from factocord.errors import CacheUnavailableError, FactocordError
from factocord.faq import faq_service
from factocord.ui import embeds
from factocord.util.logger import get_logger

logger = get_logger("events_listener")

GENERIC_ERROR_MESSAGE = "Something went wrong while running this command. Please try again later."
CACHE_ERROR_MESSAGE = "The documentation is not available right now. Please try again in a moment."


class EventsListenerCog(commands.Cog):
    """Handles Discord bot lifecycle events and command errors."""

    def __init__(self, bot: discord.Bot) -> None:
        self.bot = bot
        logger.info("[EVENTS LISTENER] Events listener cog loaded")

    @commands.Cog.listener(name="on_ready")
    async def on_ready(self) -> None:
        if not self.bot.user:
            logger.warning("[EVENTS LISTENER] Bot partially connected, user info not yet available.")
            return

        await self.bot.change_presence(
            status=discord.Status.online,
            activity=discord.Activity(type=discord.ActivityType.watching, name="the modding API docs"),
        )
        logger.info("Bot connected as %s (ID: %s)", self.bot.user, self.bot.user.id)

    @commands.Cog.listener(name="on_guild_remove")
    async def on_guild_remove(self, guild: discord.Guild) -> None:
        """Delete the FAQ entries of a server the bot left."""
        logger.debug("[EVENTS LISTENER] Bot removed from guild: %s (ID: %s)", guild.name, guild.id)
        await faq_service.remove_server(guild.id)
        logger.info("[EVENTS LISTENER] Left guild '%s' (ID: %s)", guild.name, guild.id)

    @commands.Cog.listener(name="on_application_command_error")
    async def on_application_command_error(self, application_context: discord.ApplicationContext, error: Exception):
        """Reply with an error embed.

        User-facing errors (unknown names, invalid FAQ edits) show their own
        message. Everything else is logged with its traceback and answered
        with a generic message.
        """
        error = getattr(error, "original", error)
        command_name = getattr(application_context.command, "qualified_name", None) or getattr(
            application_context.command, "name", "<unknown>"
        )

        if isinstance(error, FactocordError) and error.user_facing:
            logger.info("[EVENTS LISTENER] Command '%s' failed: %s", command_name, error)
            embed = embeds.error_embed(error.message, title=f"Error while executing command {command_name}:")
        else:
            logger.error("Error in command '%s': %s", command_name, error, exc_info=error)
            message = CACHE_ERROR_MESSAGE if isinstance(error, CacheUnavailableError) else GENERIC_ERROR_MESSAGE
            embed = embeds.error_embed(message)

        try:
            await application_context.respond(embed=embed, ephemeral=True)
        except discord.InteractionResponded:
            await application_context.followup.send(embed=embed, ephemeral=True)


def setup(bot: discord.Bot) -> None:
    """Register the EventsListenerCog with the bot."""
    bot.add_cog(EventsListenerCog(bot))
