"""
General commands cog: ``/info`` and ``/help``.
"""

from typing import Dict, List

import discord
from discord import Option
from discord.ext import commands

from factocord.errors import CommandNotFoundError
from factocord.ui import embeds
from factocord.util.logger import get_logger

logger = get_logger("general_cmds")

AUTOCOMPLETE_LIMIT = 25


def slash_commands(discord_bot_instance) -> Dict[str, discord.SlashCommand]:
    """Every invocable slash command by qualified name, subcommands included."""
    found = {
        command.qualified_name: command
        for command in discord_bot_instance.walk_application_commands()
        if isinstance(command, discord.SlashCommand)
    }
    return dict(sorted(found.items()))


async def autocomplete_command(ctx: discord.AutocompleteContext) -> List[str]:
    partial = (ctx.value or "").strip().lower()
    names = [name for name in slash_commands(ctx.bot) if partial in name.lower()]
    return names[:AUTOCOMPLETE_LIMIT]


class GeneralCommandsCog(commands.Cog):
    """Information about the bot and its commands."""

    def __init__(self, discord_bot_instance):
        self.discord_bot_instance = discord_bot_instance
        logger.info("[GENERAL CMDS] General commands cog loaded")

    @commands.slash_command(name="info", description="Information about the bot, including latency.")
    async def info(self, ctx: discord.ApplicationContext):
        latency_milliseconds = self.discord_bot_instance.latency * 1000
        bot_user = self.discord_bot_instance.user
        bot_name = bot_user.name if bot_user else "Factocord"
        await ctx.respond(embed=embeds.info_embed(bot_name, latency_milliseconds))

    @commands.slash_command(name="help", description="List the bot's commands or show help for one of them.")
    async def help(
        self,
        ctx: discord.ApplicationContext,
        command: Option(str, "Command to show help for", autocomplete=autocomplete_command, default=""),  # type: ignore
    ):
        available = slash_commands(self.discord_bot_instance)
        name = command.strip().lstrip("/")
        if not name:
            listing = [(qualified_name, cmd.description) for qualified_name, cmd in available.items()]
            await ctx.respond(embed=embeds.help_embed(listing), ephemeral=True)
            return

        selected = available.get(name)
        if selected is None:
            raise CommandNotFoundError(name)
        options = [(option.name, option.description) for option in selected.options]
        await ctx.respond(embed=embeds.command_help_embed(name, selected.description, options), ephemeral=True)


def setup(discord_bot_instance):
    """Add the general commands cog to the supplied Discord bot instance."""
    discord_bot_instance.add_cog(GeneralCommandsCog(discord_bot_instance))
