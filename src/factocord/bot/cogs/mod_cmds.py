"""
Mod portal cog: the ``/find_mod`` command.
"""

import discord
from discord import Option
from discord.ext import commands

from factocord.mods import mod_portal
from factocord.ui import embeds
from factocord.util.format_utils import strip_comment
from factocord.util.logger import get_logger

logger = get_logger("mod_cmds")


class ModCommandsCog(commands.Cog):
    """Finds mods on the Factorio mod portal."""

    def __init__(self, discord_bot_instance):
        self.discord_bot_instance = discord_bot_instance
        logger.info("[MOD CMDS] Mod commands cog loaded")

    @commands.slash_command(name="find_mod", description="Link the most relevant mod on the mod portal.")
    async def find_mod(
        self,
        ctx: discord.ApplicationContext,
        modname: Option(str, "Search term"),  # type: ignore
    ):
        await ctx.defer()
        found = await mod_portal.find_mod(strip_comment(modname))
        await ctx.respond(embed=embeds.mod_embed(found))


def setup(discord_bot_instance):
    """Add the mod commands cog to the supplied Discord bot instance."""
    discord_bot_instance.add_cog(ModCommandsCog(discord_bot_instance))
