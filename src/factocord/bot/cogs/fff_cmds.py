"""
Friday Facts cog: the ``/fff`` command.
"""

import discord
from discord import Option
from discord.ext import commands

from factocord.fff.fff_client import get_fff
from factocord.ui import embeds
from factocord.util.logger import get_logger

logger = get_logger("fff_cmds")


class FffCommandsCog(commands.Cog):
    """Links Factorio Friday Facts blog posts."""

    def __init__(self, discord_bot_instance):
        self.discord_bot_instance = discord_bot_instance
        logger.info("[FFF CMDS] Friday Facts commands cog loaded")

    @commands.slash_command(name="fff", description="Link an FFF with the given number. Links the blog without a number.")
    async def fff(
        self,
        ctx: discord.ApplicationContext,
        number: Option(int, "Number of the FFF", min_value=1, required=False, default=None),  # type: ignore
    ):
        if number is None:
            await ctx.respond(embed=embeds.fff_blog_embed())
            return

        await ctx.defer()
        friday_facts = await get_fff(number)
        await ctx.respond(embed=embeds.fff_embed(friday_facts))


def setup(discord_bot_instance):
    """Add the Friday Facts commands cog to the supplied Discord bot instance."""
    discord_bot_instance.add_cog(FffCommandsCog(discord_bot_instance))
