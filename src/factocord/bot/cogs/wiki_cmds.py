"""
Wiki cog: the ``/wiki`` command.

The page name usually comes from autocomplete (opensearch titles). Names
typed by hand that are not an exact page title fall back to the first
search hit.
"""

from typing import List

import discord
from discord import Option
from discord.ext import commands

from factocord.errors import FactocordError, WikiPageNotFoundError
from factocord.ui import embeds
from factocord.util.format_utils import strip_comment
from factocord.util.logger import get_logger
from factocord.wiki.wiki_client import MAIN_PAGE, get_wiki_article, opensearch, search_article

logger = get_logger("wiki_cmds")

AUTOCOMPLETE_LIMIT = 25


async def autocomplete_wiki(ctx: discord.AutocompleteContext) -> List[str]:
    partial = (ctx.value or "").strip()
    if not partial:
        return [MAIN_PAGE]
    try:
        titles = await opensearch(partial)
    except FactocordError as exc:
        logger.error("[WIKI CMDS] Error searching wiki: %s", exc)
        return []
    return titles[:AUTOCOMPLETE_LIMIT]


class WikiCommandsCog(commands.Cog):
    """Links and summarizes pages of the official Factorio wiki."""

    def __init__(self, discord_bot_instance):
        self.discord_bot_instance = discord_bot_instance
        logger.info("[WIKI CMDS] Wiki commands cog loaded")

    @commands.slash_command(name="wiki", description="Link a wiki page. Can also be used inline with [[wiki search]].")
    async def wiki(
        self,
        ctx: discord.ApplicationContext,
        name: Option(str, "Wiki page name", autocomplete=autocomplete_wiki, default=""),  # type: ignore
    ):
        await ctx.defer()
        page_name = strip_comment(name) or MAIN_PAGE
        try:
            article = await get_wiki_article(page_name)
        except WikiPageNotFoundError:
            logger.debug("[WIKI CMDS] No page named %r, searching instead", page_name)
            article = await search_article(page_name)
        await ctx.respond(embed=embeds.wiki_embed(article))


def setup(discord_bot_instance):
    """Add the wiki commands cog to the supplied Discord bot instance."""
    discord_bot_instance.add_cog(WikiCommandsCog(discord_bot_instance))
