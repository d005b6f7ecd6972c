"""
FAQ cog: per-server FAQ tags.

- ``/faq [name]`` shows an entry (or lists all tags when no name is given).
  Unknown names fall back to the closest existing tag.
- ``/faqedit new|remove|link`` manage entries. They require the Manage
  Server permission.

All commands are server-only since FAQ tags are stored per server.
"""

from typing import List

import discord
from discord import Option
from discord.ext import commands

from factocord.errors import CacheUnavailableError, FaqNotFoundError
from factocord.faq import faq_service
from factocord.ui import embeds
from factocord.util.logger import get_logger

logger = get_logger("faq_cmds")


async def autocomplete_faq(ctx: discord.AutocompleteContext) -> List[str]:
    guild_id = getattr(ctx.interaction, "guild_id", None)
    if guild_id is None:
        logger.error("[FAQ CMDS] Could not get server ID while autocompleting faq name")
        return []
    try:
        return faq_service.autocomplete_titles(guild_id, ctx.value or "")
    except CacheUnavailableError as exc:
        logger.warning("[FAQ CMDS] FAQ autocomplete unavailable: %s", exc)
        return []


class FaqCommandsCog(commands.Cog):
    """Shows and edits the FAQ tags of a server."""

    faqedit = discord.SlashCommandGroup("faqedit", "Add, remove or link FAQ entries")

    def __init__(self, discord_bot_instance):
        self.discord_bot_instance = discord_bot_instance
        logger.info("[FAQ CMDS] FAQ commands cog loaded")

    async def _ensure_guild_context(self, ctx: discord.ApplicationContext) -> bool:
        if not ctx.guild_id:
            await ctx.respond("This command can only be used in a server.", ephemeral=True)
            return False
        return True

    def _has_manage_permission(self, ctx: discord.ApplicationContext) -> bool:
        permissions = getattr(ctx.user, "guild_permissions", None)
        return bool(permissions and permissions.manage_guild)

    async def _check_permissions(self, ctx: discord.ApplicationContext) -> bool:
        if not await self._ensure_guild_context(ctx):
            return False
        if not self._has_manage_permission(ctx):
            await ctx.respond("You need Manage Server permission.", ephemeral=True)
            return False
        return True

    @commands.slash_command(name="faq", description="Show an FAQ entry of this server")
    async def faq(
        self,
        ctx: discord.ApplicationContext,
        name: Option(str, "Name of the faq entry", autocomplete=autocomplete_faq, default=None),  # type: ignore
    ):
        if not await self._ensure_guild_context(ctx):
            return

        if not name:
            names = await faq_service.list_faqs(ctx.guild_id)
            await ctx.respond(embed=embeds.faq_list_embed(names))
            return

        try:
            resolution = await faq_service.resolve_faq(ctx.guild_id, name)
        except FaqNotFoundError as exc:
            logger.info("[FAQ CMDS] %s", exc)
            await ctx.respond(embed=embeds.faq_not_found_embed(exc.message, exc.name))
            return
        await ctx.respond(embed=embeds.faq_embed(resolution))

    @faqedit.command(name="new", description="Add or replace an FAQ entry")
    async def faq_new(
        self,
        ctx: discord.ApplicationContext,
        name: Option(str, "Name of the faq"),  # type: ignore
        content: Option(str, "Contents of the FAQ", default=None),  # type: ignore
        image: Option(discord.Attachment, "Image to show in the FAQ", default=None),  # type: ignore
    ):
        if not await self._check_permissions(ctx):
            return
        image_url = image.url if image is not None else None
        entry, replaced = await faq_service.add_entry(ctx.guild_id, name, content, image_url, ctx.user.id)
        await ctx.respond(embed=embeds.faq_saved_embed(entry, replaced))

    @faqedit.command(name="remove", description="Remove an FAQ entry")
    async def faq_remove(
        self,
        ctx: discord.ApplicationContext,
        name: Option(str, "FAQ entry to remove", autocomplete=autocomplete_faq),  # type: ignore
    ):
        if not await self._check_permissions(ctx):
            return
        title, removed = await faq_service.remove_entry(ctx.guild_id, name)
        if removed:
            await ctx.respond(f"FAQ entry {title} removed from database")
        else:
            await ctx.respond(f"FAQ entry {title} does not exist in database")

    @faqedit.command(name="link", description="Add another name for an existing FAQ entry")
    async def faq_link(
        self,
        ctx: discord.ApplicationContext,
        name: Option(str, "Name for link"),  # type: ignore
        link_to: Option(str, "Existing FAQ entry to link to", autocomplete=autocomplete_faq),  # type: ignore
    ):
        if not await self._check_permissions(ctx):
            return
        entry = await faq_service.link_entry(ctx.guild_id, name, link_to, ctx.user.id)
        await ctx.respond(f"FAQ link {entry.title} added to database, linking to {entry.link}")


def setup(discord_bot_instance):
    """Add the FAQ commands cog to the supplied Discord bot instance."""
    discord_bot_instance.add_cog(FaqCommandsCog(discord_bot_instance))
