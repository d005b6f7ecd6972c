"""Message listener Cog for Factocord.

Answers inline wiki searches: a message containing ``[[search]]`` gets a
reply with the first matching wiki page. Searches inside inline code or
code blocks are ignored, as are messages from bots. Editing the message
within an hour updates the reply.
"""

import re

import discord
from discord.ext import commands, tasks

from factocord.bot.inline_command_log import InlineCommandLog, inline_command_log
from factocord.errors import FactocordError
from factocord.ui import embeds
from factocord.util.logger import get_logger
from factocord.wiki.wiki_client import WikiArticle, get_wiki_article, opensearch

logger = get_logger("message_listener")

WIKI_SEARCH_PATTERN = re.compile(r"\[\[(.*?)\]\]")
CODE_WRAPPED_SEARCH_PATTERN = re.compile(r"`[\S\s]*?\[\[(.*?)\]\][\S\s]*?`")

PRUNE_INTERVAL_MINUTES = 10


def find_wiki_search(content: str) -> str | None:
    """The text of the first ``[[...]]`` in ``content``, unless it sits in backticks."""
    if CODE_WRAPPED_SEARCH_PATTERN.search(content):
        return None
    match = WIKI_SEARCH_PATTERN.search(content)
    if match is None:
        return None
    return match.group(1).strip() or None


async def lookup_inline(query: str) -> WikiArticle | None:
    """First opensearch hit for ``query`` rendered as an article, or None."""
    titles = await opensearch(query)
    if not titles:
        logger.debug("[MESSAGE LISTENER] No wiki results for inline search %r", query)
        return None
    return await get_wiki_article(titles[0])


class MessageListenerCog(commands.Cog):
    """Inline ``[[wiki]]`` searches in ordinary messages."""

    def __init__(self, bot: discord.Bot, command_log: InlineCommandLog = inline_command_log) -> None:
        self.bot = bot
        self.command_log = command_log
        logger.info("[MESSAGE LISTENER] Message listener cog loaded")

    @commands.Cog.listener(name="on_message")
    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return
        query = find_wiki_search(message.content or "")
        if query is None:
            return

        try:
            article = await lookup_inline(query)
        except FactocordError as exc:
            logger.warning("[MESSAGE LISTENER] Inline wiki search %r failed: %s", query, exc)
            return
        if article is None:
            return

        response = await message.channel.send(embed=embeds.wiki_embed(article))
        self.command_log.record(message.id, message.channel.id, response.id)

    @commands.Cog.listener(name="on_raw_message_edit")
    async def on_raw_message_edit(self, payload: discord.RawMessageUpdateEvent) -> None:
        entry = self.command_log.get(payload.message_id)
        if entry is None:
            return
        content = payload.data.get("content")
        if content is None:
            return
        query = find_wiki_search(content)
        if query is None:
            return

        try:
            article = await lookup_inline(query)
        except FactocordError as exc:
            logger.warning("[MESSAGE LISTENER] Inline wiki search %r failed: %s", query, exc)
            return
        if article is None:
            return

        channel = self.bot.get_channel(entry.channel_id) or await self.bot.fetch_channel(entry.channel_id)
        await channel.get_partial_message(entry.response_id).edit(embed=embeds.wiki_embed(article))

    @tasks.loop(minutes=PRUNE_INTERVAL_MINUTES)
    async def _prune_task(self) -> None:
        dropped = self.command_log.prune()
        if dropped:
            logger.debug("[MESSAGE LISTENER] Pruned %d inline responses", dropped)

    @commands.Cog.listener()
    async def on_ready(self) -> None:
        if not self._prune_task.is_running():
            self._prune_task.start()

    def cog_unload(self) -> None:
        self._prune_task.cancel()


def setup(bot: discord.Bot) -> None:
    """Register the MessageListenerCog with the bot."""
    bot.add_cog(MessageListenerCog(bot))
