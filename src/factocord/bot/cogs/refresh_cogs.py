"""Background refresh cogs.

Each cog owns one cache and refreshes it on its own interval:
- RuntimeApiRefreshCog   – runtime API documentation
- PrototypeApiRefreshCog – prototype API documentation
- FaqCacheRefreshCog     – FAQ titles of every server

A failed refresh is logged by the cache and keeps the previous snapshot;
the next tick simply tries again.
"""

from __future__ import annotations

from typing import Callable

import discord
from discord.ext import commands, tasks

from factocord.api.api_cache import data_api_cache, runtime_api_cache
from factocord.api.corpus_cache import CorpusCache
from factocord.configuration.app_configuration import app_config
from factocord.faq.faq_service import faq_titles_cache
from factocord.util.logger import get_logger

logger = get_logger("refresh_cogs")


class _CacheRefreshCog(commands.Cog):
    """
    Reusable base for cogs that periodically refresh one cache.

    Subclasses supply:
        _name          – tag used in log messages
        _get_interval  – callable returning the configured interval in seconds
        _get_cache     – callable returning the cache to refresh
    """

    _name: str
    _get_interval: Callable[[], float]
    _get_cache: Callable[[], CorpusCache]

    def __init__(self, bot: discord.Bot) -> None:
        self.bot = bot

    @tasks.loop(seconds=1)  # real interval set in on_ready
    async def _refresh_task(self) -> None:
        cache = self._get_cache()
        # The loop fires right away on start; skip that tick when startup already loaded the cache.
        if self._refresh_task.current_loop == 0 and cache.is_populated:
            return
        await cache.refresh()

    @_refresh_task.before_loop
    async def _before_refresh(self) -> None:
        await self.bot.wait_until_ready()

    @commands.Cog.listener()
    async def on_ready(self) -> None:
        interval = self._get_interval()
        self._refresh_task.change_interval(seconds=interval)
        if not self._refresh_task.is_running():
            self._refresh_task.start()
            logger.info("[%s] Started (interval=%.1fs)", self._name, interval)

    def cog_unload(self) -> None:
        self._refresh_task.cancel()
        logger.info("[%s] Stopped", self._name)


class RuntimeApiRefreshCog(_CacheRefreshCog):
    """Periodically re-downloads the runtime API documentation."""

    _name = "RUNTIME_API_REFRESH"
    _get_interval = staticmethod(lambda: app_config.api_refresh_interval)
    _get_cache = staticmethod(lambda: runtime_api_cache)


class PrototypeApiRefreshCog(_CacheRefreshCog):
    """Periodically re-downloads the prototype API documentation."""

    _name = "PROTOTYPE_API_REFRESH"
    _get_interval = staticmethod(lambda: app_config.api_refresh_interval)
    _get_cache = staticmethod(lambda: data_api_cache)


class FaqCacheRefreshCog(_CacheRefreshCog):
    """Periodically reloads the FAQ title list from the database."""

    _name = "FAQ_CACHE_REFRESH"
    _get_interval = staticmethod(lambda: app_config.faq_cache_refresh_interval)
    _get_cache = staticmethod(lambda: faq_titles_cache)


def setup(bot: discord.Bot) -> None:
    bot.add_cog(RuntimeApiRefreshCog(bot))
    bot.add_cog(PrototypeApiRefreshCog(bot))
    bot.add_cog(FaqCacheRefreshCog(bot))
