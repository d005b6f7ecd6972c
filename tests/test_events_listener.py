from types import SimpleNamespace
from unittest.mock import AsyncMock

import discord
import pytest

from factocord.bot.cogs import events_listener
from factocord.errors import CacheUnavailableError, ClassNotFoundError


@pytest.fixture
def fake_bot():
    return SimpleNamespace(
        user=SimpleNamespace(id=999, display_name="Factocord"),
        change_presence=AsyncMock(),
    )


def make_ctx():
    return SimpleNamespace(
        command=SimpleNamespace(qualified_name="api class", name="class"),
        respond=AsyncMock(),
        followup=SimpleNamespace(send=AsyncMock()),
    )


def test_setup_registers_cog():
    captured = {}
    events_listener.setup(SimpleNamespace(add_cog=lambda cog: captured.setdefault("cog", cog)))
    assert isinstance(captured["cog"], events_listener.EventsListenerCog)


@pytest.mark.asyncio
async def test_on_ready_sets_presence(fake_bot):
    cog = events_listener.EventsListenerCog(fake_bot)

    await cog.on_ready()

    fake_bot.change_presence.assert_awaited_once()
    assert fake_bot.change_presence.await_args.kwargs["activity"].name == "the modding API docs"


@pytest.mark.asyncio
async def test_on_ready_without_user(fake_bot):
    fake_bot.user = None
    cog = events_listener.EventsListenerCog(fake_bot)

    await cog.on_ready()

    fake_bot.change_presence.assert_not_awaited()


@pytest.mark.asyncio
async def test_on_guild_remove_deletes_faq_entries(fake_bot, monkeypatch):
    remove_server = AsyncMock(return_value=3)
    monkeypatch.setattr(events_listener.faq_service, "remove_server", remove_server)
    cog = events_listener.EventsListenerCog(fake_bot)

    await cog.on_guild_remove(SimpleNamespace(id=123, name="Factory"))

    remove_server.assert_awaited_once_with(123)


@pytest.mark.asyncio
async def test_user_facing_error_is_shown_verbatim(fake_bot):
    cog = events_listener.EventsListenerCog(fake_bot)
    ctx = make_ctx()
    error = discord.ApplicationCommandInvokeError(ClassNotFoundError("LuaNothing"))

    await cog.on_application_command_error(ctx, error)

    embed = ctx.respond.await_args.kwargs["embed"]
    assert embed.title == "Error while executing command api class:"
    assert embed.description == "Could not find class `LuaNothing` in runtime API documentation"
    assert embed.color == discord.Color.red()


@pytest.mark.asyncio
async def test_cache_errors_get_generic_message(fake_bot):
    cog = events_listener.EventsListenerCog(fake_bot)
    ctx = make_ctx()

    await cog.on_application_command_error(ctx, CacheUnavailableError("lock timed out"))

    embed = ctx.respond.await_args.kwargs["embed"]
    assert embed.description == events_listener.CACHE_ERROR_MESSAGE
    assert "lock timed out" not in embed.description


@pytest.mark.asyncio
async def test_unexpected_errors_get_generic_message(fake_bot):
    cog = events_listener.EventsListenerCog(fake_bot)
    ctx = make_ctx()

    await cog.on_application_command_error(ctx, RuntimeError("boom"))

    assert ctx.respond.await_args.kwargs["embed"].description == events_listener.GENERIC_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_error_after_response_uses_followup(fake_bot):
    cog = events_listener.EventsListenerCog(fake_bot)
    ctx = make_ctx()
    ctx.respond.side_effect = discord.InteractionResponded(SimpleNamespace())

    await cog.on_application_command_error(ctx, ClassNotFoundError("LuaNothing"))

    ctx.followup.send.assert_awaited_once()
    assert ctx.followup.send.await_args.kwargs["ephemeral"] is True
