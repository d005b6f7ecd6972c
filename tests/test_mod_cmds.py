from types import SimpleNamespace
from unittest.mock import AsyncMock

import discord
import pytest

from factocord.bot.cogs import mod_cmds
from factocord.errors import ModSearchUnavailableError
from factocord.mods import mod_portal
from factocord.mods.mod_portal import FoundMod

FOUND = FoundMod(
    name="Krastorio2",
    title="Krastorio 2",
    owner="raiguard",
    summary="A *large* overhaul mod.",
    downloads_count=42,
    thumbnail="https://assets-mod.factorio.com/assets/abc.thumb.png",
)


def make_ctx():
    return SimpleNamespace(defer=AsyncMock(), respond=AsyncMock())


@pytest.fixture
def cog():
    return mod_cmds.ModCommandsCog(SimpleNamespace())


@pytest.mark.asyncio
async def test_find_mod_command_strips_comment(cog, monkeypatch):
    find_mod = AsyncMock(return_value=FOUND)
    monkeypatch.setattr(mod_portal, "find_mod", find_mod)
    ctx = make_ctx()

    await mod_cmds.ModCommandsCog.find_mod.callback(cog, ctx, "krastorio | for you")

    find_mod.assert_awaited_once_with("krastorio")
    ctx.defer.assert_awaited_once()
    embed = ctx.respond.await_args.kwargs["embed"]
    assert embed.title == "Krastorio 2"
    assert embed.url == "https://mods.factorio.com/mod/Krastorio2"
    assert embed.color == discord.Color.green()
    assert [(field.name, field.value) for field in embed.fields] == [("Author", "raiguard"), ("Downloads", "42")]


@pytest.mark.asyncio
async def test_find_mod_command_unconfigured(cog, monkeypatch):
    monkeypatch.setattr(mod_portal, "find_mod", AsyncMock(side_effect=ModSearchUnavailableError()))

    with pytest.raises(ModSearchUnavailableError):
        await mod_cmds.ModCommandsCog.find_mod.callback(cog, make_ctx(), "krastorio")
