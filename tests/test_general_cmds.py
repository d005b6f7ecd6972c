from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from factocord.bot.cogs import fff_cmds, general_cmds, wiki_cmds
from factocord.errors import CommandNotFoundError
from factocord.ui import embeds


def make_ctx():
    return SimpleNamespace(defer=AsyncMock(), respond=AsyncMock())


@pytest.fixture
def bot():
    commands = [wiki_cmds.WikiCommandsCog.wiki, fff_cmds.FffCommandsCog.fff, general_cmds.GeneralCommandsCog.info]
    return SimpleNamespace(
        walk_application_commands=lambda: iter(commands),
        latency=0.0421,
        user=SimpleNamespace(name="Factocord"),
    )


@pytest.fixture
def cog(bot):
    return general_cmds.GeneralCommandsCog(bot)


def test_slash_commands_sorted_by_name(bot):
    assert list(general_cmds.slash_commands(bot)) == ["fff", "info", "wiki"]


@pytest.mark.asyncio
async def test_info_shows_latency(cog):
    ctx = make_ctx()

    await general_cmds.GeneralCommandsCog.info.callback(cog, ctx)

    embed = ctx.respond.await_args.kwargs["embed"]
    assert embed.title == "Factocord"
    assert embed.fields[-1].name == "Latency"
    assert embed.fields[-1].value == "42 ms"


def test_info_embed_links_source_and_invite(monkeypatch):
    monkeypatch.setattr(
        embeds, "app_config", SimpleNamespace(source_url="https://github.com/x/factocord", invite_url="https://discord.com/invite")
    )

    embed = embeds.info_embed("Factocord", 10.0)

    assert [field.name for field in embed.fields] == ["Source", "Invite link", "Latency"]
    assert embed.fields[0].value == "[GitHub](https://github.com/x/factocord)"


@pytest.mark.asyncio
async def test_help_lists_every_command(cog):
    ctx = make_ctx()

    await general_cmds.GeneralCommandsCog.help.callback(cog, ctx, "")

    description = ctx.respond.await_args.kwargs["embed"].description
    assert description.splitlines()[0].startswith("`/fff` Link an FFF")
    assert "`/wiki`" in description
    assert ctx.respond.await_args.kwargs["ephemeral"] is True


@pytest.mark.asyncio
async def test_help_for_one_command_shows_options(cog):
    ctx = make_ctx()

    await general_cmds.GeneralCommandsCog.help.callback(cog, ctx, "/wiki")

    embed = ctx.respond.await_args.kwargs["embed"]
    assert embed.title == "/wiki"
    assert [(field.name, field.value) for field in embed.fields] == [("name", "Wiki page name")]


@pytest.mark.asyncio
async def test_help_unknown_command(cog):
    with pytest.raises(CommandNotFoundError) as excinfo:
        await general_cmds.GeneralCommandsCog.help.callback(cog, make_ctx(), "teleport")

    assert excinfo.value.user_facing is True


@pytest.mark.asyncio
async def test_autocomplete_command_filters_names(bot):
    ctx = SimpleNamespace(value="FF", bot=bot)

    assert await general_cmds.autocomplete_command(ctx) == ["fff"]
