"""
API documentation cog: the ``/api`` command group.

Subcommands look up one entity of the runtime or prototype API by name
(case-insensitive) and answer with an embed. ``class``, ``prototype`` and
``type`` accept an optional member, either as a second option or with the
``Entity::member`` shorthand. ``page`` links a fixed set of documentation
pages.

Lookups raise the matching ``NotFoundError`` subclass; the global
application command error handler turns those into error embeds.
"""

from typing import Callable, Iterable, List, NamedTuple

import discord
from discord import Option
from discord.ext import commands

from factocord.api.api_cache import data_api_cache, runtime_api_cache
from factocord.api.lookup import (
    Named,
    autocomplete_members,
    autocomplete_names,
    autocomplete_properties,
    find_by_name,
)
from factocord.configuration.app_configuration import app_config
from factocord.errors import (
    CacheUnavailableError,
    ClassNotFoundError,
    ConceptNotFoundError,
    DefineNotFoundError,
    EventNotFoundError,
    PrototypeNotFoundError,
    TypeNotFoundError,
)
from factocord.ui import embeds
from factocord.util.format_utils import split_inputs
from factocord.util.logger import get_logger

logger = get_logger("api_cmds")

AUTOCOMPLETE_LIMIT = 25


class ApiPage(NamedTuple):
    title: str
    site: str  # "docs" or "wiki"
    path: str


API_PAGES = {
    "Home": ApiPage("Home", "docs", ""),
    "Lifecycle": ApiPage("Lifecycle", "docs", "auxiliary/data-lifecycle.html"),
    "Storage": ApiPage("Storage", "docs", "auxiliary/storage.html"),
    "Mod structure": ApiPage("Mod Structure", "docs", "auxiliary/mod-structure.html"),
    "Changelog Format": ApiPage("Changelog Format", "docs", "auxiliary/changelog-format.html"),
    "Migrations": ApiPage("Migrations", "docs", "auxiliary/migrations.html"),
    "Libraries and Functions": ApiPage("Libraries and Functions", "docs", "auxiliary/libraries.html"),
    "Classes": ApiPage("Classes", "docs", "classes.html"),
    "Events": ApiPage("Events", "docs", "events.html"),
    "Concepts": ApiPage("Concepts", "docs", "concepts.html"),
    "Defines": ApiPage("Defines", "docs", "defines.html"),
    "Prototypes": ApiPage("Prototypes", "docs", "prototypes.html"),
    "Types": ApiPage("Types", "docs", "types.html"),
    "Prototype Inheritance Tree": ApiPage("Prototype Inheritance Tree", "docs", "tree.html"),
    "Noise Expressions": ApiPage("Noise Expressions", "docs", "auxiliary/noise-expressions.html"),
    "Instrument Mode": ApiPage("Instrument Mode", "docs", "auxiliary/instrument.html"),
    "Item Weight": ApiPage("Item Weight", "docs", "auxiliary/item-weight.html"),
    "Modding Tutorial": ApiPage("Modding Tutorial", "wiki", "Tutorial:Modding_tutorial/Gangsir"),
    "Scripting Tutorial": ApiPage("Scripting Tutorial", "wiki", "Tutorial:Scripting"),
    "Localisation": ApiPage("Localisation", "wiki", "Tutorial:Localisation"),
    "Scenario System": ApiPage("Scenario System", "wiki", "Scenario_system"),
    "Command Line Parameters": ApiPage("Command Line Parameters", "wiki", "Command_line_parameters"),
    "Console Commands": ApiPage("Console Commands", "wiki", "Console"),
    "data.raw": ApiPage("data.raw", "wiki", "Data.raw"),
}


def page_link(choice: str) -> tuple[str, str]:
    """Title and absolute URL of one of :data:`API_PAGES`."""
    page = API_PAGES[choice]
    base = app_config.docs_base_url if page.site == "docs" else app_config.wiki_base_url
    return page.title, f"{base}/{page.path}"


# ---------------------------------------------------------------------------
# Autocomplete
# ---------------------------------------------------------------------------

def _complete(source: Callable[[], List[str]]) -> List[str]:
    """Run an autocomplete source, answering nothing while the caches are empty."""
    try:
        return source()[:AUTOCOMPLETE_LIMIT]
    except CacheUnavailableError as exc:
        logger.warning("[API CMDS] Autocomplete unavailable: %s", exc)
        return []


def _complete_names(collection: Callable[[], Iterable[Named]], ctx: discord.AutocompleteContext) -> List[str]:
    return _complete(lambda: autocomplete_names(collection(), ctx.value or ""))


async def autocomplete_class(ctx: discord.AutocompleteContext) -> List[str]:
    return _complete_names(lambda: runtime_api_cache.snapshot().classes, ctx)


async def autocomplete_event(ctx: discord.AutocompleteContext) -> List[str]:
    return _complete_names(lambda: runtime_api_cache.snapshot().events, ctx)


async def autocomplete_define(ctx: discord.AutocompleteContext) -> List[str]:
    return _complete_names(lambda: runtime_api_cache.snapshot().defines, ctx)


async def autocomplete_concept(ctx: discord.AutocompleteContext) -> List[str]:
    return _complete_names(lambda: runtime_api_cache.snapshot().concepts, ctx)


async def autocomplete_prototype(ctx: discord.AutocompleteContext) -> List[str]:
    return _complete_names(lambda: data_api_cache.snapshot().prototypes, ctx)


async def autocomplete_type(ctx: discord.AutocompleteContext) -> List[str]:
    return _complete_names(lambda: data_api_cache.snapshot().types, ctx)


def _selected(ctx: discord.AutocompleteContext, option: str) -> str:
    """Entity already chosen in ``option``, with any ``::member`` suffix removed."""
    entity_search, _ = split_inputs(str(ctx.options.get(option) or ""), None)
    return entity_search


async def autocomplete_class_member(ctx: discord.AutocompleteContext) -> List[str]:
    def source() -> List[str]:
        api_class = find_by_name(runtime_api_cache.snapshot().classes, _selected(ctx, "class"))
        return autocomplete_members(api_class, ctx.value or "") if api_class else []
    return _complete(source)


async def autocomplete_prototype_property(ctx: discord.AutocompleteContext) -> List[str]:
    def source() -> List[str]:
        prototype = find_by_name(data_api_cache.snapshot().prototypes, _selected(ctx, "prototype"))
        return autocomplete_properties(prototype, ctx.value or "") if prototype else []
    return _complete(source)


async def autocomplete_type_property(ctx: discord.AutocompleteContext) -> List[str]:
    def source() -> List[str]:
        data_type = find_by_name(data_api_cache.snapshot().types, _selected(ctx, "type"))
        return autocomplete_properties(data_type, ctx.value or "") if data_type else []
    return _complete(source)


# ---------------------------------------------------------------------------
# Cog
# ---------------------------------------------------------------------------

class ApiCommandsCog(commands.Cog):
    """Slash commands linking the Factorio modding API documentation."""

    api = discord.SlashCommandGroup("api", "Link a page of the Factorio modding API documentation")

    def __init__(self, discord_bot_instance):
        self.discord_bot_instance = discord_bot_instance
        logger.info("[API CMDS] API commands cog loaded")

    @api.command(name="class", description="Link a modding API class")
    async def api_class(
        self,
        ctx: discord.ApplicationContext,
        class_name: Option(str, "Name of the class", name="class", autocomplete=autocomplete_class),  # type: ignore
        property_name: Option(str, "Method or attribute of the class", name="property", autocomplete=autocomplete_class_member, default=None),  # type: ignore
    ):
        class_search, member_search = split_inputs(class_name, property_name)
        api_class = find_by_name(runtime_api_cache.snapshot().classes, class_search)
        if api_class is None:
            raise ClassNotFoundError(class_search)
        await ctx.respond(embed=embeds.class_embed(api_class, member_search))

    @api.command(name="event", description="Link a modding API event")
    async def api_event(
        self,
        ctx: discord.ApplicationContext,
        event_name: Option(str, "Name of the event", name="event", autocomplete=autocomplete_event),  # type: ignore
    ):
        event_search, _ = split_inputs(event_name, None)
        event = find_by_name(runtime_api_cache.snapshot().events, event_search)
        if event is None:
            raise EventNotFoundError(event_search)
        await ctx.respond(embed=embeds.event_embed(event))

    @api.command(name="define", description="Link a modding API define")
    async def api_define(
        self,
        ctx: discord.ApplicationContext,
        define_name: Option(str, "Name of the define", name="define", autocomplete=autocomplete_define),  # type: ignore
    ):
        define_search, _ = split_inputs(define_name, None)
        define = find_by_name(runtime_api_cache.snapshot().defines, define_search.removeprefix("defines."))
        if define is None:
            raise DefineNotFoundError(define_search)
        await ctx.respond(embed=embeds.define_embed(define))

    @api.command(name="concept", description="Link a modding API concept")
    async def api_concept(
        self,
        ctx: discord.ApplicationContext,
        concept_name: Option(str, "Name of the concept", name="concept", autocomplete=autocomplete_concept),  # type: ignore
    ):
        concept_search, _ = split_inputs(concept_name, None)
        concept = find_by_name(runtime_api_cache.snapshot().concepts, concept_search)
        if concept is None:
            raise ConceptNotFoundError(concept_search)
        await ctx.respond(embed=embeds.concept_embed(concept))

    @api.command(name="prototype", description="Link a modding API prototype")
    async def api_prototype(
        self,
        ctx: discord.ApplicationContext,
        prototype_name: Option(str, "Name of the prototype", name="prototype", autocomplete=autocomplete_prototype),  # type: ignore
        property_name: Option(str, "Property of the prototype", name="property", autocomplete=autocomplete_prototype_property, default=None),  # type: ignore
    ):
        prototype_search, property_search = split_inputs(prototype_name, property_name)
        data_api = data_api_cache.snapshot()
        prototype = find_by_name(data_api.prototypes, prototype_search)
        if prototype is None:
            raise PrototypeNotFoundError(prototype_search)
        await ctx.respond(embed=embeds.prototype_embed(prototype, property_search, data_api))

    @api.command(name="type", description="Link a modding API type")
    async def api_type(
        self,
        ctx: discord.ApplicationContext,
        type_name: Option(str, "Name of the type", name="type", autocomplete=autocomplete_type),  # type: ignore
        property_name: Option(str, "Property of the type", name="property", autocomplete=autocomplete_type_property, default=None),  # type: ignore
    ):
        type_search, property_search = split_inputs(type_name, property_name)
        data_api = data_api_cache.snapshot()
        data_type = find_by_name(data_api.types, type_search)
        if data_type is None:
            raise TypeNotFoundError(type_search)
        await ctx.respond(embed=embeds.type_embed(data_type, property_search, data_api))

    @api.command(name="page", description="Link a page in the auxiliary API docs")
    async def api_page(
        self,
        ctx: discord.ApplicationContext,
        page: Option(str, "API page to link", choices=list(API_PAGES)),  # type: ignore
    ):
        title, url = page_link(page)
        await ctx.respond(embed=embeds.page_embed(title, url))


def setup(discord_bot_instance):
    """Add the API commands cog to the supplied Discord bot instance."""
    discord_bot_instance.add_cog(ApiCommandsCog(discord_bot_instance))
