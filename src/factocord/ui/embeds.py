"""
Embed builders for every command response.

API embeds are gold, wiki embeds orange, errors red. Descriptions coming
from the API documents have their internal links resolved against the
current prototype API snapshot; when that snapshot is unavailable,
prototype links degrade to plain labels.
"""

from __future__ import annotations

from typing import Iterable, Tuple

import discord

from factocord.api.api_cache import data_api_cache
from factocord.api.cross_reference import ApiSection, build_docs_url, resolve_links
from factocord.api.data_models import DataApi, DataType, Property, Prototype
from factocord.api.lookup import find_member, find_property
from factocord.api.runtime_models import ApiClass, Attribute, Concept, Define, Event, Method
from factocord.api.signatures import attribute_signature, method_signature, property_signature
from factocord.api.type_renderer import render_type
from factocord.configuration.app_configuration import app_config
from factocord.errors import CacheUnavailableError, PropertyNotFoundError
from factocord.faq.faq_repository import FaqEntry
from factocord.faq.faq_service import FaqResolution
from factocord.fff.fff_client import FridayFacts
from factocord.mods.mod_portal import FoundMod
from factocord.util.format_utils import (
    EMBED_DESCRIPTION_LIMIT,
    EMBED_FIELD_NAME_LIMIT,
    EMBED_FIELD_VALUE_LIMIT,
    EMBED_TITLE_LIMIT,
    escape_formatting,
    truncate_for_embed,
)
from factocord.util.logger import get_logger
from factocord.wiki.wiki_client import WikiArticle

logger = get_logger("embeds")

API_COLOR = discord.Color.gold()
WIKI_COLOR = discord.Color.orange()
ERROR_COLOR = discord.Color.red()
SUCCESS_COLOR = discord.Color.dark_green()

WIKI_SUMMARY_LIMIT = 2048
MOD_COLOR = discord.Color.green()
INFO_COLOR = discord.Color.blurple()

FFF_BLOG_TITLE = "Factorio Friday Facts"
FFF_DEFAULT_THUMBNAIL = "https://factorio.com/static/img/factorio-wheel.png"


def current_data_api() -> DataApi | None:
    """The prototype API snapshot used to classify links, or None while unavailable."""
    try:
        return data_api_cache.snapshot()
    except CacheUnavailableError as exc:
        logger.warning("[EMBEDS] Resolving links without prototype API: %s", exc)
        return None


# Default for ``data_api`` arguments: read the cached snapshot at call time.
# An explicit None renders without prototype link classification.
CACHED_DATA_API = object()


def select_data_api(data_api: DataApi | None | object) -> DataApi | None:
    return current_data_api() if data_api is CACHED_DATA_API else data_api  # type: ignore[return-value]


def docs_url(path: str) -> str:
    return f"{app_config.docs_base_url}/{path}"


# ---------------------------------------------------------------------------
# API entities
# ---------------------------------------------------------------------------

def entity_embed(
    kind: str,
    index_page: str,
    title: str,
    url: str,
    description: str,
    data_api: DataApi | None,
) -> discord.Embed:
    """Common layout: title linking to the entity, author line naming its kind."""
    embed = discord.Embed(
        title=truncate_for_embed(title, EMBED_TITLE_LIMIT),
        url=url,
        description=truncate_for_embed(resolve_links(description, data_api), EMBED_DESCRIPTION_LIMIT),
        color=API_COLOR,
    )
    embed.set_author(name=kind, url=docs_url(index_page))
    return embed


def documented_field(signature: str, description: str, url: str, data_api: DataApi | None) -> Tuple[str, str]:
    """Field name and value for one member: signature in backticks, description and docs link."""
    full_docs_link = f"\n[Full documentation]({url})"
    value = truncate_for_embed(resolve_links(description, data_api), EMBED_FIELD_VALUE_LIMIT - len(full_docs_link))
    name = f"`{truncate_for_embed(signature, EMBED_FIELD_NAME_LIMIT - 2)}`"
    return name, value + full_docs_link


def add_missing_property_field(embed: discord.Embed, name: str) -> None:
    embed.add_field(name="Error", value=PropertyNotFoundError(name).message, inline=False)


def class_embed(api_class: ApiClass, member_name: str | None = None, data_api: DataApi | None | object = CACHED_DATA_API) -> discord.Embed:
    """Embed for a runtime class, plus one field for ``member_name`` when given."""
    data_api = select_data_api(data_api)
    embed = entity_embed(
        "Class",
        "classes.html",
        api_class.name,
        build_docs_url(ApiSection.CLASS, api_class.name, None),
        api_class.description,
        data_api,
    )
    if member_name is None:
        return embed

    member = find_member(api_class, member_name)
    if member is None:
        add_missing_property_field(embed, member_name)
        return embed

    url = build_docs_url(ApiSection.CLASS, api_class.name, member.name)
    match member:
        case Method():
            signature = method_signature(member)
        case Attribute():
            signature = attribute_signature(member)
    name, value = documented_field(signature, member.description, url, data_api)
    embed.add_field(name=name, value=value, inline=False)
    return embed


def event_embed(event: Event, data_api: DataApi | None | object = CACHED_DATA_API) -> discord.Embed:
    return entity_embed(
        "Event",
        "events.html",
        event.name,
        docs_url(f"events.html#{event.name}"),
        event.description,
        select_data_api(data_api),
    )


def define_embed(define: Define, data_api: DataApi | None | object = CACHED_DATA_API) -> discord.Embed:
    return entity_embed(
        "Define",
        "defines.html",
        define.name,
        docs_url(f"defines.html#defines.{define.name}"),
        define.description,
        select_data_api(data_api),
    )


def concept_embed(concept: Concept, data_api: DataApi | None | object = CACHED_DATA_API) -> discord.Embed:
    return entity_embed(
        "Concept",
        "concepts.html",
        concept.name,
        docs_url(f"concepts.html#{concept.name}"),
        concept.description,
        select_data_api(data_api),
    )


def add_property_field(
    embed: discord.Embed,
    section: ApiSection,
    owner: Prototype | DataType,
    property_name: str,
    data_api: DataApi | None,
) -> None:
    prop: Property | None = find_property(owner, property_name)
    if prop is None:
        add_missing_property_field(embed, property_name)
        return
    url = build_docs_url(section, owner.name, prop.name)
    name, value = documented_field(property_signature(prop), prop.description, url, data_api)
    embed.add_field(name=name, value=value, inline=False)


def prototype_embed(prototype: Prototype, property_name: str | None = None, data_api: DataApi | None | object = CACHED_DATA_API) -> discord.Embed:
    data_api = select_data_api(data_api)
    embed = entity_embed(
        "Prototype",
        "prototypes.html",
        prototype.name,
        build_docs_url(ApiSection.PROTOTYPE, prototype.name, None),
        prototype.description,
        data_api,
    )
    if property_name is not None:
        add_property_field(embed, ApiSection.PROTOTYPE, prototype, property_name, data_api)
    return embed


def type_embed(data_type: DataType, property_name: str | None = None, data_api: DataApi | None | object = CACHED_DATA_API) -> discord.Embed:
    """Types show their definition in the title: ``Name :: definition``."""
    data_api = select_data_api(data_api)
    embed = entity_embed(
        "Type",
        "types.html",
        f"{data_type.name} :: {render_type(data_type.type)}",
        build_docs_url(ApiSection.TYPE, data_type.name, None),
        data_type.description,
        data_api,
    )
    if property_name is not None:
        add_property_field(embed, ApiSection.TYPE, data_type, property_name, data_api)
    return embed


def page_embed(name: str, url: str) -> discord.Embed:
    return discord.Embed(title=name, description=url, color=API_COLOR)


# ---------------------------------------------------------------------------
# Wiki
# ---------------------------------------------------------------------------

def wiki_embed(article: WikiArticle) -> discord.Embed:
    return discord.Embed(
        title=truncate_for_embed(article.title, EMBED_TITLE_LIMIT),
        url=article.url,
        description=truncate_for_embed(article.summary, WIKI_SUMMARY_LIMIT),
        color=WIKI_COLOR,
    )


# ---------------------------------------------------------------------------
# Friday Facts and mods
# ---------------------------------------------------------------------------

def fff_embed(friday_facts: FridayFacts) -> discord.Embed:
    embed = discord.Embed(
        title=friday_facts.title,
        url=friday_facts.url,
        description=friday_facts.description,
        color=WIKI_COLOR,
    )
    embed.set_thumbnail(url=friday_facts.image)
    return embed


def fff_blog_embed() -> discord.Embed:
    """Shown when no FFF number is given: a link to the blog index."""
    embed = discord.Embed(title=FFF_BLOG_TITLE, url=app_config.fff_blog_url, color=WIKI_COLOR)
    embed.set_thumbnail(url=FFF_DEFAULT_THUMBNAIL)
    return embed


def mod_embed(found: FoundMod) -> discord.Embed:
    embed = discord.Embed(
        title=truncate_for_embed(escape_formatting(found.title), EMBED_TITLE_LIMIT),
        url=found.url,
        description=truncate_for_embed(escape_formatting(found.summary), EMBED_DESCRIPTION_LIMIT),
        color=MOD_COLOR,
    )
    owner = truncate_for_embed(escape_formatting(found.owner), EMBED_FIELD_VALUE_LIMIT) or "-"
    embed.add_field(name="Author", value=owner, inline=True)
    embed.add_field(name="Downloads", value=str(found.downloads_count), inline=True)
    embed.set_thumbnail(url=found.thumbnail)
    return embed


# ---------------------------------------------------------------------------
# FAQ
# ---------------------------------------------------------------------------

def faq_embed(resolution: FaqResolution) -> discord.Embed:
    entry = resolution.entry
    if resolution.close_match:
        title = (
            f'Could not find "{escape_formatting(resolution.requested)}" in FAQ tags. '
            f'Did you mean "{escape_formatting(entry.title)}"?'
        )
    else:
        title = entry.title

    embed = discord.Embed(title=truncate_for_embed(title, EMBED_TITLE_LIMIT), color=API_COLOR)
    if entry.contents:
        embed.description = entry.contents
    if entry.image:
        embed.set_image(url=entry.image)
    return embed


def faq_list_embed(names: Iterable[str]) -> discord.Embed:
    return discord.Embed(
        title="List of FAQ tags",
        description=truncate_for_embed(", ".join(names), EMBED_DESCRIPTION_LIMIT),
        color=API_COLOR,
    )


def faq_saved_embed(entry: FaqEntry, replaced: bool) -> discord.Embed:
    title = f'Successfully edited "{entry.title}"' if replaced else f'Successfully added "{entry.title}" to database'
    embed = discord.Embed(title=truncate_for_embed(title, EMBED_TITLE_LIMIT), color=SUCCESS_COLOR)
    if entry.contents:
        embed.description = entry.contents
    if entry.image:
        embed.set_image(url=entry.image)
    return embed


def faq_not_found_embed(message: str, name: str) -> discord.Embed:
    """Not-found message with a link to a wiki search for ``name``."""
    search_url = f"{app_config.wiki_base_url}/index.php?search={name.replace(' ', '%20')}"
    description = f"{message}\nWould you like to search [the wiki]({search_url})?"
    return error_embed(description, title="Error while executing command faq:")


# ---------------------------------------------------------------------------
# Bot information
# ---------------------------------------------------------------------------

def info_embed(bot_name: str, latency_ms: float) -> discord.Embed:
    embed = discord.Embed(
        title=bot_name,
        description="Looks up the Factorio modding API, the wiki, Friday Facts and mods.",
        color=INFO_COLOR,
    )
    if app_config.source_url:
        embed.add_field(name="Source", value=f"[GitHub]({app_config.source_url})", inline=True)
    if app_config.invite_url:
        embed.add_field(name="Invite link", value=f"[Invite]({app_config.invite_url})", inline=True)
    embed.add_field(name="Latency", value=f"{latency_ms:.0f} ms", inline=True)
    return embed


def help_embed(commands: Iterable[Tuple[str, str]]) -> discord.Embed:
    """One line per command: ``/name``, then its description."""
    lines = [f"`/{name}` {description}" for name, description in commands]
    return discord.Embed(
        title="Commands",
        description=truncate_for_embed("\n".join(lines), EMBED_DESCRIPTION_LIMIT),
        color=INFO_COLOR,
    )


def command_help_embed(name: str, description: str, options: Iterable[Tuple[str, str]]) -> discord.Embed:
    embed = discord.Embed(title=f"/{name}", description=description, color=INFO_COLOR)
    for option_name, option_description in options:
        embed.add_field(
            name=option_name,
            value=truncate_for_embed(option_description or "-", EMBED_FIELD_VALUE_LIMIT),
            inline=False,
        )
    return embed


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def error_embed(message: str, title: str = "Error") -> discord.Embed:
    return discord.Embed(
        title=title,
        description=truncate_for_embed(message, EMBED_DESCRIPTION_LIMIT),
        color=ERROR_COLOR,
    )
