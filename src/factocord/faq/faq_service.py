"""
FAQ lookups and edits.

Titles are normalized with :func:`~factocord.util.format_utils.capitalize`
before every lookup and write. All FAQ titles of every server are kept in
``faq_titles_cache`` so autocomplete and closest-match suggestions never
touch the database; the cache is refreshed on an interval and right after
each edit.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Tuple

from factocord.api.corpus_cache import CorpusCache
from factocord.configuration.app_configuration import app_config
from factocord.database.db_connection import db_connection
from factocord.errors import (
    FaqAlreadyExistsError,
    FaqBodyTooLongError,
    FaqNotFoundError,
    FaqTitleTooLongError,
)
from factocord.faq.faq_repository import FaqEntry, FaqTitle, faq_repository
from factocord.util.format_utils import EMBED_DESCRIPTION_LIMIT, EMBED_TITLE_LIMIT, capitalize, strip_comment
from factocord.util.fuzzy_match import closest
from factocord.util.logger import get_logger

logger = get_logger("faq_service")

AUTOCOMPLETE_LIMIT = 25


async def load_faq_titles() -> Tuple[FaqTitle, ...]:
    async with db_connection.read() as conn:
        return tuple(await faq_repository.get_titles(conn))


faq_titles_cache: CorpusCache[Tuple[FaqTitle, ...]] = CorpusCache("FAQ titles", load_faq_titles)


@dataclass(frozen=True, slots=True)
class FaqResolution:
    """Outcome of :func:`resolve_faq`.

    ``entry`` is the entry to display (links already followed); ``requested``
    is the normalized name the user asked for and ``close_match`` tells
    whether ``entry`` was found by similarity instead of exact title.
    """
    entry: FaqEntry
    requested: str
    close_match: bool


def normalize_title(name: str) -> str:
    return capitalize(strip_comment(name))


def server_titles(server_id: int) -> List[str]:
    """Titles of one server from the cache, in cache order."""
    return [item.title for item in faq_titles_cache.snapshot() if item.server_id == server_id]


def find_closest_title(server_id: int, name: str, threshold: float | None = None) -> str | None:
    if threshold is None:
        threshold = app_config.fuzzy_threshold
    result = closest(name, server_titles(server_id), threshold)
    if result is None:
        return None
    title, score = result
    logger.debug("[FAQ] Closest match for %r is %r (%.2f)", name, title, score)
    return title


def autocomplete_titles(server_id: int, partial: str) -> List[str]:
    """Sorted titles containing ``partial`` (case-insensitive)."""
    needle = partial.strip().lower()
    matches = sorted(title for title in server_titles(server_id) if needle in title.lower())
    return matches[:AUTOCOMPLETE_LIMIT]


async def resolve_faq(server_id: int, name: str) -> FaqResolution:
    """Find the entry to show for ``name``.

    Tries the exact (normalized) title first, then the closest cached title
    scoring above the configured threshold. Link entries resolve to the
    entry they point at.

    Raises:
        FaqNotFoundError: Nothing matched, or a link points nowhere.
        CacheUnavailableError: The title cache could not be read.
    """
    requested = normalize_title(name)
    close_match = False

    async with db_connection.read() as conn:
        entry = await faq_repository.find_entry(conn, server_id, requested)
        if entry is None:
            match_title = find_closest_title(server_id, requested)
            if match_title is not None:
                entry = await faq_repository.find_entry(conn, server_id, match_title)
                close_match = True
        if entry is None:
            raise FaqNotFoundError(requested)

        if entry.link is not None:
            linked = await faq_repository.find_entry(conn, server_id, entry.link)
            if linked is None:
                logger.warning("[FAQ] Entry %r links to missing entry %r", entry.title, entry.link)
                raise FaqNotFoundError(entry.link)
            entry = linked

    return FaqResolution(entry=entry, requested=requested, close_match=close_match)


async def list_faqs(server_id: int) -> List[str]:
    """Sorted display names, each listing the links pointing at it."""
    async with db_connection.read() as conn:
        index = await faq_repository.get_server_index(conn, server_id)
    names = [f"{title} ({', '.join(links)})" if links else title for title, links in index.items()]
    return sorted(names)


async def add_entry(
    server_id: int,
    name: str,
    contents: str | None,
    image: str | None,
    author_id: int,
) -> Tuple[FaqEntry, bool]:
    """Create or overwrite an entry.

    Returns:
        Tuple[FaqEntry, bool]: The stored entry and whether it replaced an
        existing one.
    """
    if len(name) > EMBED_TITLE_LIMIT:
        raise FaqTitleTooLongError()
    if contents is not None and len(contents) > EMBED_DESCRIPTION_LIMIT:
        raise FaqBodyTooLongError()

    entry = FaqEntry(
        server_id=server_id,
        title=capitalize(name.strip()),
        contents=contents,
        image=image,
        edit_time=int(time.time()),
        author=author_id,
    )
    async with db_connection.transaction() as conn:
        replaced = await faq_repository.delete(conn, server_id, entry.title) > 0
        await faq_repository.insert(conn, entry)

    logger.info("[FAQ] %s FAQ entry %r on server %s", "Edited" if replaced else "Added", entry.title, server_id)
    await faq_titles_cache.refresh()
    return entry, replaced


async def link_entry(server_id: int, name: str, link_to: str, author_id: int) -> FaqEntry:
    """Create a link entry. Links to links are flattened to the final target.

    Raises:
        FaqAlreadyExistsError: ``name`` is already taken.
        FaqNotFoundError: ``link_to`` does not exist.
    """
    title = capitalize(name.strip())
    target = capitalize(link_to.strip())
    if len(title) > EMBED_TITLE_LIMIT:
        raise FaqTitleTooLongError()

    async with db_connection.transaction() as conn:
        if await faq_repository.find_entry(conn, server_id, title) is not None:
            raise FaqAlreadyExistsError(title)
        linked = await faq_repository.find_entry(conn, server_id, target)
        if linked is None:
            raise FaqNotFoundError(target)

        entry = FaqEntry(
            server_id=server_id,
            title=title,
            link=linked.link or target,
            edit_time=int(time.time()),
            author=author_id,
        )
        await faq_repository.insert(conn, entry)

    logger.info("[FAQ] Linked FAQ entry %r -> %r on server %s", entry.title, entry.link, server_id)
    await faq_titles_cache.refresh()
    return entry


async def remove_entry(server_id: int, name: str) -> Tuple[str, bool]:
    """Delete an entry. Returns the normalized title and whether it existed."""
    title = capitalize(name.strip())
    async with db_connection.transaction() as conn:
        removed = await faq_repository.delete(conn, server_id, title) > 0
    if removed:
        logger.info("[FAQ] Removed FAQ entry %r on server %s", title, server_id)
        await faq_titles_cache.refresh()
    return title, removed


async def remove_server(server_id: int) -> int:
    async with db_connection.transaction() as conn:
        count = await faq_repository.delete_server(conn, server_id)
    logger.info("[FAQ] Deleted %d FAQ entries of server %s", count, server_id)
    await faq_titles_cache.refresh()
    return count
