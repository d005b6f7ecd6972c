"""
Persistent storage for per-server FAQ entries.

An entry either has its own contents/image, or is a *link* whose ``link``
column names another entry of the same server. Links always point at a
non-link entry; :mod:`factocord.faq.faq_service` enforces that when
creating them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import aiosqlite

from factocord.util.logger import get_logger

logger = get_logger("faq_repository")


@dataclass(frozen=True, slots=True)
class FaqTitle:
    """Cached (server, title) pair used for autocomplete and closest-match lookup."""
    server_id: int
    title: str


@dataclass(frozen=True, slots=True)
class FaqEntry:
    """A single row from the ``faq`` table."""
    server_id: int
    title: str
    contents: str | None = None
    image: str | None = None
    link: str | None = None
    edit_time: int = 0
    author: int = 0


def _row_to_entry(row) -> FaqEntry:
    return FaqEntry(
        server_id=row[0],
        title=row[1],
        contents=row[2],
        image=row[3],
        link=row[4],
        edit_time=row[5],
        author=row[6],
    )


_ENTRY_COLUMNS = "server_id, title, contents, image, link, edit_time, author"


class FaqRepository:
    """Low-level CRUD for the ``faq`` table."""

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @staticmethod
    async def insert(conn: aiosqlite.Connection, entry: FaqEntry) -> None:
        await conn.execute(
            f"INSERT INTO faq ({_ENTRY_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                entry.server_id,
                entry.title,
                entry.contents,
                entry.image,
                entry.link,
                entry.edit_time,
                entry.author,
            ),
        )

    @staticmethod
    async def delete(conn: aiosqlite.Connection, server_id: int, title: str) -> int:
        """Delete one entry. Returns the number of removed rows (0 or 1)."""
        cursor = await conn.execute(
            "DELETE FROM faq WHERE server_id = ? AND title = ?",
            (server_id, title),
        )
        return cursor.rowcount

    @staticmethod
    async def delete_server(conn: aiosqlite.Connection, server_id: int) -> int:
        """Delete every entry of a server, e.g. after the bot left it."""
        cursor = await conn.execute("DELETE FROM faq WHERE server_id = ?", (server_id,))
        return cursor.rowcount

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @staticmethod
    async def find_entry(conn: aiosqlite.Connection, server_id: int, title: str) -> FaqEntry | None:
        cursor = await conn.execute(
            f"SELECT {_ENTRY_COLUMNS} FROM faq WHERE server_id = ? AND title = ?",
            (server_id, title),
        )
        row = await cursor.fetchone()
        return _row_to_entry(row) if row is not None else None

    @staticmethod
    async def get_titles(conn: aiosqlite.Connection) -> List[FaqTitle]:
        """Every (server, title) pair across all servers."""
        cursor = await conn.execute("SELECT server_id, title FROM faq ORDER BY server_id, title")
        rows = await cursor.fetchall()
        return [FaqTitle(server_id=row[0], title=row[1]) for row in rows]

    @staticmethod
    async def get_server_index(conn: aiosqlite.Connection, server_id: int) -> Dict[str, List[str]]:
        """Map each non-link title of a server to the titles linking to it."""
        cursor = await conn.execute(
            "SELECT title, link FROM faq WHERE server_id = ? ORDER BY title",
            (server_id,),
        )
        rows = await cursor.fetchall()

        index: Dict[str, List[str]] = {row[0]: [] for row in rows if row[1] is None}
        for title, link in ((row[0], row[1]) for row in rows if row[1] is not None):
            if link in index:
                index[link].append(title)
            else:
                logger.warning("[FAQ REPOSITORY] Dangling FAQ link %r -> %r on server %s", title, link, server_id)
        return index


faq_repository = FaqRepository()
