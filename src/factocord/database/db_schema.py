"""Table creation for the FAQ store."""

import aiosqlite

from factocord.util.logger import get_logger

logger = get_logger("database_schema")


async def initialize_schema(db: aiosqlite.Connection) -> None:
    """Create every table and index that does not exist yet."""
    await db.execute("""
        CREATE TABLE IF NOT EXISTS faq (
            server_id INTEGER NOT NULL,
            title TEXT NOT NULL,
            contents TEXT,
            image TEXT,
            edit_time INTEGER NOT NULL,
            author INTEGER NOT NULL,
            link TEXT,
            PRIMARY KEY (server_id, title)
        )
    """)
    await db.execute("CREATE INDEX IF NOT EXISTS idx_faq_link ON faq(server_id, link)")
    logger.debug("[SCHEMA] Database schema initialized")
