"""
Database package for Factocord.

- **db_connection.py**: ConnectionManager owning the single aiosqlite
  connection (``db_connection``), with serialized write transactions.
- **db_schema.py**: Creates the tables on a fresh database.
"""
