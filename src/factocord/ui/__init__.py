"""
User interface components for Factocord.

- **embeds.py**: Builds the Discord embeds for API entries, wiki pages,
  FAQ entries and errors.
"""
