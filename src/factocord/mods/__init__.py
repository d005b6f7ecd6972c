"""
Factorio mod portal.

- **mod_portal.py**: Queries the mod portal search API for the most
  relevant mod matching a name.
"""
