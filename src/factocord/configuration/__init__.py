"""
Configuration management for Factocord.

- **app_configuration.py**: YAML configuration loader for global settings.
  Provides documentation and wiki endpoints, refresh intervals, matching
  thresholds and the database path. Falls back to the public Factorio
  endpoints on missing or malformed config files.
"""
