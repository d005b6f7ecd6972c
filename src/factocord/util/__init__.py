"""
Utility functions and helpers for Factocord.

- **logger.py**: Centralized logging configuration with colored console output,
  rotating file handlers, and per-session log aggregation. Uses prompt_toolkit
  for console output.

- **fuzzy_match.py**: Closest-name matching used for FAQ tag suggestions.

- **format_utils.py**: Small text helpers for Discord markdown (truncation,
  comment stripping, escaping).
"""
