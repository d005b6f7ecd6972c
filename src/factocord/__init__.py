"""
Factocord - Discord bot for the Factorio modding community

Factocord answers questions about Factorio modding straight from the sources:

Core Components:

- **API documentation**: Downloads the machine-readable runtime and prototype
  API documentation, keeps both in memory and refreshes them periodically
- **Wiki**: Fetches pages from the official Factorio wiki and renders their
  lead section as Discord markdown, also for inline ``[[search]]`` messages
- **FAQ**: Per-server FAQ tags stored in SQLite, with links between tags and
  closest-match suggestions for misspelled names

Usage:
    from factocord.main import main
    main()  # Loads the documentation and starts the bot
"""
