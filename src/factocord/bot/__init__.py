"""
Discord cogs and event handlers for Factocord.

- **api_cmds.py**: ``/api`` slash commands for classes, events, defines,
  concepts, prototypes, types and documentation pages
- **wiki_cmds.py**: ``/wiki`` command
- **faq_cmds.py**: ``/faq`` and ``/faqedit`` commands
- **message_listener.py**: Inline ``[[search]]`` wiki lookups in messages
- **events_listener.py**: Bot lifecycle and application command errors
- **refresh_cogs.py**: Periodic refresh of the documentation and FAQ caches
"""
