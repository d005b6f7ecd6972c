"""
Factorio wiki access.

- **wiki_client.py**: MediaWiki API requests (page wikitext, opensearch).
- **wikitext_parser.py**: Converts mwparserfromhell parse trees into the
  markup nodes of **markup_nodes.py**.
- **markup_transformer.py**: Renders markup nodes as Discord markdown and
  extracts the lead section of a page.
"""
