"""
Per-server FAQ tags.

- **faq_repository.py**: SQL access to the ``faq`` table.
- **faq_service.py**: Lookup with link following and closest-match fallback,
  validation of new entries and the cached list of tag titles.
"""
