"""
Factorio modding API documentation.

- **api_client.py**: Downloads the runtime and prototype JSON documents.
- **runtime_models.py** / **data_models.py**: Decoded documentation corpora.
- **type_model.py** / **type_renderer.py**: Type expressions and their text form.
- **signatures.py**: Method, attribute and property signatures for embeds.
- **cross_reference.py**: Turns ``[Name](runtime:Name)`` style references into
  documentation links.
- **lookup.py**: Name lookups against the cached corpora.
- **corpus_cache.py** / **api_cache.py**: Shared snapshot slots for both corpora.
"""
