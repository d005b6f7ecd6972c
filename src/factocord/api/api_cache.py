"""Shared cache instances for the two API documentation corpora."""

from __future__ import annotations

from factocord.api.api_client import get_data_api, get_runtime_api
from factocord.api.corpus_cache import CorpusCache
from factocord.api.data_models import DataApi
from factocord.api.runtime_models import RuntimeApi

runtime_api_cache: CorpusCache[RuntimeApi] = CorpusCache("runtime API", get_runtime_api)
data_api_cache: CorpusCache[DataApi] = CorpusCache("prototype API", get_data_api)
