"""HTTP fetchers for the runtime and data-stage API documents."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, TypeVar

import requests

from factocord.api.data_models import DataApi, decode_data_api
from factocord.api.runtime_models import RuntimeApi, decode_runtime_api
from factocord.configuration.app_configuration import app_config
from factocord.errors import UpstreamFetchError
from factocord.util.logger import get_logger

logger = get_logger("api_client")

T = TypeVar("T")


def fetch_json(url: str, timeout: float, description: str) -> Any:
    """GET ``url`` and return its decoded JSON body. Blocks the calling thread.

    Raises:
        UpstreamFetchError: On network errors, non-200 status codes or
            bodies that are not valid JSON.
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise UpstreamFetchError(f"Request for {description} failed: {exc}") from exc

    if response.status_code != 200:
        raise UpstreamFetchError(
            f"Received HTTP status code {response.status_code} while accessing {description}"
        )
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamFetchError(f"Invalid JSON received from {description}: {exc}") from exc


def fetch_and_decode(url: str, timeout: float, description: str, decoder: Callable[[Any], T]) -> T:
    raw = fetch_json(url, timeout, description)
    return decoder(raw)


async def get_runtime_api() -> RuntimeApi:
    """Download and decode ``runtime-api.json`` without blocking the event loop."""
    url = app_config.runtime_api_url
    logger.debug("[API CLIENT] Fetching runtime API from %s", url)
    api = await asyncio.to_thread(
        fetch_and_decode, url, app_config.request_timeout, "Lua runtime API", decode_runtime_api
    )
    logger.debug("[API CLIENT] Runtime API %s decoded: %d classes", api.application_version, len(api.classes))
    return api


async def get_data_api() -> DataApi:
    """Download and decode ``prototype-api.json`` without blocking the event loop."""
    url = app_config.data_api_url
    logger.debug("[API CLIENT] Fetching prototype API from %s", url)
    api = await asyncio.to_thread(
        fetch_and_decode, url, app_config.request_timeout, "Lua prototype API", decode_data_api
    )
    logger.debug("[API CLIENT] Prototype API %s decoded: %d prototypes", api.application_version, len(api.prototypes))
    return api
