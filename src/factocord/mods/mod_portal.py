"""
Mod portal search.

The search endpoint wants a portal account, read from ``MOD_PORTAL_USERNAME``
and ``MOD_PORTAL_TOKEN``. Without them :func:`find_mod` refuses up front
instead of sending an anonymous request the portal would reject.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from typing import Any, Dict
from urllib.parse import quote

import requests

from factocord.configuration.app_configuration import app_config
from factocord.errors import ModNotFoundError, ModSearchUnavailableError, UpstreamFetchError
from factocord.util.logger import get_logger

logger = get_logger("mod_portal")

QUERY_LIMIT = 50
GAME_VERSION = "1.1"
DEFAULT_THUMBNAIL = "/assets/.thumb.png"


@dataclass(frozen=True, slots=True)
class FoundMod:
    name: str
    title: str
    owner: str
    summary: str
    downloads_count: int
    thumbnail: str

    @property
    def url(self) -> str:
        return mod_url(self.name)


def mod_url(name: str) -> str:
    return f"{app_config.mod_portal_url}/mod/{quote(name)}"


def portal_credentials() -> tuple[str, str] | None:
    username = os.getenv("MOD_PORTAL_USERNAME")
    token = os.getenv("MOD_PORTAL_TOKEN")
    if not username or not token:
        return None
    return username, token


def build_search_payload(query: str, username: str, token: str) -> Dict[str, str]:
    return {
        "username": username,
        "token": token,
        "query": query[:QUERY_LIMIT],
        "version": GAME_VERSION,
        "sort_attribute": "relevancy",
        "only_bookmarks": "false",
        "show_deprecated": "false",
        "page": "1",
        "page_size": "1",
        "highlight_pre_tag": "",
        "highlight_post_tag": "",
    }


def parse_search_result(entry: Dict[str, Any]) -> FoundMod:
    thumbnail = entry.get("thumbnail") or DEFAULT_THUMBNAIL
    return FoundMod(
        name=str(entry["name"]),
        title=str(entry.get("title") or entry["name"]),
        owner=str(entry.get("owner", "")),
        summary=str(entry.get("summary", "")),
        downloads_count=int(entry.get("downloads_count", 0)),
        thumbnail=f"{app_config.mod_assets_url}{thumbnail}",
    )


def search_mod(query: str, username: str, token: str) -> FoundMod:
    """POST a one-result relevancy search and return the top hit.

    Raises:
        ModNotFoundError: The portal found nothing.
        UpstreamFetchError: The request failed or the answer was malformed.
    """
    payload = build_search_payload(query, username, token)
    try:
        response = requests.post(app_config.mod_search_api_url, json=payload, timeout=app_config.request_timeout)
    except requests.RequestException as exc:
        raise UpstreamFetchError(f"Error accessing mod search API: {exc}") from exc

    if response.status_code != 200:
        raise UpstreamFetchError(f"Received HTTP status code {response.status_code} while accessing mod search API")
    try:
        body = response.json()
    except ValueError as exc:
        raise UpstreamFetchError("Mod search API returned invalid JSON") from exc

    results = body.get("results") if isinstance(body, dict) else None
    if not isinstance(results, list):
        raise UpstreamFetchError("Unexpected answer from mod search API")
    if not results:
        raise ModNotFoundError(query)
    try:
        return parse_search_result(results[0])
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamFetchError("Unexpected answer from mod search API") from exc


async def find_mod(query: str) -> FoundMod:
    credentials = portal_credentials()
    if credentials is None:
        raise ModSearchUnavailableError()
    found = await asyncio.to_thread(search_mod, query, *credentials)
    logger.debug("[MODS] %r matched mod %r", query, found.name)
    return found
