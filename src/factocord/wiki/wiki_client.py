"""
MediaWiki access for wiki.factorio.com.

Both endpoints are plain ``api.php`` queries made with ``requests`` in a
worker thread. :func:`get_wiki_article` ties fetching, parsing and
rendering together and is what the commands call.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List

import requests

from factocord.configuration.app_configuration import app_config
from factocord.errors import UpstreamFetchError, WikiPageNotFoundError
from factocord.util.logger import get_logger
from factocord.wiki.markup_transformer import lead_section, page_url, transform
from factocord.wiki.wikitext_parser import parse_wikitext

logger = get_logger("wiki_client")

MAIN_PAGE = "Main Page"

# Translated pages live at "<Title>/<language code>"
LANG_CODES = frozenset(
    """
    aa ab ae af ak am an ar ar-ae ar-bh ar-dz ar-eg ar-iq ar-jo ar-kw ar-lb ar-ly ar-ma ar-om ar-qa
    ar-sa ar-sy ar-tn ar-ye as av ay az ba be bg bh bi bm bn bo br bs ca ce ch co cr cs cu cv cy da
    de de-at de-ch de-de de-li de-lu div dv dz ee el en en-au en-bz en-ca en-cb en-gb en-ie en-jm
    en-nz en-ph en-tt en-us en-za en-zw eo es es-ar es-bo es-cl es-co es-cr es-do es-ec es-es es-gt
    es-hn es-mx es-ni es-pa es-pe es-pr es-py es-sv es-us es-uy es-ve et eu fa ff fi fj fo fr fr-be
    fr-ca fr-ch fr-fr fr-lu fr-mc fy ga gd gl gn gu gv ha he hi ho hr hr-ba hr-hr ht hu hy hz ia id
    ie ig ii ik in io is it it-ch it-it iu iw ja ji jv jw ka kg ki kj kk kl km kn ko kok kr ks ku kv
    kw ky kz la lb lg li ln lo ls lt lu lv mg mh mi mk ml mn mo mr ms ms-bn ms-my mt my na nb nd ne
    ng nl nl-be nl-nl nn no nr ns nv ny oc oj om or os pa pi pl ps pt pt-br pt-pt qu qu-bo qu-ec
    qu-pe rm rn ro ru rw sa sb sc sd se se-fi se-no se-se sg sh si sk sl sm sn so sq sr sr-ba sr-sp
    ss st su sv sv-fi sv-se sw sx syr ta te tg th ti tk tl tn to tr ts tt tw ty ug uk ur us uz ve vi
    vo wa wo xh yi yo za zh zh-cn zh-hk zh-mo zh-sg zh-tw zu
    """.split()
)


@dataclass(frozen=True, slots=True)
class WikiArticle:
    """A rendered wiki page: its canonical title, URL and lead section."""

    title: str
    url: str
    summary: str


def is_translation(title: str) -> bool:
    _, slash, suffix = title.rpartition("/")
    return bool(slash) and suffix.lower() in LANG_CODES


def query_wiki(params: Dict[str, str], description: str) -> Any:
    """GET ``api.php`` with ``params`` and return the decoded JSON body."""
    try:
        response = requests.get(app_config.wiki_api_url, params=params, timeout=app_config.request_timeout)
    except requests.RequestException as exc:
        raise UpstreamFetchError(f"Error retrieving {description}: {exc}") from exc

    if response.status_code != 200:
        raise UpstreamFetchError(f"Error retrieving {description}: HTTP {response.status_code}")
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamFetchError(f"Error retrieving {description}: invalid JSON") from exc


def fetch_page_wikitext(name: str) -> tuple[str, str]:
    """Fetch the wikitext of ``name``, following redirects.

    Returns:
        tuple[str, str]: The canonical page title and its wikitext.

    Raises:
        WikiPageNotFoundError: The wiki has no page by that name.
        UpstreamFetchError: The request failed or the answer was malformed.
    """
    payload = query_wiki(
        {
            "action": "parse",
            "format": "json",
            "page": name,
            "redirects": "1",
            "prop": "wikitext",
            "formatversion": "2",
        },
        f"wiki page {name!r}",
    )
    if not isinstance(payload, dict):
        raise UpstreamFetchError(f"Unexpected answer for wiki page {name!r}")

    if "error" in payload:
        code = payload["error"].get("code", "") if isinstance(payload["error"], dict) else ""
        if code in ("missingtitle", "invalidtitle"):
            raise WikiPageNotFoundError(name)
        raise UpstreamFetchError(f"Wiki refused page {name!r}: {code or payload['error']}")

    parsed = payload.get("parse")
    if not isinstance(parsed, dict) or "title" not in parsed or "wikitext" not in parsed:
        raise UpstreamFetchError(f"Unexpected answer for wiki page {name!r}")
    return str(parsed["title"]), str(parsed["wikitext"])


def search_titles(query: str) -> List[str]:
    """Opensearch page titles matching ``query``, translations excluded."""
    payload = query_wiki(
        {
            "action": "opensearch",
            "format": "json",
            "search": query,
            "namespace": "0|3000",
            "limit": "100",
            "formatversion": "2",
        },
        f"wiki search {query!r}",
    )
    # [search, titles, descriptions, urls]
    if not isinstance(payload, list) or len(payload) < 2 or not isinstance(payload[1], list):
        raise UpstreamFetchError(f"Unexpected answer for wiki search {query!r}")
    return [str(title) for title in payload[1] if not is_translation(str(title))]


def render_article(title: str, wikitext: str) -> WikiArticle:
    summary = lead_section(transform(parse_wikitext(wikitext)))
    return WikiArticle(title=title, url=page_url(title), summary=summary)


async def opensearch(query: str) -> List[str]:
    return await asyncio.to_thread(search_titles, query)


async def get_wiki_article(name: str) -> WikiArticle:
    """Fetch and render the page called ``name``. Blank names mean the main page."""
    name = name.strip() or MAIN_PAGE
    title, wikitext = await asyncio.to_thread(fetch_page_wikitext, name)
    logger.debug("[WIKI] Fetched %r (%d characters of wikitext)", title, len(wikitext))
    return render_article(title, wikitext)


async def search_article(query: str) -> WikiArticle:
    """Render the first opensearch hit for ``query``.

    Raises:
        WikiPageNotFoundError: The search returned nothing.
    """
    titles = await opensearch(query)
    if not titles:
        raise WikiPageNotFoundError(query)
    return await get_wiki_article(titles[0])
