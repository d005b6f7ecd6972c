"""
Friday Facts blog posts.

Posts live at ``<blog_url>/post/fff-<number>``. Everything the embed shows
comes from the ``og:`` meta tags in the page head.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import requests
from bs4 import BeautifulSoup

from factocord.configuration.app_configuration import app_config
from factocord.errors import FffNotFoundError, FffPageError, UpstreamFetchError
from factocord.util.logger import get_logger

logger = get_logger("fff_client")

TITLE_SUFFIX = "| Factorio"
TITLE_LIMIT = 256
DESCRIPTION_LIMIT = 1000


@dataclass(frozen=True, slots=True)
class FridayFacts:
    number: int
    url: str
    title: str
    image: str
    description: str


def fff_url(number: int) -> str:
    return f"{app_config.fff_blog_url}/post/fff-{number}"


def meta_content(soup: BeautifulSoup, prop: str) -> str:
    tag = soup.find("meta", attrs={"property": prop})
    content = tag.get("content") if tag is not None else None
    if not content:
        raise FffPageError(f"Failed to read FFF page: could not find {prop.removeprefix('og:')}")
    return str(content).strip()


def parse_fff_page(number: int, url: str, html: str) -> FridayFacts:
    """Read title, image and description out of a blog post's head.

    Raises:
        FffPageError: One of the ``og:`` tags is missing or empty.
    """
    soup = BeautifulSoup(html, "html.parser")
    title = meta_content(soup, "og:title").removesuffix(TITLE_SUFFIX).strip()
    image = meta_content(soup, "og:image")
    description = meta_content(soup, "og:description")
    return FridayFacts(
        number=number,
        url=url,
        title=title[:TITLE_LIMIT],
        image=image,
        description=description[:DESCRIPTION_LIMIT],
    )


def fetch_fff_page(number: int) -> FridayFacts:
    url = fff_url(number)
    try:
        response = requests.get(url, timeout=app_config.request_timeout)
    except requests.RequestException as exc:
        raise UpstreamFetchError(f"Error retrieving FFF {number}: {exc}") from exc

    if response.status_code == 404:
        raise FffNotFoundError(number)
    if response.status_code != 200:
        raise UpstreamFetchError(f"Received HTTP status code {response.status_code} for FFF {number}")
    return parse_fff_page(number, url, response.text)


async def get_fff(number: int) -> FridayFacts:
    friday_facts = await asyncio.to_thread(fetch_fff_page, number)
    logger.debug("[FFF] Fetched FFF %d: %r", number, friday_facts.title)
    return friday_facts
