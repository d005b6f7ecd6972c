"""
Render parsed wiki articles as Discord markdown.

:func:`transform` walks the node tree recursively and produces chat text.
Headings are prefixed with :data:`HEADING_DELIMITER` so that
:func:`lead_section` can later cut the article down to its introduction.
"""

from __future__ import annotations

from typing import Iterable

from factocord.configuration.app_configuration import app_config
from factocord.wiki.markup_nodes import (
    Bold,
    DefinitionList,
    ExternalLink,
    Heading,
    HorizontalDivider,
    Italic,
    Link,
    ListItem,
    OrderedList,
    ParagraphBreak,
    Preformatted,
    Tag,
    Template,
    TemplateParameter,
    Text,
    UnorderedList,
    WikiNode,
)

HEADING_DELIMITER = "||HEADING||"

ORDERED_ITEM_PREFIX = "1. "
UNORDERED_ITEM_PREFIX = "- "

SPACE_AGE_NOTICE = r"_[Space Age](https://wiki.factorio.com/Space\_Age) expansion exclusive feature._"


def page_url(target: str, base_url: str | None = None) -> str:
    """URL of a wiki page; spaces in the title become underscores."""
    base = (base_url or app_config.wiki_base_url).rstrip("/")
    return f"{base}/{target.strip().replace(' ', '_')}"


class MarkupTransformer:
    """Recursive visitor turning wiki nodes into chat markdown.

    Args:
        wiki_base_url: Root used for internal links. Defaults to the configured wiki.
    """

    def __init__(self, wiki_base_url: str | None = None) -> None:
        self.wiki_base_url = wiki_base_url

    def render_all(self, nodes: Iterable[WikiNode]) -> str:
        return "".join(self.render(node) for node in nodes)

    def render(self, node: WikiNode) -> str:
        match node:
            case Text(value=value):
                return value
            case Bold(nodes=children):
                return f"**{self.render_all(children)}**"
            case Italic(nodes=children):
                return f"*{self.render_all(children)}*"
            case Heading(level=level, nodes=children):
                return f"\n{HEADING_DELIMITER}{'#' * level} {self.render_all(children).strip()}\n"
            case ParagraphBreak():
                return "\n\n"
            case HorizontalDivider():
                return "\n---\n"
            case Link(target=target, nodes=children):
                text = self.render_all(children) if children else target
                return f"[{text}]({page_url(target, self.wiki_base_url)})"
            case ExternalLink(url=url, nodes=children):
                if not children:
                    return url
                return f"[{self.render_all(children)}]({url})"
            case OrderedList(items=items):
                return self.render_items(items, ORDERED_ITEM_PREFIX)
            case UnorderedList(items=items):
                return self.render_items(items, UNORDERED_ITEM_PREFIX)
            case DefinitionList(items=items):
                return self.render_items(items, "")
            case Preformatted(nodes=children):
                return f"```{self.render_all(children)}```\n"
            case Tag(name=name, nodes=children):
                return self.render_tag(name, children)
            case Template(name=name, parameters=parameters):
                return self.render_template(name, parameters)
            case _:
                return ""

    def render_items(self, items: Iterable[ListItem], prefix: str) -> str:
        return "".join(f"\n{prefix}{self.render_all(item.nodes)}" for item in items)

    def render_tag(self, name: str, children: Iterable[WikiNode]) -> str:
        inner = self.render_all(children)
        match name.lower():
            case "code":
                return f"`{inner}`"
            case "syntaxhighlight" | "source":
                return f"```lua\n{inner.strip(chr(10))}\n```\n"
            case "nowiki":
                return inner
            case "pre":
                return f"```{inner}```\n"
            case _:
                return f"TAG {name}: {inner}"

    def render_template(self, name: str, parameters: tuple[TemplateParameter, ...]) -> str:
        normalized = name.strip()
        if normalized.lower() == "imagelink":
            positional = [p for p in parameters if p.name is None]
            if not positional:
                return ""
            # Image links never carry a custom caption, the first parameter is the page.
            value = self.render_all(positional[0].nodes).strip()
            if not value:
                return ""
            return f"[{value}]({page_url(value, self.wiki_base_url)})"
        if normalized == "About/Space age":
            return SPACE_AGE_NOTICE + "\n"
        if normalized.startswith("DISPLAYTITLE:"):
            return f"DISPLAYTITLE: {normalized.removeprefix('DISPLAYTITLE:')}"
        return ""


def transform(nodes: Iterable[WikiNode], wiki_base_url: str | None = None) -> str:
    """Render a whole article as Discord markdown."""
    return MarkupTransformer(wiki_base_url).render_all(nodes)


def lead_section(text: str, min_length: int | None = None) -> str:
    """Cut a transformed article down to its introduction.

    Everything before the first heading is the lead. When the lead is shorter
    than ``min_length`` (a stub that would make an empty-looking summary)
    the first section after it is appended as well.
    """
    if min_length is None:
        min_length = app_config.lead_section_min_length
    sections = text.split(HEADING_DELIMITER)
    if len(sections) == 1:
        return sections[0]
    if len(sections[0]) < min_length:
        return sections[0] + sections[1]
    return sections[0]
