"""
Closed node model for parsed wiki articles.

:mod:`factocord.wiki.wikitext_parser` builds these from the wikitext of a
page; :mod:`factocord.wiki.markup_transformer` renders them as Discord
markdown. Nodes are frozen dataclasses; container nodes hold their children
as tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True, slots=True)
class Text:
    value: str


@dataclass(frozen=True, slots=True)
class Bold:
    nodes: Tuple["WikiNode", ...]


@dataclass(frozen=True, slots=True)
class Italic:
    nodes: Tuple["WikiNode", ...]


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    nodes: Tuple["WikiNode", ...]


@dataclass(frozen=True, slots=True)
class ParagraphBreak:
    pass


@dataclass(frozen=True, slots=True)
class HorizontalDivider:
    pass


@dataclass(frozen=True, slots=True)
class Link:
    """Internal link to another wiki page. Empty ``nodes`` means "show the target"."""

    target: str
    nodes: Tuple["WikiNode", ...] = ()


@dataclass(frozen=True, slots=True)
class ExternalLink:
    url: str
    nodes: Tuple["WikiNode", ...] = ()


@dataclass(frozen=True, slots=True)
class ListItem:
    nodes: Tuple["WikiNode", ...]


@dataclass(frozen=True, slots=True)
class OrderedList:
    items: Tuple[ListItem, ...]


@dataclass(frozen=True, slots=True)
class UnorderedList:
    items: Tuple[ListItem, ...]


@dataclass(frozen=True, slots=True)
class DefinitionList:
    """``;term`` / ``:indented`` lines."""

    items: Tuple[ListItem, ...]


@dataclass(frozen=True, slots=True)
class Preformatted:
    nodes: Tuple["WikiNode", ...]


@dataclass(frozen=True, slots=True)
class Tag:
    """An HTML-like or extension tag such as ``<code>`` or ``<syntaxhighlight>``."""

    name: str
    nodes: Tuple["WikiNode", ...] = ()


@dataclass(frozen=True, slots=True)
class TemplateParameter:
    """``name`` is None for positional parameters."""

    name: str | None
    nodes: Tuple["WikiNode", ...]


@dataclass(frozen=True, slots=True)
class Template:
    name: str
    parameters: Tuple[TemplateParameter, ...] = ()


@dataclass(frozen=True, slots=True)
class Unsupported:
    """Parsed construct with no chat rendering (tables, images, comments, ...)."""

    kind: str


WikiNode = Union[
    Text,
    Bold,
    Italic,
    Heading,
    ParagraphBreak,
    HorizontalDivider,
    Link,
    ExternalLink,
    OrderedList,
    UnorderedList,
    DefinitionList,
    Preformatted,
    Tag,
    Template,
    Unsupported,
]
