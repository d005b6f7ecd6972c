"""
Convert wikitext into :mod:`factocord.wiki.markup_nodes` trees.

Parsing is delegated to ``mwparserfromhell``. Its flat node stream is
adapted here: bold/italic/list-marker tags become their own node kinds,
consecutive list lines are grouped into (nested) list nodes, and anything
that has no chat rendering becomes :class:`Unsupported`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

import mwparserfromhell
from mwparserfromhell import nodes as mw

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
    Unsupported,
    WikiNode,
)

LIST_MARKERS = ("*", "#", ";", ":")
UNSUPPORTED_LINK_NAMESPACES = ("file:", "image:", "media:", "category:")
PARAGRAPH_SEPARATOR = "\n\n"

# Raw content of a list line: parser nodes plus leftover text fragments
RawContent = List[Union[mw.Node, str]]


@dataclass(slots=True)
class ListLine:
    markers: str
    content: RawContent = field(default_factory=list)


def parse_wikitext(text: str) -> List[WikiNode]:
    """Parse a page's wikitext into renderable nodes."""
    code = mwparserfromhell.parse(text)
    return convert_nodes(code.nodes)


def is_list_marker(node: object) -> bool:
    return isinstance(node, mw.Tag) and node.wiki_markup in LIST_MARKERS


def convert_nodes(nodes: Sequence[Union[mw.Node, str]]) -> List[WikiNode]:
    """Convert a run of parser nodes, grouping list lines as it goes."""
    out: List[WikiNode] = []
    index = 0
    while index < len(nodes):
        node = nodes[index]
        if is_list_marker(node):
            lines, index, leftover = collect_list_lines(nodes, index)
            out.extend(build_lists(lines, 0))
            if leftover:
                # The newline ending the last item was consumed with it
                out.extend(text_nodes("\n" + leftover))
            continue
        for converted in convert_node(node):
            if isinstance(converted, Heading):
                trim_line_break(out)
            out.append(converted)
        index += 1
    return out


def text_nodes(value: str) -> List[WikiNode]:
    """Split plain text on blank lines into text runs and paragraph breaks."""
    out: List[WikiNode] = []
    for position, chunk in enumerate(value.split(PARAGRAPH_SEPARATOR)):
        if position:
            out.append(ParagraphBreak())
        if chunk:
            out.append(Text(chunk))
    return out


def trim_line_break(out: List[WikiNode]) -> None:
    """Drop the newline that ends the line before a heading; headings render their own."""
    if not out:
        return
    last = out[-1]
    if isinstance(last, ParagraphBreak):
        out[-1] = Text("\n")
    elif isinstance(last, Text) and last.value.endswith("\n"):
        if last.value == "\n":
            out.pop()
        else:
            out[-1] = Text(last.value[:-1])


def collect_list_lines(nodes: Sequence[Union[mw.Node, str]], start: int) -> Tuple[List[ListLine], int, str | None]:
    """Gather consecutive list lines starting at ``nodes[start]``.

    Returns:
        Tuple: The lines, the index of the first node after the list and any
        text that followed the newline ending the last line.
    """
    lines: List[ListLine] = []
    index = start
    while index < len(nodes) and is_list_marker(nodes[index]):
        line = ListLine(markers="")
        while index < len(nodes) and is_list_marker(nodes[index]):
            line.markers += nodes[index].wiki_markup
            index += 1

        leftover = None
        while index < len(nodes):
            node = nodes[index]
            index += 1
            value = node if isinstance(node, str) else (node.value if isinstance(node, mw.Text) else None)
            if value is not None and "\n" in value:
                head, leftover = value.split("\n", 1)
                if head:
                    line.content.append(head)
                break
            line.content.append(node)

        lines.append(line)
        if leftover:
            return lines, index, leftover
    return lines, index, None


def build_lists(lines: Sequence[ListLine], depth: int) -> List[WikiNode]:
    """Group list lines into list nodes. Lines with deeper markers nest under the previous item."""
    lists: List[WikiNode] = []
    index = 0
    while index < len(lines):
        kind = lines[index].markers[depth]
        items: List[List[WikiNode]] = []
        while index < len(lines) and lines[index].markers[depth] == kind:
            line = lines[index]
            if len(line.markers) == depth + 1:
                items.append(convert_item_content(line.content))
                index += 1
                continue

            end = index
            while end < len(lines) and len(lines[end].markers) > depth + 1 and lines[end].markers[depth] == kind:
                end += 1
            if not items:
                items.append([])
            items[-1].extend(build_lists(lines[index:end], depth + 1))
            index = end

        lists.append(make_list(kind, tuple(ListItem(tuple(item)) for item in items)))
    return lists


def make_list(kind: str, items: Tuple[ListItem, ...]) -> WikiNode:
    match kind:
        case "#":
            return OrderedList(items)
        case "*":
            return UnorderedList(items)
        case _:
            return DefinitionList(items)


def convert_item_content(content: RawContent) -> List[WikiNode]:
    if content and isinstance(content[0], str):
        content = [content[0].lstrip(), *content[1:]]
    elif content and isinstance(content[0], mw.Text):
        content = [content[0].value.lstrip(), *content[1:]]
    return convert_nodes(content)


def convert_children(code) -> Tuple[WikiNode, ...]:
    if code is None:
        return ()
    return tuple(convert_nodes(code.nodes))


def convert_node(node: Union[mw.Node, str]) -> List[WikiNode]:
    """Convert a single parser node. May produce zero or more wiki nodes."""
    if isinstance(node, str):
        return text_nodes(node)

    match node:
        case mw.Text():
            return text_nodes(node.value)
        case mw.HTMLEntity():
            return [Text(node.normalize())]
        case mw.Heading():
            return [Heading(level=node.level, nodes=convert_children(node.title))]
        case mw.Wikilink():
            target = str(node.title).strip()
            if target.lower().startswith(UNSUPPORTED_LINK_NAMESPACES):
                return [Unsupported(kind="file link")]
            return [Link(target=target, nodes=convert_children(node.text))]
        case mw.ExternalLink():
            return [ExternalLink(url=str(node.url).strip(), nodes=convert_children(node.title))]
        case mw.Template():
            return [convert_template(node)]
        case mw.Tag():
            return convert_tag(node)
        case mw.Comment():
            return [Unsupported(kind="comment")]
        case _:
            return [Unsupported(kind=type(node).__name__.lower())]


def convert_template(node: mw.Template) -> Template:
    parameters = tuple(
        TemplateParameter(
            name=str(param.name).strip() if param.showkey else None,
            nodes=tuple(convert_nodes(param.value.nodes)),
        )
        for param in node.params
    )
    return Template(name=str(node.name).strip(), parameters=parameters)


def convert_tag(node: mw.Tag) -> List[WikiNode]:
    name = str(node.tag).strip().lower()
    children = convert_children(node.contents)

    match node.wiki_markup:
        case "'''":
            return [Bold(children)]
        case "''":
            return [Italic(children)]
        case "----":
            return [HorizontalDivider()]
        case "{|":
            return [Unsupported(kind="table")]

    match name:
        case "b" | "strong":
            return [Bold(children)]
        case "i" | "em":
            return [Italic(children)]
        case "hr":
            return [HorizontalDivider()]
        case "br":
            return [Text("\n")]
        case "pre":
            return [Preformatted(children)]
        case "table":
            return [Unsupported(kind=name)]
        case _:
            return [Tag(name=name, nodes=children)]
