"""
Rewriting of internal documentation links.

API descriptions embed links to other documented entities using the syntax
``[label](runtime:LuaEntity)`` or ``[label](prototype:ItemPrototype::stack_size)``.
Discord cannot follow those, so :func:`resolve_links` turns each one into a
real link to the documentation website, or into plain ``label`` text when
the target cannot be classified.
"""

from __future__ import annotations

import re
from enum import Enum

from factocord.api.data_models import DataApi
from factocord.configuration.app_configuration import app_config
from factocord.util.logger import get_logger

logger = get_logger("cross_reference")

LINK_PATTERN = re.compile(
    r"\[(?P<label>[^\[\]]+)\]\((?P<category>runtime|prototype):(?P<target>[^)]+?)(?P<member>::[^)]+?)?\)"
)


class ApiSection(Enum):
    """Documentation site section a link target lives in. The value is its URL path."""

    CLASS = "classes"
    PROTOTYPE = "prototypes"
    TYPE = "types"


def classify_data_stage_target(data_api: DataApi | None, name: str) -> ApiSection | None:
    """Decide whether ``name`` is a prototype or a type. Prototypes are checked first."""
    if data_api is None:
        return None
    if any(prototype.name == name for prototype in data_api.prototypes):
        return ApiSection.PROTOTYPE
    if any(data_type.name == name for data_type in data_api.types):
        return ApiSection.TYPE
    return None


def classify(category: str, target: str, data_api: DataApi | None) -> ApiSection | None:
    match category:
        case "runtime":
            return ApiSection.CLASS
        case "prototype":
            return classify_data_stage_target(data_api, target)
        case _:
            return None


def build_docs_url(section: ApiSection, target: str, member: str | None, base_url: str | None = None) -> str:
    base = (base_url or app_config.docs_base_url).rstrip("/")
    url = f"{base}/{section.value}/{target}.html"
    if member:
        url += f"#{member}"
    return url


def resolve_links(text: str, data_api: DataApi | None, base_url: str | None = None) -> str:
    """Rewrite every internal link in ``text`` in a single pass.

    Args:
        text: Description text as found in the API documents.
        data_api: Data-stage snapshot used to classify ``prototype:`` links.
            ``None`` makes every such link degrade to its label.
        base_url: Documentation root; defaults to the configured one.

    Returns:
        str: ``text`` with resolved links. Text outside links is untouched.
    """

    def substitute(match: re.Match) -> str:
        label = match.group("label")
        target = match.group("target")
        member = (match.group("member") or "").lstrip(":") or None

        section = classify(match.group("category"), target, data_api)
        if section is None:
            logger.warning("[CROSS REFERENCE] Failed to parse internal API link: %s", match.group(0))
            return label
        return f"[{label}]({build_docs_url(section, target, member, base_url)})"

    return LINK_PATTERN.sub(substitute, text)
