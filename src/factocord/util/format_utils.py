"""Small text helpers for Discord output and command input."""

from typing import Tuple

# Everything after this character in a command argument is a comment
SEPARATOR = "|"

ELLIPSIS = "..."

# Discord embed limits
EMBED_TITLE_LIMIT = 256
EMBED_DESCRIPTION_LIMIT = 4096
EMBED_FIELD_NAME_LIMIT = 256
EMBED_FIELD_VALUE_LIMIT = 1024


def truncate_for_embed(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters, ending in an ellipsis when cut."""
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    if limit <= len(ELLIPSIS):
        return text[:limit]
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def escape_formatting(text: str) -> str:
    """Escape Discord markdown and defuse mentions.

    ``_``, ``*`` and ``~`` get a backslash in front; ``@`` is followed by a
    zero-width space so it cannot ping anyone.
    """
    out = []
    for char in text:
        if char in "_*~":
            out.append("\\")
        out.append(char)
        if char == "@":
            out.append("\u200b")
    return "".join(out)


def capitalize(text: str) -> str:
    """Uppercase the first character and lowercase the rest."""
    lowered = text.lower()
    return lowered[:1].upper() + lowered[1:]


def strip_comment(text: str) -> str:
    """Drop a trailing ``| comment`` from a command argument."""
    return text.split(SEPARATOR, 1)[0].strip()


def split_inputs(main_search: str, property_search: str | None) -> Tuple[str, str | None]:
    """Split ``Entity::member`` shorthand and strip comments.

    Returns:
        Tuple[str, str | None]: The entity search and the member search, the
        latter None when empty.
    """
    main_search = strip_comment(main_search) if SEPARATOR in main_search else main_search.strip()
    if "::" in main_search:
        main_search, property_search = main_search.split("::", 1)
        main_search = main_search.strip()

    if property_search is not None:
        property_search = strip_comment(property_search)
        if not property_search:
            property_search = None
    return main_search, property_search
