"""
Exception hierarchy for Factocord.

Errors fall into three groups that the command layer treats differently:

- **User-facing** (:class:`NotFoundError`, FAQ validation errors): the
  user's input did not match anything, or was invalid. The message is shown
  verbatim and logged at INFO.
- **Infrastructure** (:class:`CacheUnavailableError`): the request cannot be
  served right now. The user sees a generic "try again" message.
- **Upstream** (:class:`UpstreamFetchError`, :class:`SchemaError`): a
  documentation or wiki fetch failed. Documentation fetches only happen in
  the refresh path and are logged there; wiki commands log them and show a
  generic failure message.
"""

from __future__ import annotations


class FactocordError(Exception):
    """Base class for every error raised by Factocord itself."""

    user_facing: bool = True

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------

class NotFoundError(FactocordError):
    """A looked-up entity, member, page or FAQ tag does not exist."""


class ClassNotFoundError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find class `{name}` in runtime API documentation")
        self.name = name


class EventNotFoundError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find event `{name}` in runtime API documentation")
        self.name = name


class DefineNotFoundError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find define `{name}` in runtime API documentation")
        self.name = name


class ConceptNotFoundError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find concept `{name}` in runtime API documentation")
        self.name = name


class PrototypeNotFoundError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find prototype `{name}` in prototype API documentation")
        self.name = name


class TypeNotFoundError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find type `{name}` in prototype API documentation")
        self.name = name


class PropertyNotFoundError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find property `{name}`")
        self.name = name


class WikiPageNotFoundError(NotFoundError):
    def __init__(self, query: str) -> None:
        super().__init__(f"No search results found for `{query}`")
        self.query = query


class FaqNotFoundError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find {name} or any similarly named tags in FAQ tags.")
        self.name = name


class FffNotFoundError(NotFoundError):
    def __init__(self, number: int) -> None:
        super().__init__(f"Page for FFF {number} not found.")
        self.number = number


class ModNotFoundError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Did not find any mods named {name}")
        self.name = name


class CommandNotFoundError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find command `{name}`")
        self.name = name


# ---------------------------------------------------------------------------
# FAQ validation
# ---------------------------------------------------------------------------

class FaqError(FactocordError):
    """Invalid FAQ edit requested by a user."""


class FaqAlreadyExistsError(FaqError):
    def __init__(self, title: str) -> None:
        super().__init__(f"An FAQ entry with title {title} already exists")
        self.title = title


class FaqTitleTooLongError(FaqError):
    def __init__(self) -> None:
        super().__init__("FAQ title too long (must be 256 characters or shorter)")


class FaqBodyTooLongError(FaqError):
    def __init__(self) -> None:
        super().__init__("FAQ body too long (must be 4096 characters or shorter)")


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------

class CacheUnavailableError(FactocordError):
    """The shared cache could not be read (never populated, or lock timed out)."""

    user_facing = False


class UpstreamFetchError(FactocordError):
    """A remote documentation source returned an error or unusable data."""

    user_facing = False


class SchemaError(UpstreamFetchError):
    """Fetched JSON does not match the documentation schema."""


class FffPageError(UpstreamFetchError):
    """The Friday Facts page loaded but lacks the metadata the embed needs."""

    user_facing = True


class ModSearchUnavailableError(FactocordError):
    """No mod portal credentials are configured."""

    def __init__(self) -> None:
        super().__init__("Mod search is not configured on this bot.")
