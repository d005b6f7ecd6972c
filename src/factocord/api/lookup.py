"""
Name lookups over decoded API collections.

All matching is case-insensitive. Exact lookups return ``None`` when nothing
matches; turning that into a user-facing "not found" message is the
caller's job.
"""

from __future__ import annotations

from typing import Iterable, List, Protocol, TypeVar

from factocord.api.data_models import DataType, Property, Prototype
from factocord.api.runtime_models import ApiClass, Attribute, Method


class Named(Protocol):
    name: str


N = TypeVar("N", bound=Named)


def find_by_name(collection: Iterable[N], name: str) -> N | None:
    """Return the first entity whose name equals ``name`` ignoring case."""
    wanted = name.strip().casefold()
    return next((entity for entity in collection if entity.name.casefold() == wanted), None)


def find_member(api_class: ApiClass, name: str) -> Method | Attribute | None:
    """Find a method or attribute of ``api_class``. Methods win on a name clash."""
    method = find_by_name(api_class.methods, name)
    if method is not None:
        return method
    return find_by_name(api_class.attributes, name)


def find_property(entity: Prototype | DataType, name: str) -> Property | None:
    """Find a property of a prototype or type. Types without properties never match."""
    if entity.properties is None:
        return None
    return find_by_name(entity.properties, name)


def autocomplete_names(collection: Iterable[Named], partial: str) -> List[str]:
    """Names starting with ``partial`` (case-insensitive), in collection order."""
    prefix = partial.casefold()
    return [entity.name for entity in collection if entity.name.casefold().startswith(prefix)]


def autocomplete_members(api_class: ApiClass, partial: str) -> List[str]:
    """Method and attribute names containing ``partial`` (case-insensitive)."""
    needle = partial.casefold()
    names = [m.name for m in api_class.methods] + [a.name for a in api_class.attributes]
    return [name for name in names if needle in name.casefold()]


def autocomplete_properties(entity: Prototype | DataType, partial: str) -> List[str]:
    if entity.properties is None:
        return []
    needle = partial.casefold()
    return [p.name for p in entity.properties if needle in p.name.casefold()]
