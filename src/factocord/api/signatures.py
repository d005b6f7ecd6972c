"""One-line signatures for methods, attributes and properties."""

from __future__ import annotations

from typing import Iterable

from factocord.api.data_models import Property
from factocord.api.runtime_models import Attribute, Method, Parameter
from factocord.api.type_renderer import DICTIONARY_ARROW, render_type


def optional_marker(optional: bool) -> str:
    return "?" if optional else ""


def parameters_signature(parameters: Iterable[Parameter], takes_table: bool) -> str:
    """Render a parameter list ordered by ``order``.

    Table-style calls render as ``{a=..., b?=...}``, positional calls as
    ``(a, b?)``.
    """
    ordered = sorted(parameters, key=lambda p: p.order)
    if takes_table:
        inner = ", ".join(f"{p.name}{optional_marker(p.optional)}=..." for p in ordered)
        return f"{{{inner}}}"
    inner = ", ".join(f"{p.name}{optional_marker(p.optional)}" for p in ordered)
    return f"({inner})"


def return_values_signature(method: Method) -> str:
    ordered = sorted(method.return_values, key=lambda rv: rv.order)
    return ", ".join(f"{render_type(rv.type)}{optional_marker(rv.optional)}" for rv in ordered)


def method_signature(method: Method) -> str:
    """``name(params) 🡪 returns``, or just ``name(params)`` without return values."""
    params = parameters_signature(method.parameters, method.takes_table)
    returns = return_values_signature(method)
    if not returns:
        return f"{method.name}{params}"
    return f"{method.name}{params} {DICTIONARY_ARROW} {returns}"


def read_write_marker(attribute: Attribute) -> str:
    match (attribute.read, attribute.write):
        case (True, True):
            return "[RW]"
        case (True, False):
            return "[R]"
        case (False, True):
            return "[W]"
        case _:
            return ""


def attribute_signature(attribute: Attribute) -> str:
    """``name [RW] :: type?``"""
    return (
        f"{attribute.name} {read_write_marker(attribute)} :: "
        f"{render_type(attribute.type)}{optional_marker(attribute.optional)}"
    )


def property_signature(prop: Property) -> str:
    """``name optional :: type`` for data-stage properties."""
    optional = "optional" if prop.optional else ""
    return f"{prop.name} {optional} :: {render_type(prop.type)}"
