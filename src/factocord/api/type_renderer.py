"""Render decoded API types as compact one-line signatures."""

from __future__ import annotations

import json

from factocord.api.type_model import (
    ArrayType,
    BuiltinType,
    CustomTableType,
    DictionaryType,
    FunctionType,
    LazyValueType,
    LiteralType,
    SimpleType,
    StructType,
    TableType,
    TupleType,
    Type,
    TypeAlias,
    UnionType,
)

DICTIONARY_ARROW = "🡪"


def render_literal(value: object) -> str:
    """Render a literal's JSON scalar in its JSON spelling.

    Strings are quoted, booleans are ``true``/``false`` and numbers keep
    their JSON form. Arrays, objects and null render empty.
    """
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return ""


def render_type(value: Type) -> str:
    """Return the one-line human readable form of ``value``.

    Tables, tuples and structs collapse to a fixed label; their members are
    shown separately where a command needs them.
    """
    match value:
        case SimpleType(name=name):
            return name
        case TypeAlias(value=inner):
            return render_type(inner)
        case BuiltinType():
            return "builtin"
        case UnionType(options=options):
            return " or ".join(render_type(option) for option in options)
        case ArrayType(value=inner):
            return f"array[{render_type(inner)}]"
        case DictionaryType(key=key, value=inner) | CustomTableType(key=key, value=inner):
            return f"dictionary[{render_type(key)} {DICTIONARY_ARROW} {render_type(inner)}]"
        case FunctionType(parameters=parameters):
            return f"function({', '.join(render_type(p) for p in parameters)})"
        case LiteralType(value=literal):
            return render_literal(literal)
        case LazyValueType(value=inner):
            return f"LuaLazyLoadedValue({render_type(inner)})"
        case StructType(label=label):
            return label
        case TableType():
            return "table"
        case TupleType():
            return "tuple"
        case _:
            return ""
