"""
Recursive type model of the Factorio API documentation.

Both documentation formats describe the shape of a value either as a bare
type name (a JSON string) or as a JSON object tagged with ``complex_type``.
This module decodes those into a closed set of frozen dataclasses:

- :class:`SimpleType` for bare names,
- one class per ``complex_type`` variant (:class:`UnionType`,
  :class:`ArrayType`, :class:`TableType`, ...).

Decoded types are never mutated. Rendering lives in
:mod:`factocord.api.type_renderer`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Tuple, Union

from factocord.errors import SchemaError

if TYPE_CHECKING:
    from factocord.api.runtime_models import Attribute, Parameter, ParameterGroup


JsonScalar = Union[str, bool, int, float, None]


@dataclass(frozen=True, slots=True)
class SimpleType:
    """A bare type name such as ``uint`` or ``LuaEntity``."""

    name: str


@dataclass(frozen=True, slots=True)
class TypeAlias:
    """A type wrapped with its own description (``complex_type: type``)."""

    value: "Type"
    description: str = ""


@dataclass(frozen=True, slots=True)
class BuiltinType:
    """Marker for types implemented by the engine itself."""


@dataclass(frozen=True, slots=True)
class UnionType:
    options: Tuple["Type", ...]
    full_format: bool = False


@dataclass(frozen=True, slots=True)
class ArrayType:
    value: "Type"


@dataclass(frozen=True, slots=True)
class DictionaryType:
    key: "Type"
    value: "Type"


@dataclass(frozen=True, slots=True)
class CustomTableType:
    """``LuaCustomTable``, a dictionary-like object owned by the engine."""

    key: "Type"
    value: "Type"


@dataclass(frozen=True, slots=True)
class FunctionType:
    parameters: Tuple["Type", ...]


@dataclass(frozen=True, slots=True)
class LiteralType:
    """A single literal value. ``value`` keeps the raw JSON scalar."""

    value: Any
    description: str | None = None


@dataclass(frozen=True, slots=True)
class LazyValueType:
    """``LuaLazyLoadedValue``: a value computed on first access."""

    value: "Type"


@dataclass(frozen=True, slots=True)
class StructType:
    """Opaque struct. ``label`` is the spelling used by the owning corpus."""

    attributes: Tuple["Attribute", ...] = ()
    label: str = "LuaStruct"


@dataclass(frozen=True, slots=True)
class TableType:
    parameters: Tuple["Parameter", ...] = ()
    variant_parameter_groups: Tuple["ParameterGroup", ...] | None = None
    variant_parameter_description: str | None = None


@dataclass(frozen=True, slots=True)
class TupleType:
    """Fixed-length tuple. Runtime docs list ``values``, older docs use ``parameters``."""

    values: Tuple["Type", ...] = ()
    parameters: Tuple["Parameter", ...] = ()
    variant_parameter_groups: Tuple["ParameterGroup", ...] | None = None
    variant_parameter_description: str | None = None


ComplexType = Union[
    TypeAlias,
    BuiltinType,
    UnionType,
    ArrayType,
    DictionaryType,
    CustomTableType,
    FunctionType,
    LiteralType,
    LazyValueType,
    StructType,
    TableType,
    TupleType,
]

Type = Union[SimpleType, ComplexType]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def require(raw: Mapping[str, Any], key: str, context: str) -> Any:
    """Return ``raw[key]`` or raise :class:`SchemaError` naming the missing key."""
    try:
        return raw[key]
    except KeyError:
        raise SchemaError(f"Missing key '{key}' in {context}") from None
    except TypeError:
        raise SchemaError(f"Expected an object for {context}, got {type(raw).__name__}") from None


def decode_type(raw: Any) -> Type:
    """Decode a JSON type description into a :data:`Type`.

    Args:
        raw: A JSON string (simple type) or object carrying ``complex_type``.

    Returns:
        Type: The decoded, immutable type.

    Raises:
        SchemaError: If the value has an unexpected shape or an unknown tag.
    """
    if isinstance(raw, str):
        return SimpleType(raw)
    if not isinstance(raw, Mapping):
        raise SchemaError(f"Type must be a string or an object, got {type(raw).__name__}")

    # Imported here to avoid a cycle: parameters and attributes carry types.
    from factocord.api.runtime_models import decode_attribute, decode_parameter, decode_parameter_group

    tag = require(raw, "complex_type", "type")
    context = f"'{tag}' type"

    match tag:
        case "type":
            return TypeAlias(decode_type(require(raw, "value", context)), raw.get("description") or "")
        case "builtin":
            return BuiltinType()
        case "union":
            options = tuple(decode_type(option) for option in require(raw, "options", context))
            return UnionType(options, bool(raw.get("full_format", False)))
        case "array":
            return ArrayType(decode_type(require(raw, "value", context)))
        case "dictionary":
            return DictionaryType(decode_type(require(raw, "key", context)), decode_type(require(raw, "value", context)))
        case "LuaCustomTable":
            return CustomTableType(decode_type(require(raw, "key", context)), decode_type(require(raw, "value", context)))
        case "function":
            return FunctionType(tuple(decode_type(p) for p in require(raw, "parameters", context)))
        case "literal":
            return LiteralType(require(raw, "value", context), raw.get("description"))
        case "LuaLazyLoadedValue":
            return LazyValueType(decode_type(require(raw, "value", context)))
        case "LuaStruct":
            attributes = tuple(decode_attribute(a) for a in require(raw, "attributes", context))
            return StructType(attributes, "LuaStruct")
        case "struct":
            return StructType((), "struct")
        case "table":
            return TableType(
                tuple(decode_parameter(p) for p in require(raw, "parameters", context)),
                decode_optional_groups(raw.get("variant_parameter_groups"), decode_parameter_group),
                raw.get("variant_parameter_description"),
            )
        case "tuple":
            return TupleType(
                tuple(decode_type(v) for v in raw.get("values") or ()),
                tuple(decode_parameter(p) for p in raw.get("parameters") or ()),
                decode_optional_groups(raw.get("variant_parameter_groups"), decode_parameter_group),
                raw.get("variant_parameter_description"),
            )
        case _:
            raise SchemaError(f"Unknown complex_type '{tag}'")


def decode_optional_groups(raw: Any, decoder) -> tuple | None:
    if raw is None:
        return None
    return tuple(decoder(group) for group in raw)
