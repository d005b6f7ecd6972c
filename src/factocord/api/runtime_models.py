"""
Entity model of the runtime (scripting) API documentation.

Mirrors the structure of ``runtime-api.json``: classes with their methods,
attributes and operators, events, defines, concepts and global objects.
Everything is decoded once into frozen dataclasses by :func:`decode_runtime_api`
and then shared read-only between all commands through the corpus cache.

Two schema generations are accepted: methods may carry ``takes_table``
directly or inside a ``format`` object, and attributes may carry a single
``type`` with ``read``/``write`` flags or separate ``read_type``/``write_type``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from factocord.api.type_model import Type, decode_type, require
from factocord.errors import SchemaError


@dataclass(frozen=True, slots=True)
class Image:
    filename: str
    caption: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Member:
    """Fields shared by every documented entity."""

    name: str
    order: int
    description: str
    lists: Tuple[str, ...] = ()
    examples: Tuple[str, ...] = ()
    images: Tuple[Image, ...] = ()
    notes: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Parameter:
    name: str
    order: int
    description: str
    type: Type
    optional: bool


@dataclass(frozen=True, slots=True, kw_only=True)
class ParameterGroup:
    name: str
    order: int
    description: str
    parameters: Tuple[Parameter, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class ReturnValue:
    order: int
    description: str
    type: Type
    optional: bool


@dataclass(frozen=True, slots=True, kw_only=True)
class VariadicParameter:
    type: Type | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EventRaised(Member):
    timeframe: str
    optional: bool


@dataclass(frozen=True, slots=True, kw_only=True)
class Method(Member):
    parameters: Tuple[Parameter, ...] = ()
    return_values: Tuple[ReturnValue, ...] = ()
    takes_table: bool = False
    table_optional: bool | None = None
    variant_parameter_groups: Tuple[ParameterGroup, ...] | None = None
    variant_parameter_description: str | None = None
    variadic_parameter: VariadicParameter | None = None
    raises: Tuple[EventRaised, ...] = ()
    subclasses: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Attribute(Member):
    type: Type
    read: bool
    write: bool
    optional: bool = False
    read_type: Type | None = None
    write_type: Type | None = None
    visibility: Tuple[str, ...] = ()
    raises: Tuple[EventRaised, ...] = ()
    subclasses: Tuple[str, ...] = ()


Operator = Method | Attribute


@dataclass(frozen=True, slots=True, kw_only=True)
class ApiClass(Member):
    methods: Tuple[Method, ...] = ()
    attributes: Tuple[Attribute, ...] = ()
    operators: Tuple[Operator, ...] = ()
    abstract: bool = False
    parent: str | None = None
    visibility: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Event(Member):
    data: Tuple[Parameter, ...] = ()
    filter: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DefineValue(Member):
    """A single leaf value inside a define, e.g. ``defines.direction.north``."""


@dataclass(frozen=True, slots=True, kw_only=True)
class Define(Member):
    values: Tuple[DefineValue, ...] = ()
    subkeys: Tuple["Define", ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Concept(Member):
    type: Type


@dataclass(frozen=True, slots=True, kw_only=True)
class GlobalObject(Member):
    type: Type


@dataclass(frozen=True, slots=True, kw_only=True)
class RuntimeApi:
    """One complete decoded snapshot of ``runtime-api.json``."""

    application: str
    application_version: str
    api_version: int
    stage: str
    classes: Tuple[ApiClass, ...] = ()
    events: Tuple[Event, ...] = ()
    defines: Tuple[Define, ...] = ()
    concepts: Tuple[Concept, ...] = ()
    global_objects: Tuple[GlobalObject, ...] = ()
    global_functions: Tuple[Method, ...] = ()


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _strings(raw: Any) -> Tuple[str, ...]:
    return tuple(str(item) for item in raw or ())


def decode_image(raw: Mapping[str, Any]) -> Image:
    return Image(filename=require(raw, "filename", "image"), caption=raw.get("caption"))


def decode_member_fields(raw: Mapping[str, Any], context: str) -> dict:
    """Return the common :class:`Member` keyword arguments for ``raw``."""
    return {
        "name": require(raw, "name", context),
        "order": int(require(raw, "order", context)),
        "description": raw.get("description") or "",
        "lists": _strings(raw.get("lists")),
        "examples": _strings(raw.get("examples")),
        "images": tuple(decode_image(image) for image in raw.get("images") or ()),
        "notes": _strings(raw.get("notes")),
    }


def decode_parameter(raw: Mapping[str, Any]) -> Parameter:
    return Parameter(
        name=require(raw, "name", "parameter"),
        order=int(require(raw, "order", "parameter")),
        description=raw.get("description") or "",
        type=decode_type(require(raw, "type", "parameter")),
        optional=bool(raw.get("optional", False)),
    )


def decode_parameter_group(raw: Mapping[str, Any]) -> ParameterGroup:
    return ParameterGroup(
        name=require(raw, "name", "parameter group"),
        order=int(require(raw, "order", "parameter group")),
        description=raw.get("description") or "",
        parameters=tuple(decode_parameter(p) for p in require(raw, "parameters", "parameter group")),
    )


def decode_return_value(raw: Mapping[str, Any]) -> ReturnValue:
    return ReturnValue(
        order=int(require(raw, "order", "return value")),
        description=raw.get("description") or "",
        type=decode_type(require(raw, "type", "return value")),
        optional=bool(raw.get("optional", False)),
    )


def decode_event_raised(raw: Mapping[str, Any]) -> EventRaised:
    return EventRaised(
        **decode_member_fields(raw, "raised event"),
        timeframe=require(raw, "timeframe", "raised event"),
        optional=bool(raw.get("optional", False)),
    )


def decode_method(raw: Mapping[str, Any]) -> Method:
    method_format = raw.get("format") or {}
    takes_table = method_format.get("takes_table", raw.get("takes_table", False))
    table_optional = method_format.get("table_optional", raw.get("table_is_optional"))

    variadic = None
    if raw.get("variadic_parameter") is not None:
        variadic_raw = raw["variadic_parameter"]
        variadic = VariadicParameter(
            type=decode_type(variadic_raw["type"]) if variadic_raw.get("type") is not None else None,
            description=variadic_raw.get("description"),
        )
    elif raw.get("variadic_type") is not None:
        variadic = VariadicParameter(type=decode_type(raw["variadic_type"]), description=raw.get("variadic_description"))

    groups = raw.get("variant_parameter_groups")
    return Method(
        **decode_member_fields(raw, "method"),
        parameters=tuple(decode_parameter(p) for p in raw.get("parameters") or ()),
        return_values=tuple(decode_return_value(rv) for rv in raw.get("return_values") or ()),
        takes_table=bool(takes_table),
        table_optional=table_optional,
        variant_parameter_groups=tuple(decode_parameter_group(g) for g in groups) if groups is not None else None,
        variant_parameter_description=raw.get("variant_parameter_description"),
        variadic_parameter=variadic,
        raises=tuple(decode_event_raised(e) for e in raw.get("raises") or ()),
        subclasses=_strings(raw.get("subclasses")),
    )


def decode_attribute(raw: Mapping[str, Any]) -> Attribute:
    read_type = decode_type(raw["read_type"]) if raw.get("read_type") is not None else None
    write_type = decode_type(raw["write_type"]) if raw.get("write_type") is not None else None

    if "type" in raw:
        value_type = decode_type(raw["type"])
        read = bool(raw.get("read", read_type is not None))
        write = bool(raw.get("write", write_type is not None))
    elif read_type is not None or write_type is not None:
        value_type = read_type if read_type is not None else write_type
        read = read_type is not None
        write = write_type is not None
    else:
        raise SchemaError(f"Attribute '{raw.get('name')}' has no type")

    return Attribute(
        **decode_member_fields(raw, "attribute"),
        type=value_type,
        read=read,
        write=write,
        optional=bool(raw.get("optional", False)),
        read_type=read_type,
        write_type=write_type,
        visibility=_strings(raw.get("visibility")),
        raises=tuple(decode_event_raised(e) for e in raw.get("raises") or ()),
        subclasses=_strings(raw.get("subclasses")),
    )


def decode_operator(raw: Mapping[str, Any]) -> Operator:
    """Operators are either methods (``call``) or attributes (``index``, ``length``)."""
    if "parameters" in raw:
        return decode_method(raw)
    return decode_attribute(raw)


def decode_class(raw: Mapping[str, Any]) -> ApiClass:
    return ApiClass(
        **decode_member_fields(raw, "class"),
        methods=tuple(decode_method(m) for m in raw.get("methods") or ()),
        attributes=tuple(decode_attribute(a) for a in raw.get("attributes") or ()),
        operators=tuple(decode_operator(o) for o in raw.get("operators") or ()),
        abstract=bool(raw.get("abstract", False)),
        parent=raw.get("parent"),
        visibility=_strings(raw.get("visibility")),
    )


def decode_event(raw: Mapping[str, Any]) -> Event:
    return Event(
        **decode_member_fields(raw, "event"),
        data=tuple(decode_parameter(p) for p in raw.get("data") or ()),
        filter=raw.get("filter"),
    )


def decode_define(raw: Mapping[str, Any]) -> Define:
    return Define(
        **decode_member_fields(raw, "define"),
        values=tuple(DefineValue(**decode_member_fields(v, "define value")) for v in raw.get("values") or ()),
        subkeys=tuple(decode_define(d) for d in raw.get("subkeys") or ()),
    )


def decode_concept(raw: Mapping[str, Any]) -> Concept:
    return Concept(**decode_member_fields(raw, "concept"), type=decode_type(require(raw, "type", "concept")))


def decode_global_object(raw: Mapping[str, Any]) -> GlobalObject:
    return GlobalObject(**decode_member_fields(raw, "global object"), type=decode_type(require(raw, "type", "global object")))


def decode_runtime_api(raw: Any) -> RuntimeApi:
    """Decode the whole runtime API document.

    Raises:
        SchemaError: If any part of the document does not match the schema.
    """
    if not isinstance(raw, Mapping):
        raise SchemaError("Runtime API document must be a JSON object")
    try:
        return RuntimeApi(
            application=require(raw, "application", "runtime API"),
            application_version=require(raw, "application_version", "runtime API"),
            api_version=int(require(raw, "api_version", "runtime API")),
            stage=require(raw, "stage", "runtime API"),
            classes=tuple(decode_class(c) for c in raw.get("classes") or ()),
            events=tuple(decode_event(e) for e in raw.get("events") or ()),
            defines=tuple(decode_define(d) for d in raw.get("defines") or ()),
            concepts=tuple(decode_concept(c) for c in raw.get("concepts") or ()),
            global_objects=tuple(decode_global_object(g) for g in raw.get("global_objects") or ()),
            global_functions=tuple(decode_method(f) for f in raw.get("global_functions") or ()),
        )
    except (TypeError, ValueError, AttributeError) as exc:
        raise SchemaError(f"Malformed runtime API document: {exc}") from exc
