"""
Entity model of the data-stage (prototype) API documentation.

Mirrors ``prototype-api.json``: a flat list of prototypes and a flat list of
types, both of which expose ordered properties.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from factocord.api.runtime_models import Image, Member, decode_image, decode_member_fields
from factocord.api.type_model import Type, decode_type, require
from factocord.errors import SchemaError


@dataclass(frozen=True, slots=True, kw_only=True)
class Property(Member):
    type: Type
    optional: bool
    alt_name: str | None = None
    override: bool = False
    default: Type | str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CustomProperties:
    description: str
    key_type: Type
    value_type: Type
    lists: Tuple[str, ...] = ()
    examples: Tuple[str, ...] = ()
    images: Tuple[Image, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Prototype(Member):
    properties: Tuple[Property, ...] = ()
    parent: str | None = None
    abstract: bool = False
    typename: str | None = None
    instance_limit: int | None = None
    deprecated: bool = False
    custom_properties: CustomProperties | None = None
    visibility: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class DataType(Member):
    type: Type
    properties: Tuple[Property, ...] | None = None
    parent: str | None = None
    abstract: bool = False
    inline: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class DataApi:
    """One complete decoded snapshot of ``prototype-api.json``."""

    application: str
    application_version: str
    api_version: int
    stage: str
    prototypes: Tuple[Prototype, ...] = ()
    types: Tuple[DataType, ...] = ()


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode_property(raw: Mapping[str, Any]) -> Property:
    default = raw.get("default")
    if isinstance(default, Mapping):
        default = decode_type(default)
    return Property(
        **decode_member_fields(raw, "property"),
        type=decode_type(require(raw, "type", "property")),
        optional=bool(raw.get("optional", False)),
        alt_name=raw.get("alt_name"),
        override=bool(raw.get("override", False)),
        default=default,
    )


def decode_custom_properties(raw: Mapping[str, Any]) -> CustomProperties:
    return CustomProperties(
        description=raw.get("description") or "",
        key_type=decode_type(require(raw, "key_type", "custom properties")),
        value_type=decode_type(require(raw, "value_type", "custom properties")),
        lists=tuple(raw.get("lists") or ()),
        examples=tuple(raw.get("examples") or ()),
        images=tuple(decode_image(i) for i in raw.get("images") or ()),
    )


def decode_prototype(raw: Mapping[str, Any]) -> Prototype:
    custom = raw.get("custom_properties")
    return Prototype(
        **decode_member_fields(raw, "prototype"),
        properties=tuple(decode_property(p) for p in raw.get("properties") or ()),
        parent=raw.get("parent"),
        abstract=bool(raw.get("abstract", False)),
        typename=raw.get("typename"),
        instance_limit=raw.get("instance_limit"),
        deprecated=bool(raw.get("deprecated", False)),
        custom_properties=decode_custom_properties(custom) if custom is not None else None,
        visibility=tuple(raw.get("visibility") or ()),
    )


def decode_data_type(raw: Mapping[str, Any]) -> DataType:
    properties = raw.get("properties")
    return DataType(
        **decode_member_fields(raw, "type"),
        type=decode_type(require(raw, "type", "type")),
        properties=tuple(decode_property(p) for p in properties) if properties is not None else None,
        parent=raw.get("parent"),
        abstract=bool(raw.get("abstract", False)),
        inline=bool(raw.get("inline", False)),
    )


def decode_data_api(raw: Any) -> DataApi:
    """Decode the whole prototype API document.

    Raises:
        SchemaError: If any part of the document does not match the schema.
    """
    if not isinstance(raw, Mapping):
        raise SchemaError("Prototype API document must be a JSON object")
    try:
        return DataApi(
            application=require(raw, "application", "prototype API"),
            application_version=require(raw, "application_version", "prototype API"),
            api_version=int(require(raw, "api_version", "prototype API")),
            stage=require(raw, "stage", "prototype API"),
            prototypes=tuple(decode_prototype(p) for p in raw.get("prototypes") or ()),
            types=tuple(decode_data_type(t) for t in raw.get("types") or ()),
        )
    except (TypeError, ValueError, AttributeError) as exc:
        raise SchemaError(f"Malformed prototype API document: {exc}") from exc
