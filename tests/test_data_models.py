import pytest

from factocord.api.data_models import decode_data_api, decode_property
from factocord.api.type_model import SimpleType, StructType
from factocord.errors import SchemaError


def test_decode_data_api(data_api):
    assert [p.name for p in data_api.prototypes] == ["ItemPrototype", "RecipePrototype"]
    item = data_api.prototypes[0]
    assert item.parent == "Prototype"
    assert item.typename == "item"
    assert item.properties[0].type == SimpleType("ItemCountType")


def test_types_without_properties_keep_none(data_api):
    item_count, color = data_api.types

    assert item_count.properties is None
    assert color.type == StructType((), "struct")
    assert color.properties[0].default == "0"


def test_property_default_may_be_a_type():
    prop = decode_property({
        "name": "mode",
        "order": 0,
        "description": "",
        "type": "string",
        "optional": True,
        "default": {"complex_type": "literal", "value": "auto"},
    })
    assert prop.default is not None
    assert prop.default.value == "auto"


def test_property_requires_type():
    with pytest.raises(SchemaError, match="Missing key 'type'"):
        decode_property({"name": "broken", "order": 0})


def test_malformed_prototype_list(data_api_json):
    data_api_json["prototypes"] = [{"name": "Broken", "order": "not a number"}]
    with pytest.raises(SchemaError):
        decode_data_api(data_api_json)
