from factocord.api.signatures import (
    attribute_signature,
    method_signature,
    parameters_signature,
    property_signature,
)
from factocord.api.runtime_models import Parameter
from factocord.api.type_model import SimpleType


def test_table_method_signature(runtime_api):
    destroy = runtime_api.classes[0].methods[0]
    assert method_signature(destroy) == "destroy{raise_destroy?=...} 🡪 boolean"


def test_positional_method_signature_with_optional_return(runtime_api):
    get_inventory = runtime_api.classes[0].methods[1]
    assert method_signature(get_inventory) == "get_inventory(inventory) 🡪 LuaInventory?"


def test_parameters_sorted_by_order():
    parameters = [
        Parameter(name="second", order=1, description="", type=SimpleType("int"), optional=True),
        Parameter(name="first", order=0, description="", type=SimpleType("int"), optional=False),
    ]
    assert parameters_signature(parameters, takes_table=False) == "(first, second?)"


def test_attribute_signatures(runtime_api):
    health, name = runtime_api.classes[0].attributes
    assert attribute_signature(health) == "health [RW] :: float?"
    assert attribute_signature(name) == "name [R] :: string"


def test_property_signature(data_api):
    optional_prop = data_api.types[1].properties[0]
    required_prop = data_api.prototypes[0].properties[0]

    assert property_signature(optional_prop) == "r optional :: float"
    assert "optional" not in property_signature(required_prop)
    assert property_signature(required_prop).endswith(":: ItemCountType")
