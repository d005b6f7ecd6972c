"""
Pytest configuration and fixtures for Factocord tests.
"""

import copy
import sys
from pathlib import Path

import pytest

# Add src directory to path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from factocord.api.api_cache import data_api_cache, runtime_api_cache  # noqa: E402
from factocord.api.data_models import decode_data_api  # noqa: E402
from factocord.api.runtime_models import decode_runtime_api  # noqa: E402


RUNTIME_API_JSON = {
    "application": "factorio",
    "application_version": "2.0.28",
    "api_version": 6,
    "stage": "runtime",
    "classes": [
        {
            "name": "LuaEntity",
            "order": 0,
            "description": "The primary interface for interacting with entities. See [LuaSurface](runtime:LuaSurface).",
            "parent": "LuaControl",
            "methods": [
                {
                    "name": "destroy",
                    "order": 0,
                    "description": "Destroys the entity.",
                    "parameters": [
                        {"name": "raise_destroy", "order": 0, "description": "", "type": "boolean", "optional": True},
                    ],
                    "format": {"takes_table": True, "table_optional": True},
                    "return_values": [{"order": 0, "description": "", "type": "boolean", "optional": False}],
                },
                {
                    "name": "get_inventory",
                    "order": 1,
                    "description": "Get an inventory belonging to this entity.",
                    "parameters": [
                        {"name": "inventory", "order": 0, "description": "", "type": "defines.inventory", "optional": False},
                    ],
                    "format": {"takes_table": False},
                    "return_values": [{"order": 0, "description": "", "type": "LuaInventory", "optional": True}],
                },
            ],
            "attributes": [
                {
                    "name": "health",
                    "order": 0,
                    "description": "The current health of the entity.",
                    "read_type": "float",
                    "write_type": "float",
                    "optional": True,
                },
                {
                    "name": "name",
                    "order": 1,
                    "description": "Name of the entity prototype.",
                    "read_type": "string",
                },
            ],
            "operators": [],
        },
        {
            "name": "LuaSurface",
            "order": 1,
            "description": "A surface in the game.",
            "methods": [],
            "attributes": [],
            "operators": [],
        },
    ],
    "events": [
        {
            "name": "on_built_entity",
            "order": 0,
            "description": "Called when a player builds something.",
            "data": [{"name": "entity", "order": 0, "description": "", "type": "LuaEntity", "optional": False}],
        },
    ],
    "defines": [
        {
            "name": "direction",
            "order": 0,
            "description": "Directions used by entities.",
            "values": [{"name": "north", "order": 0, "description": ""}],
        },
    ],
    "concepts": [
        {
            "name": "MapPosition",
            "order": 0,
            "description": "Coordinates on a surface.",
            "type": {
                "complex_type": "table",
                "parameters": [{"name": "x", "order": 0, "description": "", "type": "double", "optional": False}],
            },
        },
    ],
    "global_objects": [{"name": "game", "order": 0, "description": "", "type": "LuaGameScript"}],
    "global_functions": [],
}

DATA_API_JSON = {
    "application": "factorio",
    "application_version": "2.0.28",
    "api_version": 6,
    "stage": "prototype",
    "prototypes": [
        {
            "name": "ItemPrototype",
            "order": 0,
            "description": "Possible configuration for all items. Stack size is [ItemCountType](prototype:ItemCountType).",
            "parent": "Prototype",
            "typename": "item",
            "properties": [
                {
                    "name": "stack_size",
                    "order": 0,
                    "description": "Count of items of the same name that can be stored in one inventory slot.",
                    "type": "ItemCountType",
                    "optional": False,
                },
            ],
        },
        {
            "name": "RecipePrototype",
            "order": 1,
            "description": "A recipe.",
            "typename": "recipe",
            "properties": [],
        },
    ],
    "types": [
        {"name": "ItemCountType", "order": 0, "description": "Count of items.", "type": "uint32"},
        {
            "name": "Color",
            "order": 1,
            "description": "Red, green, blue and alpha values.",
            "type": {"complex_type": "struct"},
            "properties": [
                {"name": "r", "order": 0, "description": "Red value.", "type": "float", "optional": True, "default": "0"},
            ],
        },
    ],
}


@pytest.fixture
def runtime_api_json():
    return copy.deepcopy(RUNTIME_API_JSON)


@pytest.fixture
def data_api_json():
    return copy.deepcopy(DATA_API_JSON)


@pytest.fixture
def runtime_api(runtime_api_json):
    return decode_runtime_api(runtime_api_json)


@pytest.fixture
def data_api(data_api_json):
    return decode_data_api(data_api_json)


@pytest.fixture
def loaded_caches(runtime_api, data_api):
    """Populate both documentation caches for the duration of a test."""
    runtime_api_cache.replace(runtime_api)
    data_api_cache.replace(data_api)
    yield runtime_api, data_api
    runtime_api_cache._snapshot = None
    runtime_api_cache._refreshed_at = None
    data_api_cache._snapshot = None
    data_api_cache._refreshed_at = None


@pytest.fixture
def empty_caches():
    """Make sure both documentation caches start out empty."""
    for cache in (runtime_api_cache, data_api_cache):
        cache._snapshot = None
        cache._refreshed_at = None
    yield
