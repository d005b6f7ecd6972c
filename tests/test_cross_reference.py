from factocord.api.cross_reference import ApiSection, build_docs_url, classify, resolve_links

BASE = "https://lua-api.factorio.com/latest"


def test_runtime_link_becomes_class_url(data_api):
    text = "See [LuaEntity](runtime:LuaEntity) for details."
    assert resolve_links(text, data_api, BASE) == f"See [LuaEntity]({BASE}/classes/LuaEntity.html) for details."


def test_member_becomes_anchor(data_api):
    text = "[destroy](runtime:LuaEntity::destroy)"
    assert resolve_links(text, data_api, BASE) == f"[destroy]({BASE}/classes/LuaEntity.html#destroy)"


def test_prototype_and_type_links_are_classified(data_api):
    text = "[item](prototype:ItemPrototype::stack_size) and [count](prototype:ItemCountType)"
    assert resolve_links(text, data_api, BASE) == (
        f"[item]({BASE}/prototypes/ItemPrototype.html#stack_size) and [count]({BASE}/types/ItemCountType.html)"
    )


def test_unknown_prototype_target_degrades_to_label(data_api):
    assert resolve_links("[thing](prototype:Nonexistent)", data_api, BASE) == "thing"


def test_missing_data_api_degrades_prototype_links_only():
    text = "[a](runtime:LuaEntity) [b](prototype:ItemPrototype)"
    assert resolve_links(text, None, BASE) == f"[a]({BASE}/classes/LuaEntity.html) b"


def test_text_without_links_is_untouched(data_api):
    text = "Plain [markdown](https://example.com) link."
    assert resolve_links(text, data_api, BASE) == text


def test_prototype_classification_is_case_sensitive(data_api):
    assert classify("prototype", "itemprototype", data_api) is None
    assert classify("prototype", "ItemPrototype", data_api) is ApiSection.PROTOTYPE


def test_build_docs_url_strips_trailing_slash():
    assert build_docs_url(ApiSection.TYPE, "Color", None, BASE + "/") == f"{BASE}/types/Color.html"
