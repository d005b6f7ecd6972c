import pytest

from factocord.util.format_utils import (
    capitalize,
    escape_formatting,
    split_inputs,
    strip_comment,
    truncate_for_embed,
)


@pytest.mark.parametrize(
    "text, limit, expected",
    [
        ("short", 10, "short"),
        ("exactly10!", 10, "exactly10!"),
        ("this is too long", 10, "this is..."),
        ("abcdef", 3, "abc"),
        ("abc", 0, ""),
    ],
)
def test_truncate_for_embed(text, limit, expected):
    assert truncate_for_embed(text, limit) == expected


def test_escape_formatting():
    assert escape_formatting("a_b*c~d") == "a\\_b\\*c\\~d"
    assert escape_formatting("@everyone") == "@\u200beveryone"


def test_capitalize():
    assert capitalize("bELTS") == "Belts"
    assert capitalize("") == ""


def test_strip_comment():
    assert strip_comment("LuaEntity | look here") == "LuaEntity"
    assert strip_comment("  no comment ") == "no comment"


def test_split_inputs_with_member_shorthand():
    assert split_inputs("LuaEntity::health", None) == ("LuaEntity", "health")


def test_split_inputs_with_separate_member_and_comments():
    assert split_inputs("LuaEntity | hi", "destroy | this one") == ("LuaEntity", "destroy")


def test_split_inputs_empty_member_becomes_none():
    assert split_inputs("LuaEntity", " | only a comment") == ("LuaEntity", None)
