from factocord.wiki.markup_nodes import (
    Bold,
    ExternalLink,
    Heading,
    Italic,
    Link,
    OrderedList,
    ParagraphBreak,
    Tag,
    Template,
    Text,
    UnorderedList,
    Unsupported,
)
from factocord.wiki.markup_transformer import HEADING_DELIMITER, lead_section, transform
from factocord.wiki.wikitext_parser import parse_wikitext

WIKI = "https://wiki.factorio.com"


def render(text: str) -> str:
    return transform(parse_wikitext(text), WIKI)


def test_bold_and_italic():
    nodes = parse_wikitext("'''Iron''' is ''useful''")

    assert isinstance(nodes[0], Bold)
    assert nodes[0].nodes == (Text("Iron"),)
    assert any(isinstance(node, Italic) for node in nodes)
    assert render("'''Iron''' is ''useful''") == "**Iron** is *useful*"


def test_heading_level_and_title():
    heading = next(node for node in parse_wikitext("Intro\n== Recipes ==\nBody") if isinstance(node, Heading))

    assert heading.level == 2
    assert render("Intro\n== Recipes ==\nBody").count(HEADING_DELIMITER) == 1


def test_internal_link_with_and_without_text():
    nodes = parse_wikitext("[[Iron plate|plates]] and [[Copper plate]]")

    links = [node for node in nodes if isinstance(node, Link)]
    assert links[0].target == "Iron plate"
    assert links[1].nodes == ()
    assert render("[[Iron plate|plates]]") == f"[plates]({WIKI}/Iron_plate)"


def test_file_links_are_unsupported():
    nodes = parse_wikitext("[[File:Iron plate.png|32px]]")
    assert nodes == [Unsupported(kind="file link")]


def test_external_link():
    nodes = parse_wikitext("[https://factorio.com Factorio]")

    assert isinstance(nodes[0], ExternalLink)
    assert render("[https://factorio.com Factorio]") == "[Factorio](https://factorio.com)"


def test_unordered_list():
    assert render("Items:\n* Iron\n* Copper\n") == "Items:\n\n- Iron\n- Copper"


def test_ordered_list_followed_by_text():
    nodes = parse_wikitext("# Mine\n# Smelt\nDone")

    assert isinstance(nodes[0], OrderedList)
    assert len(nodes[0].items) == 2
    assert render("# Mine\n# Smelt\nDone") == "\n1. Mine\n1. Smelt\nDone"


def test_nested_list_items():
    nodes = parse_wikitext("* Plates\n** Iron\n")

    outer = nodes[0]
    assert isinstance(outer, UnorderedList)
    assert len(outer.items) == 1
    assert isinstance(outer.items[0].nodes[-1], UnorderedList)


def test_template_parameters():
    template = parse_wikitext("{{Imagelink|Iron plate}}")[0]

    assert isinstance(template, Template)
    assert template.name == "Imagelink"
    assert template.parameters[0].name is None
    assert render("{{Imagelink|Iron plate}}") == f"[Iron plate]({WIKI}/Iron_plate)"


def test_code_tag():
    nodes = parse_wikitext("Use <code>game.print</code>.")

    assert any(isinstance(node, Tag) and node.name == "code" for node in nodes)
    assert render("Use <code>game.print</code>.") == "Use `game.print`."


def test_comments_and_tables_disappear():
    assert render("A<!-- hidden -->B") == "AB"
    assert render('{| class="wikitable"\n| cell\n|}') == ""


def test_page_summary_end_to_end():
    wikitext = (
        "{{Languages}}\n'''Transport belts''' move items.\n"
        "== Usage ==\nPlace them in a line.\n== History ==\nAdded long ago."
    )
    summary = lead_section(render(wikitext), min_length=100)

    assert summary.startswith("\n**Transport belts** move items.")
    assert "## Usage" in summary
    assert "History" not in summary


def test_blank_lines_become_paragraph_breaks():
    nodes = parse_wikitext("First paragraph.\n\nSecond paragraph.")

    assert nodes == [Text("First paragraph."), ParagraphBreak(), Text("Second paragraph.")]
    assert render("First paragraph.\n\nSecond paragraph.") == "First paragraph.\n\nSecond paragraph."


def test_heading_does_not_double_the_line_break():
    rendered = render("Intro.\n== Recipes ==\nBody")

    assert rendered == f"Intro.\n{HEADING_DELIMITER}## Recipes\n\nBody"
    assert "\n\n" + HEADING_DELIMITER not in rendered


def test_heading_after_blank_line_keeps_one_break():
    rendered = render("Intro.\n\n== Recipes ==\nBody")

    assert rendered.startswith(f"Intro.\n\n{HEADING_DELIMITER}## Recipes")
