import pytest
import pytest_asyncio

from factocord.database.db_connection import db_connection
from factocord.errors import (
    CacheUnavailableError,
    FaqAlreadyExistsError,
    FaqBodyTooLongError,
    FaqNotFoundError,
    FaqTitleTooLongError,
)
from factocord.faq import faq_service


@pytest_asyncio.fixture
async def faq_db(tmp_path):
    await db_connection.open(tmp_path / "faq.db")
    await faq_service.faq_titles_cache.prime()
    yield
    await db_connection.close()
    faq_service.faq_titles_cache._snapshot = None
    faq_service.faq_titles_cache._refreshed_at = None


@pytest.mark.asyncio
async def test_add_and_resolve_exact(faq_db):
    entry, replaced = await faq_service.add_entry(1, "belts", "Belts move items.", None, 42)

    assert replaced is False
    assert entry.title == "Belts"

    resolution = await faq_service.resolve_faq(1, "BELTS")
    assert resolution.entry.contents == "Belts move items."
    assert resolution.close_match is False


@pytest.mark.asyncio
async def test_add_replaces_existing_entry(faq_db):
    await faq_service.add_entry(1, "Belts", "old", None, 42)
    entry, replaced = await faq_service.add_entry(1, "Belts", "new", "https://cdn.example/belt.png", 43)

    assert replaced is True
    resolution = await faq_service.resolve_faq(1, "Belts")
    assert resolution.entry.contents == "new"
    assert resolution.entry.image == "https://cdn.example/belt.png"
    assert resolution.entry.author == 43


@pytest.mark.asyncio
async def test_add_validates_lengths(faq_db):
    with pytest.raises(FaqTitleTooLongError):
        await faq_service.add_entry(1, "x" * 257, "body", None, 42)
    with pytest.raises(FaqBodyTooLongError):
        await faq_service.add_entry(1, "Title", "x" * 4097, None, 42)


@pytest.mark.asyncio
async def test_resolve_falls_back_to_closest_title(faq_db):
    await faq_service.add_entry(1, "Belts", "Belts move items.", None, 42)

    resolution = await faq_service.resolve_faq(1, "belt")

    assert resolution.close_match is True
    assert resolution.requested == "Belt"
    assert resolution.entry.title == "Belts"


@pytest.mark.asyncio
async def test_resolve_unknown_name(faq_db):
    await faq_service.add_entry(1, "Belts", "Belts move items.", None, 42)

    with pytest.raises(FaqNotFoundError) as excinfo:
        await faq_service.resolve_faq(1, "Quantum computers")
    assert excinfo.value.name == "Quantum computers"


@pytest.mark.asyncio
async def test_entries_are_per_server(faq_db):
    await faq_service.add_entry(1, "Belts", "server one", None, 42)

    with pytest.raises(FaqNotFoundError):
        await faq_service.resolve_faq(2, "Belts")


@pytest.mark.asyncio
async def test_links_resolve_to_their_target(faq_db):
    await faq_service.add_entry(1, "Trains", "Choo choo.", None, 42)
    link = await faq_service.link_entry(1, "rail", "trains", 42)

    assert link.title == "Rail"
    assert link.link == "Trains"
    resolution = await faq_service.resolve_faq(1, "Rail")
    assert resolution.entry.title == "Trains"
    assert resolution.close_match is False


@pytest.mark.asyncio
async def test_links_to_links_are_flattened(faq_db):
    await faq_service.add_entry(1, "Trains", "Choo choo.", None, 42)
    await faq_service.link_entry(1, "Rail", "Trains", 42)

    link = await faq_service.link_entry(1, "Railway", "Rail", 42)

    assert link.link == "Trains"


@pytest.mark.asyncio
async def test_link_errors(faq_db):
    await faq_service.add_entry(1, "Trains", "Choo choo.", None, 42)

    with pytest.raises(FaqAlreadyExistsError):
        await faq_service.link_entry(1, "Trains", "Trains", 42)
    with pytest.raises(FaqNotFoundError):
        await faq_service.link_entry(1, "Rail", "Boats", 42)


@pytest.mark.asyncio
async def test_list_faqs_shows_links(faq_db):
    await faq_service.add_entry(1, "Trains", "Choo choo.", None, 42)
    await faq_service.add_entry(1, "Belts", "Move items.", None, 42)
    await faq_service.link_entry(1, "Rail", "Trains", 42)
    await faq_service.link_entry(1, "Choo", "Trains", 42)

    assert await faq_service.list_faqs(1) == ["Belts", "Trains (Choo, Rail)"]


@pytest.mark.asyncio
async def test_remove_entry(faq_db):
    await faq_service.add_entry(1, "Belts", "Move items.", None, 42)

    assert await faq_service.remove_entry(1, "belts") == ("Belts", True)
    assert await faq_service.remove_entry(1, "belts") == ("Belts", False)


@pytest.mark.asyncio
async def test_autocomplete_follows_edits(faq_db):
    await faq_service.add_entry(1, "Trains", "Choo choo.", None, 42)
    await faq_service.add_entry(1, "Train stops", "Stops.", None, 42)
    await faq_service.add_entry(2, "Trainyard", "Other server.", None, 42)

    assert faq_service.autocomplete_titles(1, "train") == ["Train stops", "Trains"]

    await faq_service.remove_entry(1, "Trains")
    assert faq_service.autocomplete_titles(1, "train") == ["Train stops"]


@pytest.mark.asyncio
async def test_remove_server(faq_db):
    await faq_service.add_entry(1, "Belts", "Move items.", None, 42)
    await faq_service.add_entry(1, "Trains", "Choo choo.", None, 42)
    await faq_service.add_entry(2, "Belts", "Other server.", None, 42)

    assert await faq_service.remove_server(1) == 2
    assert faq_service.server_titles(1) == []
    assert faq_service.server_titles(2) == ["Belts"]


def test_closest_title_needs_loaded_cache():
    faq_service.faq_titles_cache._snapshot = None
    with pytest.raises(CacheUnavailableError):
        faq_service.find_closest_title(1, "Belts")
