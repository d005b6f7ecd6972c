from types import SimpleNamespace

import pytest
import requests

from factocord.errors import ModNotFoundError, ModSearchUnavailableError, UpstreamFetchError
from factocord.mods import mod_portal

SEARCH_RESULT = {
    "name": "Krastorio2",
    "title": "Krastorio 2",
    "owner": "raiguard",
    "summary": "A *large* overhaul mod.",
    "downloads_count": 123456,
    "thumbnail": "/assets/abc.thumb.png",
}


def fake_response(payload, status_code=200):
    return SimpleNamespace(status_code=status_code, json=lambda: payload)


@pytest.fixture
def portal_requests(monkeypatch):
    calls = []
    answer = {"response": fake_response({"results": [SEARCH_RESULT]})}

    def fake_post(url, json, timeout):
        calls.append((url, json))
        return answer["response"]

    monkeypatch.setattr(mod_portal.requests, "post", fake_post)
    return SimpleNamespace(calls=calls, answer=answer)


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv("MOD_PORTAL_USERNAME", "factocord")
    monkeypatch.setenv("MOD_PORTAL_TOKEN", "secret")


def test_mod_url_escapes_spaces():
    assert mod_portal.mod_url("Even Distribution") == "https://mods.factorio.com/mod/Even%20Distribution"


def test_build_search_payload():
    payload = mod_portal.build_search_payload("q" * 80, "user", "token")

    assert payload["query"] == "q" * mod_portal.QUERY_LIMIT
    assert payload["username"] == "user"
    assert payload["token"] == "token"
    assert payload["sort_attribute"] == "relevancy"
    assert payload["page_size"] == "1"


def test_search_mod_returns_top_hit(portal_requests):
    found = mod_portal.search_mod("krastorio", "user", "token")

    url, payload = portal_requests.calls[0]
    assert url == "https://mods.factorio.com/api/search"
    assert payload["query"] == "krastorio"
    assert found.name == "Krastorio2"
    assert found.title == "Krastorio 2"
    assert found.downloads_count == 123456
    assert found.thumbnail == "https://assets-mod.factorio.com/assets/abc.thumb.png"
    assert found.url == "https://mods.factorio.com/mod/Krastorio2"


def test_search_mod_without_thumbnail_uses_placeholder(portal_requests):
    entry = dict(SEARCH_RESULT, thumbnail=None)
    portal_requests.answer["response"] = fake_response({"results": [entry]})

    found = mod_portal.search_mod("krastorio", "user", "token")

    assert found.thumbnail == "https://assets-mod.factorio.com/assets/.thumb.png"


def test_search_mod_no_results(portal_requests):
    portal_requests.answer["response"] = fake_response({"results": []})

    with pytest.raises(ModNotFoundError, match="Did not find any mods named nothing"):
        mod_portal.search_mod("nothing", "user", "token")


@pytest.mark.parametrize(
    "response",
    [
        fake_response({}, status_code=500),
        fake_response({"unexpected": True}),
        fake_response({"results": [{"title": "no name"}]}),
    ],
)
def test_search_mod_bad_answers(portal_requests, response):
    portal_requests.answer["response"] = response

    with pytest.raises(UpstreamFetchError):
        mod_portal.search_mod("krastorio", "user", "token")


def test_search_mod_connection_error(monkeypatch):
    def fail(url, json, timeout):
        raise requests.Timeout("slow")

    monkeypatch.setattr(mod_portal.requests, "post", fail)

    with pytest.raises(UpstreamFetchError, match="slow"):
        mod_portal.search_mod("krastorio", "user", "token")


@pytest.mark.asyncio
async def test_find_mod_uses_env_credentials(portal_requests, credentials):
    found = await mod_portal.find_mod("krastorio")

    _, payload = portal_requests.calls[0]
    assert payload["username"] == "factocord"
    assert payload["token"] == "secret"
    assert found.name == "Krastorio2"


@pytest.mark.asyncio
async def test_find_mod_without_credentials(portal_requests, monkeypatch):
    monkeypatch.delenv("MOD_PORTAL_USERNAME", raising=False)
    monkeypatch.delenv("MOD_PORTAL_TOKEN", raising=False)

    with pytest.raises(ModSearchUnavailableError) as excinfo:
        await mod_portal.find_mod("krastorio")

    assert excinfo.value.user_facing is True
    assert portal_requests.calls == []
