import threading

import pytest

from factocord.api.corpus_cache import CorpusCache
from factocord.errors import CacheUnavailableError, UpstreamFetchError


def test_empty_cache_is_unavailable():
    cache = CorpusCache("test", loader=None)

    assert cache.is_populated is False
    assert cache.refreshed_at is None
    with pytest.raises(CacheUnavailableError, match="not loaded yet"):
        cache.snapshot()


@pytest.mark.asyncio
async def test_prime_populates_cache():
    async def loader():
        return {"version": 1}

    cache = CorpusCache("test", loader)
    snapshot = await cache.prime()

    assert snapshot == {"version": 1}
    assert cache.snapshot() is snapshot
    assert cache.refreshed_at is not None


@pytest.mark.asyncio
async def test_prime_propagates_failures():
    async def loader():
        raise UpstreamFetchError("down")

    cache = CorpusCache("test", loader)
    with pytest.raises(UpstreamFetchError):
        await cache.prime()
    assert cache.is_populated is False


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_snapshot():
    results = [{"version": 1}, UpstreamFetchError("down")]

    async def loader():
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    cache = CorpusCache("test", loader)
    assert await cache.refresh() is True
    assert await cache.refresh() is False
    assert cache.snapshot() == {"version": 1}


@pytest.mark.asyncio
async def test_refresh_swaps_in_new_snapshot():
    versions = iter([1, 2])

    async def loader():
        return {"version": next(versions)}

    cache = CorpusCache("test", loader)
    await cache.prime()
    held = cache.snapshot()
    await cache.refresh()

    assert held == {"version": 1}
    assert cache.snapshot() == {"version": 2}


def test_lock_timeout_is_reported(monkeypatch):
    cache = CorpusCache("test", loader=None)
    cache.replace({"version": 1})
    monkeypatch.setattr("factocord.api.corpus_cache.LOCK_TIMEOUT_SECONDS", 0.01)

    cache._lock.acquire()
    try:
        with pytest.raises(CacheUnavailableError, match="lock timed out"):
            cache.snapshot()
    finally:
        cache._lock.release()


def test_concurrent_readers_see_whole_snapshots():
    cache = CorpusCache("test", loader=None)
    cache.replace({"version": 0, "classes": ("c0",) * 8})
    writes = 2000
    stop = threading.Event()
    torn = []
    seen_versions = []

    def reader():
        last = -1
        while not stop.is_set():
            current = cache.snapshot()
            version = current["version"]
            if current["classes"] != (f"c{version}",) * 8 or version < last:
                torn.append(current)
            last = version
        seen_versions.append(last)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for thread in readers:
        thread.start()
    for version in range(1, writes + 1):
        cache.replace({"version": version, "classes": (f"c{version}",) * 8})
    stop.set()
    for thread in readers:
        thread.join()

    assert torn == []
    assert len(seen_versions) == 4
    assert cache.snapshot()["version"] == writes
