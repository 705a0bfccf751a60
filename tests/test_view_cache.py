from app.utils.view_cache import ViewCache, cached, get_view_cache, revalidate_path
from tests.utils import login


class FakeTimer:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_revalidate_drops_path_and_children():
    cache = ViewCache()
    cache.set("/dashboard", "cards", 1)
    cache.set("/dashboard/invoices", "rows", 2)
    cache.set("/dashboard-archive", "rows", 3)
    cache.set("/reports", "rows", 4)

    assert cache.revalidate("/dashboard") == 2
    assert cache.get("/dashboard", "cards") is None
    assert cache.get("/dashboard/invoices", "rows") is None
    assert cache.get("/dashboard-archive", "rows") == 3
    assert cache.get("/reports", "rows") == 4


def test_entries_expire():
    timer = FakeTimer()
    cache = ViewCache(timeout=10, timer=timer)
    cache.set("/dashboard", "cards", "value")
    timer.now += 9
    assert cache.get("/dashboard", "cards") == "value"
    timer.now += 2
    assert cache.get("/dashboard", "cards") is None
    assert len(cache) == 0


def test_entry_count_is_bounded():
    cache = ViewCache(maxsize=3)
    for index in range(10):
        cache.set("/dashboard/invoices", ("rows", f"term-{index}", 1), [])

    assert len(cache) == 3
    assert cache.get("/dashboard/invoices", ("rows", "term-9", 1)) == []
    assert cache.get("/dashboard/invoices", ("rows", "term-0", 1)) is None


def test_distinct_searches_do_not_grow_cache(client, app, invoices):
    app.config["VIEW_CACHE_MAXSIZE"] = 8
    with client:
        login(client)
        for index in range(500):
            response = client.get(f"/dashboard/invoices?query=term-{index}")
            assert response.status_code == 200
        assert len(get_view_cache()) <= 8


def test_cached_loads_once_until_revalidated(app):
    calls = []

    def loader():
        calls.append(1)
        return ["row"]

    assert cached("/dashboard/invoices", "k", loader) == ["row"]
    assert cached("/dashboard/invoices", "k", loader) == ["row"]
    assert len(calls) == 1

    revalidate_path("/dashboard/invoices")
    cached("/dashboard/invoices", "k", loader)
    assert len(calls) == 2


def test_cache_settings_from_config(app):
    cache = get_view_cache()
    assert cache.timeout == app.config["VIEW_CACHE_TIMEOUT"]
    assert cache.maxsize == app.config["VIEW_CACHE_MAXSIZE"]
