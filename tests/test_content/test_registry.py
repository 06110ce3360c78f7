"""Tests for Registry and ContentStore."""

import threading
from datetime import date

import pytest

from blogidx.content.errors import DuplicateSlugError, LoadError
from blogidx.content.query import ContentQuery
from blogidx.content.registry import ContentStore, Registry


def test_order_is_newest_first_independent_of_input(make_entry):
    a = make_entry("a", published=date(2025, 1, 13))
    b = make_entry("b", published=date(2025, 2, 1))

    assert [e.slug for e in Registry.load([a, b])] == ["b", "a"]
    assert [e.slug for e in Registry.load([b, a])] == ["b", "a"]


def test_ties_broken_by_slug_ascending(make_entry):
    same_day = date(2025, 1, 13)
    entries = [make_entry(slug, published=same_day) for slug in ("zeta", "alpha", "mid")]
    entries.append(make_entry("newer", published=date(2025, 3, 1)))

    assert [e.slug for e in Registry.load(entries)] == ["newer", "alpha", "mid", "zeta"]


def test_duplicate_slug_rejected_regardless_of_fields(make_entry):
    first = make_entry("same", published=date(2025, 1, 1), category="A")
    second = make_entry("same", published=date(2020, 6, 6), category="B", title="Other")

    with pytest.raises(DuplicateSlugError) as exc_info:
        Registry.load([first, second])
    assert exc_info.value.slugs == ("same",)


def test_duplicate_error_names_every_slug(make_entry):
    entries = [make_entry(s) for s in ("x", "y", "x", "y", "z")]
    with pytest.raises(DuplicateSlugError) as exc_info:
        Registry.load(entries)
    assert exc_info.value.slugs == ("x", "y")


def test_lookup(make_entry):
    registry = Registry.load([make_entry("a"), make_entry("b", published=date(2025, 5, 5))])

    assert len(registry) == 2
    assert "a" in registry
    assert "missing" not in registry
    assert registry.get("a").slug == "a"
    assert registry.get("missing") is None
    assert registry.index_of("b") == 0
    with pytest.raises(KeyError):
        registry.index_of("missing")


def test_registry_is_immutable(make_entry):
    registry = Registry.load([make_entry("a")])
    assert isinstance(registry.entries, tuple)
    with pytest.raises(AttributeError):
        registry.extra = 1


def test_load_produces_fresh_registry(make_entry):
    first = Registry.load([make_entry("a")])
    second = Registry.load([make_entry("b")])
    assert [e.slug for e in first] == ["a"]
    assert [e.slug for e in second] == ["b"]


def test_empty_registry():
    registry = Registry.load([])
    assert len(registry) == 0
    assert list(registry) == []


# ---------------------------------------------------------------------------
# ContentStore
# ---------------------------------------------------------------------------

def test_store_starts_empty():
    assert len(ContentStore().current) == 0


def test_swap_returns_previous(make_entry):
    old = Registry.load([make_entry("a")])
    new = Registry.load([make_entry("b")])
    store = ContentStore(old)

    assert store.swap(new) is old
    assert store.current is new


def test_reader_keeps_its_snapshot_across_swap(make_entry):
    store = ContentStore(Registry.load([make_entry("a")]))
    snapshot = store.current

    store.swap(Registry.load([make_entry("b"), make_entry("c")]))

    assert [e.slug for e in snapshot] == ["a"]
    assert len(store.current) == 2


def test_reload_swaps_on_success(make_raw):
    store = ContentStore()
    registry = store.reload([make_raw("one"), make_raw("two", pubDate="2025-06-01")])

    assert store.current is registry
    assert [e.slug for e in store.current] == ["two", "one"]


def test_reload_failure_keeps_current_snapshot(make_raw):
    store = ContentStore()
    good = store.reload([make_raw("one")])

    with pytest.raises(LoadError):
        store.reload([make_raw("two"), make_raw("broken", title=...)])

    assert store.current is good


def test_query_uses_current_snapshot(make_raw):
    store = ContentStore()
    store.reload([make_raw("one", tags=["gpu"])])
    assert [e.slug for e in store.query().by_tag("gpu")] == ["one"]


def test_concurrent_readers_see_whole_snapshots(make_entry):
    small = Registry.load([make_entry("a")])
    large = Registry.load([make_entry(f"p{i}") for i in range(50)])
    store = ContentStore(small)
    seen: set[int] = set()
    stop = threading.Event()

    def reader():
        while not stop.is_set():
            seen.add(len(list(store.current)))

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for i in range(200):
        store.swap(large if i % 2 == 0 else small)
    stop.set()
    for t in threads:
        t.join()

    assert seen <= {1, 50}


def test_query_returns_content_query(make_entry):
    store = ContentStore(Registry.load([make_entry("a")]))
    query = store.query()
    assert isinstance(query, ContentQuery)
    assert query.all() == (store.current.get("a"),)
