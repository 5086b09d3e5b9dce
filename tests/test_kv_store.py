"""Tests for the key-value store backends."""

from datetime import timedelta

import pytest

from common.constants import MAX_VALUE_SIZE
from portal.exceptions import ValueTooLargeError
from portal.kv_store import KVEntry, SqliteKVStore, create_store, validate_key


async def collect(store, prefix):
    return [entry async for entry in store.list(prefix)]


class TestBasicOperations:
    """get/set/delete on both backends."""

    async def test_get_missing_returns_none(self, store):
        assert await store.get(("movies", "nope")) is None

    async def test_set_then_get(self, store):
        await store.set(("movies", "alien"), {"title": "Alien", "links": ["http://a"]})

        entry = await store.get(("movies", "alien"))
        assert entry == KVEntry(key=("movies", "alien"), value={"title": "Alien", "links": ["http://a"]})

    async def test_set_replaces_value(self, store):
        await store.set(("k", "a"), "first")
        await store.set(("k", "a"), "second")

        assert (await store.get(("k", "a"))).value == "second"

    async def test_delete_is_idempotent(self, store):
        await store.set(("k", "a"), 1)
        await store.delete(("k", "a"))
        await store.delete(("k", "a"))
        await store.delete(("k", "never-set"))

        assert await store.get(("k", "a")) is None

    async def test_non_ascii_values_round_trip(self, store):
        text = "naïve ☃ 映画 🎬"
        await store.set(("scripts", "u", "chunk_0"), text)

        assert (await store.get(("scripts", "u", "chunk_0"))).value == text


class TestListing:
    """Prefix scans."""

    async def test_list_is_ordered_by_key(self, store):
        for name in ["charlie", "alpha", "bravo"]:
            await store.set(("movies", name), name)

        keys = [entry.key for entry in await collect(store, ("movies",))]
        assert keys == [("movies", "alpha"), ("movies", "bravo"), ("movies", "charlie")]

    async def test_list_orders_component_wise(self, store):
        await store.set(("s", "a", "chunk_0"), 1)
        await store.set(("s", "a-b", "chunk_0"), 2)
        await store.set(("s", "a", "chunk_1"), 3)

        keys = [entry.key for entry in await collect(store, ("s",))]
        assert keys == [("s", "a", "chunk_0"), ("s", "a", "chunk_1"), ("s", "a-b", "chunk_0")]

    async def test_prefix_never_matches_partial_component(self, store):
        await store.set(("scripts", "a", "chunk_0"), "a")
        await store.set(("scripts", "ab", "chunk_0"), "ab")

        entries = await collect(store, ("scripts", "a"))
        assert [entry.value for entry in entries] == ["a"]

    async def test_exact_prefix_key_is_not_listed(self, store):
        await store.set(("movies",), "root")
        await store.set(("movies", "alien"), "alien")

        entries = await collect(store, ("movies",))
        assert [entry.key for entry in entries] == [("movies", "alien")]

    async def test_list_other_namespace_is_empty(self, store):
        await store.set(("movies", "alien"), 1)

        assert await collect(store, ("keys",)) == []

    async def test_empty_prefix_lists_everything(self, store):
        await store.set(("b", "1"), 1)
        await store.set(("a", "1"), 1)

        keys = [entry.key for entry in await collect(store, ())]
        assert keys == [("a", "1"), ("b", "1")]


class TestExpiry:
    """Per-entry expiry against the injected clock."""

    async def test_entry_visible_before_expiry(self, store, clock):
        await store.set(("sessions", "t"), "v", expire_in=timedelta(seconds=10))
        clock.advance(seconds=9)

        assert (await store.get(("sessions", "t"))).value == "v"

    async def test_entry_hidden_once_expired(self, store, clock):
        await store.set(("sessions", "t"), "v", expire_in=timedelta(milliseconds=1))
        clock.advance(milliseconds=1)

        assert await store.get(("sessions", "t")) is None
        assert await collect(store, ("sessions",)) == []

    async def test_set_without_expiry_clears_previous_expiry(self, store, clock):
        await store.set(("k", "a"), 1, expire_in=timedelta(seconds=1))
        await store.set(("k", "a"), 2)
        clock.advance(days=1)

        assert (await store.get(("k", "a"))).value == 2


class TestLimitsAndValidation:

    async def test_value_over_limit_is_rejected(self, store):
        with pytest.raises(ValueTooLargeError):
            await store.set(("k", "big"), "x" * MAX_VALUE_SIZE)

        assert await store.get(("k", "big")) is None

    async def test_value_under_limit_is_accepted(self, store):
        await store.set(("k", "ok"), "x" * (MAX_VALUE_SIZE - 100))

        assert len((await store.get(("k", "ok"))).value) == MAX_VALUE_SIZE - 100

    async def test_unencodable_text_is_rejected(self, store):
        await store.set(("k", "text"), "original")

        with pytest.raises(ValueError):
            await store.set(("k", "text"), "a\ud800b")

        assert (await store.get(("k", "text"))).value == "original"

    @pytest.mark.parametrize("key", [(), ("",), ("a", ""), ("a\x00b",), ["a"]])
    def test_validate_key_rejects_malformed(self, key):
        with pytest.raises(ValueError):
            validate_key(key)

    async def test_store_rejects_malformed_key(self, store):
        with pytest.raises(ValueError):
            await store.set(("movies", ""), 1)


class TestSqliteStore:

    async def test_data_survives_reopen(self, tmp_path, clock):
        path = str(tmp_path / "kv.db")
        first = SqliteKVStore(path, clock)
        await first.set(("movies", "alien"), {"title": "Alien"})

        second = SqliteKVStore(path, clock)
        assert (await second.get(("movies", "alien"))).value == {"title": "Alien"}

    async def test_expired_row_is_purged_on_get(self, sqlite_store, clock):
        await sqlite_store.set(("sessions", "t"), "v", expire_in=timedelta(seconds=1))
        clock.advance(seconds=2)

        assert await sqlite_store.get(("sessions", "t")) is None
        clock.now = clock.now - timedelta(seconds=2)
        assert await sqlite_store.get(("sessions", "t")) is None


def test_create_store_memory(tmp_path):
    store = create_store("memory", str(tmp_path / "unused.db"))
    assert type(store).__name__ == "MemoryKVStore"


def test_create_store_sqlite(tmp_path):
    path = tmp_path / "data" / "reelbox.db"
    store = create_store("sqlite", str(path))

    assert isinstance(store, SqliteKVStore)
    assert path.exists()


def test_create_store_unknown_backend(tmp_path):
    with pytest.raises(ValueError):
        create_store("redis", str(tmp_path / "kv.db"))
