"""Tests for chunked object storage."""

import pytest

from common.constants import CHUNK_SIZE, MAX_VALUE_SIZE
from portal.exceptions import ValueTooLargeError
from portal.repositories.chunk_repository import (
    ChunkRepository,
    chunk_name,
    parse_chunk_index,
    split_into_chunks,
)


@pytest.fixture
def chunk_repo(store):
    return ChunkRepository(store)


async def chunk_keys(store, object_id):
    return [entry.key async for entry in store.list(("scripts", object_id))]


class TestHelpers:

    def test_split_empty_content_is_single_empty_chunk(self):
        assert split_into_chunks("", 10) == [""]

    def test_split_exact_multiple(self):
        assert split_into_chunks("abcdef", 3) == ["abc", "def"]

    def test_split_with_remainder(self):
        assert split_into_chunks("abcdefg", 3) == ["abc", "def", "g"]

    def test_split_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            split_into_chunks("abc", 0)

    def test_chunk_name(self):
        assert chunk_name(0) == "chunk_0"
        assert chunk_name(12) == "chunk_12"

    @pytest.mark.parametrize("name,expected", [
        ("chunk_0", 0),
        ("chunk_10", 10),
        ("chunk_", None),
        ("chunk_x", None),
        ("chunk_-1", None),
        ("chunk_٣", None),
        ("meta", None),
    ])
    def test_parse_chunk_index(self, name, expected):
        assert parse_chunk_index(name) == expected


class TestRoundTrip:

    @pytest.mark.parametrize("length", [0, 1, CHUNK_SIZE - 1, CHUNK_SIZE, CHUNK_SIZE + 1, 3 * CHUNK_SIZE + 17])
    async def test_write_then_read_returns_content(self, chunk_repo, length):
        content = "".join(chr(ord("a") + i % 26) for i in range(length))

        await chunk_repo.write("doc", content)

        assert await chunk_repo.read("doc") == content

    async def test_chunk_count_is_ceiling_of_length(self, chunk_repo, store):
        written = await chunk_repo.write("doc", "x" * (2 * CHUNK_SIZE + 1))

        assert written == 3
        assert [key[-1] for key in await chunk_keys(store, "doc")] == ["chunk_0", "chunk_1", "chunk_2"]

    async def test_empty_content_is_distinct_from_missing(self, chunk_repo):
        await chunk_repo.write("empty", "")

        assert await chunk_repo.read("empty") == ""
        assert await chunk_repo.read("missing") is None

    async def test_multibyte_characters_across_chunk_boundary(self, chunk_repo):
        content = "a" * (CHUNK_SIZE - 1) + "🎬映画" + "é" * CHUNK_SIZE

        await chunk_repo.write("unicode", content)

        assert await chunk_repo.read("unicode") == content

    async def test_worst_case_chunk_fits_value_limit(self, chunk_repo):
        content = "🎬" * CHUNK_SIZE

        await chunk_repo.write("wide", content)

        assert len(content.encode("utf-8")) <= MAX_VALUE_SIZE
        assert await chunk_repo.read("wide") == content


class TestOrdering:

    async def test_reassembles_numerically_not_lexically(self, store):
        repo = ChunkRepository(store, chunk_size=1)
        content = "0123456789AB"

        await repo.write("ordered", content)

        # lexical key order puts chunk_10 before chunk_2
        listed = [key[-1] for key in await chunk_keys(store, "ordered")]
        assert listed.index("chunk_10") < listed.index("chunk_2")
        assert await repo.read("ordered") == content

    async def test_ten_full_chunks(self, chunk_repo):
        content = "".join(str(i) * CHUNK_SIZE for i in range(10)) + "tail"

        assert await chunk_repo.write("big", content) == 11
        assert await chunk_repo.read("big") == content

    async def test_unexpected_keys_are_ignored(self, chunk_repo, store):
        await chunk_repo.write("doc", "hello")
        await store.set(("scripts", "doc", "meta"), "not a chunk")

        assert await chunk_repo.read("doc") == "hello"


class TestOverwriteAndDelete:

    async def test_overwrite_with_shorter_content_drops_old_chunks(self, store):
        repo = ChunkRepository(store, chunk_size=4)
        await repo.write("doc", "a" * 40)

        await repo.write("doc", "bb")

        assert await repo.read("doc") == "bb"
        assert len(await chunk_keys(store, "doc")) == 1

    async def test_delete_removes_all_chunks(self, store):
        repo = ChunkRepository(store, chunk_size=4)
        await repo.write("doc", "a" * 10)

        assert await repo.delete("doc") == 3
        assert await repo.read("doc") is None
        assert await chunk_keys(store, "doc") == []

    async def test_rejected_overwrite_keeps_old_content(self, chunk_repo, store):
        await chunk_repo.write("doc", "original")

        with pytest.raises(ValueError):
            await chunk_repo.write("doc", "a\ud800b")

        assert await chunk_repo.read("doc") == "original"
        assert await chunk_keys(store, "doc") == [("scripts", "doc", "chunk_0")]

    async def test_oversized_chunk_rejected_before_delete(self, store):
        repo = ChunkRepository(store, chunk_size=MAX_VALUE_SIZE + 1)
        await repo.write("doc", "original")

        with pytest.raises(ValueTooLargeError):
            await repo.write("doc", "x" * (MAX_VALUE_SIZE + 1))

        assert await repo.read("doc") == "original"

    async def test_delete_missing_is_noop(self, chunk_repo):
        assert await chunk_repo.delete("ghost") == 0
        assert await chunk_repo.delete("ghost") == 0

    async def test_delete_does_not_touch_prefix_sibling(self, chunk_repo):
        await chunk_repo.write("a", "first")
        await chunk_repo.write("ab", "second")

        await chunk_repo.delete("a")

        assert await chunk_repo.read("a") is None
        assert await chunk_repo.read("ab") == "second"


class TestListing:

    async def test_list_object_ids_is_sorted_and_distinct(self, store):
        repo = ChunkRepository(store, chunk_size=2)
        await repo.write("zeta", "aaaaaa")
        await repo.write("alpha", "bbbb")
        await repo.write("mid", "")

        assert await repo.list_object_ids() == ["alpha", "mid", "zeta"]

    async def test_namespaces_are_isolated(self, store):
        scripts = ChunkRepository(store)
        notes = ChunkRepository(store, namespace="notes")
        await scripts.write("doc", "script")
        await notes.write("doc", "note")

        assert await scripts.read("doc") == "script"
        assert await notes.read("doc") == "note"
        assert await notes.list_object_ids() == ["doc"]

    async def test_stray_keys_do_not_make_an_object(self, chunk_repo, store):
        await chunk_repo.write("real", "content")
        await store.set(("scripts", "ghost", "meta"), "not a chunk")
        await store.set(("scripts", "ghost"), "bare")

        assert await chunk_repo.list_object_ids() == ["real"]
        assert await chunk_repo.read("ghost") is None
