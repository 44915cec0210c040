"""Unit tests for the Store adapter."""

import asyncio

import pytest

from remark.config import StoreSettings
from remark.domain.error import UnavailableError
from remark.persistence.backend import InMemoryBackend
from remark.persistence.error import (
    StorePermissionError,
    TransientStoreError,
    WriteConflictError,
)
from remark.persistence.store import DELETE, Store, WriteMode


def make_store(backend=None, **overrides) -> Store:
    settings = StoreSettings(
        read_timeout=overrides.pop("read_timeout", 1.0),
        retry_interval_base=overrides.pop("retry_interval_base", 0.001),
        **overrides,
    )
    return Store(backend or InMemoryBackend(), settings)


class FlakyBackend(InMemoryBackend):
    """Fails the first `failures` set() calls with the given error."""

    def __init__(self, failures: int, error: Exception) -> None:
        super().__init__()
        self.failures = failures
        self.error = error
        self.set_calls = 0

    async def set(self, path, value):
        self.set_calls += 1
        if self.set_calls <= self.failures:
            raise self.error
        await super().set(path, value)


class ConflictingBackend(InMemoryBackend):
    """Transactions conflict the first `failures` times."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.transaction_calls = 0

    async def transaction(self, path, update):
        self.transaction_calls += 1
        if self.transaction_calls <= self.failures:
            raise WriteConflictError("conflict")
        return await super().transaction(path, update)


class SlowBackend(InMemoryBackend):
    async def get(self, path):
        await asyncio.sleep(1)
        return await super().get(path)


class TestReadWrite:
    """Tests for read, write and delete."""

    @pytest.mark.asyncio
    async def test_read_missing_path_returns_none(self):
        store = make_store()

        assert await store.read("users/nobody") is None

    @pytest.mark.asyncio
    async def test_replace_overwrites_node(self):
        store = make_store()
        await store.write("users/alice", {"email": "a@example.com", "role": "user"})

        await store.write("users/alice", {"email": "b@example.com"})

        assert await store.read("users/alice") == {"email": "b@example.com"}

    @pytest.mark.asyncio
    async def test_merge_updates_listed_children_only(self):
        store = make_store()
        await store.write("users/alice", {"email": "a@example.com", "role": "user"})

        await store.write("users/alice", {"role": "admin"}, mode=WriteMode.MERGE)

        assert await store.read("users/alice") == {
            "email": "a@example.com",
            "role": "admin",
        }

    @pytest.mark.asyncio
    async def test_merge_with_none_deletes_child(self):
        store = make_store()
        await store.write("comments/p1", {"c1": {"comment": "x"}, "c2": {"comment": "y"}})

        await store.write("comments/p1", {"c1": None}, mode=WriteMode.MERGE)

        assert await store.read("comments/p1") == {"c2": {"comment": "y"}}

    @pytest.mark.asyncio
    async def test_merge_requires_mapping(self):
        store = make_store()

        with pytest.raises(TypeError):
            await store.write("articles/p1/likes", 3, mode=WriteMode.MERGE)

    @pytest.mark.asyncio
    async def test_create_returns_new_key(self):
        store = make_store()

        key = await store.write("comments/p1", {"date": 1}, mode=WriteMode.CREATE)

        assert key
        assert await store.read(f"comments/p1/{key}") == {"date": 1}

    @pytest.mark.asyncio
    async def test_delete_removes_subtree(self):
        store = make_store()
        await store.write("comments/p1/c1", {"comment": "x"})

        await store.delete("comments/p1")

        assert await store.read("comments") is None


class TestTransact:
    """Tests for transact()."""

    @pytest.mark.asyncio
    async def test_commit_returns_new_value(self):
        store = make_store()

        result = await store.transact("articles/p1/likes", lambda v: (v or 0) + 1)

        assert result.committed is True
        assert result.value == 1

    @pytest.mark.asyncio
    async def test_updater_returning_none_aborts(self):
        store = make_store()
        await store.write("users/alice", {"email": "a@example.com"})

        result = await store.transact("users/alice", lambda current: None)

        assert result.committed is False
        assert result.value == {"email": "a@example.com"}
        assert await store.read("users/alice") == {"email": "a@example.com"}

    @pytest.mark.asyncio
    async def test_delete_sentinel_removes_node(self):
        store = make_store()
        await store.write("articleLikes/alice_p1", {"username": "alice"})

        result = await store.transact("articleLikes/alice_p1", lambda current: DELETE)

        assert result.committed is True
        assert result.value is None
        assert await store.read("articleLikes/alice_p1") is None

    @pytest.mark.asyncio
    async def test_concurrent_increments_are_not_lost(self):
        store = make_store()

        await asyncio.gather(
            *(
                store.transact("articles/p1/likes", lambda v: (v or 0) + 1)
                for _ in range(10)
            )
        )

        assert await store.read("articles/p1/likes", use_cache=False) == 10

    @pytest.mark.asyncio
    async def test_write_conflicts_are_retried(self):
        backend = ConflictingBackend(failures=2)
        store = make_store(backend)

        result = await store.transact("articles/p1/likes", lambda v: (v or 0) + 1)

        assert result.committed is True
        assert backend.transaction_calls == 3

    @pytest.mark.asyncio
    async def test_persistent_conflicts_become_unavailable(self):
        backend = ConflictingBackend(failures=10)
        store = make_store(backend, max_retries=3)

        with pytest.raises(UnavailableError):
            await store.transact("articles/p1/likes", lambda v: (v or 0) + 1)

        # One attempt plus three retries
        assert backend.transaction_calls == 4


class TestRetryAndTimeout:
    """Tests for the retry policy and timeouts."""

    @pytest.mark.asyncio
    async def test_transient_write_errors_are_retried(self):
        backend = FlakyBackend(failures=2, error=TransientStoreError("blip"))
        store = make_store(backend)

        await store.write("users/alice", {"email": "a@example.com"})

        assert backend.set_calls == 3
        assert await store.read("users/alice") == {"email": "a@example.com"}

    @pytest.mark.asyncio
    async def test_permission_errors_are_not_retried(self):
        backend = FlakyBackend(failures=5, error=StorePermissionError("denied"))
        store = make_store(backend)

        with pytest.raises(StorePermissionError):
            await store.write("users/alice", {"email": "a@example.com"})

        assert backend.set_calls == 1

    @pytest.mark.asyncio
    async def test_backoff_doubles_between_retries(self, monkeypatch):
        delays = []
        real_sleep = asyncio.sleep

        async def fake_sleep(delay):
            if delay:
                delays.append(delay)
            await real_sleep(0)

        monkeypatch.setattr("remark.persistence.store.asyncio.sleep", fake_sleep)
        backend = FlakyBackend(failures=3, error=TransientStoreError("blip"))
        store = make_store(backend, retry_interval_base=0.5, max_retries=3)

        await store.write("users/alice", {"email": "a@example.com"})

        assert delays == [0.5, 1.0, 2.0]

    @pytest.mark.asyncio
    async def test_slow_read_times_out(self):
        store = make_store(SlowBackend(), read_timeout=0.01)

        with pytest.raises(UnavailableError):
            await store.read("users/alice")


class TestCache:
    """Tests for the read cache."""

    @pytest.mark.asyncio
    async def test_cached_read_ignores_changes_made_behind_the_store(self):
        backend = InMemoryBackend({"users": {"alice": {"email": "a@example.com"}}})
        store = make_store(backend)
        await store.read("users/alice")

        await backend.set("users/alice/email", "b@example.com")

        assert await store.read("users/alice") == {"email": "a@example.com"}
        assert await store.read("users/alice", use_cache=False) == {
            "email": "b@example.com"
        }

    @pytest.mark.asyncio
    async def test_write_invalidates_ancestor_and_descendant_entries(self):
        store = make_store()
        await store.write("comments/p1/c1", {"comment": "x"})
        await store.read("comments/p1")
        await store.read("comments/p1/c1/comment")

        await store.write("comments/p1/c1", {"comment": "y"})

        assert await store.read("comments/p1") == {"c1": {"comment": "y"}}
        assert await store.read("comments/p1/c1/comment") == "y"

    @pytest.mark.asyncio
    async def test_unrelated_entries_survive_writes(self):
        backend = InMemoryBackend({"users": {"alice": {"email": "a@example.com"}}})
        store = make_store(backend)
        await store.read("users/alice")
        await backend.set("users/alice/email", "b@example.com")

        await store.write("users/bob", {"email": "bob@example.com"})

        assert await store.read("users/alice") == {"email": "a@example.com"}

    @pytest.mark.asyncio
    async def test_cache_can_be_disabled(self):
        backend = InMemoryBackend({"users": {"alice": {"email": "a@example.com"}}})
        store = make_store(backend, cache_enabled=False)
        await store.read("users/alice")

        await backend.set("users/alice/email", "b@example.com")

        assert await store.read("users/alice") == {"email": "b@example.com"}

    @pytest.mark.asyncio
    async def test_cached_values_are_copies(self):
        store = make_store()
        await store.write("users/alice", {"email": "a@example.com"})

        first = await store.read("users/alice")
        first["email"] = "mutated"

        assert await store.read("users/alice") == {"email": "a@example.com"}
