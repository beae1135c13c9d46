"""Tests for InMemoryCacheStore."""

import math

import pytest
from graphql import ExecutionResult, GraphQLError

from responsecache import EntityRef, InMemoryCacheStore, SerializationError


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(maxsize=100, timer=clock)


def _result(value: str) -> ExecutionResult:
    return ExecutionResult(data={"value": value})


USER_1 = EntityRef("User", "1")
USER_2 = EntityRef("User", "2")


class TestInMemoryCacheStore:
    """Tests for InMemoryCacheStore."""

    @pytest.mark.asyncio
    async def test_set_and_get(self, store: InMemoryCacheStore) -> None:
        await store.set("key1", _result("a"), [USER_1], 60)

        assert await store.get("key1") == _result("a")

    @pytest.mark.asyncio
    async def test_get_missing_key(self, store: InMemoryCacheStore) -> None:
        assert await store.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_overwrite(self, store: InMemoryCacheStore) -> None:
        """Test that set replaces the entry and its tags."""
        await store.set("key1", _result("a"), [USER_1], 60)
        await store.set("key1", _result("b"), [USER_2], 60)

        await store.invalidate([USER_1])

        assert await store.get("key1") == _result("b")
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_expiry(self, store: InMemoryCacheStore, clock: FakeClock) -> None:
        await store.set("key1", _result("a"), [USER_1], 10)

        clock.now = 9.9
        assert await store.get("key1") is not None

        clock.now = 10.0
        assert await store.get("key1") is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_infinite_ttl(self, store: InMemoryCacheStore, clock: FakeClock) -> None:
        await store.set("key1", _result("a"), [], math.inf)

        clock.now = 1e9
        assert await store.get("key1") == _result("a")

    @pytest.mark.asyncio
    async def test_zero_ttl_is_not_stored(self, store: InMemoryCacheStore) -> None:
        await store.set("key1", _result("a"), [USER_1], 0)

        assert await store.get("key1") is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_invalidate_removes_tagged_entries(self, store: InMemoryCacheStore) -> None:
        await store.set("key1", _result("a"), [USER_1], 60)
        await store.set("key2", _result("b"), [USER_1, USER_2], 60)
        await store.set("key3", _result("c"), [USER_2], 60)

        await store.invalidate([USER_1])

        assert await store.get("key1") is None
        assert await store.get("key2") is None
        assert await store.get("key3") == _result("c")

    @pytest.mark.asyncio
    async def test_invalidate_empty_is_noop(self, store: InMemoryCacheStore) -> None:
        await store.set("key1", _result("a"), [USER_1], 60)

        await store.invalidate([])

        assert await store.get("key1") == _result("a")

    @pytest.mark.asyncio
    async def test_invalidate_after_expiry(
        self, store: InMemoryCacheStore, clock: FakeClock
    ) -> None:
        await store.set("key1", _result("a"), [USER_1], 10)
        await store.set("key2", _result("b"), [USER_1], 60)

        clock.now = 20.0
        await store.invalidate([USER_1])

        assert len(store) == 0
        assert store._index == {}

    @pytest.mark.asyncio
    async def test_lru_eviction_unindexes(self, clock: FakeClock) -> None:
        store = InMemoryCacheStore(maxsize=2, timer=clock)
        await store.set("key1", _result("a"), [USER_1], 60)
        await store.set("key2", _result("b"), [USER_2], 60)
        await store.set("key3", _result("c"), [USER_2], 60)

        assert await store.get("key1") is None
        assert "User:1" not in store._index
        assert len(store) == 2

    @pytest.mark.asyncio
    async def test_clear(self, store: InMemoryCacheStore) -> None:
        await store.set("key1", _result("a"), [USER_1], 60)
        await store.set("key2", _result("b"), [USER_2], 60)

        store.clear()

        assert len(store) == 0
        assert await store.get("key1") is None

    def test_maxsize(self) -> None:
        assert InMemoryCacheStore(maxsize=50).maxsize == 50

    @pytest.mark.asyncio
    async def test_returned_results_are_independent(self, store: InMemoryCacheStore) -> None:
        stored = ExecutionResult(data={"user": {"id": "1", "name": "Ann"}})
        await store.set("key1", stored, [USER_1], 60)

        stored.data["user"]["name"] = "Changed after set"
        first = await store.get("key1")
        assert first is not None
        first.data["user"]["name"] = "Changed after get"

        second = await store.get("key1")
        assert second is not None
        assert second.data == {"user": {"id": "1", "name": "Ann"}}
        assert second is not first

    @pytest.mark.asyncio
    async def test_errors_are_restored(self, store: InMemoryCacheStore) -> None:
        await store.set(
            "key1",
            ExecutionResult(data={"user": None}, errors=[GraphQLError("boom", path=["user"])]),
            [],
            60,
        )

        result = await store.get("key1")

        assert result is not None
        assert result.errors is not None
        assert isinstance(result.errors[0], GraphQLError)
        assert result.errors[0].message == "boom"
        assert result.errors[0].path == ["user"]

    @pytest.mark.asyncio
    async def test_unserializable_result(self, store: InMemoryCacheStore) -> None:
        with pytest.raises(SerializationError):
            await store.set("key1", ExecutionResult(data={"value": object()}), [USER_1], 60)

        assert len(store) == 0
