"""Unit tests for the key-value stores and the key-value-backed user repository."""

import asyncio
import json
import time
from datetime import timezone

import pytest

from recordhub.application.interfaces import KeyValueStore
from recordhub.domain.entities import User
from recordhub.domain.exceptions import StorageError
from recordhub.infrastructure.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueUserRepository,
    WriteLock,
)


class FlakyKeyValueStore(InMemoryKeyValueStore):
    """Fails every write once ``failing`` is switched on."""

    def __init__(self):
        super().__init__()
        self.failing = False

    def set(self, key: str, value: str) -> None:
        if self.failing:
            raise StorageError(key, "quota exceeded")
        super().set(key, value)


def make_user(email: str = "ada@example.com") -> User:
    return User(
        name="Ada Lovelace",
        email=email,
        phone="1234567890",
        age=36,
        country="United Kingdom",
        password_hash="$2b$04$" + "x" * 53,
    )


def test_json_file_store_round_trip(tmp_path):
    path = tmp_path / "data" / "storage.json"
    store = JsonFileKeyValueStore(path)

    assert store.get("missing") is None
    store.set("a", "1")
    store.set("b", "2")
    store.set("a", "3")

    reopened = JsonFileKeyValueStore(path)
    assert reopened.get("a") == "3"
    assert reopened.get("b") == "2"
    assert json.loads(path.read_text("utf-8")) == {"a": "3", "b": "2"}


def test_json_file_store_replaces_corrupt_file_on_write(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileKeyValueStore(path)

    with pytest.raises(StorageError):
        store.get("key")

    store.set("key", "value")
    assert store.get("key") == "value"


@pytest.mark.asyncio
async def test_users_persist_across_repositories(tmp_path):
    store: KeyValueStore = JsonFileKeyValueStore(tmp_path / "storage.json")
    repository = KeyValueUserRepository(store)
    created = await repository.create(make_user())

    reloaded = KeyValueUserRepository(JsonFileKeyValueStore(tmp_path / "storage.json"))
    users = await reloaded.get_all()

    assert [u.id for u in users] == [created.id]
    assert users[0].registration_date == created.registration_date

    raw = json.loads(store.get("registeredUsers"))
    assert raw[0]["email"] == "ada@example.com"
    assert "password" not in raw[0]


@pytest.mark.asyncio
async def test_reloaded_repository_keeps_ids_increasing():
    store = InMemoryKeyValueStore()
    first = await KeyValueUserRepository(store).create(make_user())

    second = await KeyValueUserRepository(store).create(make_user("b@example.com"))

    assert int(second.id) > int(first.id)


@pytest.mark.asyncio
async def test_corrupt_collection_loads_empty():
    store = InMemoryKeyValueStore({"registeredUsers": "[{\"id\": 1"})

    repository = KeyValueUserRepository(store)

    assert await repository.get_all() == []


@pytest.mark.asyncio
async def test_failed_write_leaves_collection_unchanged():
    store = FlakyKeyValueStore()
    repository = KeyValueUserRepository(store)
    kept = await repository.create(make_user())

    store.failing = True
    with pytest.raises(StorageError):
        await repository.create(make_user("b@example.com"))
    with pytest.raises(StorageError):
        await repository.delete(kept.id)

    assert [u.id for u in await repository.get_all()] == [kept.id]


@pytest.mark.asyncio
async def test_custom_storage_key():
    store = InMemoryKeyValueStore()
    repository = KeyValueUserRepository(store, key="users-v2")

    await repository.create(make_user())

    assert store.get("registeredUsers") is None
    assert store.get("users-v2") is not None


@pytest.mark.asyncio
async def test_write_lock_is_reentrant_for_its_holder():
    lock = WriteLock()

    async with lock.hold():
        async with lock.hold():
            assert lock.locked
    assert not lock.locked


@pytest.mark.asyncio
async def test_write_lock_serializes_other_tasks():
    lock = WriteLock()
    events: list[str] = []

    async def writer(name: str) -> None:
        async with lock.hold():
            events.append(f"{name}-start")
            await asyncio.sleep(0.01)
            events.append(f"{name}-end")

    await asyncio.gather(writer("a"), writer("b"))

    assert events == ["a-start", "a-end", "b-start", "b-end"]


class SlowKeyValueStore(InMemoryKeyValueStore):
    """Blocks the calling thread on every write, like a slow disk."""

    def set(self, key: str, value: str) -> None:
        time.sleep(0.3)
        super().set(key, value)


@pytest.mark.asyncio
async def test_slow_writes_do_not_block_the_event_loop():
    repository = KeyValueUserRepository(SlowKeyValueStore())
    gaps: list[float] = []
    done = asyncio.Event()

    async def ticker() -> None:
        last = time.perf_counter()
        while not done.is_set():
            await asyncio.sleep(0.01)
            now = time.perf_counter()
            gaps.append(now - last)
            last = now

    ticking = asyncio.create_task(ticker())
    await repository.create(make_user())
    done.set()
    await ticking

    assert gaps
    assert max(gaps) < 0.1


@pytest.mark.asyncio
async def test_registration_dates_without_offset_load_as_utc():
    stored = [{
        "id": "1700000000000",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "1234567890",
        "age": 36,
        "country": "United Kingdom",
        "registrationDate": "2026-01-15T10:30:00",
    }, {
        "id": "1700000000001",
        "name": "Grace Hopper",
        "email": "grace@example.com",
        "phone": "1234567890",
        "age": 40,
        "country": "United States",
        "registrationDate": "2026-01-16T08:00:00.000Z",
    }]
    store = InMemoryKeyValueStore({"registeredUsers": json.dumps(stored)})

    users = await KeyValueUserRepository(store).get_all()

    assert [u.registration_date.tzinfo for u in users] == [timezone.utc, timezone.utc]
    assert users[0].registration_date.hour == 10
