"""UserRepository backed by a KeyValueStore.

The whole collection is kept under one key as a JSON array of user
objects, the same layout the registration page keeps in local storage:

    [{"id": "1760000000000", "name": "...", "registrationDate": "2026-..."}, ...]
"""

import asyncio
import json
import logging
import time
from contextlib import AbstractAsyncContextManager
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from recordhub.application.interfaces import KeyValueStore, UserRepository
from recordhub.domain.entities import User
from recordhub.domain.exceptions import StorageError
from recordhub.domain.validation import normalize_email
from recordhub.infrastructure.storage.write_lock import WriteLock

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "registeredUsers"


def _as_utc(moment: datetime) -> datetime:
    """Stored dates without an offset are taken to be UTC."""
    return moment.replace(tzinfo=timezone.utc) if moment.tzinfo is None else moment


class KeyValueUserRepository(UserRepository):
    """Implements the UserRepository port on top of the key-value persistence port.

    Every mutation serializes the full collection and writes it back. If the
    write fails the in-memory collection keeps its previous state and the
    StorageError propagates to the caller.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        self._store = store
        self._key = key
        self._lock = WriteLock()
        self._users: dict[str, User] = self._load()
        self._last_id = max(
            (int(user_id) for user_id in self._users if user_id.isdigit()), default=0
        )

    # ── Mapping ─────────────────────────────────────────────────────

    def _to_entity(self, item: dict[str, Any]) -> User:
        """Map a stored JSON object → domain entity."""
        return User(
            id=str(item["id"]),
            name=item["name"],
            email=item["email"],
            phone=item["phone"],
            age=int(item["age"]),
            country=item["country"],
            password_hash=item.get("passwordHash", ""),
            registration_date=_as_utc(datetime.fromisoformat(item["registrationDate"])),
        )

    def _to_record(self, user: User) -> dict[str, Any]:
        """Map domain entity → JSON object for storage."""
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "phone": user.phone,
            "age": user.age,
            "country": user.country,
            "passwordHash": user.password_hash,
            "registrationDate": user.registration_date.isoformat(),
        }

    # ── Persistence ─────────────────────────────────────────────────

    def _load(self) -> dict[str, User]:
        try:
            raw = self._store.get(self._key)
        except StorageError as exc:
            logger.error("Error loading users from storage: %s", exc)
            return {}
        if raw is None:
            return {}
        try:
            items = json.loads(raw)
            users = [self._to_entity(item) for item in items]
        except (ValueError, TypeError, KeyError) as exc:
            logger.error("Error loading users from storage: %s", exc)
            return {}
        logger.info("Loaded %d users from key '%s'", len(users), self._key)
        return {user.id: user for user in users}

    async def _save(self, users: dict[str, User]) -> None:
        """Write the collection from a worker thread, then make it current."""
        payload = json.dumps([self._to_record(user) for user in users.values()])
        await asyncio.to_thread(self._store.set, self._key, payload)
        self._users = users

    def _next_id(self) -> str:
        """Millisecond creation time, bumped so ids stay strictly increasing."""
        candidate = time.time_ns() // 1_000_000
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    # ── Port ────────────────────────────────────────────────────────

    def transaction(self) -> AbstractAsyncContextManager[None]:
        return self._lock.hold()

    async def get_by_id(self, user_id: str) -> User | None:
        user = self._users.get(user_id)
        return replace(user) if user else None

    async def get_all(self) -> list[User]:
        return [replace(user) for user in self._users.values()]

    async def get_recent(self, limit: int) -> list[User]:
        if limit <= 0:
            return []
        newest = list(self._users.values())[-limit:]
        return [replace(user) for user in reversed(newest)]

    async def email_exists(self, email: str, *, exclude_id: str | None = None) -> bool:
        wanted = normalize_email(email)
        return any(
            normalize_email(user.email) == wanted
            for user in self._users.values()
            if user.id != exclude_id
        )

    async def create(self, user: User) -> User:
        async with self._lock.hold():
            stored = replace(
                user, id=self._next_id(), registration_date=datetime.now(timezone.utc)
            )
            await self._save({**self._users, stored.id: stored})
            logger.info("Registered user %s", stored.id)
            return replace(stored)

    async def update(self, user: User) -> User:
        async with self._lock.hold():
            current = self._users.get(user.id)
            if current is None:
                raise ValueError(f"User {user.id} not found in store")
            stored = replace(user, registration_date=current.registration_date)
            await self._save({**self._users, stored.id: stored})
            return replace(stored)

    async def delete(self, user_id: str) -> User | None:
        async with self._lock.hold():
            if user_id not in self._users:
                return None
            remaining = {uid: user for uid, user in self._users.items() if uid != user_id}
            removed = self._users[user_id]
            await self._save(remaining)
            logger.info("Deleted user %s", user_id)
            return removed
