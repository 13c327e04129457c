"""Unit tests for the UserService against the key-value-backed user store."""

import asyncio
import time
from datetime import datetime, timedelta, timezone

import bcrypt
import pytest

from recordhub.application.schemas import UserCreate, UserUpdate
from recordhub.application.services import UserService
from recordhub.domain.exceptions import EntityNotFoundError, ValidationError
from recordhub.infrastructure.storage import InMemoryKeyValueStore, KeyValueUserRepository


def password_matches(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode(), hashed.encode())


def make_user(**overrides) -> UserCreate:
    data = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "(555) 123-4567",
        "age": 36,
        "country": "United Kingdom",
        "password": "Secret@123",
        "confirmPassword": "Secret@123",
    }
    data.update(overrides)
    return UserCreate.model_validate(data)


@pytest.fixture
def repository() -> KeyValueUserRepository:
    return KeyValueUserRepository(InMemoryKeyValueStore())


@pytest.fixture
def service(repository: KeyValueUserRepository) -> UserService:
    return UserService(repository, hash_rounds=4)


@pytest.mark.asyncio
async def test_register_assigns_id_and_hashes_password(service: UserService):
    user = await service.register(make_user())

    assert user.id is not None and user.id.isdigit()
    assert user.registration_date is not None
    assert user.password_hash != "Secret@123"
    assert password_matches("Secret@123", user.password_hash)


@pytest.mark.asyncio
async def test_register_reports_every_invalid_field(service: UserService):
    form = make_user(name="A", age=17, password="weak", confirmPassword="other")

    with pytest.raises(ValidationError) as exc_info:
        await service.register(form)

    assert set(exc_info.value.errors) == {"name", "age", "password", "confirmPassword"}


@pytest.mark.asyncio
async def test_duplicate_email_does_not_change_count(service: UserService):
    await service.register(make_user())

    with pytest.raises(ValidationError) as exc_info:
        await service.register(make_user(email="ADA@example.COM"))

    assert exc_info.value.errors["email"] == "This email has already been registered"
    assert len(await service.list_users()) == 1


@pytest.mark.asyncio
async def test_ids_are_unique_even_within_one_millisecond(service: UserService):
    ids = []
    for i in range(5):
        user = await service.register(make_user(email=f"user{i}@example.com"))
        ids.append(int(user.id))

    assert ids == sorted(set(ids))


@pytest.mark.asyncio
async def test_update_changes_only_sent_fields(service: UserService):
    user = await service.register(make_user())

    updated = await service.update_user(user.id, UserUpdate.model_validate({"age": "40"}))

    assert updated.age == 40
    assert updated.name == user.name
    assert updated.email == user.email
    assert updated.password_hash == user.password_hash
    assert updated.registration_date == user.registration_date


@pytest.mark.asyncio
async def test_update_keeps_own_email_but_rejects_anothers(service: UserService):
    ada = await service.register(make_user())
    await service.register(make_user(email="grace@example.com"))

    same = await service.update_user(ada.id, UserUpdate.model_validate({"email": "Ada@Example.com"}))
    assert same.email == "Ada@Example.com"

    with pytest.raises(ValidationError):
        await service.update_user(ada.id, UserUpdate.model_validate({"email": "grace@example.com"}))


@pytest.mark.asyncio
async def test_password_change_needs_confirmation(service: UserService):
    user = await service.register(make_user())

    with pytest.raises(ValidationError) as exc_info:
        await service.update_user(user.id, UserUpdate.model_validate({"password": "Newpass@1"}))
    assert exc_info.value.errors == {"confirmPassword": "Please confirm your password"}

    updated = await service.update_user(
        user.id,
        UserUpdate.model_validate({"password": "Newpass@1", "confirmPassword": "Newpass@1"}),
    )
    assert password_matches("Newpass@1", updated.password_hash)


@pytest.mark.asyncio
async def test_unknown_user(service: UserService):
    with pytest.raises(EntityNotFoundError):
        await service.get_user("123")
    with pytest.raises(EntityNotFoundError):
        await service.delete_user("123")
    with pytest.raises(EntityNotFoundError):
        await service.update_user("123", UserUpdate.model_validate({"age": 30}))


@pytest.mark.asyncio
async def test_recent_users_newest_first(service: UserService):
    for i in range(7):
        await service.register(make_user(email=f"user{i}@example.com"))

    recent = await service.recent_users(5)

    assert [u.email for u in recent] == [f"user{i}@example.com" for i in (6, 5, 4, 3, 2)]


@pytest.mark.asyncio
async def test_stats(service: UserService):
    assert (await service.stats()).total_users == 0

    await service.register(make_user(age=20))
    await service.register(make_user(email="b@example.com", age=25))

    stats = await service.stats()
    assert stats.total_users == 2
    assert stats.average_age == 23  # 22.5 rounds half up
    assert stats.users_this_week == 2

    later = await service.stats(now=datetime.now(timezone.utc) + timedelta(days=8))
    assert later.users_this_week == 0


@pytest.mark.asyncio
async def test_registration_leaves_the_event_loop_responsive(repository: KeyValueUserRepository):
    service = UserService(repository, hash_rounds=12)
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
    await service.register(make_user())
    done.set()
    await ticking

    assert gaps
    assert max(gaps) < 0.1


@pytest.mark.asyncio
async def test_concurrent_registrations_of_one_email(service: UserService):
    results = await asyncio.gather(
        service.register(make_user()),
        service.register(make_user(email="ADA@example.com")),
        return_exceptions=True,
    )

    rejected = [r for r in results if isinstance(r, ValidationError)]
    assert len(rejected) == 1
    assert rejected[0].errors == {"email": "This email has already been registered"}
    assert len(await service.list_users()) == 1
