"""Application service (use case) for user registration and management."""

import asyncio
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any

from recordhub.application.interfaces import UserRepository
from recordhub.application.schemas.user import UserCreate, UserUpdate
from recordhub.domain.entities import User, UserStats
from recordhub.domain.exceptions import EntityNotFoundError, ValidationError
from recordhub.domain.passwords import DEFAULT_ROUNDS, hash_password
from recordhub.domain.validation import USER_FIELDS, parse_age, validate_email, validate_record

logger = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(days=7)


class UserService:
    """Orchestrates registration, editing and the dashboard views.

    Rules are checked and the password is hashed before the write lock is
    taken. Under the lock only the duplicate-email check is repeated, so a
    concurrent registration of the same address still loses.
    """

    def __init__(self, repository: UserRepository, *, hash_rounds: int = DEFAULT_ROUNDS):
        self._repository = repository
        self._hash_rounds = hash_rounds

    async def get_user(self, user_id: str) -> User:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def list_users(self) -> list[User]:
        return await self._repository.get_all()

    async def recent_users(self, limit: int) -> list[User]:
        return await self._repository.get_recent(limit)

    async def _email_taken(self, email: Any, *, exclude_id: str | None = None) -> bool:
        if not isinstance(email, str) or not email.strip():
            return False
        return await self._repository.email_exists(email, exclude_id=exclude_id)

    async def _ensure_email_free(self, email: Any, *, exclude_id: str | None = None) -> None:
        if await self._email_taken(email, exclude_id=exclude_id):
            raise ValidationError({"email": validate_email(email, already_registered=True)})

    async def _entity_changes(self, values: dict[str, Any]) -> dict[str, Any]:
        """Turn validated form values into User attribute values.

        bcrypt runs in a worker thread so the event loop keeps serving requests.
        """
        changes: dict[str, Any] = {}
        for key in ("name", "email", "phone", "country"):
            if key in values:
                changes[key] = values[key].strip()
        if "age" in values:
            changes["age"] = parse_age(values["age"])
        if "password" in values:
            changes["password_hash"] = await asyncio.to_thread(
                hash_password, values["password"], rounds=self._hash_rounds
            )
        return changes

    async def register(self, data: UserCreate) -> User:
        """Validate every field and store the user."""
        values = data.model_dump(by_alias=True)
        email_taken = await self._email_taken(data.email)
        errors = validate_record(values, USER_FIELDS, email_taken=email_taken)
        if errors:
            raise ValidationError(errors)
        user = User(**await self._entity_changes(values))

        async with self._repository.transaction():
            await self._ensure_email_free(data.email)
            created = await self._repository.create(user)
        return created

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        """Apply a partial edit. A new password must come with a matching confirmation."""
        values = data.model_dump(by_alias=True, exclude_unset=True)
        if "password" in values or "confirmPassword" in values:
            values.setdefault("password", None)
            values.setdefault("confirmPassword", None)
        fields = [name for name in USER_FIELDS if name in values]

        await self.get_user(user_id)
        email_taken = await self._email_taken(values.get("email"), exclude_id=user_id)
        errors = validate_record(values, fields, email_taken=email_taken)
        if errors:
            raise ValidationError(errors)
        changes = await self._entity_changes(values)

        async with self._repository.transaction():
            user = await self.get_user(user_id)
            await self._ensure_email_free(values.get("email"), exclude_id=user_id)
            user.apply_patch(changes)
            updated = await self._repository.update(user)
        logger.info("User %s updated (%s)", user_id, ", ".join(fields) or "no changes")
        return updated

    async def delete_user(self, user_id: str) -> User:
        removed = await self._repository.delete(user_id)
        if removed is None:
            raise EntityNotFoundError("User", user_id)
        return removed

    async def stats(self, *, now: datetime | None = None) -> UserStats:
        users = await self._repository.get_all()
        now = now or datetime.now(timezone.utc)
        if not users:
            return UserStats(total_users=0, average_age=0, users_this_week=0)
        # half-up rounding, matching the dashboard's display
        average = math.floor(sum(user.age for user in users) / len(users) + 0.5)
        this_week = sum(1 for user in users if user.registration_date > now - RECENT_WINDOW)
        return UserStats(
            total_users=len(users),
            average_age=average,
            users_this_week=this_week,
        )
