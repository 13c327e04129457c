"""Domain entity for registered users."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class User:
    """A person registered through the registration form.

    Only the password hash is kept. ``id`` and ``registration_date`` are
    assigned by the repository on insert.
    """

    name: str
    email: str
    phone: str
    age: int
    country: str
    password_hash: str
    id: str | None = None
    registration_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    EDITABLE_FIELDS = frozenset({"name", "email", "phone", "age", "country", "password_hash"})

    def apply_patch(self, changes: dict[str, Any]) -> None:
        """Overwrite only the fields present in ``changes``."""
        unknown = set(changes) - self.EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"User fields are not editable: {', '.join(sorted(unknown))}")
        for name, value in changes.items():
            setattr(self, name, value)


@dataclass(frozen=True)
class UserStats:
    """Dashboard summary of the registered users."""

    total_users: int
    average_age: int
    users_this_week: int
