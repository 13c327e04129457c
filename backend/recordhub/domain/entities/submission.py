"""Domain entity for contact-form submissions."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Submission:
    """A validated contact-form submission."""

    full_name: str
    email: str
    phone: str
    age: int
    country: str
    message: str
    agreement: bool
    website: str | None = None
    id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
