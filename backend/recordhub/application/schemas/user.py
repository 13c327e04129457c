"""Pydantic DTOs for user registration."""

from datetime import datetime
from typing import Any

from recordhub.application.schemas.base import CamelModel, RequestModel


class UserCreate(RequestModel):
    """Registration form payload.

    Fields are loosely typed on purpose: the validation rules, not the
    parser, decide what is acceptable and report every problem at once.
    """

    name: Any = None
    email: Any = None
    phone: Any = None
    age: Any = None
    country: Any = None
    password: Any = None
    confirm_password: Any = None


class UserUpdate(RequestModel):
    """Edit form payload — only the keys present in the request are changed."""

    name: Any = None
    email: Any = None
    phone: Any = None
    age: Any = None
    country: Any = None
    password: Any = None
    confirm_password: Any = None


class UserResponse(CamelModel):
    """Schema returned to the client. The password is never included."""

    id: str
    name: str
    email: str
    phone: str
    age: int
    country: str
    registration_date: datetime

    model_config = {"from_attributes": True}


class UserStatsResponse(CamelModel):
    """Dashboard figures."""

    total_users: int
    average_age: int
    users_this_week: int
