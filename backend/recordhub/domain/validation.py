"""Field validation rules — pure functions, no I/O.

Each rule receives a raw input value and returns ``None`` when it accepts
the value, or a human-readable message when it rejects it.

``validate_record`` runs every requested field through ``validate_field``,
so checking one field on input and checking the whole form on submit use
exactly the same rules.

Field names are the ones the clients send (``fullName``, ``confirmPassword``).
"""

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from recordhub.domain.countries import RECOGNIZED_COUNTRIES

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{10,15}$")
WEBSITE_PATTERN = re.compile(r"^https?://.+")
INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")
PASSWORD_SYMBOLS = "@$!%*?&"

MIN_NAME_LENGTH = 2
MIN_AGE = 18
MAX_AGE = 120
MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 15
MIN_PASSWORD_LENGTH = 8
MIN_MESSAGE_LENGTH = 10
MAX_MESSAGE_LENGTH = 500

USER_FIELDS = ("name", "email", "phone", "age", "country", "password", "confirmPassword")
SUBMISSION_FIELDS = (
    "fullName", "email", "phone", "age", "country", "website", "message", "agreement",
)
TASK_FIELDS = ("title",)


class PasswordStrength(str, Enum):
    """Display-only strength rating shown next to the password input."""

    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"


@dataclass(frozen=True)
class FieldContext:
    """Sibling values and store facts a rule may consult."""

    values: Mapping[str, Any] = field(default_factory=dict)
    email_taken: bool = False


# ── Helpers ──────────────────────────────────────────────────────────

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_email(email: str) -> str:
    """Canonical form used for duplicate detection."""
    return email.strip().lower()


def parse_age(value: Any) -> int | None:
    """Return the integer age encoded by ``value``, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and INTEGER_PATTERN.match(value.strip()):
        return int(value.strip())
    return None


def _has_lower(text: str) -> bool:
    return any(ch.islower() for ch in text)


def _has_upper(text: str) -> bool:
    return any(ch.isupper() for ch in text)


def _has_digit(text: str) -> bool:
    return any(ch in "0123456789" for ch in text)


def _has_symbol(text: str) -> bool:
    return any(ch in PASSWORD_SYMBOLS for ch in text)


# ── Rules ────────────────────────────────────────────────────────────

def validate_name(value: Any, label: str = "Name") -> str | None:
    if not isinstance(value, str) or not value.strip():
        return f"{label} is required"
    trimmed = value.strip()
    if len(trimmed) < MIN_NAME_LENGTH:
        return f"{label} must be at least {MIN_NAME_LENGTH} characters"
    if not all(ch.isalpha() or ch == " " for ch in trimmed):
        return f"{label} can only contain letters and spaces"
    return None


def validate_email(value: Any, *, already_registered: bool = False) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return "Email is required"
    if not EMAIL_PATTERN.match(value.strip()):
        return "Invalid email format"
    if already_registered:
        return "This email has already been registered"
    return None


def validate_phone(value: Any) -> str | None:
    """Accept digits with optional ``+`` prefix and space/dash/parenthesis separators."""
    if not isinstance(value, str) or not value.strip():
        return "Phone number is required"
    trimmed = value.strip()
    digits = sum(1 for ch in trimmed if ch in "0123456789")
    if not PHONE_PATTERN.match(trimmed) or not MIN_PHONE_DIGITS <= digits <= MAX_PHONE_DIGITS:
        return f"Please enter a valid phone number ({MIN_PHONE_DIGITS}-{MAX_PHONE_DIGITS} digits)"
    return None


def validate_age(value: Any) -> str | None:
    if _is_blank(value):
        return "Age is required"
    age = parse_age(value)
    if age is None:
        return "Age must be a valid number"
    if not MIN_AGE <= age <= MAX_AGE:
        return f"Age must be between {MIN_AGE} and {MAX_AGE}"
    return None


def validate_country(value: Any) -> str | None:
    if _is_blank(value):
        return "Country is required"
    if not isinstance(value, str) or value.strip() not in RECOGNIZED_COUNTRIES:
        return "Invalid country selection"
    return None


def validate_password(value: Any) -> str | None:
    if not isinstance(value, str) or not value:
        return "Password is required"
    if len(value) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    if not (_has_lower(value) and _has_upper(value) and _has_digit(value) and _has_symbol(value)):
        return (
            "Password must contain at least one uppercase letter, one lowercase letter, "
            "one number, and one special character"
        )
    return None


def validate_confirm_password(value: Any, password: Any) -> str | None:
    if not isinstance(value, str) or not value:
        return "Please confirm your password"
    if value != password:
        return "Passwords do not match"
    return None


def validate_website(value: Any) -> str | None:
    """Optional field: absent or empty is accepted."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        return "Website must be a valid string"
    if not WEBSITE_PATTERN.match(value.strip()):
        return "URL must start with http:// or https://"
    return None


def validate_message(value: Any) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return "Message is required"
    trimmed = value.strip()
    if len(trimmed) < MIN_MESSAGE_LENGTH:
        return f"Message must be at least {MIN_MESSAGE_LENGTH} characters"
    if len(trimmed) > MAX_MESSAGE_LENGTH:
        return f"Message cannot exceed {MAX_MESSAGE_LENGTH} characters"
    return None


def validate_agreement(value: Any) -> str | None:
    if value is not True:
        return "You must agree to the terms and conditions"
    return None


def validate_title(value: Any) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return "Title is required"
    return None


def password_strength(password: str) -> PasswordStrength:
    """Rate a password for display. Never used to accept or reject it."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return PasswordStrength.WEAK
    if not (_has_lower(password) and _has_upper(password) and _has_digit(password)):
        return PasswordStrength.WEAK
    if _has_symbol(password):
        return PasswordStrength.STRONG
    return PasswordStrength.MEDIUM


# ── Registry ─────────────────────────────────────────────────────────

Rule = Callable[[Any, FieldContext], str | None]

FIELD_RULES: dict[str, Rule] = {
    "name": lambda value, _: validate_name(value),
    "fullName": lambda value, _: validate_name(value, label="Full name"),
    "email": lambda value, ctx: validate_email(value, already_registered=ctx.email_taken),
    "phone": lambda value, _: validate_phone(value),
    "age": lambda value, _: validate_age(value),
    "country": lambda value, _: validate_country(value),
    "password": lambda value, _: validate_password(value),
    "confirmPassword": lambda value, ctx: validate_confirm_password(
        value, ctx.values.get("password")
    ),
    "website": lambda value, _: validate_website(value),
    "message": lambda value, _: validate_message(value),
    "agreement": lambda value, _: validate_agreement(value),
    "title": lambda value, _: validate_title(value),
}


def is_known_field(name: str) -> bool:
    return name in FIELD_RULES


def validate_field(name: str, value: Any, *, context: FieldContext | None = None) -> str | None:
    """Run the rule registered for ``name``. Raises KeyError for unknown fields."""
    try:
        rule = FIELD_RULES[name]
    except KeyError:
        raise KeyError(f"No validation rule for field '{name}'") from None
    return rule(value, context or FieldContext())


def validate_record(
    data: Mapping[str, Any],
    fields: Iterable[str],
    *,
    email_taken: bool = False,
) -> dict[str, str]:
    """Validate every field in ``fields`` and collect all failures.

    Returns an empty dict when the record is acceptable.
    """
    context = FieldContext(values=data, email_taken=email_taken)
    errors: dict[str, str] = {}
    for name in fields:
        message = validate_field(name, data.get(name), context=context)
        if message:
            errors[name] = message
    return errors
