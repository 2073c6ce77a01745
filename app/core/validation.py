"""Field-level helpers shared by request validation."""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str) -> str:
    """Lowercase and trim an email address."""
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    """Check for a basic local@domain.tld shape."""
    return bool(EMAIL_PATTERN.match(email))


def is_blank(value: str | None) -> bool:
    """True for None and for strings that are empty after trimming."""
    return value is None or not value.strip()
