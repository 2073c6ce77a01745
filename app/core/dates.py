"""Date parsing and day-boundary helpers.

All computations happen in UTC so that a stored appointment date and the
window used to look it up never depend on the server's local time zone.
"""

from datetime import UTC, datetime, time

from app.core.exceptions import BadRequestException

INVALID_DATE_MESSAGE = "Invalid date format. Please use YYYY-MM-DD format."

END_OF_DAY = time(23, 59, 59, 999000)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_date(value: str) -> datetime:
    """
    Parse an ISO-8601 date or datetime string.

    Args:
        value: Date string such as ``2024-06-01`` or ``2024-06-01T09:00:00Z``

    Returns:
        Timezone-aware datetime in UTC, truncated to milliseconds so it
        always falls inside some day window from ``day_bounds``

    Raises:
        BadRequestException: If the string cannot be parsed
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (TypeError, ValueError) as e:
        raise BadRequestException(INVALID_DATE_MESSAGE) from e

    parsed = parsed.replace(microsecond=parsed.microsecond // 1000 * 1000)
    return ensure_utc(parsed)


def day_bounds(value: datetime) -> tuple[datetime, datetime]:
    """Return the inclusive (start, end) window of the UTC calendar day."""
    day = ensure_utc(value).date()
    start = datetime.combine(day, time.min, tzinfo=UTC)
    end = datetime.combine(day, END_OF_DAY, tzinfo=UTC)
    return start, end
