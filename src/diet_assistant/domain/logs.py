"""Domain models for daily consumption logs."""

from dataclasses import dataclass
from datetime import datetime

from diet_assistant.domain.errors import InvalidValue

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class LogEntry:
    """A food reference with the number of servings eaten."""

    food_id: str
    servings: int


def validate_day(day: str) -> str:
    """Return the day unchanged if it is a valid ``YYYY-MM-DD`` string."""
    try:
        parsed = datetime.strptime(day, DATE_FORMAT)
    except (TypeError, ValueError) as exc:
        raise InvalidValue(f"Invalid date '{day}', expected YYYY-MM-DD", "day") from exc
    if parsed.strftime(DATE_FORMAT) != day:
        raise InvalidValue(f"Invalid date '{day}', expected YYYY-MM-DD", "day")
    return day
