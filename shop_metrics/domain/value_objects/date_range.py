"""
Date range value object for report queries.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any

from shop_metrics.utils.error_handler import ValidationException


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive calendar-day range, interpreted in UTC.

    Attributes:
        start: First day (from 00:00:00 UTC)
        end: Last day (through 23:59:59 UTC)

    Example:
        >>> DateRange.parse("2025-01-01", "2025-01-31").created_at_max
        '2025-01-31T23:59:59Z'
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValidationException(
                message=f"Start date {self.start} is after end date {self.end}",
                field="from",
                invalid_value=self.start.isoformat(),
            )

    @classmethod
    def parse(cls, start: Any, end: Any) -> "DateRange":
        """Build a range from ``YYYY-MM-DD`` strings or date objects."""
        return cls(start=_parse_day(start, "from"), end=_parse_day(end, "to"))

    @property
    def created_at_min(self) -> str:
        return _format_utc(datetime.combine(self.start, time(0, 0, 0), tzinfo=timezone.utc))

    @property
    def created_at_max(self) -> str:
        return _format_utc(datetime.combine(self.end, time(23, 59, 59), tzinfo=timezone.utc))

    def to_query_params(self) -> dict[str, str]:
        """Date boundaries as Shopify ``orders.json`` filters."""
        return {"created_at_min": self.created_at_min, "created_at_max": self.created_at_max}


def _format_utc(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def _parse_day(value: Any, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise ValidationException(
            message=f"Invalid date for '{field}': {value!r}",
            field=field,
            invalid_value=value,
            expected_format="YYYY-MM-DD",
        ) from e
