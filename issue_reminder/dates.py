"""Relative date expressions and the run's time window.

Supports the expressions the reminder is usually configured with:
- ``now``, ``today``, ``yesterday``, ``tomorrow``
- ``7 days ago``, ``day ago``, ``last week``, ``next month``
- ``-3 hours``, ``+1 week``, ``2 weeks``
- ISO dates and datetimes: 2024-01-01, 2024-01-01T10:00:00Z

Months count as 30 days and years as 365 days. Naive absolute dates are
taken as UTC.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .config import ConfigurationError

UNIT_SECONDS = {
    "second": 1,
    "sec": 1,
    "minute": 60,
    "min": 60,
    "hour": 3600,
    "day": 86400,
    "week": 7 * 86400,
    "fortnight": 14 * 86400,
    "month": 30 * 86400,
    "year": 365 * 86400,
}

NAMED_OFFSETS = {
    "now": timedelta(0),
    "today": timedelta(0),
    "yesterday": timedelta(days=-1),
    "tomorrow": timedelta(days=1),
}

RELATIVE_PATTERN = re.compile(
    r"^(?:(?P<word>last|next)\s+|(?P<sign>[+-])?\s*(?P<count>\d+)?\s*)"
    r"(?P<unit>" + "|".join(sorted(UNIT_SECONDS, key=len, reverse=True)) + r")s?"
    r"(?P<ago>\s+ago)?$"
)

ABSOLUTE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
]


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp into an aware UTC datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _relative_offset(expression: str) -> timedelta | None:
    if expression in NAMED_OFFSETS:
        return NAMED_OFFSETS[expression]

    match = RELATIVE_PATTERN.match(expression)
    if not match:
        return None

    count = int(match.group("count") or 1)
    if match.group("sign") == "-" or match.group("word") == "last":
        count = -count
    if match.group("ago"):
        count = -count
    return timedelta(seconds=count * UNIT_SECONDS[match.group("unit")])


def _absolute(expression: str) -> datetime | None:
    try:
        return parse_timestamp(expression)
    except ValueError:
        pass
    for fmt in ABSOLUTE_FORMATS:
        try:
            return datetime.strptime(expression, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def parse_date_expression(expression: str, now: datetime) -> datetime:
    """Resolve ``expression`` against ``now``.

    Raises:
        ConfigurationError: If the expression is not understood.
    """
    normalized = " ".join(expression.strip().lower().split())
    offset = _relative_offset(normalized)
    if offset is not None:
        return now + offset

    absolute = _absolute(expression.strip())
    if absolute is not None:
        return absolute

    raise ConfigurationError(
        f"Unable to parse date '{expression}'. "
        "Use a relative expression such as '7 days ago' or an ISO date like 2024-01-01."
    )


@dataclass(frozen=True)
class TimeWindow:
    """Boundaries of one run, all derived from a single ``now``."""

    now: datetime
    oldest: datetime
    newest: datetime

    @property
    def since_param(self) -> str:
        return format_timestamp(self.oldest)


def resolve_window(since: str, until: str, now: datetime | None = None) -> TimeWindow:
    now = now or datetime.now(timezone.utc)
    return TimeWindow(
        now=now,
        oldest=parse_date_expression(since, now),
        newest=parse_date_expression(until, now),
    )
