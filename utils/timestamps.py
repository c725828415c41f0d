# utils/timestamps.py
"""
Timestamp helpers for TempleOSRS datapoints.

The API keys every datapoint with a naive 'YYYY-MM-DD HH:MM:SS' string that
is implicitly UTC. This module turns those strings into ordered, hashable
values and back again without any timezone conversion.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"

# strptime tolerates unpadded fields ("2023-1-5 3:4:5"); the API never sends those
_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


class TimestampParseError(ValueError):
    """Raised when a string is not a valid 'YYYY-MM-DD HH:MM:SS' timestamp."""

    def __init__(self, raw: object):
        self.raw = raw
        super().__init__(f"invalid timestamp {raw!r} (expected {TIMESTAMP_FORMAT})")


@dataclass(frozen=True, order=True)
class Timestamp:
    """A UTC instant. Ordering and equality come from the wrapped datetime."""

    instant: datetime

    def epoch_seconds(self) -> float:
        return self.instant.timestamp()

    def __str__(self) -> str:
        return format_timestamp(self)


def parse_timestamp(s: str) -> Timestamp:
    """
    Parse an API timestamp string.

    Args:
        s: String in 'YYYY-MM-DD HH:MM:SS' format, interpreted as UTC.

    Returns:
        The matching Timestamp.

    Raises:
        TimestampParseError: wrong separators, unpadded or out-of-range
            components, trailing characters or a non-string value.
    """
    if not isinstance(s, str) or not _TIMESTAMP_RE.fullmatch(s):
        raise TimestampParseError(s)
    try:
        naive = datetime.strptime(s, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise TimestampParseError(s) from exc
    return Timestamp(naive.replace(tzinfo=timezone.utc))


def _ymd(d: datetime) -> str:
    # strftime("%Y") does not pad years below 1000 on glibc
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def format_timestamp(ts: Timestamp) -> str:
    """Inverse of parse_timestamp."""
    d = ts.instant.astimezone(timezone.utc)
    return f"{_ymd(d)} {d.hour:02d}:{d.minute:02d}:{d.second:02d}"


def from_epoch(seconds: float) -> Timestamp:
    return Timestamp(datetime.fromtimestamp(seconds, tz=timezone.utc))


def format_date(seconds: float) -> str:
    """Calendar date ('YYYY-MM-DD', UTC) for an epoch-seconds value."""
    return _ymd(datetime.fromtimestamp(seconds, tz=timezone.utc))
