"""Data models for the weight log."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from muse.errors import ParseError

# Whole kilograms with at most one decimal digit: "76", "76.0"
_WEIGHT_PATTERN = re.compile(r"^([0-9]+)(?:\.([0-9]))?$")

# RFC 3339 date-time, offsets limited to hours and minutes
_TIMESTAMP_PATTERN = re.compile(
    r"^[0-9]{4}-[0-9]{2}-[0-9]{2}[Tt ][0-9]{2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]+)?"
    r"(?:[Zz]|[+-][0-9]{2}:[0-9]{2})$"
)


@dataclass(frozen=True, order=True)
class Weight:
    """A body weight held as an integer number of tenths of a kilogram.

    Keeping the value fixed-point makes averaging and display exact:
    Weight(760) is 76.0 kg.
    """

    tenths: int

    def __post_init__(self) -> None:
        if isinstance(self.tenths, bool) or not isinstance(self.tenths, int):
            raise ValueError(f"tenths must be an int, got {self.tenths!r}")
        if self.tenths < 0:
            raise ValueError(f"weight must be non-negative, got {self.tenths}")

    @classmethod
    def parse(cls, text: str) -> "Weight":
        """Parse a kilogram literal such as "76.0".

        At most one decimal digit is allowed; extra precision is rejected
        rather than truncated.

        Raises:
            ParseError: If the literal is not a valid tenths-of-a-kg value
        """
        match = _WEIGHT_PATTERN.match(text.strip())
        if match is None:
            raise ParseError(f"invalid weight '{text}' (expected e.g. 76.0)")
        whole, decimal = match.groups()
        return cls(int(whole) * 10 + int(decimal or 0))

    @property
    def kg(self) -> float:
        """Return the weight in kilograms as a float (for display only)."""
        return self.tenths / 10

    def __str__(self) -> str:
        whole, decimal = divmod(self.tenths, 10)
        return f"{whole}.{decimal}"


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Raises:
        ParseError: If the text is not RFC 3339 (e.g. "+00:00:00" offsets)
    """
    text = text.strip()
    if _TIMESTAMP_PATTERN.match(text) is None:
        raise ParseError(f"invalid RFC 3339 timestamp '{text}'")
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        # Out of range fields such as month 13
        raise ParseError(f"invalid RFC 3339 timestamp '{text}': {e}") from e
    return parsed.astimezone(timezone.utc)


def format_timestamp(timestamp: datetime) -> str:
    """Format a UTC datetime as RFC 3339 with a trailing Z."""
    return timestamp.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class WeightRecord:
    """A single weight reading at an instant."""

    weight: Weight
    timestamp: datetime

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is None or self.timestamp.utcoffset() is None:
            raise ValueError(f"timestamp must be timezone-aware, got {self.timestamp!r}")
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "timestamp", self.timestamp.astimezone(timezone.utc))

    @classmethod
    def of(cls, weight: Weight) -> "WeightRecord":
        """Create a record for a weight measured now."""
        return cls(weight, datetime.now(timezone.utc))

    def at(self, timestamp: datetime) -> "WeightRecord":
        """Return a copy of this record measured at another instant."""
        return replace(self, timestamp=timestamp)
