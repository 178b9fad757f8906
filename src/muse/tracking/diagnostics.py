"""Trend and status reporting for the weight log."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from muse.tracking.log import WeightLog
from muse.tracking.models import WeightRecord, format_timestamp

# Two weeks of daily readings
DEFAULT_PERIOD = 14


class Trend(str, Enum):
    """Direction of the smoothed weight."""

    DOWN = "down"
    FLAT = "flat"
    UP = "up"


@dataclass
class WeightStatus:
    """Latest reading plus the moving-average trend, when one exists."""

    latest: WeightRecord
    period: int
    smoothed: Optional[WeightRecord]  # None with fewer than `period` readings
    trend: Optional[Trend]  # None with fewer than two smoothed points


def trend_direction(smoothed: Sequence[WeightRecord]) -> Optional[Trend]:
    """Compare the last two smoothed weights.

    Returns:
        Trend, or None if there are fewer than two smoothed records
    """
    if len(smoothed) < 2:
        return None

    last = smoothed[-1].weight
    penultimate = smoothed[-2].weight
    if last < penultimate:
        return Trend.DOWN
    if last > penultimate:
        return Trend.UP
    return Trend.FLAT


def generate_status(log: WeightLog, period: int = DEFAULT_PERIOD) -> Optional[WeightStatus]:
    """Build a status report for the log.

    Args:
        log: Weight log to summarize
        period: Moving average window

    Returns:
        WeightStatus, or None if the log is empty
    """
    records = log.as_slice()
    if not records:
        return None

    smoothed = log.moving_average(period)
    return WeightStatus(
        latest=records[-1],
        period=period,
        smoothed=smoothed[-1] if smoothed else None,
        trend=trend_direction(smoothed),
    )


def format_status(status: WeightStatus) -> str:
    """Format a status report as text."""
    latest = status.latest
    lines = [
        f"Latest weight recorded: {latest.weight}kg\t\t({format_timestamp(latest.timestamp)})",
    ]

    if status.smoothed is not None and status.trend is not None:
        lines.append(
            f"Trending weight: {status.smoothed.weight}kg\t\t\t(trending {status.trend.value})"
        )
    else:
        lines.append(f"Not enough data for a {status.period}-reading trend")

    return "\n".join(lines)
