"""Pytest fixtures for muse tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from muse.logconfig import configure_logging

SAMPLE_CSV = (
    "weight,timestamp\n"
    "76.0,2019-01-01T00:06:00Z\n"
    "75.7,2019-01-02T00:06:00Z\n"
    "75.3,2019-01-03T00:06:00Z\n"
)


@pytest.fixture(autouse=True)
def quiet_logging():
    """Route structlog through stdlib logging at WARNING for every test."""
    configure_logging("WARNING")


@pytest.fixture
def day1() -> datetime:
    return datetime(2019, 1, 1, 0, 6, tzinfo=timezone.utc)


@pytest.fixture
def sample_csv() -> bytes:
    """Three daily readings: 76.0, 75.7, 75.3 kg."""
    return SAMPLE_CSV.encode("utf-8")


@pytest.fixture
def sample_csv_path(tmp_path, sample_csv):
    """Write the sample readings to a temporary file."""
    path = tmp_path / "weight.csv"
    path.write_bytes(sample_csv)
    return path
