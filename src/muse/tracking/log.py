"""Chronologically ordered weight log."""

from __future__ import annotations

import io
from operator import attrgetter
from typing import IO, Iterator, Union

import numpy as np
import pandas as pd

from muse.errors import ParseError, PreconditionError
from muse.tracking.models import Weight, WeightRecord, format_timestamp, parse_timestamp

CSV_COLUMNS = ["weight", "timestamp"]

CsvSource = Union[IO[bytes], IO[str], bytes, str]


def _read_text(source: CsvSource) -> str:
    """Read a CSV source fully and decode it as UTF-8."""
    data = source if isinstance(source, (bytes, str)) else source.read()
    if isinstance(data, bytes):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"weight log is not valid UTF-8: {e}") from e
    return data


class WeightLog:
    """An ordered collection of weight records.

    Records are kept in non-decreasing timestamp order as long as they are
    added through insert(). A log loaded from CSV keeps the file's order.
    """

    def __init__(self) -> None:
        self._records: list[WeightRecord] = []

    @classmethod
    def from_csv(cls, source: CsvSource) -> "WeightLog":
        """Load a log from CSV text.

        CSV format:
            weight,timestamp
            76.0,2019-01-01T00:06:00Z

        Args:
            source: Binary or text stream, or the raw bytes/str content

        Returns:
            WeightLog with records in file order

        Raises:
            ParseError: If the header, any weight or any timestamp is invalid.
                Nothing is returned on failure.
        """
        text = _read_text(source)
        try:
            # Header is validated by hand so a header-less file cannot pass
            frame = pd.read_csv(
                io.StringIO(text), header=None, dtype=str, na_filter=False
            )
        except pd.errors.EmptyDataError as e:
            raise ParseError("missing header (expected 'weight,timestamp')") from e
        except pd.errors.ParserError as e:
            raise ParseError(f"malformed CSV: {e}") from e

        rows = list(frame.itertuples(index=False, name=None))
        header = [str(field) for field in rows[0]]
        if header != CSV_COLUMNS:
            raise ParseError(
                f"invalid header {','.join(header)!r} (expected 'weight,timestamp')"
            )

        log = cls()
        for row_number, (weight, timestamp) in enumerate(rows[1:], start=1):
            if not isinstance(weight, str) or not isinstance(timestamp, str):
                raise ParseError("expected 2 fields", row=row_number)
            try:
                record = WeightRecord(Weight.parse(weight), parse_timestamp(timestamp))
            except ParseError as e:
                raise ParseError(str(e), row=row_number) from e
            log._records.append(record)
        return log

    def to_csv(self) -> str:
        """Serialize the log in the format read by from_csv()."""
        frame = pd.DataFrame(
            {
                "weight": [str(r.weight) for r in self._records],
                "timestamp": [format_timestamp(r.timestamp) for r in self._records],
            },
            columns=CSV_COLUMNS,
        )
        return frame.to_csv(index=False, lineterminator="\n")

    def insert(self, record: WeightRecord) -> None:
        """Append a record, re-sorting only if it is older than the last one.

        The sort is stable, so records with equal timestamps keep the order
        in which they were inserted.
        """
        needs_sort = bool(self._records) and record.timestamp < self._records[-1].timestamp
        self._records.append(record)
        if needs_sort:
            self._records.sort(key=attrgetter("timestamp"))

    def as_slice(self) -> tuple[WeightRecord, ...]:
        """Return the records in stored order."""
        return tuple(self._records)

    def moving_average(self, period: int) -> list[WeightRecord]:
        """Simple moving average over consecutive stored records.

        Each window of `period` records yields one record whose weight is
        the window mean (integer division on tenths, remainder dropped) and
        whose timestamp is the window's last timestamp.

        Args:
            period: Window size, must be at least 1

        Returns:
            len(log) - period + 1 records, or [] if the log is shorter
            than the period

        Raises:
            PreconditionError: If period is not a positive integer

        Example:
            >>> # 76.0, 75.7, 75.3 with period 2
            >>> [str(r.weight) for r in log.moving_average(2)]
            ['75.8', '75.5']
        """
        if not isinstance(period, int) or period < 1:
            raise PreconditionError(f"period must be a positive integer, got {period!r}")
        if len(self._records) < period:
            return []

        # Object dtype keeps Python ints, so weights have no upper bound
        tenths = np.array([r.weight.tenths for r in self._records], dtype=object)
        prefix = np.concatenate(([0], np.cumsum(tenths)))
        sums = prefix[period:] - prefix[:-period]
        means = sums // period

        return [
            WeightRecord(Weight(int(mean)), record.timestamp)
            for mean, record in zip(means, self._records[period - 1 :])
        ]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[WeightRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"WeightLog({len(self._records)} records)"
