"""Record-to-CSV conversion.

WHAT:
    Converts an ordered sequence of heterogeneous records (str -> scalar
    mappings) into a delimited-text document with one unified header.
    The header is the ordered union of field names, by first appearance.
    Missing fields become empty cells.

WHY:
    Google Ads reports come back with different field sets per row
    (optional metrics, per-level ids). A single stable header keeps the
    downloaded CSV loadable in spreadsheets and BI tools.

REFERENCES:
    adsreport/services/records.py (decoding DTOs into records)
    adsreport/routers/reports.py (CSV download endpoints)
"""

from __future__ import annotations

import csv
import io
import logging
import math
from decimal import Decimal
from typing import Iterable, Iterator, List, Mapping, Optional, Sequence, TextIO, Union

from adsreport.errors import EmptyInputError, SerializationError

logger = logging.getLogger(__name__)

Scalar = Union[str, int, float, Decimal, bool, None]
Record = Mapping[str, Scalar]


class _LineBuffer:
    """Write target that hands back whatever the csv writer produced last."""

    def __init__(self) -> None:
        self._parts: List[str] = []

    def write(self, text: str) -> int:
        self._parts.append(text)
        return len(text)

    def pop(self) -> str:
        out = "".join(self._parts)
        self._parts.clear()
        return out


def _as_sequence(records: Iterable[Record]) -> Sequence[Record]:
    # Two passes are needed (header, then rows); one-shot iterators are materialized
    if isinstance(records, Sequence):
        return records
    return list(records)


def column_set(records: Iterable[Record]) -> List[str]:
    """Return the union of field names in first-seen order."""
    columns: List[str] = []
    seen = set()
    for record in records:
        for key in record.keys():
            if key not in seen:
                seen.add(key)
                columns.append(key)
    return columns


def format_scalar(value: Scalar, field: Optional[str] = None) -> str:
    """Render a scalar as a single cell.

    Booleans become ``true``/``false`` and ``None`` becomes an empty string.
    Numbers are written in fixed-point notation without grouping; floats keep
    their shortest round-trip digits, so ``1e-05`` is written as ``0.00001``.
    Anything that is not a scalar raises SerializationError.
    """
    # bool first: bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(
                f"Non-finite number {value!r} in field {field!r}",
                field=field,
                value_type="float",
            )
        text = repr(value)
        if "e" in text:
            # Spell out exponents: 1e-05 -> 0.00001
            return format(Decimal(text), "f")
        return text
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise SerializationError(
                f"Non-finite number {value!r} in field {field!r}",
                field=field,
                value_type="Decimal",
            )
        return format(value, "f")
    type_name = type(value).__name__
    raise SerializationError(
        f"Unsupported value type {type_name} in field {field!r}",
        field=field,
        value_type=type_name,
    )


def iter_rows(records: Iterable[Record], allow_empty: bool = False) -> Iterator[List[str]]:
    """Yield the header row, then one row per record aligned to the header.

    Raises:
        EmptyInputError: no header can be derived (no records, or only
            records without fields) and ``allow_empty`` is False.
    """
    rows = _as_sequence(records)
    columns = column_set(rows)
    if not columns:
        if allow_empty:
            return
        raise EmptyInputError()
    yield list(columns)
    for record in rows:
        yield [format_scalar(record.get(col), col) for col in columns]


def _writer(sink: TextIO, delimiter: str, lineterminator: str):
    return csv.writer(
        sink,
        delimiter=delimiter,
        quotechar='"',
        doublequote=True,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator=lineterminator,
    )


def write_records(
    records: Iterable[Record],
    sink: TextIO,
    delimiter: str = ",",
    allow_empty: bool = False,
    lineterminator: str = "\n",
) -> int:
    """Write records as CSV straight into ``sink``.

    Args:
        records: Ordered records; materialized if given as an iterator
        sink: Any text stream with a ``write`` method
        delimiter: Single-character field separator
        allow_empty: Emit an empty document instead of raising on no records
        lineterminator: Line ending for every row, header included

    Returns:
        Number of data rows written (header excluded).
    """
    row_iter = iter_rows(records, allow_empty=allow_empty)
    writer = _writer(sink, delimiter, lineterminator)
    written = 0
    # Index 0 is the header
    for index, row in enumerate(row_iter):
        writer.writerow(row)
        written = index
    logger.debug("[CSV_EXPORT] Wrote %d rows", written)
    return written


def iter_csv_chunks(
    records: Iterable[Record],
    delimiter: str = ",",
    allow_empty: bool = False,
    lineterminator: str = "\n",
) -> Iterator[str]:
    """Return an iterator over the document, one line per item.

    The column set is derived eagerly, so EmptyInputError is raised by this
    call itself and not by the first ``next()`` on the returned iterator.
    That keeps HTTP handlers able to answer with an error status before any
    body bytes are sent.

    Every cell is formatted up front as well, so the whole formatted table
    is held in memory before the first line is yielded. Use write_records
    to stream into a sink without building the table.
    """
    table = list(iter_rows(records, allow_empty=allow_empty))

    def _generate() -> Iterator[str]:
        buffer = _LineBuffer()
        writer = _writer(buffer, delimiter, lineterminator)
        for row in table:
            writer.writerow(row)
            yield buffer.pop()

    return _generate()


def records_to_text(
    records: Iterable[Record],
    delimiter: str = ",",
    allow_empty: bool = False,
    lineterminator: str = "\n",
) -> str:
    """Convert records to an in-memory CSV document."""
    out = io.StringIO()
    write_records(
        records,
        out,
        delimiter=delimiter,
        allow_empty=allow_empty,
        lineterminator=lineterminator,
    )
    return out.getvalue()
