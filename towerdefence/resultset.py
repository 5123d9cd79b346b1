"""Run SQL against SQLite and hold the rows as text, the way the progress store reads them."""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass, field
from typing import Iterator

from .timestamp import MONTH_ABBREVIATIONS, SQLITE_FORMATS, Timestamp

_INT = re.compile(r"\s*([+-]?\d+)")


class SqlError(Exception):
    """Raised when a query fails to run."""


@dataclass
class ResultSet:
    """Rows returned by a query, every value stored as text; NULL becomes the empty string."""

    columns: list[str] = field(default_factory=list)
    rows: list[tuple[str, ...]] = field(default_factory=list)

    def row_count(self) -> int:
        return len(self.rows)

    def column_name(self, index: int) -> str:
        if not 0 <= index < len(self.columns):
            raise IndexError(f"column index out of range: {index}")
        return self.columns[index]

    def text(self, row: int, col: int) -> str:
        if not 0 <= row < len(self.rows):
            raise IndexError(f"row index out of range: {row}")
        values = self.rows[row]
        if not 0 <= col < len(values):
            raise IndexError(f"column index out of range: {col}")
        return values[col]

    def integer(self, row: int, col: int) -> int:
        """The value as an integer; empty (NULL) reads as 0."""
        value = self.text(row, col)
        if value == "":
            return 0
        match = _INT.match(value)
        if match is None:
            raise ValueError(f"not an integer: {value!r}")
        return int(match.group(1))

    def timestamp(self, row: int, col: int) -> Timestamp | None:
        """The value as a timestamp in one of SQLite's date layouts, or None for NULL."""
        value = self.text(row, col)
        if value in ("", "NULL"):
            return None
        for fmt in SQLITE_FORMATS:
            if len(fmt) != len(value):
                continue
            try:
                return Timestamp.parse(value, fmt)
            except ValueError:
                continue
        raise ValueError(f"not a timestamp: {value!r}")

    def blob(self, row: int, col: int) -> bytes:
        return self.text(row, col).encode("utf-8", "surrogateescape")


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", "surrogateescape")
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _split_statements(query: str) -> Iterator[str]:
    pending = ""
    for piece in query.split(";"):
        pending += piece + ";"
        if sqlite3.complete_statement(pending):
            if pending.strip(" \t\r\n;"):
                yield pending
            pending = ""
    rest = pending[:-1]
    if rest.strip():
        yield rest


def _commit_pending(connection: sqlite3.Connection) -> None:
    try:
        if connection.in_transaction:
            connection.commit()
    except sqlite3.ProgrammingError:
        pass  # connection already closed


def execute_sql(connection: sqlite3.Connection, query: str) -> ResultSet:
    """Run one or more ';'-separated statements and collect every returned row."""
    result = ResultSet()
    try:
        for statement in _split_statements(query):
            cursor = connection.execute(statement)
            for row in cursor:
                if not result.columns:
                    result.columns = [column[0] for column in cursor.description]
                result.rows.append(tuple(_as_text(value) for value in row))
    except sqlite3.Error as exc:
        _commit_pending(connection)
        raise SqlError(str(exc)) from exc
    _commit_pending(connection)
    return result


def parse_user_date(text: str) -> Timestamp | None:
    """A 'DD-MON-YYYY' date, or None if the text is not one."""
    try:
        return Timestamp.parse(text, "DD-MON-YYYY")
    except ValueError:
        return None


def _leading_int(text: str) -> int:
    match = _INT.match(text)
    return int(match.group(1)) if match else 0


def decode_user_date(text: str) -> tuple[int, int, int] | None:
    """Split a 'DD-MON-YYYY' date into (year, month, day) with loose range checks."""
    if text[2:3] != "-" or text[6:7] != "-":
        return None
    day = _leading_int(text[0:2])
    name = text[3:6].upper()
    month = next(
        (index for index, abbr in enumerate(MONTH_ABBREVIATIONS, start=1) if abbr.upper() == name),
        0,
    )
    year = _leading_int(text[7:11])
    if not 1 <= day <= 31 or not 1 <= month <= 12 or not 1900 <= year <= 2500:
        return None
    return (year, month, day)