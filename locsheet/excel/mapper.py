"""Column and key mapping between workbook rows and dataset records.

- Header lookup: locate a column by its header text instead of a fixed index.
- KeyIndex: key -> row map for a culture sheet, built once per sheet.
- Namespace grouping: rebuild namespaces from flat row order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from openpyxl.worksheet.worksheet import Worksheet

from locsheet.errors import MissingColumnError
from locsheet.excel.backend import SpreadsheetBackend
from locsheet.excel.config import (
    COLUMN_NOT_FOUND,
    DATA_START_ROW,
    KEY,
    NAMESPACE,
    PATH,
    SOURCE,
    TRANSLATION,
)
from locsheet.schemas.text import CultureText, FieldRef, Namespace, Record, RecordField

logger = logging.getLogger(__name__)

# Columns bound to record data. Anything else (Context, Done, Comment, ID)
# is a reviewer column and stays blank on export.
_COLUMN_FIELDS: dict[str, RecordField] = {
    KEY: RecordField.KEY,
    SOURCE: RecordField.SOURCE,
    NAMESPACE: RecordField.NAMESPACE,
    PATH: RecordField.PATH,
}


def column_field(header: str, sheet_culture: str | None = None) -> FieldRef | None:
    """Return the record field a column header is bound to, if any.

    ``Translation`` binds to the culture the sheet is named after.
    """
    if header == TRANSLATION:
        return CultureText(sheet_culture) if sheet_culture else None
    return _COLUMN_FIELDS.get(header)


def require_column(ws: Worksheet, header: str) -> int:
    """Like :meth:`SpreadsheetBackend.find_column` but raise when absent."""
    col = SpreadsheetBackend.find_column(ws, header)
    if col == COLUMN_NOT_FOUND:
        raise MissingColumnError(ws.title, header)
    return col


def write_record_row(
    ws: Worksheet,
    row: int,
    columns: Iterable[str],
    record: Record,
    namespace: str,
    sheet_culture: str | None = None,
) -> None:
    """Write one record into ``row`` of a header-driven sheet.

    Each column is located by header; a column missing from the sheet is
    skipped. The Namespace column takes ``namespace`` (the owning
    namespace's name) rather than the record's own attribute.
    """
    for header in columns:
        col = SpreadsheetBackend.find_column(ws, header)
        if col == COLUMN_NOT_FOUND:
            logger.debug("Sheet '%s' has no '%s' column, skipping", ws.title, header)
            continue
        field = column_field(header, sheet_culture)
        if field is None:
            continue
        if field is RecordField.NAMESPACE:
            value = namespace
        else:
            value = record.get(field)
        SpreadsheetBackend.set_value(ws, row, col, value)


class KeyIndex:
    """Maps the Key column of a sheet to row numbers.

    When a key appears more than once the first row wins.
    """

    def __init__(self, ws: Worksheet) -> None:
        self._ws = ws
        self._key_col = require_column(ws, KEY)
        self._rows: dict[str, int] = {}

        for row in range(DATA_START_ROW, ws.max_row + 1):
            key = SpreadsheetBackend.get_text(ws, row, self._key_col)
            if key not in self._rows:
                self._rows[key] = row

    @property
    def sheet_name(self) -> str:
        return self._ws.title

    def row_for(self, key: str) -> int | None:
        """Row number for ``key`` or None if the sheet does not contain it."""
        return self._rows.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._rows

    def __len__(self) -> int:
        return len(self._rows)


def group_namespaces(entries: Iterable[tuple[str, Record]]) -> list[Namespace]:
    """Group ``(namespace_name, record)`` pairs into namespaces by runs.

    A new namespace starts whenever the name differs from the previous
    entry's. A name that reappears later starts a second namespace entry.
    """
    namespaces: list[Namespace] = []
    current: Namespace | None = None
    for name, record in entries:
        if current is None or current.name != name:
            current = Namespace(name=name)
            namespaces.append(current)
        record.namespace = name
        current.children.append(record)
    return namespaces
