"""Excel file reading operations.

Reads a workbook in either layout into a :class:`Dataset`. Never modifies
the workbook. Any structural problem aborts the whole import.
"""

from __future__ import annotations

import logging
from pathlib import Path

from locsheet.config import settings
from locsheet.errors import FormatError
from locsheet.excel.backend import SpreadsheetBackend
from locsheet.excel.config import (
    DATA_START_ROW,
    FIXED_SHEETS,
    FLAT_ID_COL,
    FLAT_NATIVE_COL,
    FLAT_SEQ_COL,
    HEADER_ROW,
    ID,
    IMPORT_SHEET,
    KEY,
    NAMESPACE,
    PATH,
    SEQ,
    SERVICE_DATA_MARKER,
    SERVICE_KEY_COL,
    SERVICE_NAMESPACE_COL,
    SERVICE_PATH_COL,
    SERVICE_SOURCE_COL,
    SOURCE,
    TRANSLATION,
    TRANSLATION_SHEET,
    SheetLayout,
)
from locsheet.excel.mapper import KeyIndex, group_namespaces, require_column
from locsheet.schemas.text import Dataset, Record, TranslationUnit
from locsheet.utils.text import normalize_multiline, parse_composite_key

logger = logging.getLogger(__name__)


class ExcelReader:
    """Reads translation workbooks without modification."""

    @staticmethod
    def detect_layout(file_path: str | Path) -> SheetLayout:
        """Tell which layout a workbook uses.

        MULTI if it has an Import sheet; FLAT if it has a Translation sheet
        or its first sheet starts with the ``#, ID`` header.
        """
        with SpreadsheetBackend.load(file_path) as book:
            return ExcelReader._detect(book)

    @staticmethod
    def _detect(book: SpreadsheetBackend) -> SheetLayout:
        if book.has_sheet(IMPORT_SHEET):
            return SheetLayout.MULTI
        if book.has_sheet(TRANSLATION_SHEET):
            return SheetLayout.FLAT
        ws = book.first_sheet()
        if ws is not None and book.header_values(ws)[:2] == [SEQ, ID]:
            return SheetLayout.FLAT
        raise FormatError(
            f"Unrecognized workbook layout. Sheets: {book.sheet_names}"
        )

    @staticmethod
    def read(file_path: str | Path, layout: SheetLayout | None = None) -> Dataset:
        """Read a workbook, detecting the layout when not given."""
        if layout is None:
            layout = ExcelReader.detect_layout(file_path)
        if layout == SheetLayout.MULTI:
            return ExcelReader.read_multi(file_path)
        return ExcelReader.read_flat(file_path)

    # --- Layout A ----------------------------------------------------------

    @staticmethod
    def read_flat(file_path: str | Path) -> Dataset:
        """Read the single-sheet layout.

        Rows above the sentinel give keys and per-culture text; the service
        rows below it give source, namespace and path, matched to the rows
        above by position.
        """
        with SpreadsheetBackend.load(file_path) as book:
            if book.has_sheet(TRANSLATION_SHEET):
                ws = book.sheet(TRANSLATION_SHEET)
            else:
                ws = book.first_sheet()
            if ws is None:
                raise FormatError(f"Workbook {file_path} has no sheets")
            row_count, col_count = book.dimensions(ws)
            text = book.get_text

            if (
                text(ws, HEADER_ROW, FLAT_SEQ_COL) != SEQ
                or text(ws, HEADER_ROW, FLAT_ID_COL) != ID
            ):
                raise FormatError(
                    f"Sheet '{ws.title}' does not start with '{SEQ}, {ID}' headers"
                )

            # Culture headers run from column C to the first blank header
            cultures: list[str] = []
            for col in range(FLAT_NATIVE_COL, col_count + 1):
                culture = text(ws, HEADER_ROW, col)
                if not culture:
                    break
                cultures.append(culture)
            if not cultures:
                raise FormatError(f"Sheet '{ws.title}' declares no cultures")
            native_culture = cultures[0]

            # Translation rows, down to the sentinel
            records: list[Record] = []
            row = DATA_START_ROW
            while text(ws, row, FLAT_SEQ_COL) != SERVICE_DATA_MARKER:
                if row > row_count:
                    raise FormatError(
                        f"Service data marker not found in sheet '{ws.title}'"
                    )
                key = parse_composite_key(text(ws, row, FLAT_ID_COL))
                records.append(Record(
                    key=key,
                    translations=[
                        TranslationUnit(
                            culture=culture,
                            text=normalize_multiline(
                                text(ws, row, FLAT_NATIVE_COL + offset)
                            ),
                        )
                        for offset, culture in enumerate(cultures)
                    ],
                ))
                row += 1
            marker_row = row

            # Service rows, positionally aligned with the records above
            entries: list[tuple[str, Record]] = []
            for row in range(marker_row + 1, row_count + 1):
                source = text(ws, row, SERVICE_SOURCE_COL)
                ns = text(ws, row, SERVICE_NAMESPACE_COL)
                key = text(ws, row, SERVICE_KEY_COL)
                path = text(ws, row, SERVICE_PATH_COL)
                if not (source or ns or key or path):
                    continue

                position = len(entries)
                if position >= len(records):
                    raise FormatError(
                        f"Unexpected service data row {row} (key '{key}', "
                        f"namespace '{ns}'): only {len(records)} translation rows"
                    )
                record = records[position]
                if record.key != key:
                    raise FormatError(
                        f"Unexpected key '{key}' in service data row {row} "
                        f"(namespace '{ns}'), expected '{record.key}'"
                    )
                record.source = normalize_multiline(source)
                record.path = path
                entries.append((ns, record))

            if len(entries) != len(records):
                missing = records[len(entries)]
                raise FormatError(
                    f"No service data for key '{missing.key}': "
                    f"{len(records)} translation rows, {len(entries)} service rows"
                )

        dataset = Dataset(
            namespaces=group_namespaces(entries),
            cultures=cultures,
            native_culture=native_culture,
        )
        logger.info(
            "Read %d records in %d namespaces (%d cultures) from %s",
            len(records), len(dataset.namespaces), len(cultures), file_path,
        )
        return dataset

    # --- Layout B ----------------------------------------------------------

    @staticmethod
    def read_multi(file_path: str | Path) -> Dataset:
        """Read the multi-sheet layout.

        The Import sheet lists every record; each culture sheet is joined
        to it by Key. Every Import key must exist in every culture sheet.
        """
        native = settings.NATIVE_CULTURE

        with SpreadsheetBackend.load(file_path) as book:
            if not book.has_sheet(IMPORT_SHEET):
                raise FormatError(f"Workbook {file_path} has no '{IMPORT_SHEET}' sheet")

            culture_sheets: dict[str, KeyIndex] = {}
            translation_cols: dict[str, int] = {}
            for name in book.sheet_names:
                if name in FIXED_SHEETS or name == native:
                    continue
                ws = book.sheet(name)
                culture_sheets[name] = KeyIndex(ws)
                translation_cols[name] = require_column(ws, TRANSLATION)
            cultures = [native, *culture_sheets]

            import_ws = book.sheet(IMPORT_SHEET)
            key_col = require_column(import_ws, KEY)
            source_col = require_column(import_ws, SOURCE)
            ns_col = require_column(import_ws, NAMESPACE)
            path_col = require_column(import_ws, PATH)
            row_count, _ = book.dimensions(import_ws)
            text = book.get_text

            entries: list[tuple[str, Record]] = []
            for row in range(DATA_START_ROW, row_count + 1):
                key = text(import_ws, row, key_col)
                if not key:
                    continue
                source = normalize_multiline(text(import_ws, row, source_col))
                ns = text(import_ws, row, ns_col)
                record = Record(
                    key=key,
                    source=source,
                    path=text(import_ws, row, path_col),
                    translations=[TranslationUnit(culture=native, text=source)],
                )
                for culture, index in culture_sheets.items():
                    culture_row = index.row_for(key)
                    if culture_row is None:
                        raise FormatError(
                            f"Culture '{culture}' does not contain a translation "
                            f"for key '{key}' (namespace '{ns}'). "
                            f"Re-sync the workbook."
                        )
                    ws = book.sheet(culture)
                    record.translations.append(TranslationUnit(
                        culture=culture,
                        text=normalize_multiline(
                            text(ws, culture_row, translation_cols[culture])
                        ),
                    ))
                entries.append((ns, record))

        dataset = Dataset(
            namespaces=group_namespaces(entries),
            cultures=cultures,
            native_culture=native,
        )
        logger.info(
            "Read %d records in %d namespaces (%d cultures) from %s",
            len(entries), len(dataset.namespaces), len(cultures), file_path,
        )
        return dataset
