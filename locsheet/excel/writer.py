"""Excel file writing operations.

Builds a fresh workbook from a :class:`Dataset` in either layout, styles it
for translators and writes it to disk. Row order always follows
namespace/record traversal order so the reader can match rows back.
"""

from __future__ import annotations

import logging
from pathlib import Path

from openpyxl.worksheet.worksheet import Worksheet

from locsheet.config import settings
from locsheet.errors import FormatError
from locsheet.excel.backend import SpreadsheetBackend
from locsheet.excel.config import (
    CATEGORIES_SHEET,
    CATEGORY_CODES,
    CATEGORY_COLUMNS,
    COLUMN_NOT_FOUND,
    CONTROL_COLUMNS,
    CONTROL_SHEET,
    CULTURE_COLUMNS,
    CULTURE_TEXT_COLUMNS,
    CULTURE_TEXT_WIDTH,
    DATA_START_ROW,
    DONE,
    DONE_EMPTY_FILL,
    DONE_FILLED_FILL,
    EVEN_COL_FILL,
    FIXED_SHEETS,
    FLAT_ID_COL,
    FLAT_ID_WIDTH,
    FLAT_NATIVE_COL,
    FLAT_SEQ_COL,
    FLAT_SEQ_WIDTH,
    FLAT_TEXT_WIDTH,
    HEADER_FILL,
    HEADER_ROW,
    ID,
    IMPORT_COLUMNS,
    IMPORT_SHEET,
    INVALID_SHEET_TITLE_CHARS,
    MARKER_FONT,
    MAX_SHEET_TITLE_LENGTH,
    MISSING_FILL,
    NATIVE_FILL,
    ODD_COL_FILL,
    SEQ,
    SERVICE_DATA_MARKER,
    SERVICE_FONT,
    SERVICE_KEY_COL,
    SERVICE_NAMESPACE_COL,
    SERVICE_PATH_COL,
    SERVICE_SOURCE_COL,
    TRANSLATION_SHEET,
    SheetLayout,
)
from locsheet.excel.mapper import write_record_row
from locsheet.schemas.text import Dataset
from locsheet.utils.text import COMPOSITE_SEPARATOR, make_composite_name

logger = logging.getLogger(__name__)


def _translation_fill(text: str, col: int) -> str:
    """Background for a non-native culture cell in the flat layout."""
    if not text.strip():
        return MISSING_FILL
    return EVEN_COL_FILL if col % 2 == 0 else ODD_COL_FILL


def _style_header(ws: Worksheet) -> None:
    """Orange, centered header row (not used on the Import sheet)."""
    SpreadsheetBackend.set_row_style(
        ws, HEADER_ROW, ws.max_column, fill=HEADER_FILL, horizontal="center",
    )


def _check_composite_ids(dataset: Dataset) -> None:
    """Reject names that would make an ``ID`` cell ambiguous."""
    for ns, record in dataset.records():
        if COMPOSITE_SEPARATOR in ns.name or COMPOSITE_SEPARATOR in record.key:
            raise FormatError(
                f"Key '{record.key}' in namespace '{ns.name}' contains "
                f"'{COMPOSITE_SEPARATOR}', which the flat layout uses to "
                f"join namespace and key"
            )


def _check_culture_sheet_titles(dataset: Dataset) -> None:
    """Reject cultures that cannot be stored as their own sheet."""
    taken = {name.lower() for name in FIXED_SHEETS}
    for culture in dataset.other_cultures:
        if not culture or len(culture) > MAX_SHEET_TITLE_LENGTH:
            raise FormatError(
                f"Culture '{culture}' is not a valid sheet title "
                f"(1 to {MAX_SHEET_TITLE_LENGTH} characters)"
            )
        bad = sorted({ch for ch in culture if ch in INVALID_SHEET_TITLE_CHARS})
        if bad:
            raise FormatError(
                f"Culture '{culture}' is not a valid sheet title "
                f"(contains {''.join(bad)!r})"
            )
        if culture.lower() in taken:
            raise FormatError(
                f"Culture '{culture}' clashes with another sheet of the "
                f"multi-sheet layout"
            )
        taken.add(culture.lower())


class ExcelWriter:
    """Writes datasets to new Excel workbooks."""

    @staticmethod
    def check(dataset: Dataset, layout: SheetLayout = SheetLayout.FLAT) -> None:
        """Make sure ``dataset`` can be written in ``layout`` and read back.

        Raises:
            FormatError: If the dataset is malformed or uses a name the
                layout cannot store.
        """
        dataset.validate_structure()
        if layout == SheetLayout.MULTI:
            _check_culture_sheet_titles(dataset)
        else:
            _check_composite_ids(dataset)

    @staticmethod
    def write(
        dataset: Dataset,
        file_path: str | Path,
        layout: SheetLayout = SheetLayout.FLAT,
    ) -> None:
        if layout == SheetLayout.MULTI:
            ExcelWriter.write_multi(dataset, file_path)
        else:
            ExcelWriter.write_flat(dataset, file_path)

    # --- Layout A ----------------------------------------------------------

    @staticmethod
    def write_flat(dataset: Dataset, file_path: str | Path) -> None:
        """Export ``dataset`` to ``file_path`` using the single-sheet layout."""
        _check_composite_ids(dataset)
        with SpreadsheetBackend.new() as book:
            ExcelWriter._fill_flat(book, dataset)
            book.save(file_path)
        logger.info(
            "Wrote %d records (flat layout) to %s", dataset.record_count, file_path,
        )

    @staticmethod
    def build_flat(dataset: Dataset) -> bytes:
        """Serialize ``dataset`` in the single-sheet layout."""
        _check_composite_ids(dataset)
        with SpreadsheetBackend.new() as book:
            ExcelWriter._fill_flat(book, dataset)
            return book.to_bytes()

    @staticmethod
    def _fill_flat(book: SpreadsheetBackend, dataset: Dataset) -> None:
        """Lay out the single sheet.

        Layout: header ``#, ID, <native>, <others>``; one row per record;
        the service data marker; then one ``source, namespace, key, path``
        row per record in the same order.
        """
        others = dataset.other_cultures
        ws = book.create_sheet(
            TRANSLATION_SHEET, [SEQ, ID, dataset.native_culture, *others],
        )
        last_col = FLAT_NATIVE_COL + len(others)

        # Caption
        book.set_row_style(
            ws, HEADER_ROW, last_col,
            fill=HEADER_FILL, bold=True, horizontal="center",
        )
        book.set_column_width(ws, FLAT_SEQ_COL, FLAT_SEQ_WIDTH)
        book.set_column_width(ws, FLAT_ID_COL, FLAT_ID_WIDTH)
        for col in range(FLAT_NATIVE_COL, last_col + 1):
            book.set_column_width(ws, col, FLAT_TEXT_WIDTH)

        row = DATA_START_ROW
        for ns, record in dataset.records():
            book.set_value(ws, row, FLAT_SEQ_COL, row - 1)
            book.set_style(ws, row, FLAT_SEQ_COL, horizontal="center")
            book.set_value(ws, row, FLAT_ID_COL, make_composite_name(ns.name, record.key))

            book.set_value(ws, row, FLAT_NATIVE_COL, record.text(dataset.native_culture))
            book.set_style(ws, row, FLAT_NATIVE_COL, fill=NATIVE_FILL, wrap=True)

            for col, culture in enumerate(others, FLAT_NATIVE_COL + 1):
                translation = record.text(culture)
                book.set_value(ws, row, col, translation)
                book.set_style(
                    ws, row, col, fill=_translation_fill(translation, col), wrap=True,
                )
            row += 1

        book.set_value(ws, row, FLAT_SEQ_COL, SERVICE_DATA_MARKER)
        book.set_style(ws, row, FLAT_SEQ_COL, bold=True, font_color=MARKER_FONT)
        row += 1

        for ns, record in dataset.records():
            book.set_value(ws, row, SERVICE_SOURCE_COL, record.source)
            book.set_value(ws, row, SERVICE_NAMESPACE_COL, ns.name)
            book.set_value(ws, row, SERVICE_KEY_COL, record.key)
            book.set_value(ws, row, SERVICE_PATH_COL, record.path)
            book.set_row_style(ws, row, SERVICE_PATH_COL, font_color=SERVICE_FONT)
            row += 1

    # --- Layout B ----------------------------------------------------------

    @staticmethod
    def write_multi(dataset: Dataset, file_path: str | Path) -> None:
        """Export ``dataset`` to ``file_path`` using the multi-sheet layout."""
        _check_culture_sheet_titles(dataset)
        with SpreadsheetBackend.new() as book:
            ExcelWriter._fill_multi(book, dataset)
            book.save(file_path)
        logger.info(
            "Wrote %d records (multi-sheet layout, %d culture sheets) to %s",
            dataset.record_count, len(dataset.other_cultures), file_path,
        )

    @staticmethod
    def build_multi(dataset: Dataset) -> bytes:
        """Serialize ``dataset`` in the multi-sheet layout."""
        _check_culture_sheet_titles(dataset)
        with SpreadsheetBackend.new() as book:
            ExcelWriter._fill_multi(book, dataset)
            return book.to_bytes()

    @staticmethod
    def _fill_multi(book: SpreadsheetBackend, dataset: Dataset) -> None:
        """Lay out Import, Control, Categories and one sheet per non-native culture.

        Rows are written by header lookup, so each sheet may order its
        columns freely.
        """
        others = dataset.other_cultures
        import_ws = book.create_sheet(IMPORT_SHEET, IMPORT_COLUMNS)
        control_ws = book.create_sheet(CONTROL_SHEET, CONTROL_COLUMNS)
        categories_ws = book.create_sheet(CATEGORIES_SHEET, CATEGORY_COLUMNS)
        for row, code in enumerate(CATEGORY_CODES, DATA_START_ROW):
            book.set_value(categories_ws, row, 1, code)
        culture_sheets = {
            culture: book.create_sheet(culture, CULTURE_COLUMNS)
            for culture in others
        }

        row = DATA_START_ROW
        for ns, record in dataset.records():
            write_record_row(import_ws, row, IMPORT_COLUMNS, record, ns.name)
            write_record_row(control_ws, row, CONTROL_COLUMNS, record, ns.name)
            for culture, ws in culture_sheets.items():
                write_record_row(ws, row, CULTURE_COLUMNS, record, ns.name, culture)
            row += 1
        last_row = row - 1

        for culture, ws in culture_sheets.items():
            ExcelWriter._style_culture_sheet(ws, culture, last_row)

        # The Import sheet is machine-read and stays unstyled
        book.auto_fit_columns(control_ws)
        book.auto_fit_columns(categories_ws)
        for ws in (control_ws, categories_ws, *culture_sheets.values()):
            _style_header(ws)
            book.auto_filter(ws)

    @staticmethod
    def _style_culture_sheet(ws: Worksheet, culture: str, last_row: int) -> None:
        """Size and wrap the text columns; highlight Done on the review culture."""
        SpreadsheetBackend.auto_fit_columns(ws)
        for header in CULTURE_TEXT_COLUMNS:
            col = SpreadsheetBackend.find_column(ws, header)
            if col == COLUMN_NOT_FOUND:
                continue
            SpreadsheetBackend.set_column_width(ws, col, CULTURE_TEXT_WIDTH)
            for row in range(DATA_START_ROW, last_row + 1):
                SpreadsheetBackend.set_style(ws, row, col, wrap=True)

        if culture != settings.REVIEW_CULTURE or last_row < DATA_START_ROW:
            return
        done_col = SpreadsheetBackend.find_column(ws, DONE)
        if done_col == COLUMN_NOT_FOUND:
            return
        SpreadsheetBackend.add_formula_highlight(
            ws, done_col, DATA_START_ROW, last_row,
            "LEN(TRIM({cell}))=0", DONE_EMPTY_FILL,
        )
        SpreadsheetBackend.add_formula_highlight(
            ws, done_col, DATA_START_ROW, last_row,
            "LEN(TRIM({cell}))>0", DONE_FILLED_FILL,
        )
