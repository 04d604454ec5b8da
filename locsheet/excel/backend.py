"""Thin openpyxl wrapper used by the reader and the writer.

Covers only what the layouts need: sheets, cell text, cell styles, column
widths, conditional formats and (de)serialization.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.formatting.rule import FormulaRule
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from locsheet.config import settings
from locsheet.excel.config import COLUMN_NOT_FOUND, HEADER_ROW


def solid_fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


class SpreadsheetBackend:
    """An openpyxl workbook plus the cell/style operations the layouts use.

    Use as a context manager (or call :meth:`close`) so the workbook is
    released on every exit path.
    """

    def __init__(self, workbook: openpyxl.Workbook) -> None:
        self._wb = workbook

    @classmethod
    def new(cls) -> "SpreadsheetBackend":
        """Create an empty workbook (without openpyxl's default sheet)."""
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        return cls(wb)

    @classmethod
    def load(cls, file_path: str | Path) -> "SpreadsheetBackend":
        """Open an existing workbook with cached values instead of formulas."""
        return cls(openpyxl.load_workbook(str(file_path), data_only=True))

    def __enter__(self) -> "SpreadsheetBackend":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._wb.close()

    # --- Sheets ------------------------------------------------------------

    @property
    def sheet_names(self) -> list[str]:
        return list(self._wb.sheetnames)

    def has_sheet(self, name: str) -> bool:
        return name in self._wb.sheetnames

    def sheet(self, name: str) -> Worksheet:
        return self._wb[name]

    def first_sheet(self) -> Worksheet | None:
        if not self._wb.worksheets:
            return None
        return self._wb.worksheets[0]

    def create_sheet(
        self,
        name: str,
        headers: tuple[str, ...] | list[str] | None = None,
    ) -> Worksheet:
        """Add a sheet, optionally writing ``headers`` into row 1."""
        ws = self._wb.create_sheet(title=name)
        for col_idx, header in enumerate(headers or (), 1):
            ws.cell(row=HEADER_ROW, column=col_idx, value=header)
        return ws

    # --- Cells -------------------------------------------------------------

    @staticmethod
    def get_text(ws: Worksheet, row: int, col: int) -> str:
        """Cell value as text; empty cells read as ``""``."""
        value = ws.cell(row=row, column=col).value
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    @staticmethod
    def set_value(ws: Worksheet, row: int, col: int, value: Any) -> None:
        """Write a value. Strings are always stored as text, never formulas."""
        cell = ws.cell(row=row, column=col, value=value)
        if isinstance(value, str) and value.startswith("="):
            cell.data_type = "s"

    @staticmethod
    def dimensions(ws: Worksheet) -> tuple[int, int]:
        """Return ``(row_count, column_count)`` of the used range."""
        return ws.max_row, ws.max_column

    @staticmethod
    def header_values(ws: Worksheet) -> list[str]:
        return [
            SpreadsheetBackend.get_text(ws, HEADER_ROW, col)
            for col in range(1, ws.max_column + 1)
        ]

    @staticmethod
    def find_column(ws: Worksheet, header: str) -> int:
        """1-based column whose header cell equals ``header``.

        Returns COLUMN_NOT_FOUND if no header cell matches.
        """
        for col in range(1, ws.max_column + 1):
            if ws.cell(row=HEADER_ROW, column=col).value == header:
                return col
        return COLUMN_NOT_FOUND

    # --- Styles ------------------------------------------------------------

    @staticmethod
    def set_style(
        ws: Worksheet,
        row: int,
        col: int,
        *,
        fill: str | None = None,
        bold: bool | None = None,
        font_color: str | None = None,
        horizontal: str | None = None,
        wrap: bool | None = None,
    ) -> None:
        """Apply the given style attributes to one cell; others are kept."""
        cell = ws.cell(row=row, column=col)
        if fill is not None:
            cell.fill = solid_fill(fill)
        if bold is not None or font_color is not None:
            cell.font = Font(
                bold=cell.font.bold if bold is None else bold,
                color=font_color if font_color is not None else cell.font.color,
            )
        if horizontal is not None or wrap is not None:
            cell.alignment = Alignment(
                horizontal=horizontal or cell.alignment.horizontal,
                vertical=cell.alignment.vertical,
                wrap_text=cell.alignment.wrap_text if wrap is None else wrap,
            )

    @staticmethod
    def set_row_style(ws: Worksheet, row: int, last_col: int, **style: Any) -> None:
        for col in range(1, last_col + 1):
            SpreadsheetBackend.set_style(ws, row, col, **style)

    @staticmethod
    def set_column_width(ws: Worksheet, col: int, width: float) -> None:
        ws.column_dimensions[get_column_letter(col)].width = width

    @staticmethod
    def auto_fit_columns(ws: Worksheet, max_width: int | None = None) -> None:
        """Size each column to its longest line of text, capped at ``max_width``."""
        limit = max_width or settings.MAX_COLUMN_WIDTH
        for col in range(1, ws.max_column + 1):
            longest = 0
            for row in range(1, ws.max_row + 1):
                value = ws.cell(row=row, column=col).value
                if value is None:
                    continue
                for line in str(value).splitlines() or [""]:
                    longest = max(longest, len(line))
            if longest:
                SpreadsheetBackend.set_column_width(ws, col, min(longest + 2, limit))

    @staticmethod
    def auto_filter(ws: Worksheet) -> None:
        ws.auto_filter.ref = ws.dimensions

    @staticmethod
    def add_formula_highlight(
        ws: Worksheet,
        col: int,
        first_row: int,
        last_row: int,
        formula: str,
        fill: str,
    ) -> None:
        """Highlight cells of one column where ``formula`` is true.

        ``formula`` is written relative to the first cell of the range; the
        placeholder ``{cell}`` is replaced with that cell's address.
        """
        letter = get_column_letter(col)
        cell_range = f"{letter}{first_row}:{letter}{last_row}"
        rule = FormulaRule(
            formula=[formula.format(cell=f"{letter}{first_row}")],
            fill=solid_fill(fill),
        )
        ws.conditional_formatting.add(cell_range, rule)

    # --- Persistence -------------------------------------------------------

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self._wb.save(buffer)
        return buffer.getvalue()

    def save(self, file_path: str | Path) -> None:
        """Serialize the workbook and write the bytes to ``file_path``."""
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes())
