"""Workbook layout constants shared by the reader and the writer.

Two layouts are supported:
- FLAT (Layout A): one "Translation" sheet. Header row, one row per record,
  a sentinel row, then one hidden service-data row per record.
- MULTI (Layout B): "Import", "Control", "Categories" plus one sheet per
  non-native culture, joined by the Key column.

Every literal here is part of the file format. Reader and writer must use
these names and never their own copies.
"""

import enum
from typing import Final


class SheetLayout(str, enum.Enum):
    FLAT = "flat"
    MULTI = "multi"


# Sentinel row text separating translations from service data (Layout A)
SERVICE_DATA_MARKER: Final[str] = (
    "--== !!! DO NOT TRANSLATE THE TEXT BELOW !!! == SERVICE DATA ==--"
)

# Sheet names
TRANSLATION_SHEET: Final[str] = "Translation"
IMPORT_SHEET: Final[str] = "Import"
CONTROL_SHEET: Final[str] = "Control"
CATEGORIES_SHEET: Final[str] = "Categories"

# Sheets in Layout B that are not culture sheets
FIXED_SHEETS: Final[tuple[str, ...]] = (IMPORT_SHEET, CONTROL_SHEET, CATEGORIES_SHEET)

# Excel limits on sheet titles (culture sheets in Layout B)
MAX_SHEET_TITLE_LENGTH: Final[int] = 31
INVALID_SHEET_TITLE_CHARS: Final[str] = "[]:*?/\\"

# Column headers
SEQ: Final[str] = "#"
ID: Final[str] = "ID"
KEY: Final[str] = "Key"
SOURCE: Final[str] = "Source"
NAMESPACE: Final[str] = "Namespace"
PATH: Final[str] = "Path"
CONTEXT: Final[str] = "Context"
TRANSLATION: Final[str] = "Translation"
DONE: Final[str] = "Done"
COMMENT: Final[str] = "Comment"
CATEGORY: Final[str] = "Category"

# Returned by header lookup when a column is absent
COLUMN_NOT_FOUND: Final[int] = -1

HEADER_ROW: Final[int] = 1
DATA_START_ROW: Final[int] = 2

# --- Layout A (flat) -------------------------------------------------------
# A=#, B=ID (namespace,key), C=native culture, D+=other cultures
FLAT_SEQ_COL: Final[int] = 1
FLAT_ID_COL: Final[int] = 2
FLAT_NATIVE_COL: Final[int] = 3

# Service rows below the sentinel: A=Source, B=Namespace, C=Key, D=Path
SERVICE_SOURCE_COL: Final[int] = 1
SERVICE_NAMESPACE_COL: Final[int] = 2
SERVICE_KEY_COL: Final[int] = 3
SERVICE_PATH_COL: Final[int] = 4

FLAT_SEQ_WIDTH: Final[int] = 10
FLAT_ID_WIDTH: Final[int] = 40
FLAT_TEXT_WIDTH: Final[int] = 100

# --- Layout B (multi-sheet) ------------------------------------------------
IMPORT_COLUMNS: Final[tuple[str, ...]] = (KEY, SOURCE, NAMESPACE, PATH)
CONTROL_COLUMNS: Final[tuple[str, ...]] = (KEY, SOURCE, NAMESPACE, CONTEXT)
CULTURE_COLUMNS: Final[tuple[str, ...]] = (
    KEY, NAMESPACE, CONTEXT, SOURCE, TRANSLATION, DONE, COMMENT,
)
CATEGORY_COLUMNS: Final[tuple[str, ...]] = (CATEGORY,)

# Pre-seeded rows of the Categories sheet
CATEGORY_CODES: Final[tuple[str, ...]] = (
    "UI", "Dialogue", "Item", "Quest", "Tutorial", "System",
)

# Culture sheet columns that get wrapping and a fixed width
CULTURE_TEXT_COLUMNS: Final[tuple[str, ...]] = (SOURCE, TRANSLATION)
CULTURE_TEXT_WIDTH: Final[int] = 60

# --- Colors (RGB hex) ------------------------------------------------------
HEADER_FILL: Final[str] = "FFA500"        # orange
NATIVE_FILL: Final[str] = "FFE5D4"        # peach
MISSING_FILL: Final[str] = "FFC7CE"       # pink, untranslated cell
EVEN_COL_FILL: Final[str] = "C8EFD4"      # green tint
ODD_COL_FILL: Final[str] = "C8EBFA"       # blue tint
MARKER_FONT: Final[str] = "FF0000"        # red
SERVICE_FONT: Final[str] = "D3D3D3"       # light gray
DONE_EMPTY_FILL: Final[str] = "FFC7CE"    # red
DONE_FILLED_FILL: Final[str] = "C6EFCE"   # green
