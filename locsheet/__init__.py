"""Localization dataset to spreadsheet converter.

Exports a translation dataset to an ``.xlsx`` workbook that translators can
edit, and imports the edited workbook back into the same dataset.
"""

from locsheet.errors import (
    FormatError,
    LocSheetError,
    MissingColumnError,
    RecordNotFoundError,
    UnknownCultureError,
)
from locsheet.excel import ExcelReader, ExcelWriter, SheetLayout, SyncManager, SyncResult
from locsheet.schemas.text import (
    CultureText,
    Dataset,
    Namespace,
    Record,
    RecordField,
    TranslationUnit,
)

__version__ = "1.0.0"

__all__ = [
    "CultureText",
    "Dataset",
    "ExcelReader",
    "ExcelWriter",
    "FormatError",
    "LocSheetError",
    "MissingColumnError",
    "Namespace",
    "Record",
    "RecordField",
    "RecordNotFoundError",
    "SheetLayout",
    "SyncManager",
    "SyncResult",
    "TranslationUnit",
    "UnknownCultureError",
]
