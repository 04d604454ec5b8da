"""Excel conversion engine.

Provides reading, writing, key mapping and sync for translation workbooks.
"""

from locsheet.excel.config import SERVICE_DATA_MARKER, SheetLayout
from locsheet.excel.mapper import KeyIndex, group_namespaces
from locsheet.excel.reader import ExcelReader
from locsheet.excel.writer import ExcelWriter
from locsheet.excel.sync import SyncManager, SyncResult

__all__ = [
    "SERVICE_DATA_MARKER",
    "ExcelReader",
    "ExcelWriter",
    "KeyIndex",
    "SheetLayout",
    "SyncManager",
    "SyncResult",
    "group_namespaces",
]
