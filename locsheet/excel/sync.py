"""Excel synchronization manager.

Coordinates dataset export/import with the workbook on disk: layout
detection, backups of overwritten files and file hashing for change
detection.
"""

from __future__ import annotations

import datetime
import hashlib
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from locsheet.config import settings
from locsheet.excel.config import SheetLayout
from locsheet.excel.reader import ExcelReader
from locsheet.excel.writer import ExcelWriter
from locsheet.schemas.text import CultureText, Dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    """Result of an import or export."""

    success: bool
    layout: SheetLayout
    records_processed: int = 0
    namespaces: int = 0
    file_hash: str | None = None
    backup_path: Path | None = None
    warnings: list[str] = field(default_factory=list)


def _create_backup(file_path: Path) -> Path:
    """Copy ``file_path`` into a timestamped backup next to it.

    Returns the backup file path.
    """
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_dir = file_path.parent / settings.BACKUP_DIR_NAME
    backup_dir.mkdir(parents=True, exist_ok=True)
    backup_path = backup_dir / f"{file_path.stem}_{timestamp}{file_path.suffix}"
    shutil.copy2(str(file_path), str(backup_path))
    return backup_path


def untranslated_warnings(dataset: Dataset) -> list[str]:
    """One warning per non-native culture that has blank translations."""
    warnings: list[str] = []
    for culture in dataset.other_cultures:
        blank = sum(
            1 for _, record in dataset.records()
            if not record.get(CultureText(culture)).strip()
        )
        if blank:
            warnings.append(
                f"Culture '{culture}': {blank} of {dataset.record_count} "
                f"records untranslated"
            )
    return warnings


class SyncManager:
    """Moves datasets between memory and workbook files."""

    @staticmethod
    def compute_file_hash(file_path: str | Path) -> str:
        """Compute SHA-256 hash of a file for conflict detection."""
        sha256 = hashlib.sha256()
        with open(str(file_path), "rb") as f:
            for chunk in iter(lambda: f.read(8192), b""):
                sha256.update(chunk)
        return sha256.hexdigest()

    @staticmethod
    def export_file(
        dataset: Dataset,
        file_path: str | Path,
        layout: SheetLayout = SheetLayout.FLAT,
        backup: bool = True,
    ) -> SyncResult:
        """Validate ``dataset`` and write it to ``file_path``.

        An existing file is backed up first unless ``backup`` is False.

        Raises:
            FormatError: If the dataset breaks the uniform culture set, has
                duplicate keys in a namespace or uses a name the layout
                cannot store. Nothing is written in that case.
        """
        path = Path(file_path)
        ExcelWriter.check(dataset, layout)

        backup_path = None
        if backup and path.exists():
            backup_path = _create_backup(path)
            logger.info("Backed up %s to %s", path, backup_path)

        ExcelWriter.write(dataset, path, layout)
        return SyncResult(
            success=True,
            layout=layout,
            records_processed=dataset.record_count,
            namespaces=len(dataset.namespaces),
            file_hash=SyncManager.compute_file_hash(path),
            backup_path=backup_path,
            warnings=untranslated_warnings(dataset),
        )

    @staticmethod
    def import_file(
        file_path: str | Path,
        layout: SheetLayout | None = None,
    ) -> tuple[Dataset, SyncResult]:
        """Read ``file_path`` into a dataset, detecting the layout if needed.

        Raises:
            FormatError: On any structural problem in the workbook.
        """
        if layout is None:
            layout = ExcelReader.detect_layout(file_path)
        dataset = ExcelReader.read(file_path, layout)
        dataset.validate_structure()

        warnings = untranslated_warnings(dataset)
        for warning in warnings:
            logger.warning("%s: %s", file_path, warning)

        return dataset, SyncResult(
            success=True,
            layout=layout,
            records_processed=dataset.record_count,
            namespaces=len(dataset.namespaces),
            file_hash=SyncManager.compute_file_hash(file_path),
            warnings=warnings,
        )
