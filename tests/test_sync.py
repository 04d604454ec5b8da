"""Tests for layout detection, backups and import/export results."""

import openpyxl
import pytest

from locsheet.config import settings
from locsheet.errors import FormatError
from locsheet.excel.config import SheetLayout
from locsheet.excel.reader import ExcelReader
from locsheet.excel.sync import SyncManager, untranslated_warnings
from locsheet.schemas.text import Namespace


class TestDetectLayout:
    @pytest.mark.parametrize("layout", [SheetLayout.FLAT, SheetLayout.MULTI])
    def test_detects_exported_layout(self, menu_dataset, tmp_path, layout):
        path = tmp_path / "book.xlsx"
        SyncManager.export_file(menu_dataset, path, layout)
        assert ExcelReader.detect_layout(path) == layout

    def test_flat_sheet_under_other_name(self, menu_dataset, tmp_path):
        path = tmp_path / "book.xlsx"
        SyncManager.export_file(menu_dataset, path, SheetLayout.FLAT)
        wb = openpyxl.load_workbook(path)
        wb.active.title = "Strings"
        wb.save(path)

        assert ExcelReader.detect_layout(path) == SheetLayout.FLAT
        assert ExcelReader.read(path) == menu_dataset

    def test_unknown_workbook(self, tmp_path):
        path = tmp_path / "other.xlsx"
        wb = openpyxl.Workbook()
        wb.active.append(["Name", "Value"])
        wb.save(path)

        with pytest.raises(FormatError, match="Unrecognized"):
            ExcelReader.detect_layout(path)


class TestExportFile:
    def test_result(self, game_dataset, tmp_path):
        path = tmp_path / "game.xlsx"
        result = SyncManager.export_file(game_dataset, path)

        assert result.success
        assert result.layout == SheetLayout.FLAT
        assert result.records_processed == 4
        assert result.namespaces == 3
        assert result.file_hash == SyncManager.compute_file_hash(path)
        assert result.backup_path is None
        assert result.warnings == ["Culture 'fr': 1 of 4 records untranslated"]

    def test_backs_up_existing_file(self, menu_dataset, tmp_path):
        path = tmp_path / "menu.xlsx"
        path.write_bytes(b"previous version")

        result = SyncManager.export_file(menu_dataset, path)

        assert result.backup_path is not None
        assert result.backup_path.parent == tmp_path / settings.BACKUP_DIR_NAME
        assert result.backup_path.read_bytes() == b"previous version"
        assert path.read_bytes() != b"previous version"

    def test_no_backup_when_disabled(self, menu_dataset, tmp_path):
        path = tmp_path / "menu.xlsx"
        path.write_bytes(b"previous version")

        result = SyncManager.export_file(menu_dataset, path, backup=False)

        assert result.backup_path is None
        assert not (tmp_path / settings.BACKUP_DIR_NAME).exists()

    def test_invalid_dataset_is_not_written(self, menu_dataset, tmp_path):
        menu_dataset.namespaces[0].children[0].translations.pop()
        path = tmp_path / "menu.xlsx"

        with pytest.raises(FormatError):
            SyncManager.export_file(menu_dataset, path)
        assert not path.exists()

    def test_flat_separator_in_namespace_is_not_written(self, menu_dataset, tmp_path):
        children = menu_dataset.namespaces[0].children
        menu_dataset.namespaces = [Namespace(name="Menu,Main", children=children)]
        path = tmp_path / "menu.xlsx"
        path.write_bytes(b"previous version")

        with pytest.raises(FormatError, match="Menu,Main"):
            SyncManager.export_file(menu_dataset, path)
        assert path.read_bytes() == b"previous version"
        assert not (tmp_path / settings.BACKUP_DIR_NAME).exists()

    def test_multi_invalid_culture_is_not_written(self, menu_dataset, tmp_path):
        menu_dataset.cultures = ["en", "de/CH"]
        menu_dataset.namespaces[0].children[0].translations[1].culture = "de/CH"
        path = tmp_path / "menu.xlsx"

        with pytest.raises(FormatError, match="de/CH"):
            SyncManager.export_file(menu_dataset, path, SheetLayout.MULTI)
        assert not path.exists()

    def test_exports_into_new_directory(self, menu_dataset, tmp_path):
        path = tmp_path / "out" / "menu.xlsx"
        result = SyncManager.export_file(menu_dataset, path)
        assert result.file_hash == SyncManager.compute_file_hash(path)


class TestImportFile:
    @pytest.mark.parametrize("layout", [SheetLayout.FLAT, SheetLayout.MULTI])
    def test_round_trip(self, game_dataset, tmp_path, layout):
        path = tmp_path / "game.xlsx"
        SyncManager.export_file(game_dataset, path, layout)

        dataset, result = SyncManager.import_file(path)

        assert dataset == game_dataset
        assert result.layout == layout
        assert result.records_processed == 4
        assert result.warnings == ["Culture 'fr': 1 of 4 records untranslated"]

    def test_hash_changes_with_content(self, menu_dataset, tmp_path):
        first = tmp_path / "a.xlsx"
        second = tmp_path / "b.xlsx"
        SyncManager.export_file(menu_dataset, first)
        menu_dataset.namespaces[0].children[0].set_text("de", "Los")
        SyncManager.export_file(menu_dataset, second)

        _, result_a = SyncManager.import_file(first)
        _, result_b = SyncManager.import_file(second)
        assert result_a.file_hash != result_b.file_hash


def test_untranslated_warnings_ignore_native(menu_dataset):
    menu_dataset.namespaces[0].children[0].set_text("en", "")
    assert untranslated_warnings(menu_dataset) == []
    menu_dataset.namespaces[0].children[0].set_text("de", "  ")
    assert untranslated_warnings(menu_dataset) == [
        "Culture 'de': 1 of 1 records untranslated"
    ]
