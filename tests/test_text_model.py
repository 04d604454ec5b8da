"""Tests for records, namespaces and datasets."""

import pytest

from locsheet.errors import FormatError, RecordNotFoundError, UnknownCultureError
from locsheet.schemas.text import (
    CultureText,
    Dataset,
    Namespace,
    Record,
    RecordField,
    resolve_field,
)


@pytest.fixture
def record() -> Record:
    rec = Record.create(
        "Start", ["en", "de"], source="Start Game", path="Menu.cs", namespace="Menu",
    )
    rec.set_text("en", "Start Game")
    rec.set_text("de", "Spiel Starten")
    return rec


class TestResolveField:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Key", RecordField.KEY),
            ("Source", RecordField.SOURCE),
            ("Path", RecordField.PATH),
            ("Namespace", RecordField.NAMESPACE),
        ],
    )
    def test_metadata_names(self, name, expected):
        assert resolve_field(name) is expected

    def test_other_names_are_cultures(self):
        assert resolve_field("de") == CultureText("de")
        assert resolve_field("key") == CultureText("key")


class TestRecordAccess:
    def test_get_metadata(self, record):
        assert record.get(RecordField.KEY) == "Start"
        assert record.get(RecordField.SOURCE) == "Start Game"
        assert record.get(RecordField.PATH) == "Menu.cs"
        assert record.get(RecordField.NAMESPACE) == "Menu"

    def test_get_culture(self, record):
        assert record.get(CultureText("de")) == "Spiel Starten"
        assert record.get(resolve_field("en")) == "Start Game"

    def test_get_unknown_culture_is_empty(self, record):
        assert record.get(CultureText("UnknownCulture")) == ""

    def test_set_metadata(self, record):
        record.set(RecordField.PATH, "Other.cs")
        record.set(resolve_field("Namespace"), "Title")
        assert record.path == "Other.cs"
        assert record.namespace == "Title"

    def test_set_culture(self, record):
        record.set(CultureText("de"), "Los geht's")
        assert record.text("de") == "Los geht's"

    def test_set_unknown_culture_fails(self, record):
        with pytest.raises(UnknownCultureError) as exc_info:
            record.set(CultureText("UnknownCulture"), "x")
        assert "UnknownCulture" in str(exc_info.value)
        assert record.cultures == ["en", "de"]

    def test_create_has_blank_unit_per_culture(self):
        rec = Record.create("K", ["en", "de", "fr"])
        assert rec.cultures == ["en", "de", "fr"]
        assert all(unit.text == "" for unit in rec.translations)


class TestNamespace:
    def test_get_record(self, record):
        ns = Namespace(name="Menu", children=[record])
        assert ns.get_record("Start") is record

    def test_get_missing_record(self, record):
        ns = Namespace(name="Menu", children=[record])
        with pytest.raises(RecordNotFoundError):
            ns.get_record("Quit")

    def test_children_take_owner_name(self):
        records = [Record.create("Start", ["en"]), Record.create("Quit", ["en"], namespace="Stale")]
        ns = Namespace(name="Menu", children=records)
        assert [r.namespace for r in ns.children] == ["Menu", "Menu"]
        assert ns.children[0] is records[0]


class TestDataset:
    def test_records_traversal_order(self, game_dataset):
        keys = [(ns.name, rec.key) for ns, rec in game_dataset.records()]
        assert keys == [
            ("Menu", "Start"),
            ("Menu", "Quit"),
            ("Dialog.Intro", "Line1"),
            ("Menu", "Options"),
        ]
        assert game_dataset.record_count == 4

    def test_other_cultures(self, game_dataset):
        assert game_dataset.other_cultures == ["de", "fr"]

    def test_validate_ok(self, game_dataset):
        game_dataset.validate_structure()

    def test_validate_missing_culture(self, game_dataset):
        game_dataset.namespaces[0].children[0].translations.pop()
        with pytest.raises(FormatError, match="Start"):
            game_dataset.validate_structure()

    def test_validate_extra_culture(self, menu_dataset):
        rec = menu_dataset.namespaces[0].children[0]
        rec.translations.append(rec.translations[0].model_copy(update={"culture": "fr"}))
        with pytest.raises(FormatError, match="extra"):
            menu_dataset.validate_structure()

    def test_validate_duplicate_key(self, menu_dataset):
        ns = menu_dataset.namespaces[0]
        ns.children.append(ns.children[0].model_copy(deep=True))
        with pytest.raises(FormatError, match="Duplicate key 'Start'"):
            menu_dataset.validate_structure()

    def test_same_key_in_two_namespaces_is_valid(self, menu_dataset):
        children = [r.model_copy(deep=True) for r in menu_dataset.namespaces[0].children]
        menu_dataset.namespaces.append(Namespace(name="Pause", children=children))
        menu_dataset.validate_structure()
        assert children[0].namespace == "Pause"

    def test_validate_renamed_namespace(self, menu_dataset):
        menu_dataset.namespaces[0].name = "Title"
        with pytest.raises(FormatError, match="reports namespace 'Menu'"):
            menu_dataset.validate_structure()

    def test_validate_appended_record_without_namespace(self, menu_dataset):
        menu_dataset.namespaces[0].children.append(Record.create("Quit", ["en", "de"]))
        with pytest.raises(FormatError, match="Quit"):
            menu_dataset.validate_structure()

    def test_validate_undeclared_native(self, menu_dataset):
        menu_dataset.native_culture = "ja"
        with pytest.raises(FormatError, match="Native culture"):
            menu_dataset.validate_structure()
