"""In-memory translation dataset.

A :class:`Dataset` holds ordered namespaces of records; every record carries
one :class:`TranslationUnit` per declared culture, native culture included.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pydantic import BaseModel, Field, model_validator

from locsheet.errors import FormatError, RecordNotFoundError, UnknownCultureError


class RecordField(str, enum.Enum):
    """Record metadata addressable by name."""

    KEY = "Key"
    SOURCE = "Source"
    PATH = "Path"
    NAMESPACE = "Namespace"


@dataclass(frozen=True)
class CultureText:
    """Reference to the translation text of one culture."""

    culture: str


FieldRef = RecordField | CultureText

_METADATA_ATTRS: dict[RecordField, str] = {
    RecordField.KEY: "key",
    RecordField.SOURCE: "source",
    RecordField.PATH: "path",
    RecordField.NAMESPACE: "namespace",
}


def resolve_field(name: str) -> FieldRef:
    """Map a symbolic field name to a typed field reference.

    ``Key``, ``Source``, ``Path`` and ``Namespace`` address metadata; any
    other name is taken as a culture code.
    """
    try:
        return RecordField(name)
    except ValueError:
        return CultureText(name)


class TranslationUnit(BaseModel):
    culture: str
    text: str = ""


class Record(BaseModel):
    """One translatable string and its translations."""

    key: str
    source: str = ""
    path: str = ""
    namespace: str = ""
    translations: list[TranslationUnit] = Field(default_factory=list)

    @classmethod
    def create(
        cls,
        key: str,
        cultures: Iterable[str],
        source: str = "",
        path: str = "",
        namespace: str = "",
    ) -> "Record":
        """Build a record with a blank translation unit per culture."""
        return cls(
            key=key,
            source=source,
            path=path,
            namespace=namespace,
            translations=[TranslationUnit(culture=c) for c in cultures],
        )

    @property
    def cultures(self) -> list[str]:
        return [t.culture for t in self.translations]

    def _unit(self, culture: str) -> TranslationUnit | None:
        for unit in self.translations:
            if unit.culture == culture:
                return unit
        return None

    def get(self, field: FieldRef) -> str:
        """Read a metadata field or a culture's text.

        A culture the record does not carry reads as an empty string.
        """
        if isinstance(field, CultureText):
            unit = self._unit(field.culture)
            return unit.text if unit is not None else ""
        return getattr(self, _METADATA_ATTRS[field])

    def set(self, field: FieldRef, value: str) -> None:
        """Write a metadata field or a culture's text.

        Raises:
            UnknownCultureError: If the culture has no translation unit on
                this record.
        """
        if isinstance(field, CultureText):
            unit = self._unit(field.culture)
            if unit is None:
                raise UnknownCultureError(field.culture, self.key)
            unit.text = value
            return
        setattr(self, _METADATA_ATTRS[field], value)

    def text(self, culture: str) -> str:
        return self.get(CultureText(culture))

    def set_text(self, culture: str, value: str) -> None:
        self.set(CultureText(culture), value)


class Namespace(BaseModel):
    name: str
    children: list[Record] = Field(default_factory=list)

    @model_validator(mode="after")
    def _adopt_children(self) -> "Namespace":
        # A record always reports the namespace that owns it
        for record in self.children:
            record.namespace = self.name
        return self

    def get_record(self, key: str) -> Record:
        for record in self.children:
            if record.key == key:
                return record
        raise RecordNotFoundError(key, self.name)


class Dataset(BaseModel):
    """Root aggregate: namespaces, declared cultures and the native culture."""

    namespaces: list[Namespace] = Field(default_factory=list)
    cultures: list[str] = Field(default_factory=list)
    native_culture: str = ""

    @property
    def other_cultures(self) -> list[str]:
        """Declared cultures except the native one, in declared order."""
        return [c for c in self.cultures if c != self.native_culture]

    def records(self) -> Iterator[tuple[Namespace, Record]]:
        """Yield ``(namespace, record)`` pairs in export order."""
        for ns in self.namespaces:
            for record in ns.children:
                yield ns, record

    @property
    def record_count(self) -> int:
        return sum(len(ns.children) for ns in self.namespaces)

    def validate_structure(self) -> None:
        """Check the uniform culture set, per-namespace key uniqueness and
        that every record reports the namespace that owns it.

        Raises:
            FormatError: On the first violation found.
        """
        if self.native_culture not in self.cultures:
            raise FormatError(
                f"Native culture '{self.native_culture}' is not declared "
                f"in {self.cultures}"
            )
        expected = set(self.cultures)
        for ns in self.namespaces:
            seen: set[str] = set()
            for record in ns.children:
                if record.key in seen:
                    raise FormatError(
                        f"Duplicate key '{record.key}' in namespace '{ns.name}'"
                    )
                seen.add(record.key)
                if record.namespace != ns.name:
                    raise FormatError(
                        f"Record '{record.key}' in namespace '{ns.name}' "
                        f"reports namespace '{record.namespace}'"
                    )
                actual = record.cultures
                if set(actual) != expected or len(actual) != len(expected):
                    missing = sorted(expected - set(actual))
                    extra = sorted(set(actual) - expected)
                    raise FormatError(
                        f"Record '{record.key}' in namespace '{ns.name}' has "
                        f"cultures {actual}, expected {self.cultures} "
                        f"(missing: {missing}, extra: {extra})"
                    )
