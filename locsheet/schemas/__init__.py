from locsheet.schemas.text import (
    CultureText,
    Dataset,
    FieldRef,
    Namespace,
    Record,
    RecordField,
    TranslationUnit,
    resolve_field,
)

__all__ = [
    "CultureText",
    "Dataset",
    "FieldRef",
    "Namespace",
    "Record",
    "RecordField",
    "TranslationUnit",
    "resolve_field",
]
