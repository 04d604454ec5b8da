"""Error kinds raised while converting datasets to and from workbooks."""


class LocSheetError(Exception):
    """Base class for all locsheet errors."""


class FormatError(LocSheetError, ValueError):
    """The workbook (or dataset) does not follow the expected layout."""


class MissingColumnError(FormatError):
    """A named column is absent from a sheet's header row."""

    def __init__(self, sheet: str, header: str) -> None:
        self.sheet = sheet
        self.header = header
        super().__init__(f"Column '{header}' not found in sheet '{sheet}'")


class UnknownCultureError(LocSheetError, KeyError):
    """Attempt to write a translation for a culture the record does not carry."""

    def __init__(self, culture: str, key: str) -> None:
        self.culture = culture
        self.key = key
        super().__init__(culture, key)

    def __str__(self) -> str:
        return f"Can't set culture [{self.culture}] in record: {self.key}"


class RecordNotFoundError(LocSheetError, KeyError):
    """No record with the given key exists in a namespace."""

    def __init__(self, key: str, namespace: str) -> None:
        self.key = key
        self.namespace = namespace
        super().__init__(key, namespace)

    def __str__(self) -> str:
        return f"Can't get record [{self.key}] in namespace: {self.namespace}"
