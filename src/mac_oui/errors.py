from __future__ import annotations


class OuiError(Exception):
    """
    Base class for every error raised by mac_oui.

    `value` is the offending input, `row` the 1-based data row it came from
    (None when the error is not tied to a table row).
    """

    def __init__(self, message: str, value: object = None, row: int | None = None) -> None:
        self.value = value
        self.row = row
        if row is not None:
            message = f"row {row}: {message}"
        super().__init__(message)


class LoadError(OuiError):
    """Raised while building a database; no partial database is ever returned."""


class SourceUnavailable(LoadError):
    pass


class MalformedBlockNotation(LoadError):
    pass


class InvalidMask(LoadError):
    pass


class TableSchemaMismatch(LoadError):
    pass


class AddressParseError(OuiError, ValueError):
    pass


class EncodingError(OuiError):
    pass
