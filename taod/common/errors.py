"""Domain errors and failure typing."""

from __future__ import annotations

from typing import Any


class IngestError(Exception):
    """Base class for ingestion failures."""

    error_code = "INGEST_ERROR"


class ConfigError(IngestError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class SinkError(IngestError):
    """Raised when decoded records cannot be handed to storage."""

    error_code = "SINK_ERROR"


class InputFileError(IngestError):
    """Raised when an input file cannot be opened or read."""

    error_code = "INPUT_FILE_ERROR"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"{path}: cannot read input file: {reason}")


class EncodingDecodeError(IngestError):
    """Raised when an input file is not valid in the configured encoding."""

    error_code = "ENCODING_ERROR"

    def __init__(self, path: str, encoding: str, offset: int) -> None:
        self.path = path
        self.encoding = encoding
        self.offset = offset
        super().__init__(f"{path}: byte {offset} cannot be decoded as {encoding}")


class DecodeError(IngestError):
    """A single row failed to decode.

    ``row`` and ``column`` are 1-based. Errors raised below the row level (for
    example by the date or coordinate assemblers) carry no position until the
    column readers attach one with :meth:`with_context`.
    """

    error_code = "DECODE_ERROR"

    def __init__(
        self,
        detail: str,
        *,
        row: int | None = None,
        column: int | None = None,
        value: Any = None,
    ) -> None:
        self.detail = detail
        self.row = row
        self.column = column
        self.value = value
        super().__init__(self._render())

    def _render(self) -> str:
        if self.row is None:
            return self.detail
        if self.column is None:
            return f"row {self.row}: {self.detail}"
        return f"row {self.row}, column {self.column}: {self.detail}"

    def with_context(self, *, row: int, column: int | None = None) -> "DecodeError":
        self.row = row
        if column is not None:
            self.column = column
        self.args = (self._render(),)
        return self


class ColumnOutOfRangeError(DecodeError):
    error_code = "COLUMN_OUT_OF_RANGE"


class NonNumericValueError(DecodeError):
    error_code = "NON_NUMERIC_VALUE"


class ValueRangeError(DecodeError):
    """A value parsed but falls outside its domain."""

    error_code = "VALUE_OUT_OF_RANGE"

    def __init__(self, detail: str, *, field: str | None = None, **kwargs: Any) -> None:
        self.field = field
        super().__init__(detail, **kwargs)


class UnresolvedReferenceError(DecodeError):
    """A code or composite key has no entry in a lookup table."""

    error_code = "UNRESOLVED_REFERENCE"

    def __init__(self, detail: str, *, key: Any, **kwargs: Any) -> None:
        self.key = key
        kwargs.setdefault("value", key)
        super().__init__(detail, **kwargs)


class DuplicateAccidentError(UnresolvedReferenceError):
    error_code = "DUPLICATE_ACCIDENT"


class RowErrors(IngestError):
    """Every row failure found in one file when errors are collected."""

    error_code = "ROW_ERRORS"

    def __init__(self, source: str, errors: list[DecodeError], truncated: bool = False) -> None:
        self.source = source
        self.errors = errors
        self.truncated = truncated
        suffix = " (truncated)" if truncated else ""
        lines = [f"{source}: {len(errors)} row error(s){suffix}"]
        lines.extend(f"  {error}" for error in errors)
        super().__init__("\n".join(lines))
