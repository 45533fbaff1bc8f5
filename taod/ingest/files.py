"""Read the main and supplementary files into ordered record lists."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Mapping, TypeVar

from taod.common.errors import ConfigError, DecodeError, EncodingDecodeError, InputFileError, RowErrors
from taod.common.models import AccidentRecord, InvolvedPartyRecord
from taod.ingest.rows import row_to_accident, row_to_involved_party
from taod.pipeline.correlate import AccidentIndex

T = TypeVar("T")

ERROR_MODES = ("fail_fast", "collect")


@dataclass(frozen=True)
class ReadOptions:
    encoding: str = "cp932"
    delimiter: str = ","
    trim: bool = True
    error_mode: str = "fail_fast"
    max_errors: int = 100

    @classmethod
    def from_config(cls, cfg: dict) -> "ReadOptions":
        input_cfg = cfg["input"]
        errors_cfg = cfg["errors"]
        options = cls(
            encoding=input_cfg["encoding"],
            delimiter=input_cfg["delimiter"],
            trim=bool(input_cfg["trim"]),
            error_mode=errors_cfg["mode"],
            max_errors=int(errors_cfg["max_errors"]),
        )
        if options.error_mode not in ERROR_MODES:
            raise ConfigError(f"Unknown error mode: {options.error_mode}")
        if options.max_errors < 1:
            raise ConfigError("errors.max_errors must be at least 1")
        return options


def _read_text(path: Path, encoding: str) -> str:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise InputFileError(str(path), exc.strerror or str(exc)) from exc
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise EncodingDecodeError(str(path), encoding, exc.start) from exc


def read_rows(path: Path, options: ReadOptions = ReadOptions()) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(row_index, cells)`` for every data row after the header.

    Blank lines are skipped and do not consume a row index.
    """
    text = _read_text(Path(path), options.encoding)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=options.delimiter)

    row_index = -1
    header_seen = False
    while True:
        try:
            cells = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            # Header failures carry no row.
            row = row_index + 2 if header_seen else None
            raise DecodeError(f"malformed line {reader.line_num}: {exc}", row=row) from exc
        if not cells:
            continue
        if not header_seen:
            header_seen = True
            continue
        row_index += 1
        if options.trim:
            cells = [cell.strip() for cell in cells]
        yield row_index, cells


def _decode_file(path: Path, options: ReadOptions, decode_row: Callable[[list[str], int], T]) -> list[T]:
    records: list[T] = []
    errors: list[DecodeError] = []
    for row_index, cells in read_rows(path, options):
        try:
            records.append(decode_row(cells, row_index))
        except DecodeError as exc:
            if options.error_mode == "fail_fast":
                raise
            errors.append(exc)
            if len(errors) >= options.max_errors:
                raise RowErrors(str(path), errors, truncated=True) from None
    if errors:
        raise RowErrors(str(path), errors)
    return records


def read_accidents(
    path: Path,
    cities: Mapping[str, str],
    *,
    options: ReadOptions = ReadOptions(),
) -> list[AccidentRecord]:
    """Decode the main file; ``cities`` maps prefecture+municipality codes to JIS codes."""
    return _decode_file(path, options, lambda cells, row_index: row_to_accident(cells, row_index, cities))


def read_involved_parties(
    path: Path,
    index: AccidentIndex,
    *,
    options: ReadOptions = ReadOptions(),
) -> list[InvolvedPartyRecord]:
    return _decode_file(path, options, lambda cells, row_index: row_to_involved_party(cells, row_index, index))
