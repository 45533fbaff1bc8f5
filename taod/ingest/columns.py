"""Typed access to positional cells of one parsed row.

``row_index`` is the 0-based index of the data row (header excluded) and
``column_index`` the 0-based cell index; errors report both 1-based.
"""

from __future__ import annotations

import re
from typing import Sequence

from taod.common.errors import ColumnOutOfRangeError, NonNumericValueError

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _cell(row: Sequence[str], row_index: int, column_index: int) -> str:
    if column_index >= len(row):
        raise ColumnOutOfRangeError(
            f"column {column_index + 1} is out of range (row has {len(row)} columns)",
            row=row_index + 1,
        )
    return row[column_index]


def read_str_column(row: Sequence[str], row_index: int, column_index: int) -> str:
    return _cell(row, row_index, column_index)


def read_optional_str_column(row: Sequence[str], row_index: int, column_index: int) -> str | None:
    value = _cell(row, row_index, column_index)
    if value == "":
        return None
    return value


def read_int_column(row: Sequence[str], row_index: int, column_index: int) -> int:
    value = _cell(row, row_index, column_index)
    if not _INT_PATTERN.fullmatch(value):
        raise NonNumericValueError(
            f"cannot convert {value!r} to a number",
            row=row_index + 1,
            column=column_index + 1,
            value=value,
        )
    return int(value)
