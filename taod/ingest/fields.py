"""Assemble date-times, times of day and points from adjacent columns."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Sequence

from taod.common.errors import ValueRangeError
from taod.common.models import GeoPoint
from taod.ingest.columns import read_int_column, read_str_column

JST = timezone(timedelta(hours=9))

# Offset of each component from the first of the five date-time columns.
DATETIME_COLUMN_OFFSETS = {"year": 0, "month": 1, "day": 2, "hour": 3, "minute": 4}
TIME_COLUMN_OFFSETS = {"hour": 0, "minute": 1}

_DIGITS = re.compile(r"[0-9]+")


def _check_time(hour: int, minute: int) -> None:
    if not 0 <= hour <= 23:
        raise ValueRangeError(f"hour ({hour}) is out of range", field="hour", value=hour)
    if not 0 <= minute <= 59:
        raise ValueRangeError(f"minute ({minute}) is out of range", field="minute", value=minute)


def offset_datetime(year: int, month: int, day: int, hour: int, minute: int) -> datetime:
    """Build a +09:00 timestamp, validating month, date, hour and minute in that order."""
    if not 1 <= month <= 12:
        raise ValueRangeError(f"month ({month}) is out of range", field="month", value=month)
    try:
        calendar_date = date(year, month, day)
    except ValueError:
        if not 1 <= year <= 9999:
            raise ValueRangeError(f"year ({year}) is out of range", field="year", value=year) from None
        raise ValueRangeError(
            f"day ({day}) is out of range for {year:04d}-{month:02d}",
            field="day",
            value=day,
        ) from None
    _check_time(hour, minute)
    return datetime(calendar_date.year, calendar_date.month, calendar_date.day, hour, minute, 0, tzinfo=JST)


def time_of_day(hour: int, minute: int) -> time:
    _check_time(hour, minute)
    return time(hour, minute, 0)


def read_datetime_columns(row: Sequence[str], row_index: int, column_index: int) -> datetime:
    year, month, day, hour, minute = (
        read_int_column(row, row_index, column_index + offset) for offset in range(5)
    )
    try:
        return offset_datetime(year, month, day, hour, minute)
    except ValueRangeError as exc:
        offset = DATETIME_COLUMN_OFFSETS.get(exc.field or "", 0)
        raise exc.with_context(row=row_index + 1, column=column_index + offset + 1)


def read_time_columns(row: Sequence[str], row_index: int, column_index: int) -> time:
    hour = read_int_column(row, row_index, column_index)
    minute = read_int_column(row, row_index, column_index + 1)
    try:
        return time_of_day(hour, minute)
    except ValueRangeError as exc:
        offset = TIME_COLUMN_OFFSETS.get(exc.field or "", 0)
        raise exc.with_context(row=row_index + 1, column=column_index + offset + 1)


def _dms_to_degrees(text: str, *, degree_width: int, max_degree: int, field: str) -> float:
    # The seconds group needs at least one digit after degrees and minutes.
    if not _DIGITS.fullmatch(text) or len(text) <= degree_width + 2:
        raise ValueRangeError(f"{field} ({text!r}) is not a packed DMS value", field=field, value=text)

    degree = float(text[:degree_width])
    minute = float(text[degree_width : degree_width + 2])
    second = float(text[degree_width + 2 :]) / 1000.0

    if minute >= 60 or second >= 60:
        raise ValueRangeError(f"{field} ({text!r}) is out of range", field=field, value=text)
    degrees = degree + minute / 60.0 + second / 3600.0
    if degrees > max_degree:
        raise ValueRangeError(f"{field} ({text!r}) exceeds {max_degree} degrees", field=field, value=text)
    return degrees


def dms_to_latitude(text: str) -> float:
    """Convert ``DDMM`` + milliseconds-of-arc digits to decimal degrees."""
    return _dms_to_degrees(text, degree_width=2, max_degree=90, field="latitude")


def dms_to_longitude(text: str) -> float:
    """Convert ``DDDMM`` + milliseconds-of-arc digits to decimal degrees."""
    return _dms_to_degrees(text, degree_width=3, max_degree=180, field="longitude")


def read_point_columns(row: Sequence[str], row_index: int, column_index: int) -> GeoPoint:
    raw_latitude = read_str_column(row, row_index, column_index)
    raw_longitude = read_str_column(row, row_index, column_index + 1)
    try:
        latitude = dms_to_latitude(raw_latitude)
    except ValueRangeError as exc:
        raise exc.with_context(row=row_index + 1, column=column_index + 1)
    try:
        longitude = dms_to_longitude(raw_longitude)
    except ValueRangeError as exc:
        raise exc.with_context(row=row_index + 1, column=column_index + 2)
    return GeoPoint(longitude=longitude, latitude=latitude)
