from datetime import time, timedelta

import pytest

from taod.common.errors import NonNumericValueError, ValueRangeError
from taod.ingest.fields import (
    JST,
    dms_to_latitude,
    dms_to_longitude,
    offset_datetime,
    read_datetime_columns,
    read_point_columns,
    read_time_columns,
    time_of_day,
)


def test_offset_datetime_builds_jst_timestamp():
    value = offset_datetime(2021, 1, 1, 10, 30)
    assert (value.year, value.month, value.day, value.hour, value.minute, value.second) == (2021, 1, 1, 10, 30, 0)
    assert value.utcoffset() == timedelta(hours=9)
    assert value.tzinfo == JST


@pytest.mark.parametrize(
    "parts",
    [(2020, 2, 29, 0, 0), (2021, 12, 31, 23, 59), (2000, 2, 29, 12, 0), (1999, 4, 30, 6, 5)],
)
def test_offset_datetime_round_trips_components(parts):
    value = offset_datetime(*parts)
    assert (value.year, value.month, value.day, value.hour, value.minute) == parts


@pytest.mark.parametrize(
    ("parts", "field", "value"),
    [
        ((2021, 13, 1, 10, 30), "month", 13),
        ((2021, 0, 1, 10, 30), "month", 0),
        ((2021, 1, 32, 10, 30), "day", 32),
        ((2021, 2, 29, 10, 30), "day", 29),
        ((1900, 2, 29, 10, 30), "day", 29),
        ((2021, 4, 31, 10, 30), "day", 31),
        ((0, 1, 1, 10, 30), "year", 0),
        ((2021, 1, 1, 24, 30), "hour", 24),
        ((2021, 1, 1, -1, 30), "hour", -1),
        ((2021, 1, 1, 10, 60), "minute", 60),
    ],
)
def test_offset_datetime_names_offending_field(parts, field, value):
    with pytest.raises(ValueRangeError) as excinfo:
        offset_datetime(*parts)
    assert excinfo.value.field == field
    assert excinfo.value.value == value
    assert excinfo.value.row is None


def test_offset_datetime_checks_month_before_time():
    with pytest.raises(ValueRangeError) as excinfo:
        offset_datetime(2021, 13, 1, 24, 60)
    assert excinfo.value.field == "month"


def test_time_of_day_bounds():
    assert time_of_day(10, 30) == time(10, 30, 0)
    assert time_of_day(0, 0) == time(0, 0)
    with pytest.raises(ValueRangeError):
        time_of_day(24, 30)
    with pytest.raises(ValueRangeError):
        time_of_day(10, 60)


def test_read_datetime_columns_attributes_range_error_to_column():
    row = ["x", "2022", "01", "22", "14", "60"]
    with pytest.raises(ValueRangeError) as excinfo:
        read_datetime_columns(row, 6, 1)
    assert excinfo.value.row == 7
    assert excinfo.value.column == 6
    assert "row 7, column 6" in str(excinfo.value)


def test_read_datetime_columns_day_error_points_at_day_column():
    row = ["2021", "02", "30", "10", "00"]
    with pytest.raises(ValueRangeError) as excinfo:
        read_datetime_columns(row, 0, 0)
    assert excinfo.value.field == "day"
    assert excinfo.value.column == 3


def test_read_datetime_columns_non_numeric():
    with pytest.raises(NonNumericValueError) as excinfo:
        read_datetime_columns(["2022", "Jan", "22", "14", "18"], 0, 0)
    assert excinfo.value.column == 2


def test_read_time_columns_uses_starting_offset():
    row = ["06", "59", "16", "33"]
    assert read_time_columns(row, 0, 0) == time(6, 59)
    assert read_time_columns(row, 0, 2) == time(16, 33)


def test_read_time_columns_minute_error_column():
    with pytest.raises(ValueRangeError) as excinfo:
        read_time_columns(["16", "75"], 0, 0)
    assert excinfo.value.column == 2


def test_dms_to_latitude():
    assert dms_to_latitude("350000000") == 35.0
    assert dms_to_latitude("353000000") == 35.0 + 30.0 / 60.0
    expected = 35.0 + 30.0 / 60.0 + 30.123 / 3600.0
    assert abs(dms_to_latitude("353030123") - expected) < 1e-11


def test_dms_to_longitude():
    assert dms_to_longitude("1350000000") == 135.0
    assert dms_to_longitude("1353000000") == 135.0 + 30.0 / 60.0
    expected = 135.0 + 30.0 / 60.0 + 30.123 / 3600.0
    assert abs(dms_to_longitude("1353030123") - expected) < 1e-11


def test_dms_accepts_the_exact_bounds():
    assert dms_to_latitude("900000000") == 90.0
    assert dms_to_longitude("1800000000") == 180.0


@pytest.mark.parametrize(
    "text",
    ["", "35", "3530", "35a030123", "-35303012", "35 30 30", "356030123", "353060000", "905930000", "900000001"],
)
def test_dms_to_latitude_rejects_malformed(text):
    with pytest.raises(ValueRangeError) as excinfo:
        dms_to_latitude(text)
    assert excinfo.value.field == "latitude"


@pytest.mark.parametrize("text", ["", "13530", "135a030123", "1816000000", "1356000000", "1805900000", "1800000001"])
def test_dms_to_longitude_rejects_malformed(text):
    with pytest.raises(ValueRangeError):
        dms_to_longitude(text)


def test_read_point_columns_orders_longitude_first():
    point = read_point_columns(["430234789", "1412612831"], 0, 0)
    assert point.latitude == 43.0 + 2.0 / 60.0 + 34.789 / 3600.0
    assert point.longitude == 141.0 + 26.0 / 60.0 + 12.831 / 3600.0


def test_read_point_columns_attributes_longitude_error():
    with pytest.raises(ValueRangeError) as excinfo:
        read_point_columns(["x", "430234789", ""], 9, 1)
    assert excinfo.value.row == 10
    assert excinfo.value.column == 3
