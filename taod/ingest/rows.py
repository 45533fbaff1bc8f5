"""Map one positional row of the main or supplementary file to a domain record."""

from __future__ import annotations

from typing import Mapping, Sequence

from taod.common.errors import UnresolvedReferenceError, ValueRangeError
from taod.common.ids import generate_record_id
from taod.common.models import AccidentIdentifier, AccidentRecord, InvolvedPartyRecord
from taod.ingest.columns import read_int_column, read_optional_str_column, read_str_column
from taod.ingest.fields import read_datetime_columns, read_point_columns, read_time_columns
from taod.pipeline.correlate import AccidentIndex

ROUTE_COLUMN = 7
ROUTE_CODE_WIDTH = 4
ROUTE_FIELD_WIDTH = 5
CITY_COLUMN = 9


def _split_route(route: str, row_index: int) -> tuple[str, str]:
    if len(route) != ROUTE_FIELD_WIDTH:
        raise ValueRangeError(
            f"route ({route!r}) must be {ROUTE_FIELD_WIDTH} characters",
            field="route",
            row=row_index + 1,
            column=ROUTE_COLUMN + 1,
            value=route,
        )
    return route[:ROUTE_CODE_WIDTH], route[ROUTE_CODE_WIDTH:]


def _resolve_city(prefecture_code: str, city_code: str, row_index: int, cities: Mapping[str, str]) -> str:
    key = f"{prefecture_code}{city_code}"
    city_jis_code = cities.get(key)
    if city_jis_code is None:
        raise UnresolvedReferenceError(
            f"city code ({key}) not found in the city code table",
            key=key,
            row=row_index + 1,
            column=CITY_COLUMN + 1,
        )
    return city_jis_code


def row_to_accident(row: Sequence[str], row_index: int, cities: Mapping[str, str]) -> AccidentRecord:
    prefecture_code = read_str_column(row, row_index, 1)
    city_code = read_str_column(row, row_index, CITY_COLUMN)
    city_jis_code = _resolve_city(prefecture_code, city_code, row_index, cities)
    route_code, route_class_code = _split_route(read_str_column(row, row_index, ROUTE_COLUMN), row_index)

    return AccidentRecord(
        id=generate_record_id(),
        prefecture_code=prefecture_code,
        police_station_code=read_str_column(row, row_index, 2),
        main_number=read_int_column(row, row_index, 3),
        accident_detail_code=read_str_column(row, row_index, 4),
        number_of_deaths=read_int_column(row, row_index, 5),
        number_of_injuries=read_int_column(row, row_index, 6),
        route_code=route_code,
        route_class_code=route_class_code,
        location_code=read_int_column(row, row_index, 8),
        city_jis_code=city_jis_code,
        occurred_at=read_datetime_columns(row, row_index, 10),
        day_night_code=read_str_column(row, row_index, 15),
        sunrise_time=read_time_columns(row, row_index, 16),
        sunset_time=read_time_columns(row, row_index, 18),
        weather_code=read_str_column(row, row_index, 20),
        district_code=read_str_column(row, row_index, 21),
        surface_condition_code=read_str_column(row, row_index, 22),
        road_model_code=read_str_column(row, row_index, 23),
        traffic_signal_code=read_str_column(row, row_index, 24),
        stop_regulation_sign_a_code=read_str_column(row, row_index, 25),
        stop_regulation_display_a_code=read_str_column(row, row_index, 26),
        stop_regulation_sign_b_code=read_str_column(row, row_index, 27),
        stop_regulation_display_b_code=read_str_column(row, row_index, 28),
        road_width_code=read_str_column(row, row_index, 29),
        road_alignment_code=read_str_column(row, row_index, 30),
        collision_point_code=read_str_column(row, row_index, 31),
        zone_regulation_code=read_str_column(row, row_index, 32),
        central_separation_code=read_str_column(row, row_index, 33),
        road_segmentation_code=read_str_column(row, row_index, 34),
        accident_type_code=read_str_column(row, row_index, 35),
        age_a_code=read_str_column(row, row_index, 36),
        age_b_code=read_str_column(row, row_index, 37),
        party_a_code=read_str_column(row, row_index, 38),
        party_b_code=read_str_column(row, row_index, 39),
        purpose_a_code=read_str_column(row, row_index, 40),
        purpose_b_code=read_str_column(row, row_index, 41),
        vehicle_type_a_code=read_str_column(row, row_index, 42),
        vehicle_type_b_code=read_str_column(row, row_index, 43),
        automatic_a_code=read_str_column(row, row_index, 44),
        automatic_b_code=read_str_column(row, row_index, 45),
        support_car_a_code=read_str_column(row, row_index, 46),
        support_car_b_code=read_str_column(row, row_index, 47),
        speed_regulation_a_code=read_str_column(row, row_index, 48),
        speed_regulation_b_code=read_str_column(row, row_index, 49),
        collision_part_a=read_str_column(row, row_index, 50),
        collision_part_b=read_str_column(row, row_index, 51),
        vehicle_damage_a_code=read_str_column(row, row_index, 52),
        vehicle_damage_b_code=read_str_column(row, row_index, 53),
        airbag_a_code=read_str_column(row, row_index, 54),
        airbag_b_code=read_str_column(row, row_index, 55),
        side_airbag_a_code=read_str_column(row, row_index, 56),
        side_airbag_b_code=read_str_column(row, row_index, 57),
        injury_a_code=read_str_column(row, row_index, 58),
        injury_b_code=read_str_column(row, row_index, 59),
        location=read_point_columns(row, row_index, 60),
        week_code=read_str_column(row, row_index, 62),
        holiday_code=read_str_column(row, row_index, 63),
        cognitive_days_a=read_int_column(row, row_index, 64),
        cognitive_days_b=read_int_column(row, row_index, 65),
        driving_practice_a_code=read_str_column(row, row_index, 66),
        driving_practice_b_code=read_str_column(row, row_index, 67),
    )


def row_to_involved_party(row: Sequence[str], row_index: int, index: AccidentIndex) -> InvolvedPartyRecord:
    identifier = AccidentIdentifier(
        prefecture_code=read_str_column(row, row_index, 1),
        police_station_code=read_str_column(row, row_index, 2),
        main_number=read_int_column(row, row_index, 3),
    )
    accident_id = index.resolve(identifier)
    if accident_id is None:
        raise UnresolvedReferenceError(
            f"accident {identifier} not found in the main file",
            key=identifier,
            row=row_index + 1,
        )

    return InvolvedPartyRecord(
        id=generate_record_id(),
        accident_id=accident_id,
        sub_number=read_int_column(row, row_index, 4),
        party_code=read_str_column(row, row_index, 5),
        purpose_code=read_optional_str_column(row, row_index, 6),
        vehicle_type_code=read_optional_str_column(row, row_index, 7),
        riding_type_code=read_str_column(row, row_index, 8),
        riding_class_code=read_str_column(row, row_index, 9),
        support_car_code=read_str_column(row, row_index, 10),
        airbag_code=read_str_column(row, row_index, 11),
        side_airbag_code=read_str_column(row, row_index, 12),
        injury_code=read_str_column(row, row_index, 13),
        collision_part=read_optional_str_column(row, row_index, 14),
        vehicle_damage_code=read_optional_str_column(row, row_index, 15),
    )
