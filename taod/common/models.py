"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, time
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class AccidentIdentifier:
    """Natural key of an accident: prefecture, police station and main number."""

    prefecture_code: str
    police_station_code: str
    main_number: int

    def __str__(self) -> str:
        return (
            f"(prefecture {self.prefecture_code}, police station {self.police_station_code}, "
            f"main number {self.main_number})"
        )


@dataclass(frozen=True)
class GeoPoint:
    longitude: float
    latitude: float


@dataclass(frozen=True)
class AccidentRecord:
    id: UUID
    prefecture_code: str
    police_station_code: str
    main_number: int
    accident_detail_code: str
    number_of_deaths: int
    number_of_injuries: int
    route_code: str
    route_class_code: str
    location_code: int
    city_jis_code: str
    occurred_at: datetime
    day_night_code: str
    sunrise_time: time
    sunset_time: time
    weather_code: str
    district_code: str
    surface_condition_code: str
    road_model_code: str
    traffic_signal_code: str
    stop_regulation_sign_a_code: str
    stop_regulation_display_a_code: str
    stop_regulation_sign_b_code: str
    stop_regulation_display_b_code: str
    road_width_code: str
    road_alignment_code: str
    collision_point_code: str
    zone_regulation_code: str
    central_separation_code: str
    road_segmentation_code: str
    accident_type_code: str
    age_a_code: str
    age_b_code: str
    party_a_code: str
    party_b_code: str
    purpose_a_code: str
    purpose_b_code: str
    vehicle_type_a_code: str
    vehicle_type_b_code: str
    automatic_a_code: str
    automatic_b_code: str
    support_car_a_code: str
    support_car_b_code: str
    speed_regulation_a_code: str
    speed_regulation_b_code: str
    collision_part_a: str
    collision_part_b: str
    vehicle_damage_a_code: str
    vehicle_damage_b_code: str
    airbag_a_code: str
    airbag_b_code: str
    side_airbag_a_code: str
    side_airbag_b_code: str
    injury_a_code: str
    injury_b_code: str
    location: GeoPoint
    week_code: str
    holiday_code: str
    cognitive_days_a: int
    cognitive_days_b: int
    driving_practice_a_code: str
    driving_practice_b_code: str

    def identifier(self) -> AccidentIdentifier:
        return AccidentIdentifier(
            prefecture_code=self.prefecture_code,
            police_station_code=self.police_station_code,
            main_number=self.main_number,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InvolvedPartyRecord:
    """A party to an accident other than parties A and B.

    ``accident_id`` is the surrogate id of the parent :class:`AccidentRecord`.
    Optional codes are ``None`` when the source cell is empty.
    """

    id: UUID
    accident_id: UUID
    sub_number: int
    party_code: str
    purpose_code: str | None
    vehicle_type_code: str | None
    riding_type_code: str
    riding_class_code: str
    support_car_code: str
    airbag_code: str
    side_airbag_code: str
    injury_code: str
    collision_part: str | None
    vehicle_damage_code: str | None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ImportBatch:
    """Both decoded collections of one import run, committed together."""

    accidents: list[AccidentRecord]
    involved_parties: list[InvolvedPartyRecord]
