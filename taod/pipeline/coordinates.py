"""Coordinate reprojection for exported accident locations."""

from __future__ import annotations

import math
from functools import lru_cache

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from taod.common.errors import ConfigError, SinkError
from taod.common.models import GeoPoint


@lru_cache(maxsize=8)
def _transformer(source_epsg: int, target_epsg: int) -> Transformer:
    try:
        return Transformer.from_crs(CRS.from_epsg(source_epsg), CRS.from_epsg(target_epsg), always_xy=True)
    except CRSError as exc:
        raise ConfigError(f"Cannot transform EPSG:{source_epsg} to EPSG:{target_epsg}: {exc}") from exc


def reproject(point: GeoPoint, source_epsg: int, target_epsg: int) -> tuple[float, float]:
    """Return ``(x, y)`` of ``point`` in ``target_epsg``; x is longitude for geographic targets."""
    if source_epsg == target_epsg:
        return point.longitude, point.latitude
    try:
        x, y = _transformer(source_epsg, target_epsg).transform(point.longitude, point.latitude)
    except ProjError as exc:
        raise SinkError(f"Cannot reproject {point} to EPSG:{target_epsg}: {exc}") from exc
    if not (math.isfinite(x) and math.isfinite(y)):
        raise SinkError(f"Reprojection of {point} to EPSG:{target_epsg} is not finite")
    return x, y


def point_ewkt(x: float, y: float, epsg: int) -> str:
    return f"SRID={epsg};POINT({x!r} {y!r})"
