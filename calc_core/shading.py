"""
Inter-row shading distance for tilted PV rows.

Solar elevation uses the winter-solstice noon approximation
gama = 90 - |latitude - (-23.44)|. All angles are in degrees, lengths in
metres. Undefined results are reported as NaN.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

WINTER_DECLINATION_DEG = -23.44
SPACING_MARGIN_M = 0.2
TAN_EPS = 1e-6

_COORD_RE = re.compile(r"^(-?\d+\.?\d*)\s*,\s*(-?\d+\.?\d*)$")


@dataclass(frozen=True)
class ShadingInput:
    lat_deg: int
    lat_min: int
    lat_sec: int
    b: float
    beta: float
    alfa: float


@dataclass(frozen=True)
class ShadingResult:
    latitude: float
    gama: float
    h: float
    d1: float
    d: float


@dataclass(frozen=True)
class Dms:
    deg: int
    min: int
    sec: int


@dataclass(frozen=True)
class Coordinates:
    lat: Dms
    lon: Dms


class CoordinateError(ValueError):
    """Raised by parse_coordinates; `reason` is format, latitude_range or longitude_range."""

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason


def _finite(name: str, value: float) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"{name} must be a number")
    val = float(value)
    if math.isnan(val) or math.isinf(val):
        raise ValueError(f"{name} must be finite")
    return val


def dms_to_decimal(deg: int, minutes: int, seconds: int) -> float:
    # Sign comes from the degrees field only.
    deg_val = _finite("deg", deg)
    abs_lat = abs(deg_val) + _finite("minutes", minutes) / 60.0 + _finite("seconds", seconds) / 3600.0
    return -abs_lat if deg_val < 0 else abs_lat


def decimal_to_dms(value: float) -> Dms:
    val = _finite("value", value)
    abs_val = abs(val)
    deg = math.floor(abs_val)
    min_decimal = (abs_val - deg) * 60.0
    minutes = math.floor(min_decimal)
    seconds = int(math.floor((min_decimal - minutes) * 60.0 + 0.5))
    if seconds == 60:
        seconds = 0
        minutes += 1
    if minutes == 60:
        minutes = 0
        deg += 1
    return Dms(deg=-deg if val < 0 else deg, min=minutes, sec=seconds)


def parse_coordinates(text: str) -> Coordinates:
    """Parse "lat, lon" in decimal degrees (as copied from a map) into DMS."""
    match = _COORD_RE.match((text or "").strip())
    if not match:
        raise CoordinateError("format", f"Invalid coordinates: {text!r}")
    lat = float(match.group(1))
    lon = float(match.group(2))
    if lat < -90 or lat > 90:
        raise CoordinateError("latitude_range", "latitude must be in [-90, 90]")
    if lon < -180 or lon > 180:
        raise CoordinateError("longitude_range", "longitude must be in [-180, 180]")
    return Coordinates(lat=decimal_to_dms(lat), lon=decimal_to_dms(lon))


def sun_elevation_winter(latitude_deg: float) -> float:
    lat = _finite("latitude_deg", latitude_deg)
    return max(0.0, 90.0 - abs(lat - WINTER_DECLINATION_DEG))


def panel_height(b: float, beta_deg: float) -> float:
    return _finite("b", b) * math.sin(math.radians(_finite("beta_deg", beta_deg)))


def shadow_offset(h: float, gama_deg: float, alfa_deg: float) -> float:
    """d1 = h / tan(gama - alfa) + margin, NaN when the tangent is unusable."""
    denom = math.tan(math.radians(_finite("gama_deg", gama_deg) - _finite("alfa_deg", alfa_deg)))
    if not math.isfinite(denom) or abs(denom) <= TAN_EPS:
        return math.nan
    return _finite("h", h) / denom + SPACING_MARGIN_M


def calc_row_spacing(data: ShadingInput) -> ShadingResult:
    if data.b < 0:
        raise ValueError("b must be >= 0")
    latitude = dms_to_decimal(data.lat_deg, data.lat_min, data.lat_sec)
    gama = sun_elevation_winter(latitude)
    h = panel_height(data.b, data.beta)
    d1 = shadow_offset(h, gama, data.alfa)
    d = d1 + data.b * math.cos(math.radians(data.beta))
    logger.debug(
        "shading latitude=%.6f gama=%.4f h=%.4f d1=%s d=%s", latitude, gama, h, d1, d
    )
    return ShadingResult(latitude=latitude, gama=gama, h=h, d1=d1, d=d)
