import math

import astropy.units as u
from astropy.coordinates import Angle

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def normalize_azimuth(azimuth_deg: float) -> float:
    return float(Angle(azimuth_deg, u.deg).wrap_at(360 * u.deg).degree)


def azimuth_to_direction(azimuth_deg: float) -> str:
    sector = 360.0 / len(COMPASS_POINTS)
    # Half-way bearings round up (11.25° -> NNE)
    index = math.floor(normalize_azimuth(azimuth_deg) / sector + 0.5)
    return COMPASS_POINTS[index % len(COMPASS_POINTS)]


def format_hour_12h(hour: int) -> str:
    if hour > 12:
        display = hour - 12
    elif hour == 0:
        display = 12
    else:
        display = hour
    period = "PM" if hour >= 12 else "AM"
    return f"{display}:00 {period}"


def format_api_time(hour: int) -> str:
    return f"{hour % 24:02d}:00:00"


def format_magnitude(mag: float | None, precision: int = 2) -> str:
    if mag is None:
        return "N/A"
    return f"{mag:.{precision}f}"


def format_degrees(value: float | None, precision: int = 1) -> str:
    if value is None:
        return "N/A"
    return f"{value:.{precision}f}°"
