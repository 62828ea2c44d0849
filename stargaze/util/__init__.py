from .format import (
    azimuth_to_direction,
    format_api_time,
    format_degrees,
    format_hour_12h,
    format_magnitude,
    normalize_azimuth,
)

__all__ = [
    "azimuth_to_direction",
    "format_api_time",
    "format_degrees",
    "format_hour_12h",
    "format_magnitude",
    "normalize_azimuth",
]
