import json

from stargaze.planner.formatters import format_json, format_text
from stargaze.planner.types import (
    NightlyBodyRecord,
    NightReport,
    ObserverLocation,
    OutputMode,
    Quality,
    Tier,
    WeatherVerdict,
)
from stargaze.planner.visibility import TELESCOPE_PROFILES


def _record(name, tier, **kwargs):
    values = dict(
        body_name=name,
        best_tier=tier,
        best_explanation="high in sky, minimal atmospheric interference",
        magnitude=-2.5,
        constellation="Taurus",
        visible_hour_count=3,
        total_hour_count=3,
        peak_altitude_deg=46.0,
        peak_hour=23,
        peak_azimuth_deg=135.0,
    )
    values.update(kwargs)
    return NightlyBodyRecord(**values)


def _report(records, weather=None, weather_error=None, failed_hours=None):
    return NightReport(
        date="2024-07-01",
        location=ObserverLocation(latitude_deg=-34.93, longitude_deg=138.6, elevation_m=50.0),
        telescope=TELESCOPE_PROFILES["entry"],
        start_hour=21,
        end_hour=2,
        hours=[21, 22, 23, 0, 1, 2],
        records=records,
        mode=OutputMode.VERBOSE,
        weather=weather,
        weather_error=weather_error,
        failed_hours=failed_hours or [],
    )


GOOD_WEATHER = WeatherVerdict(
    quality=Quality.GOOD,
    worth_observing=True,
    avg_cloud_cover=2.5,
    avg_seeing=5.5,
    avg_transparency=6.0,
    has_precipitation=False,
    reasons=("some clouds", "average atmospheric stability", "excellent transparency"),
)


def test_format_text_sections():
    records = [
        _record("Jupiter", Tier.EXCELLENT),
        _record("Saturn", Tier.GOOD, peak_hour=1, best_explanation="good viewing angle"),
        _record("Uranus", Tier.POOR, best_explanation="too low on horizon"),
        _record("Neptune", Tier.NOT_VISIBLE, peak_altitude_deg=None, peak_hour=None, peak_azimuth_deg=None),
        _record("Pluto", Tier.NOT_VISIBLE, peak_altitude_deg=None, peak_hour=None, peak_azimuth_deg=None),
    ]
    text = format_text(_report(records, weather=GOOD_WEATHER))

    assert "Date: 2024-07-01" in text
    assert "Telescope: Entry-level telescope (60-80mm aperture)" in text
    assert "Overall Quality: GOOD" in text
    assert "Cloud Cover: 3/9" in text
    assert "Atmospheric Seeing: 5.5/8" in text
    assert "VIEWING RECOMMENDATION: GO OUTSIDE!" in text
    assert "EXCELLENT TARGETS:" in text
    assert "  Best viewing: 11:00 PM (46.0° altitude)" in text
    assert "  Direction: SE (135.0°)" in text
    assert "  Magnitude: -2.50" in text
    assert "  Visible: 3/3 hours checked" in text
    assert "  Best viewing: 1:00 AM (46.0° altitude)" in text
    assert "  Uranus: too low on horizon" in text
    assert "  Neptune, Pluto" in text
    assert "FAIR TARGETS:" not in text
    assert text.index("EXCELLENT TARGETS:") < text.index("GOOD TARGETS:") < text.index("CHALLENGING")
    assert "TIP: Start with the highest-rated targets" in text


def test_format_text_without_weather():
    text = format_text(_report([], weather_error="Weather API request failed with status 503", failed_hours=[0]))
    assert "Could not fetch weather data: Weather API request failed with status 503" in text
    assert "Note: no position data for 00:00" in text
    assert "No recommended targets for this window." in text
    assert "TIP: Start with the highest-rated targets" in text


def test_format_text_bad_weather():
    weather = WeatherVerdict(
        quality=Quality.UNSUITABLE,
        worth_observing=False,
        avg_cloud_cover=8.0,
        avg_seeing=3.0,
        avg_transparency=2.0,
        has_precipitation=True,
        reasons=("heavy cloud cover", "precipitation expected"),
    )
    text = format_text(_report([_record("Moon", Tier.FAIR)], weather=weather))
    assert "Precipitation: Expected" in text
    assert "VIEWING RECOMMENDATION: NOT RECOMMENDED" in text
    assert "TIP: Check back later" in text
    assert "  Magnitude: -2.50" in text


def test_format_json():
    payload = json.loads(format_json(_report([_record("Jupiter", Tier.EXCELLENT)], weather=GOOD_WEATHER)))
    assert payload["records"][0]["best_tier"] == "excellent"
    assert payload["weather"]["quality"] == "good"
    assert payload["mode"] == "verbose"
    assert payload["hours"] == [21, 22, 23, 0, 1, 2]
