import json
import math
from dataclasses import asdict

from stargaze.util.format import (
    azimuth_to_direction,
    format_degrees,
    format_hour_12h,
    format_magnitude,
)

from .aggregate import (
    SECTION_CHALLENGING,
    SECTION_EXCELLENT,
    SECTION_FAIR,
    SECTION_GOOD,
    SECTION_NOT_VISIBLE,
    group_by_tier,
)
from .types import NightlyBodyRecord, NightReport, WeatherVerdict

RULE_WIDTH = 70


def format_json(report: NightReport) -> str:
    return json.dumps(asdict(report), indent=2, default=str)


def format_text(report: NightReport) -> str:
    lines: list[str] = []
    rule = "=" * RULE_WIDTH
    loc = report.location
    lines.append(rule)
    lines.append("TELESCOPE VIEWING TARGETS")
    lines.append(rule)
    lines.append(f"Date: {report.date}")
    lines.append(
        f"Location: {loc.latitude_deg}, {loc.longitude_deg} ({loc.elevation_m:g}m elevation)"
    )
    lines.append(f"Telescope: {report.telescope.description or report.telescope.label}")
    lines.append(f"Time Range: {report.start_hour}:00 - {report.end_hour}:00")
    lines.append(rule)
    lines.append("")

    if report.weather is not None:
        lines.extend(_weather_lines(report.weather))
    else:
        lines.append(f"Warning: Could not fetch weather data: {report.weather_error or 'unavailable'}")
        lines.append("Continuing with celestial object analysis...")
        lines.append("")

    if report.failed_hours:
        failed = ", ".join(f"{h:02d}:00" for h in report.failed_hours)
        lines.append(f"Note: no position data for {failed}")
        lines.append("")

    groups = group_by_tier(report.records)
    if groups[SECTION_EXCELLENT]:
        lines.extend(_section("EXCELLENT TARGETS:", groups[SECTION_EXCELLENT], _excellent_lines))
    if groups[SECTION_GOOD]:
        lines.extend(_section("GOOD TARGETS:", groups[SECTION_GOOD], _good_lines))
    if groups[SECTION_FAIR]:
        lines.extend(_section("FAIR TARGETS:", groups[SECTION_FAIR], _fair_lines))
    if groups[SECTION_CHALLENGING]:
        lines.append("CHALLENGING (not recommended for your telescope):")
        lines.append("-" * RULE_WIDTH)
        for record in groups[SECTION_CHALLENGING]:
            lines.append(f"  {record.body_name}: {record.best_explanation}")
        lines.append("")
    if groups[SECTION_NOT_VISIBLE]:
        lines.append("NOT VISIBLE TONIGHT:")
        lines.append("-" * RULE_WIDTH)
        lines.append("  " + ", ".join(r.body_name for r in groups[SECTION_NOT_VISIBLE]))
        lines.append("")
    if not report.records:
        lines.append("No recommended targets for this window.")
        lines.append("")

    lines.append(rule)
    if report.weather is not None and not report.weather.worth_observing:
        lines.append("TIP: Check back later - weather conditions may improve!")
    else:
        lines.append("TIP: Start with the highest-rated targets when you first go outside!")
    lines.append(rule)
    return "\n".join(lines)


def _weather_lines(weather: WeatherVerdict) -> list[str]:
    lines = [
        "WEATHER CONDITIONS FOR TONIGHT:",
        "-" * RULE_WIDTH,
        f"Overall Quality: {weather.quality.value.upper()}",
        f"Cloud Cover: {math.floor(weather.avg_cloud_cover + 0.5)}/9 (1=clear, 9=overcast)",
        f"Atmospheric Seeing: {weather.avg_seeing:.1f}/8 (higher is better)",
        f"Transparency: {weather.avg_transparency:.1f}/8 (higher is better)",
    ]
    if weather.has_precipitation:
        lines.append("Precipitation: Expected")
    lines.append(f"Conditions: {', '.join(weather.reasons)}")
    lines.append("")
    if weather.worth_observing:
        lines.append("VIEWING RECOMMENDATION: GO OUTSIDE!")
        lines.append("Weather conditions are favorable for telescope viewing tonight.")
    else:
        lines.append("VIEWING RECOMMENDATION: NOT RECOMMENDED")
        lines.append("Tonight's weather conditions are not suitable for telescope viewing.")
        lines.append("However, here's what would be visible in the sky if conditions improve:")
    lines.append("=" * RULE_WIDTH)
    lines.append("")
    return lines


def _section(title: str, records, render) -> list[str]:
    lines = [title, "-" * RULE_WIDTH]
    for record in records:
        lines.append("")
        lines.extend(render(record))
    lines.append("")
    return lines


def _best_viewing(record: NightlyBodyRecord) -> str:
    return (
        f"  Best viewing: {format_hour_12h(record.peak_hour)} "
        f"({format_degrees(record.peak_altitude_deg)} altitude)"
    )


def _direction(record: NightlyBodyRecord) -> str:
    return (
        f"  Direction: {azimuth_to_direction(record.peak_azimuth_deg)} "
        f"({format_degrees(record.peak_azimuth_deg)})"
    )


def _visible(record: NightlyBodyRecord) -> str:
    return f"  Visible: {record.visible_hour_count}/{record.total_hour_count} hours checked"


def _excellent_lines(record: NightlyBodyRecord) -> list[str]:
    return [
        record.body_name,
        _best_viewing(record),
        _direction(record),
        f"  Magnitude: {format_magnitude(record.magnitude)}",
        f"  Constellation: {record.constellation}",
        _visible(record),
        f"  Why it's great: {record.best_explanation}",
    ]


def _good_lines(record: NightlyBodyRecord) -> list[str]:
    return [
        record.body_name,
        _best_viewing(record),
        _direction(record),
        f"  Magnitude: {format_magnitude(record.magnitude)}",
        _visible(record),
        f"  Note: {record.best_explanation}",
    ]


def _fair_lines(record: NightlyBodyRecord) -> list[str]:
    return [
        record.body_name,
        _best_viewing(record),
        f"  Magnitude: {format_magnitude(record.magnitude)}",
        f"  Note: {record.best_explanation}",
    ]
