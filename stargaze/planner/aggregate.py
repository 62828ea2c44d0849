from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .filters import filter_records
from .scoring import ranking_key
from .types import (
    BodyPositionSample,
    HourlyEntry,
    NightlyBodyRecord,
    OutputMode,
    TelescopeProfile,
    Tier,
)
from .visibility import rate_visibility

MAX_SCHEDULED_HOURS = 12
EXCLUDED_BODIES = ("sun", "earth")

SECTION_EXCELLENT = "excellent"
SECTION_GOOD = "good"
SECTION_FAIR = "fair"
SECTION_CHALLENGING = "challenging"
SECTION_NOT_VISIBLE = "not-visible"


def observation_hours(start_hour: int, end_hour: int) -> list[int]:
    hours = []
    current = start_hour
    stop = (end_hour + 1) % 24
    while True:
        hours.append(current)
        current = (current + 1) % 24
        if current == stop:
            break
        if len(hours) >= MAX_SCHEDULED_HOURS:
            break
    return hours


def is_excluded_body(sample: BodyPositionSample) -> bool:
    names = {sample.body_name.lower()}
    if sample.body_id:
        names.add(sample.body_id.lower())
    return any(name in EXCLUDED_BODIES for name in names)


@dataclass
class _BodyHistory:
    body_name: str
    magnitude: float | None
    constellation: str
    distance_km: float | None
    hourly: list[HourlyEntry] = field(default_factory=list)


class NightAggregator:
    """Fold hourly position samples into one record per body.

    Bodies are kept in first-seen order and every tie (peak altitude, best
    tier) resolves to the earliest hour fed in.
    """

    def __init__(self, telescope: TelescopeProfile):
        self._telescope = telescope
        self._bodies: dict[str, _BodyHistory] = {}

    @property
    def body_names(self) -> list[str]:
        return list(self._bodies)

    def add_sample(self, sample: BodyPositionSample) -> bool:
        if is_excluded_body(sample):
            return False
        history = self._bodies.get(sample.body_name)
        if history is None:
            history = _BodyHistory(
                body_name=sample.body_name,
                magnitude=sample.magnitude,
                constellation=sample.constellation,
                distance_km=sample.distance_km,
            )
            self._bodies[sample.body_name] = history
        rating = rate_visibility(sample, self._telescope)
        history.hourly.append(
            HourlyEntry(
                hour=sample.hour,
                altitude_deg=sample.altitude_deg,
                azimuth_deg=sample.azimuth_deg,
                tier=rating.tier,
                explanation=rating.explanation,
            )
        )
        return True

    def add_hour(self, samples: Iterable[BodyPositionSample]) -> int:
        return sum(1 for sample in samples if self.add_sample(sample))

    def finalize(self, mode: OutputMode = OutputMode.VERBOSE) -> list[NightlyBodyRecord]:
        records = []
        for history in self._bodies.values():
            record = _summarize(history)
            if record.visible_hour_count == 0 and mode == OutputMode.TERSE:
                continue
            records.append(record)
        return records

    def summary(self, mode: OutputMode = OutputMode.TERSE) -> list[NightlyBodyRecord]:
        return rank_records(filter_records(self.finalize(mode), mode))


def _summarize(history: _BodyHistory) -> NightlyBodyRecord:
    visible = [h for h in history.hourly if h.altitude_deg > 0]
    if not visible:
        return NightlyBodyRecord(
            body_name=history.body_name,
            best_tier=Tier.NOT_VISIBLE,
            best_explanation="below horizon all evening",
            magnitude=history.magnitude,
            constellation=history.constellation,
            distance_km=history.distance_km,
            visible_hour_count=0,
            total_hour_count=len(history.hourly),
        )

    peak = visible[0]
    best = visible[0]
    for entry in visible[1:]:
        if entry.altitude_deg > peak.altitude_deg:
            peak = entry
        if entry.tier.rank < best.tier.rank:
            best = entry

    return NightlyBodyRecord(
        body_name=history.body_name,
        best_tier=best.tier,
        best_explanation=best.explanation,
        magnitude=history.magnitude,
        constellation=history.constellation,
        distance_km=history.distance_km,
        peak_altitude_deg=peak.altitude_deg,
        peak_hour=peak.hour,
        peak_azimuth_deg=peak.azimuth_deg,
        visible_hour_count=len(visible),
        total_hour_count=len(history.hourly),
    )


def rank_records(records: Iterable[NightlyBodyRecord]) -> list[NightlyBodyRecord]:
    return sorted(records, key=ranking_key)


def group_by_tier(
    records: Sequence[NightlyBodyRecord],
) -> dict[str, list[NightlyBodyRecord]]:
    groups: dict[str, list[NightlyBodyRecord]] = {
        SECTION_EXCELLENT: [],
        SECTION_GOOD: [],
        SECTION_FAIR: [],
        SECTION_CHALLENGING: [],
        SECTION_NOT_VISIBLE: [],
    }
    for record in records:
        groups[_section_for_tier(record.best_tier)].append(record)
    return groups


def _section_for_tier(tier: Tier) -> str:
    if tier == Tier.EXCELLENT:
        return SECTION_EXCELLENT
    if tier == Tier.GOOD:
        return SECTION_GOOD
    if tier == Tier.FAIR:
        return SECTION_FAIR
    if tier in (Tier.POOR, Tier.TOO_FAINT):
        return SECTION_CHALLENGING
    return SECTION_NOT_VISIBLE
