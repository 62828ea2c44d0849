from .types import NightlyBodyRecord

# Substitute for bodies the position service reports without a magnitude.
MISSING_MAGNITUDE = 15.0
MAX_ALTITUDE_BONUS = 5.0

TARGET_BONUS = {
    "moon": 15.0,
    "saturn": 3.0,
    "jupiter": 2.0,
    "mars": 1.0,
}


def viewability_score(record: NightlyBodyRecord) -> float:
    """Lower is easier to observe. Used to order bodies sharing a tier."""
    score = record.magnitude if record.magnitude is not None else MISSING_MAGNITUDE
    if record.peak_altitude_deg is not None:
        score -= min(MAX_ALTITUDE_BONUS, record.peak_altitude_deg / 10.0)
    score -= TARGET_BONUS.get(record.body_name.lower(), 0.0)
    return score


def ranking_key(record: NightlyBodyRecord) -> tuple[int, float]:
    return record.best_tier.rank, viewability_score(record)
