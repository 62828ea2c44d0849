from stargaze.errors import ConfigurationError

from .types import BodyPositionSample, TelescopeProfile, Tier, VisibilityRating

TELESCOPE_PROFILES = {
    "entry": TelescopeProfile(
        label="entry",
        max_magnitude=10.0,
        min_altitude_deg=15.0,
        description="Entry-level telescope (60-80mm aperture)",
    ),
    "intermediate": TelescopeProfile(
        label="intermediate",
        max_magnitude=12.0,
        min_altitude_deg=10.0,
        description="Intermediate telescope (100-150mm aperture)",
    ),
    "advanced": TelescopeProfile(
        label="advanced",
        max_magnitude=14.0,
        min_altitude_deg=5.0,
        description="Advanced telescope (200mm+ aperture)",
    ),
}


def get_telescope_profile(level: str) -> TelescopeProfile:
    try:
        return TELESCOPE_PROFILES[level.lower()]
    except KeyError:
        raise ConfigurationError(f"Unknown telescope level: {level}") from None


def rate_visibility(
    sample: BodyPositionSample, telescope: TelescopeProfile
) -> VisibilityRating:
    altitude = sample.altitude_deg
    mag = sample.magnitude

    if altitude < 0:
        return VisibilityRating(Tier.NOT_VISIBLE, "below horizon")
    if altitude < telescope.min_altitude_deg:
        return VisibilityRating(Tier.POOR, "too low on horizon")
    if mag is not None and mag > telescope.max_magnitude:
        return VisibilityRating(Tier.TOO_FAINT, "too faint for this telescope")

    if altitude > 45:
        tier = Tier.EXCELLENT
        explanation = "high in sky, minimal atmospheric interference"
    elif altitude > 30:
        tier = Tier.GOOD
        explanation = "good viewing angle"
    else:
        tier = Tier.FAIR
        explanation = "viewable but lower in sky"

    if mag is not None:
        if mag < 0:
            explanation += ", very bright"
        elif mag > 5:
            tier = Tier.GOOD if tier == Tier.EXCELLENT else Tier.FAIR
            explanation += ", relatively faint"

    return VisibilityRating(tier, explanation)
