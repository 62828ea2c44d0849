import pytest

from stargaze.planner.types import ForecastSample, PrecipitationKind, Quality
from stargaze.planner.weather import assess_weather, in_window, select_window


def _sample(hour, cloud=1, seeing=6, transparency=6, prec=PrecipitationKind.NONE):
    return ForecastSample(
        hour_of_day=hour,
        cloud_cover=cloud,
        seeing=seeing,
        transparency=transparency,
        precipitation=prec,
    )


def test_select_window_overnight():
    samples = [_sample(10), _sample(21), _sample(23), _sample(0), _sample(2), _sample(3)]
    kept = [s.hour_of_day for s in select_window(samples, 21, 2)]
    assert kept == [21, 23, 0, 2]


def test_select_window_same_day_inclusive():
    assert in_window(18, 18, 22)
    assert in_window(22, 18, 22)
    assert not in_window(23, 18, 22)
    assert not in_window(17, 18, 22)


def test_assess_weather_empty_window():
    assert assess_weather([_sample(10), _sample(13)], 21, 2) is None
    assert assess_weather([], 21, 2) is None


def test_clear_dry_night_is_worth_observing():
    verdict = assess_weather([_sample(21, cloud=1), _sample(0, cloud=2)], 21, 2)
    assert verdict.quality in (Quality.EXCELLENT, Quality.GOOD)
    assert verdict.worth_observing is True
    assert verdict.reasons == (
        "clear skies",
        "excellent atmospheric stability",
        "excellent transparency",
    )
    assert verdict.avg_cloud_cover == pytest.approx(1.5)


@pytest.mark.parametrize("prec", [PrecipitationKind.RAIN, PrecipitationKind.SNOW])
def test_precipitation_makes_night_unsuitable(prec):
    samples = [_sample(21), _sample(22, prec=prec), _sample(23)]
    verdict = assess_weather(samples, 21, 2)
    assert verdict.quality == Quality.UNSUITABLE
    assert verdict.worth_observing is False
    assert verdict.has_precipitation is True
    assert verdict.reasons[-1] == "precipitation expected"


def test_precipitation_outside_window_is_ignored():
    samples = [_sample(12, prec=PrecipitationKind.RAIN), _sample(21)]
    verdict = assess_weather(samples, 21, 2)
    assert verdict.has_precipitation is False


def test_other_precipitation_is_not_rain():
    verdict = assess_weather([_sample(21, prec=PrecipitationKind.OTHER)], 21, 2)
    assert verdict.has_precipitation is False


def test_heavy_cloud_is_poor():
    verdict = assess_weather([_sample(21, cloud=8), _sample(22, cloud=7)], 21, 2)
    assert verdict.quality == Quality.POOR
    assert "heavy cloud cover" in verdict.reasons
    assert verdict.worth_observing is False


def test_moderate_cloud_and_poor_seeing_is_fair():
    verdict = assess_weather([_sample(21, cloud=5, seeing=2)], 21, 2)
    assert verdict.quality == Quality.FAIR
    assert verdict.reasons[:2] == ("moderate cloud cover", "poor atmospheric stability")
    assert verdict.worth_observing is True


def test_some_clouds_downgrades_to_good():
    verdict = assess_weather([_sample(21, cloud=3, seeing=4, transparency=4)], 21, 2)
    assert verdict.quality == Quality.GOOD
    assert verdict.reasons == ("some clouds", "average atmospheric stability")


def test_poor_seeing_does_not_upgrade_poor_quality():
    verdict = assess_weather([_sample(21, cloud=9, seeing=1)], 21, 2)
    assert verdict.quality == Quality.POOR


def test_reduced_transparency_keeps_quality():
    verdict = assess_weather([_sample(21, transparency=2)], 21, 2)
    assert verdict.quality == Quality.EXCELLENT
    assert "reduced transparency" in verdict.reasons


def test_cloud_at_six_is_not_worth_observing():
    verdict = assess_weather([_sample(21, cloud=6)], 21, 2)
    assert verdict.quality == Quality.FAIR
    assert verdict.worth_observing is False
