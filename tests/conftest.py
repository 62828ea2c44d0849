import pytest

from stargaze.config import Config
from stargaze.errors import UpstreamRequestError
from stargaze.planner.providers import PositionProvider, WeatherProvider


def pytest_addoption(parser):
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run tests marked as integration",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--integration"):
        return

    for item in items:
        if "integration" in item.keywords:
            item.add_marker(
                pytest.mark.skip(
                    reason="need --integration option to run integration tests"
                )
            )


SITE_ENV = {
    "ASTRONOMY_API_APP_ID": "app-id",
    "ASTRONOMY_API_APP_SECRET": "app-secret",
    "LATITUDE": "-34.93",
    "LONGITUDE": "138.60",
    "ELEVATION": "50",
}


class StaticWeatherProvider(WeatherProvider):
    name = "static"

    def __init__(self, samples=None, error: Exception | None = None):
        self.samples = list(samples or [])
        self.error = error
        self.calls = 0

    def fetch_forecast(self, location):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.samples)


class StaticPositionProvider(PositionProvider):
    name = "static"

    def __init__(self, by_hour=None, failing_hours=()):
        self.by_hour = dict(by_hour or {})
        self.failing_hours = set(failing_hours)
        self.requested: list[tuple[str, int]] = []

    def fetch_positions(self, location, date, hour):
        self.requested.append((date, hour))
        if hour in self.failing_hours:
            raise UpstreamRequestError(f"API request failed with status 500 for {hour}")
        return list(self.by_hour.get(hour, []))


@pytest.fixture
def site_env():
    return dict(SITE_ENV)


@pytest.fixture
def make_config(site_env):
    def _make(data=None, **env_overrides):
        env = dict(site_env)
        env.update(env_overrides)
        return Config(data or {}, env)

    return _make


@pytest.fixture
def weather_provider():
    return StaticWeatherProvider


@pytest.fixture
def position_provider():
    return StaticPositionProvider
