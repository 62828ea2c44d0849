import math
import os
from pathlib import Path
from typing import TYPE_CHECKING, Mapping

from dotenv import find_dotenv, load_dotenv

from stargaze.errors import ConfigurationError

if TYPE_CHECKING:
    import tomli as tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:  # Python < 3.11
        import tomli as tomllib

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "stargaze" / "config.toml"

DEFAULT_ASTRONOMY_API_URL = "https://api.astronomyapi.com/api/v2/bodies/positions"
DEFAULT_WEATHER_URL = "https://www.7timer.info/bin/astro.php"

TELESCOPE_LEVELS = ("entry", "intermediate", "advanced")
OUTPUT_MODES = ("terse", "verbose")

_ENV_KEYS = {
    "app_id": "ASTRONOMY_API_APP_ID",
    "app_secret": "ASTRONOMY_API_APP_SECRET",
    "latitude_deg": "LATITUDE",
    "longitude_deg": "LONGITUDE",
    "elevation_m": "ELEVATION",
    "telescope_level": "TELESCOPE_LEVEL",
    "start_hour": "EVENING_START_HOUR",
    "end_hour": "EVENING_END_HOUR",
    "output_mode": "STARGAZE_OUTPUT_MODE",
}


class Config:
    def __init__(
        self,
        data: dict,
        environ: Mapping[str, str] | None = None,
        overrides: Mapping[str, object] | None = None,
    ):
        self._data = data
        self._env = dict(environ or {})
        self._overrides = dict(overrides or {})

    def with_overrides(self, **overrides) -> "Config":
        merged = dict(self._overrides)
        merged.update({k: v for k, v in overrides.items() if v is not None})
        return Config(self._data, self._env, merged)

    def _lookup(self, key: str, section: str, name: str, default=None):
        if key in self._overrides:
            return self._overrides[key]
        env_key = _ENV_KEYS.get(key)
        if env_key is not None:
            value = self._env.get(env_key)
            if value is not None and value.strip() != "":
                return value.strip()
        return self._data.get(section, {}).get(name, default)

    @property
    def app_id(self):
        return self._lookup("app_id", "astronomy_api", "app_id")

    @property
    def app_secret(self):
        return self._lookup("app_secret", "astronomy_api", "app_secret")

    @property
    def astronomy_api_url(self):
        return self._data.get("astronomy_api", {}).get("base_url", DEFAULT_ASTRONOMY_API_URL)

    @property
    def weather_url(self):
        return self._data.get("weather", {}).get("base_url", DEFAULT_WEATHER_URL)

    @property
    def timeout_s(self) -> float | None:
        value = self._data.get("network", {}).get("timeout_s")
        return float(value) if value is not None else None

    @property
    def site_latitude_deg(self) -> float | None:
        return _parse_number(self._lookup("latitude_deg", "site", "latitude_deg"))

    @property
    def site_longitude_deg(self) -> float | None:
        return _parse_number(self._lookup("longitude_deg", "site", "longitude_deg"))

    @property
    def site_elevation_m(self) -> float | None:
        return _parse_number(self._lookup("elevation_m", "site", "elevation_m"))

    @property
    def telescope_level(self) -> str:
        return str(self._lookup("telescope_level", "telescope", "level", "entry")).lower()

    @property
    def start_hour(self) -> int | None:
        return _parse_hour(self._lookup("start_hour", "window", "start_hour", 21))

    @property
    def end_hour(self) -> int | None:
        return _parse_hour(self._lookup("end_hour", "window", "end_hour", 2))

    @property
    def output_mode(self) -> str:
        return str(self._lookup("output_mode", "output", "mode", "terse")).lower()

    def validate(self) -> None:
        if not self.app_id or not self.app_secret:
            raise ConfigurationError(
                "ASTRONOMY_API_APP_ID and ASTRONOMY_API_APP_SECRET must be set"
            )
        for label, value in (
            ("LATITUDE", self.site_latitude_deg),
            ("LONGITUDE", self.site_longitude_deg),
            ("ELEVATION", self.site_elevation_m),
        ):
            if value is None or math.isnan(value):
                raise ConfigurationError(
                    f"{label} must be set to a number (LATITUDE, LONGITUDE and ELEVATION are required)"
                )
        if not -90.0 <= self.site_latitude_deg <= 90.0:
            raise ConfigurationError("LATITUDE must be between -90 and 90")
        for label, hour in (
            ("EVENING_START_HOUR", self.start_hour),
            ("EVENING_END_HOUR", self.end_hour),
        ):
            if hour is None or not 0 <= hour <= 23:
                raise ConfigurationError(f"{label} must be an integer between 0 and 23")
        if self.telescope_level not in TELESCOPE_LEVELS:
            raise ConfigurationError(
                f"Unknown telescope level: {self.telescope_level} "
                f"(expected one of: {', '.join(TELESCOPE_LEVELS)})"
            )
        if self.output_mode not in OUTPUT_MODES:
            raise ConfigurationError(
                f"Unknown output mode: {self.output_mode} "
                f"(expected one of: {', '.join(OUTPUT_MODES)})"
            )


def _parse_number(value) -> float | None:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return math.nan


def _parse_hour(value) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    explicit_path = path
    path = path or DEFAULT_CONFIG_PATH

    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    if not path.exists():
        if explicit_path is not None:
            raise FileNotFoundError(f"Config file not found: {path}")
        # Return default config if default file missing
        return Config({}, environ)

    with open(path, "rb") as f:
        data = tomllib.load(f)

    return Config(data, environ)
