import base64
import logging
from urllib.parse import urlencode

from stargaze.config import DEFAULT_ASTRONOMY_API_URL
from stargaze.errors import MalformedResponseError
from stargaze.planner.types import BodyPositionSample, ObserverLocation
from stargaze.util.format import format_api_time

from .base import PositionProvider, fetch_json

logger = logging.getLogger(__name__)


class AstronomyApiPositionProvider(PositionProvider):
    name = "astronomyapi"

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        base_url: str | None = None,
        timeout_s: float | None = None,
    ):
        self._app_id = app_id
        self._app_secret = app_secret
        self._base_url = base_url or DEFAULT_ASTRONOMY_API_URL
        self._timeout_s = timeout_s

    def _auth_header(self) -> dict[str, str]:
        token = base64.b64encode(f"{self._app_id}:{self._app_secret}".encode("utf-8"))
        return {"Authorization": f"Basic {token.decode('ascii')}"}

    def build_url(self, location: ObserverLocation, date: str, hour: int) -> str:
        params = {
            "latitude": location.latitude_deg,
            "longitude": location.longitude_deg,
            "elevation": location.elevation_m,
            "from_date": date,
            "to_date": date,
            "time": format_api_time(hour),
        }
        return f"{self._base_url}?{urlencode(params)}"

    def fetch_positions(
        self, location: ObserverLocation, date: str, hour: int
    ) -> list[BodyPositionSample]:
        payload = fetch_json(
            self.build_url(location, date, hour),
            headers=self._auth_header(),
            timeout_s=self._timeout_s,
        )
        samples = parse_positions(payload, hour)
        logger.debug("astronomyapi returned %d bodies for %s", len(samples), format_api_time(hour))
        return samples


def parse_positions(payload, hour: int) -> list[BodyPositionSample]:
    try:
        rows = payload["data"]["table"]["rows"]
    except (KeyError, TypeError) as e:
        raise MalformedResponseError("Positions response has no data.table.rows") from e
    if not isinstance(rows, list):
        raise MalformedResponseError("Positions response rows is not a list")

    samples = []
    for row in rows:
        try:
            body = row["cells"][0]
            horizontal = body["position"]["horizontal"]
            samples.append(
                BodyPositionSample(
                    body_id=body.get("id"),
                    body_name=body["name"],
                    hour=hour,
                    altitude_deg=float(horizontal["altitude"]["degrees"]),
                    azimuth_deg=float(horizontal["azimuth"]["degrees"]),
                    magnitude=_parse_optional_float((body.get("extraInfo") or {}).get("magnitude")),
                    constellation=(body["position"].get("constellation") or {}).get("name", ""),
                    distance_km=_parse_distance_km(body.get("distance")),
                )
            )
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            raise MalformedResponseError(f"Unexpected body entry: {e}") from e
    return samples


def _parse_optional_float(value) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _parse_distance_km(distance) -> float | None:
    if not isinstance(distance, dict):
        return None
    km = (distance.get("fromEarth") or {}).get("km")
    try:
        return _parse_optional_float(km)
    except ValueError:
        return None
