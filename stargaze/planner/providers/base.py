import http.client
import json
import logging
import socket
from abc import ABC, abstractmethod
from typing import Sequence
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from stargaze.errors import MalformedResponseError, UpstreamRequestError
from stargaze.planner.types import BodyPositionSample, ForecastSample, ObserverLocation

logger = logging.getLogger(__name__)


class WeatherProvider(ABC):
    name: str

    @abstractmethod
    def fetch_forecast(self, location: ObserverLocation) -> Sequence[ForecastSample]:
        raise NotImplementedError


class PositionProvider(ABC):
    name: str

    @abstractmethod
    def fetch_positions(
        self, location: ObserverLocation, date: str, hour: int
    ) -> Sequence[BodyPositionSample]:
        raise NotImplementedError


def fetch_json(url: str, headers: dict | None = None, timeout_s: float | None = None):
    request = Request(url, headers=headers or {}, method="GET")
    kwargs = {} if timeout_s is None else {"timeout": timeout_s}
    logger.debug("GET %s", url)
    try:
        with urlopen(request, **kwargs) as resp:
            status = getattr(resp, "status", 200)
            body = resp.read()
    except HTTPError as e:
        detail = _read_error_body(e)
        raise UpstreamRequestError(
            f"Request failed with status {e.code}: {detail}" if detail else f"Request failed with status {e.code}"
        ) from e
    except (URLError, socket.timeout, OSError, http.client.HTTPException) as e:
        reason = getattr(e, "reason", e)
        raise UpstreamRequestError(f"Request failed: {reason}") from e

    if status != 200:
        raise UpstreamRequestError(f"Request failed with status {status}")
    try:
        return json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e


def _read_error_body(error: HTTPError) -> str:
    try:
        body = error.read()
    except OSError:
        return ""
    if not body:
        return ""
    return body.decode("utf-8", errors="replace").strip()[:200]
