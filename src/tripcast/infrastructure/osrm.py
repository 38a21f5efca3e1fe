"""
Routing provider backed by an OSRM route service.
"""
import logging

import requests

from ..common.exceptions import RoutingError
from ..estimation.routing import Location, RouteEstimate

logger = logging.getLogger(__name__)

# OSRM profiles for the transport modes; unlisted modes use the car profile
OSRM_PROFILES = {
    "driving": "driving",
    "two_wheeler": "driving",
    "bus": "driving",
    "cycling": "cycling",
    "walking": "foot",
}


class OSRMRoutingProvider:
    """
    Queries the OSRM Route API (`/route/v1/<profile>/<lon,lat>;<lon,lat>`).
    One HTTP request per call, no retries.
    """

    def __init__(self, base_url: str = "https://router.project-osrm.org",
                 session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def route(self, origin: Location, destination: Location, mode: str,
              timeout_seconds: float) -> RouteEstimate:
        profile = OSRM_PROFILES.get(mode, "driving")
        url = (
            f"{self.base_url}/route/v1/{profile}/"
            f"{origin.lon},{origin.lat};{destination.lon},{destination.lat}"
        )
        try:
            resp = self.session.get(url, params={"overview": "false"}, timeout=timeout_seconds)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise RoutingError(f"OSRM request failed: {e}") from e
        except ValueError as e:
            raise RoutingError(f"OSRM returned invalid JSON: {e}") from e

        if data.get("code") != "Ok" or not data.get("routes"):
            raise RoutingError(f"OSRM error: {data.get('message', data.get('code'))}")

        try:
            best = data["routes"][0]
            meters = float(best["distance"])
            seconds = float(best["duration"])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise RoutingError(f"OSRM returned a malformed route: {e!r}") from e

        logger.debug(f"OSRM {profile} route: {meters} m, {seconds} s")
        return RouteEstimate(
            distance_km=meters / 1000,
            duration_minutes=seconds / 60,
            source="osrm",
        )
