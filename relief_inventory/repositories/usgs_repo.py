# relief_inventory/repositories/usgs_repo.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import requests

from relief_inventory.config import USGS_DEFAULT_URL
from relief_inventory.data_contracts.models import EarthquakeFeatures

logger = logging.getLogger(__name__)


class UsgsEarthquakeFeed:
    """
    Recent earthquakes around a point, from the USGS fdsnws event API.
    Feeds the severity oracle with the newest event's features.
    """

    def __init__(
        self,
        url: str = USGS_DEFAULT_URL,
        max_radius_deg: float = 10.0,
        lookback_days: int = 7,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.max_radius_deg = max_radius_deg
        self.lookback_days = lookback_days
        self.timeout = timeout
        self.session = session or requests.Session()

    def _start_date(self, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        return (now - timedelta(days=self.lookback_days)).strftime("%Y-%m-%d")

    def events(self, latitude: float, longitude: float, now: Optional[datetime] = None) -> List[EarthquakeFeatures]:
        """
        Events inside the search radius, newest first.
        Returns an empty list when the feed is unreachable or malformed.
        """
        params = {
            "format": "geojson",
            "latitude": latitude,
            "longitude": longitude,
            "maxradius": self.max_radius_deg,
            "starttime": self._start_date(now),
            "minmagnitude": 1,
            "orderby": "time",
        }

        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            features = response.json().get("features", [])
        except (requests.RequestException, ValueError, AttributeError) as e:
            logger.warning("USGS earthquake query failed: %s", e)
            return []

        events = []
        for feature in features:
            try:
                props = feature.get("properties") or {}
                lon, lat, depth = feature["geometry"]["coordinates"][:3]
                time_ms = props.get("time")
                events.append(EarthquakeFeatures(
                    magnitude=props["mag"],
                    depth=depth,
                    latitude=lat,
                    longitude=lon,
                    location=props.get("place"),
                    time=(
                        datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc).isoformat()
                        if time_ms is not None
                        else None
                    ),
                ))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.debug("Skipping malformed USGS feature")
                continue

        logger.info("USGS returned %d events near (%.2f, %.2f)", len(events), latitude, longitude)
        return events

    def latest(self, latitude: float, longitude: float, now: Optional[datetime] = None) -> Optional[EarthquakeFeatures]:
        events = self.events(latitude, longitude, now=now)
        return events[0] if events else None


def magnitude_breakdown(events: List[EarthquakeFeatures]) -> Dict[str, int]:
    """Counts of minor (<4), moderate (4-6) and strong (>=6) events."""
    counts = {"minor": 0, "moderate": 0, "strong": 0}
    for event in events:
        if event.magnitude < 4.0:
            counts["minor"] += 1
        elif event.magnitude < 6.0:
            counts["moderate"] += 1
        else:
            counts["strong"] += 1
    return counts
