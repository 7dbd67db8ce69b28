# relief_inventory/agents/severity_oracle.py

import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests

from relief_inventory.data_contracts.models import EarthquakeFeatures, SeverityLevel

logger = logging.getLogger(__name__)


class SeverityOracle(ABC):
    """
    Capability that maps event features to a disaster severity level.
    Implementations never raise: an unusable prediction is Low.
    """

    @abstractmethod
    def predict(self, features: EarthquakeFeatures) -> SeverityLevel:
        pass


class StaticSeverityOracle(SeverityOracle):
    """Returns a fixed level. Used when no prediction service is configured."""

    def __init__(self, level=SeverityLevel.low):
        self.level = SeverityLevel.coerce(level)

    def predict(self, features: EarthquakeFeatures) -> SeverityLevel:
        return self.level


class HttpSeverityOracle(SeverityOracle):
    """
    Client for the external severity prediction service.

    POSTs {magnitude, depth, latitude, longitude} as JSON and reads
    {"severity": "Low" | "Moderate" | "Severe" | "Catastrophic"}.
    Transport errors, non-2xx replies, bad JSON and unknown labels all
    fall back to Low.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def predict(self, features: EarthquakeFeatures) -> SeverityLevel:
        payload = {
            "magnitude": features.magnitude,
            "depth": features.depth,
            "latitude": features.latitude,
            "longitude": features.longitude,
        }

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Severity prediction failed, defaulting to Low: %s", e)
            return SeverityLevel.low

        label = body.get("severity") if isinstance(body, dict) else None
        level = SeverityLevel.coerce(label)

        if label is None or level.label.lower() != str(label).strip().lower():
            logger.warning("Unrecognized severity %r from oracle, defaulting to Low", label)
            return SeverityLevel.low

        logger.info("Predicted severity %s for M%.1f event", level.label, features.magnitude)
        return level
