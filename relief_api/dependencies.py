# relief_api/dependencies.py

from functools import lru_cache
from typing import Callable

from relief_inventory.agents.inventory_controller import InventoryController
from relief_inventory.agents.severity_oracle import (
    HttpSeverityOracle,
    SeverityOracle,
    StaticSeverityOracle,
)
from relief_inventory.allocation.random_source import default_random_source
from relief_inventory.config import get_settings
from relief_inventory.repositories.base import FeedRepository
from relief_inventory.repositories.factory import get_feed_repository
from relief_inventory.repositories.usgs_repo import UsgsEarthquakeFeed


@lru_cache
def get_oracle() -> SeverityOracle:
    settings = get_settings()
    if settings.SEVERITY_ORACLE_URL:
        return HttpSeverityOracle(
            settings.SEVERITY_ORACLE_URL,
            timeout=settings.SEVERITY_ORACLE_TIMEOUT,
        )
    return StaticSeverityOracle()


@lru_cache
def get_controller() -> InventoryController:
    settings = get_settings()
    return InventoryController(
        oracle=get_oracle(),
        rng=default_random_source(settings.RANDOM_SEED),
        severity=settings.DEFAULT_SEVERITY,
    )


def get_feed_source() -> Callable[[], FeedRepository]:
    # Resolved only when a request carries no rows of its own
    return lambda: get_feed_repository(get_settings())


@lru_cache
def get_earthquake_feed() -> UsgsEarthquakeFeed:
    settings = get_settings()
    return UsgsEarthquakeFeed(
        url=settings.USGS_QUERY_URL,
        max_radius_deg=settings.USGS_MAX_RADIUS_DEG,
        lookback_days=settings.USGS_LOOKBACK_DAYS,
    )
