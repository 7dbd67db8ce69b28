# relief_inventory/agents/inventory_controller.py

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from relief_inventory.agents.feed_quality_agent import FeedQualityAgent
from relief_inventory.agents.severity_oracle import SeverityOracle, StaticSeverityOracle
from relief_inventory.allocation.level_synthesizer import LevelMap, synthesize
from relief_inventory.allocation.random_source import RandomSource, default_random_source
from relief_inventory.allocation.recommender import apply_allocation, recommend
from relief_inventory.allocation.sheet_parser import parse
from relief_inventory.data_contracts.models import (
    AllocationRecommendation,
    Category,
    EarthquakeFeatures,
    SeverityLevel,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppState:
    severity: SeverityLevel = SeverityLevel.low
    selected_category: Optional[str] = None
    rows: List[List[Any]] = field(default_factory=list)
    catalog: Dict[str, Category] = field(default_factory=dict)
    current_levels: LevelMap = field(default_factory=dict)
    recommendations: List[AllocationRecommendation] = field(default_factory=list)
    feed_quality: Optional[dict] = None


class InventoryController:
    """
    Owns the application state and runs
    parse -> synthesize -> recommend whenever its inputs change.

    Every transition builds a new AppState; earlier states are never
    mutated. Transitions are serialized so concurrent callers see one
    consistent state at a time.
    """

    def __init__(
        self,
        oracle: Optional[SeverityOracle] = None,
        rng: Optional[RandomSource] = None,
        severity=SeverityLevel.low,
    ):
        self.oracle = oracle or StaticSeverityOracle()
        self.rng = rng if rng is not None else default_random_source()
        self.quality_agent = FeedQualityAgent()
        self._lock = threading.RLock()
        self._state = AppState(severity=SeverityLevel.coerce(severity))

    @property
    def state(self) -> AppState:
        return self._state

    # ---------- internal ----------

    def _pick_category(self, catalog: Dict[str, Category], preferred: Optional[str]) -> Optional[str]:
        if preferred in catalog:
            return preferred
        return next(iter(catalog), None)

    def _rebuild(self, state: AppState) -> AppState:
        catalog = parse(state.rows, state.severity, self.rng)
        levels = synthesize(catalog, state.severity, self.rng)
        selected = self._pick_category(catalog, state.selected_category)
        return replace(
            state,
            catalog=catalog,
            current_levels=levels,
            selected_category=selected,
            recommendations=recommend(catalog, levels, selected, state.severity),
        )

    def _commit(self, state: AppState) -> AppState:
        self._state = state
        return state

    # ---------- transitions ----------

    def load_feed(self, rows: Sequence[Sequence[Any]]) -> AppState:
        """Replace the raw feed and rebuild everything from it."""
        rows = [list(r or []) for r in (rows or [])]
        with self._lock:
            state = replace(
                self._state,
                rows=rows,
                feed_quality=self.quality_agent.assess(rows),
            )
            state = self._commit(self._rebuild(state))

        logger.info(
            "Loaded feed: %d rows, %d categories",
            len(rows),
            len(state.catalog),
        )
        if state.feed_quality and state.feed_quality["issues"]:
            logger.warning("Feed quality issues: %s", "; ".join(state.feed_quality["issues"]))
        return state

    def set_severity(self, severity) -> AppState:
        """
        Change the severity level. Depletion rates and simulated stock
        both depend on it, so the catalog is re-derived from the feed.
        """
        level = SeverityLevel.coerce(severity)
        with self._lock:
            if level == self._state.severity and self._state.catalog:
                return self._state
            logger.info("Severity set to %s", level.label)
            return self._commit(self._rebuild(replace(self._state, severity=level)))

    def select_category(self, category: Optional[str]) -> AppState:
        """Select a category; only its recommendations are recomputed."""
        with self._lock:
            state = self._state
            return self._commit(replace(
                state,
                selected_category=category,
                recommendations=recommend(state.catalog, state.current_levels, category, state.severity),
            ))

    def refresh_levels(self) -> AppState:
        """Draw a fresh simulated stock snapshot for the current catalog."""
        with self._lock:
            state = self._state
            levels = synthesize(state.catalog, state.severity, self.rng)
            return self._commit(replace(
                state,
                current_levels=levels,
                recommendations=recommend(state.catalog, levels, state.selected_category, state.severity),
            ))

    def allocate(self) -> AppState:
        """
        Fulfil the current recommendations of the selected category:
        stock becomes the recommended amount, statuses are re-derived.
        """
        with self._lock:
            state = self._state
            levels = apply_allocation(
                state.catalog,
                state.current_levels,
                state.selected_category,
                state.recommendations,
            )
            logger.info(
                "Allocated %d item(s) in %s",
                len(state.recommendations),
                state.selected_category,
            )
            return self._commit(replace(
                state,
                current_levels=levels,
                recommendations=recommend(state.catalog, levels, state.selected_category, state.severity),
            ))

    def update_severity_from_oracle(self, features: EarthquakeFeatures) -> AppState:
        level = self.oracle.predict(features)
        return self.set_severity(level)
