# relief_inventory/allocation/level_synthesizer.py

from __future__ import annotations

import math
from typing import Dict, Optional

import pandas as pd

from relief_inventory.allocation.random_source import RandomSource, default_random_source, draw
from relief_inventory.data_contracts.models import (
    CatalogItem,
    Category,
    CurrentLevel,
    SeverityLevel,
    StockStatus,
)

DEFAULT_DEPLETION_RATE = 0.02

LevelMap = Dict[str, Dict[str, CurrentLevel]]


def classify_status(current: float, min_stock: float, reorder_point: float) -> StockStatus:
    """
    critical at or below min, warning at or below reorder, else optimal.
    Boundary values take the more severe status.
    """
    if current <= min_stock:
        return StockStatus.critical
    if current <= reorder_point:
        return StockStatus.warning
    return StockStatus.optimal


def percentage_of_max(current: float, max_stock: float) -> int:
    if max_stock <= 0:
        return 0
    # half-up rounding
    return int(math.floor(100 * current / max_stock + 0.5))


def level_for(item: CatalogItem, current: float) -> CurrentLevel:
    """CurrentLevel for an item holding ``current`` units, from its static thresholds."""
    return CurrentLevel(
        current=current,
        percentage=percentage_of_max(current, item.max_stock),
        status=classify_status(current, item.min_stock, item.reorder_point),
        depletion_rate=item.depletion_rate or DEFAULT_DEPLETION_RATE,
    )


def simulated_current(item: CatalogItem, severity_level, rng: RandomSource) -> float:
    level = int(SeverityLevel.coerce(severity_level))
    current = item.min_stock + draw(rng) * (item.max_stock - item.min_stock)
    return max(item.min_stock, current * (1 - level * 0.1))


def synthesize(
    catalog: Dict[str, Category],
    severity_level=SeverityLevel.low,
    rng: Optional[RandomSource] = None,
) -> LevelMap:
    """
    Simulated stock snapshot for every catalog item.

    Stock is drawn uniformly between min and max, then dampened by
    severity and floored at min. One draw per item in catalog order.
    """
    rng = rng if rng is not None else default_random_source()

    levels: LevelMap = {}
    for key, category in catalog.items():
        levels[key] = {
            item.name: level_for(item, simulated_current(item, severity_level, rng))
            for item in category.items
        }
    return levels


def levels_frame(
    catalog: Dict[str, Category],
    current_levels: LevelMap,
    category: str,
) -> pd.DataFrame:
    """
    Chart series for one category: one row per item with thresholds,
    current stock, percentage and status.
    """
    columns = [
        "item",
        "current",
        "percentage",
        "status",
        "min_stock",
        "reorder_point",
        "max_stock",
        "depletion_rate",
    ]

    if category not in catalog:
        return pd.DataFrame(columns=columns)

    category_levels = current_levels.get(category, {})
    rows = []

    for item in catalog[category].items:
        level = category_levels.get(item.name)
        if level is None:
            continue
        rows.append({
            "item": item.name,
            "current": round(level.current, 2),
            "percentage": level.percentage,
            "status": level.status.value,
            "min_stock": item.min_stock,
            "reorder_point": item.reorder_point,
            "max_stock": item.max_stock,
            "depletion_rate": round(level.depletion_rate, 4),
        })

    return pd.DataFrame(rows, columns=columns)
