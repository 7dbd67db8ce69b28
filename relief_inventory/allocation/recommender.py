# relief_inventory/allocation/recommender.py

from __future__ import annotations

import math
from typing import Dict, List, Optional

from relief_inventory.allocation.level_synthesizer import (
    DEFAULT_DEPLETION_RATE,
    LevelMap,
    level_for,
)
from relief_inventory.data_contracts.models import (
    PRIORITY_WEIGHTS,
    AllocationRecommendation,
    CatalogItem,
    Category,
    CurrentLevel,
    Priority,
    SeverityLevel,
    StockStatus,
)

# Share of capacity above which an optimal item needs no top-up
TOP_UP_CEILING = 0.8


def days_until_critical(current: float, min_stock: float, depletion_rate: float, status: StockStatus) -> int:
    """
    Days of runway before stock reaches min at the current depletion rate.
    Critical items, empty stock and a zero rate all count as 0 days.
    """
    if status == StockStatus.critical:
        return 0

    daily_loss = current * depletion_rate
    if current <= 0 or daily_loss <= 0:
        return 0

    days = math.floor((current - min_stock) / daily_loss)
    return max(days, 0)


def recommend_item(
    item: CatalogItem,
    level: Optional[CurrentLevel],
    severity_level=SeverityLevel.low,
) -> AllocationRecommendation:
    severity = int(SeverityLevel.coerce(severity_level))

    current = level.current if level is not None else 0.0
    status = level.status if level is not None else StockStatus.optimal
    rate = (level.depletion_rate if level is not None else item.depletion_rate) or DEFAULT_DEPLETION_RATE

    days = days_until_critical(current, item.min_stock, rate, status)
    severity_multiplier = 1 + severity * 0.5

    if status == StockStatus.critical:
        recommended = min(item.max_stock, math.ceil(item.max_stock * 0.8 * severity_multiplier))
        reason = f"Urgent: stock at or below minimum, {days} days of runway left"
        priority = Priority.high

    elif status == StockStatus.warning:
        recommended = min(item.max_stock, math.ceil(item.reorder_point * 1.5 * severity_multiplier))
        reason = f"Below reorder point, {days} days until critical"
        priority = Priority.high if days < 3 else Priority.medium

    elif current < item.max_stock * TOP_UP_CEILING:
        severity_adjustment = 1 + severity * 0.1
        recommended = min(item.max_stock, math.ceil(current * 1.2 * severity_adjustment))
        reason = f"Top up for severity level {severity}, {days} days until critical"
        priority = Priority.medium if days < 7 else Priority.low

    else:
        recommended = current
        reason = "No change needed"
        priority = Priority.low

    return AllocationRecommendation(
        item=item.name,
        current=current,
        recommended=max(recommended, current),
        reason=reason,
        priority=priority,
        days_until_critical=days,
    )


def sort_by_priority(recommendations: List[AllocationRecommendation]) -> List[AllocationRecommendation]:
    """High before medium before low; ties keep their input order."""
    return sorted(recommendations, key=lambda r: PRIORITY_WEIGHTS[r.priority], reverse=True)


def recommend(
    catalog: Dict[str, Category],
    current_levels: LevelMap,
    selected_category: Optional[str],
    severity_level=SeverityLevel.low,
) -> List[AllocationRecommendation]:
    """
    Prioritized restock recommendations for the selected category.
    Unknown or missing category gives an empty list.
    """
    if not selected_category or selected_category not in catalog:
        return []

    category_levels = (current_levels or {}).get(selected_category, {})
    recommendations = [
        recommend_item(item, category_levels.get(item.name), severity_level)
        for item in catalog[selected_category].items
    ]
    return sort_by_priority(recommendations)


def apply_allocation(
    catalog: Dict[str, Category],
    current_levels: LevelMap,
    selected_category: str,
    recommendations: List[AllocationRecommendation],
) -> LevelMap:
    """
    Levels after fulfilling the recommendations of one category.

    Each recommended item's stock is set to its recommended amount and
    its status recomputed from the static thresholds. Other categories
    are carried over unchanged. A new mapping is returned.
    """
    updated: LevelMap = {key: dict(levels) for key, levels in (current_levels or {}).items()}

    if selected_category not in catalog:
        return updated

    by_name = {item.name: item for item in catalog[selected_category].items}
    category_levels = updated.setdefault(selected_category, {})

    for rec in recommendations:
        item = by_name.get(rec.item)
        if item is None:
            continue
        category_levels[item.name] = level_for(item, rec.recommended)

    return updated
