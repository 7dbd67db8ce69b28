# =============================================================================
# tests/unit/test_recommender.py
# Unit Tests for severity-adjusted allocation recommendations
# =============================================================================

import math

import pytest

from relief_inventory.allocation.level_synthesizer import classify_status, level_for
from relief_inventory.allocation.recommender import (
    apply_allocation,
    days_until_critical,
    recommend,
    recommend_item,
    sort_by_priority,
)
from relief_inventory.data_contracts.models import (
    AllocationRecommendation,
    CatalogItem,
    CurrentLevel,
    Priority,
    SeverityLevel,
    StockStatus,
)


def _level(current, item: CatalogItem, rate=None) -> CurrentLevel:
    return CurrentLevel(
        current=current,
        percentage=0,
        status=classify_status(current, item.min_stock, item.reorder_point),
        depletion_rate=rate if rate is not None else item.depletion_rate,
    )


WATER = CatalogItem(name="Water", min_stock=100, reorder_point=300, max_stock=1000, depletion_rate=0.05)


class TestDaysUntilCritical:

    def test_runway(self):
        # (250 - 100) / (250 * 0.05) = 12
        assert days_until_critical(250, 100, 0.05, StockStatus.warning) == 12

    def test_critical_is_zero(self):
        assert days_until_critical(50, 100, 0.05, StockStatus.critical) == 0

    def test_zero_stock_guard(self):
        assert days_until_critical(0, 0, 0.02, StockStatus.optimal) == 0

    def test_zero_rate_guard(self):
        assert days_until_critical(500, 100, 0.0, StockStatus.optimal) == 0


class TestWaterScenario:
    """min 100, reorder 300, max 1000, current 250, severity Moderate"""

    def test_warning_fast_depletion_is_high(self):
        level = _level(250, WATER, rate=0.25)
        rec = recommend_item(WATER, level, SeverityLevel.moderate)

        assert level.status == StockStatus.warning
        assert rec.recommended == 900
        assert rec.days_until_critical == 2
        assert rec.priority == Priority.high

    def test_warning_slow_depletion_is_medium(self):
        level = _level(250, WATER, rate=0.05)
        rec = recommend_item(WATER, level, SeverityLevel.moderate)

        assert rec.recommended == 900
        assert rec.days_until_critical == 12
        assert rec.priority == Priority.medium


class TestBranches:

    def test_critical(self):
        rec = recommend_item(WATER, _level(80, WATER), SeverityLevel.low)

        assert rec.recommended == min(1000, math.ceil(1000 * 0.8 * 1.5))
        assert rec.priority == Priority.high
        assert "0 days" in rec.reason

    def test_critical_capped_below_max(self):
        item = CatalogItem(name="Tents", min_stock=10, reorder_point=30, max_stock=100, depletion_rate=0.02)
        rec = recommend_item(item, _level(5, item), SeverityLevel.low)
        assert rec.recommended == 100

    def test_optimal_top_up(self):
        rec = recommend_item(WATER, _level(500, WATER, rate=0.02), SeverityLevel.moderate)

        expected = min(1000, math.ceil(500 * 1.2 * (1 + 2 * 0.1)))
        assert rec.recommended == expected
        # (500 - 100) / (500 * 0.02) = 40 days
        assert rec.priority == Priority.low

    def test_optimal_top_up_short_runway_is_medium(self):
        rec = recommend_item(WATER, _level(500, WATER, rate=0.2), SeverityLevel.low)
        # (500 - 100) / 100 = 4 days
        assert rec.days_until_critical == 4
        assert rec.priority == Priority.medium

    def test_near_capacity_no_change(self):
        rec = recommend_item(WATER, _level(850, WATER), SeverityLevel.catastrophic)

        assert rec.recommended == 850
        assert rec.reason == "No change needed"
        assert rec.priority == Priority.low

    def test_missing_level_defaults(self):
        rec = recommend_item(WATER, None, SeverityLevel.low)

        assert rec.current == 0
        assert rec.recommended == 0
        assert rec.days_until_critical == 0
        assert rec.priority == Priority.medium
        assert rec.reason.startswith("Top up")


class TestRunwayGuard:
    """Empty stock must not leak NaN or Infinity"""

    @pytest.mark.parametrize("min_stock", [0, 100])
    def test_zero_stock(self, min_stock):
        item = CatalogItem(name="Water", min_stock=min_stock, reorder_point=300, max_stock=1000, depletion_rate=0.05)
        rec = recommend_item(item, _level(0, item), SeverityLevel.severe)

        assert rec.days_until_critical == 0
        assert rec.priority == Priority.high
        assert "nan" not in rec.reason.lower()
        assert "inf" not in rec.reason.lower()


class TestInvariants:

    CURRENTS = [0, 50, 100, 150, 299, 300, 301, 500, 799, 800, 950, 1000, 1200]

    def test_never_recommends_a_decrease(self):
        odd = CatalogItem(name="Odd", min_stock=500, reorder_point=100, max_stock=50, depletion_rate=0.03)
        for item in (WATER, odd):
            for current in self.CURRENTS:
                for severity in range(1, 5):
                    rec = recommend_item(item, _level(current, item), severity)
                    assert rec.recommended >= rec.current

    @pytest.mark.parametrize("current", [0, 80, 100, 250, 300])
    def test_severity_monotonicity(self, current):
        level = _level(current, WATER)
        recommended = [
            recommend_item(WATER, level, severity).recommended
            for severity in range(1, 5)
        ]
        assert recommended == sorted(recommended)

    def test_severity_monotonicity_uncapped(self):
        item = CatalogItem(name="Water", min_stock=100, reorder_point=300, max_stock=5000, depletion_rate=0.05)
        level = _level(250, item)
        recommended = [recommend_item(item, level, s).recommended for s in range(1, 5)]

        assert recommended == sorted(recommended)
        assert recommended[0] < recommended[-1]


class TestOrdering:
    """Stable, descending priority"""

    def test_sort_is_stable(self):
        recs = [
            AllocationRecommendation(item=name, current=0, recommended=0, reason="", priority=p)
            for name, p in [
                ("a", Priority.low),
                ("b", Priority.high),
                ("c", Priority.medium),
                ("d", Priority.high),
            ]
        ]
        ordered = sort_by_priority(recs)

        assert [r.priority for r in ordered] == [Priority.high, Priority.high, Priority.medium, Priority.low]
        assert [r.item for r in ordered] == ["b", "d", "c", "a"]

    def test_recommend_sorts_category(self, make_catalog):
        catalog = make_catalog([
            ("at_capacity", 10, 30, 100, 0.02),   # low
            ("critical", 10, 30, 100, 0.02),      # high
            ("top_up", 10, 30, 100, 0.2),         # medium
            ("warning", 10, 30, 100, 0.25),       # high, 2 days
        ])
        items = {i.name: i for i in catalog["Relief"].items}
        levels = {
            "Relief": {
                "at_capacity": _level(90, items["at_capacity"]),
                "critical": _level(5, items["critical"]),
                "top_up": _level(50, items["top_up"]),
                "warning": _level(20, items["warning"]),
            }
        }
        recs = recommend(catalog, levels, "Relief", SeverityLevel.low)

        assert [r.item for r in recs] == ["critical", "warning", "top_up", "at_capacity"]
        assert [r.priority for r in recs] == [Priority.high, Priority.high, Priority.medium, Priority.low]


class TestRecommendInputs:

    def test_unknown_category(self, make_catalog):
        assert recommend(make_catalog([("Water", 1, 2, 3, 0.02)]), {}, "Nope", 1) == []

    def test_no_category(self, make_catalog):
        assert recommend(make_catalog([("Water", 1, 2, 3, 0.02)]), {}, None, 1) == []

    def test_empty_catalog(self):
        assert recommend({}, {}, "Relief", SeverityLevel.severe) == []

    def test_unknown_severity_is_low(self):
        level = _level(250, WATER)
        assert (
            recommend_item(WATER, level, "Apocalyptic").recommended
            == recommend_item(WATER, level, SeverityLevel.low).recommended
        )


class TestApplyAllocation:
    """Allocation sets stock to the recommended amount"""

    def test_sets_current_and_status(self, make_catalog):
        catalog = make_catalog([("Water", 100, 300, 1000, 0.05)])
        item = catalog["Relief"].items[0]
        levels = {"Relief": {"Water": level_for(item, 80)}, "Other": {}}
        recs = recommend(catalog, levels, "Relief", SeverityLevel.low)

        updated = apply_allocation(catalog, levels, "Relief", recs)

        assert updated["Relief"]["Water"].current == recs[0].recommended
        assert updated["Relief"]["Water"].status == StockStatus.optimal
        assert updated["Other"] == {}

    def test_input_not_mutated(self, make_catalog):
        catalog = make_catalog([("Water", 100, 300, 1000, 0.05)])
        item = catalog["Relief"].items[0]
        original = level_for(item, 80)
        levels = {"Relief": {"Water": original}}

        apply_allocation(catalog, levels, "Relief", recommend(catalog, levels, "Relief", 1))

        assert levels["Relief"]["Water"] is original

    def test_unknown_category_unchanged(self, make_catalog):
        catalog = make_catalog([("Water", 100, 300, 1000, 0.05)])
        levels = {"Relief": {"Water": level_for(catalog["Relief"].items[0], 80)}}

        assert apply_allocation(catalog, levels, "Nope", []) == levels
