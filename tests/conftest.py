# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import pytest

from relief_inventory.agents.inventory_controller import InventoryController
from relief_inventory.agents.severity_oracle import StaticSeverityOracle
from relief_inventory.data_contracts.models import CatalogItem, Category, SeverityLevel


class ScriptedRandom:
    """Deterministic random source cycling through fixed values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


# =============================================================================
# RANDOM SOURCE
# =============================================================================

@pytest.fixture
def scripted_random():
    """Factory: scripted_random([0.5, 0.2]) -> random source"""
    return ScriptedRandom


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def header_row():
    return ["Category", "Item", "Per 1000", "Min", "Reorder", "Max"]


@pytest.fixture
def sample_rows(header_row):
    """Small two-category feed"""
    return [
        header_row,
        ["Medical Supplies", "Bandages", "50", "100", "300", "1000"],
        ["Medical Supplies", "Antiseptic", "20", "40", "120", "400"],
        ["Water", "Bottled Water (L)", "3000", "500", "1500", "5000"],
        ["Water", "Purification Tablets", "1000", "200", "600", "2000"],
    ]


@pytest.fixture
def make_catalog():
    """
    Factory building a single-category catalog:
    make_catalog([("Water", 100, 300, 1000, 0.05), ...], key="Relief")
    """
    def _make(items, key="Relief", title="Relief"):
        return {
            key: Category(
                key=key,
                title=title,
                icon="📦",
                items=[
                    CatalogItem(
                        name=name,
                        min_stock=min_stock,
                        reorder_point=reorder,
                        max_stock=max_stock,
                        depletion_rate=rate,
                    )
                    for name, min_stock, reorder, max_stock, rate in items
                ],
            )
        }
    return _make


@pytest.fixture
def controller(scripted_random):
    """Controller with a deterministic random source and a Severe oracle"""
    return InventoryController(
        oracle=StaticSeverityOracle(SeverityLevel.severe),
        rng=scripted_random([0.5, 0.25, 0.75]),
    )
