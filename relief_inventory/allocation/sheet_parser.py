# relief_inventory/allocation/sheet_parser.py

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional, Sequence

import numpy as np
import pandas as pd

from relief_inventory.allocation.random_source import RandomSource, default_random_source, draw
from relief_inventory.data_contracts.models import CatalogItem, Category, SeverityLevel
from relief_inventory.data_contracts.specs import (
    CATEGORY_ICONS,
    DEFAULT_CATEGORY_ICON,
    FEED_COLUMNS,
    NUMERIC_FEED_COLUMNS,
)

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def category_key(title: Any) -> str:
    """Sanitized category id: the display title without non-alphanumerics."""
    return _NON_ALNUM.sub("", str(title))


def category_icon(title: str) -> str:
    return CATEGORY_ICONS.get(title.strip(), DEFAULT_CATEGORY_ICON)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and np.isnan(value):
        return True
    return not str(value).strip()


def depletion_rate(severity_level, rng: RandomSource) -> float:
    """
    Expected fractional daily loss for one item.
    base in [0.01, 0.05) scaled by 0.5 + 0.5 * severity.
    """
    level = int(SeverityLevel.coerce(severity_level))
    base = 0.01 + draw(rng) * 0.04
    severity_factor = 0.5 + level * 0.5
    return base * severity_factor


def feed_frame(rows: Sequence[Sequence[Any]]) -> pd.DataFrame:
    """
    Data rows of a raw feed as a DataFrame with FEED_COLUMNS.

    The header (row 0) is dropped; the index keeps each row's position
    in the source feed. Short rows are padded with NaN, extra cells are
    ignored. Numeric columns are left raw.
    """
    data = [list(row or [])[: len(FEED_COLUMNS)] for row in list(rows or [])[1:]]

    df = pd.DataFrame(data, dtype=object)
    df = df.reindex(columns=range(len(FEED_COLUMNS)))
    df.columns = FEED_COLUMNS
    df.index = pd.RangeIndex(1, len(df) + 1)
    return df


def _numeric_cell(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return float(value)
        except OverflowError:
            return np.nan
    return value


def parse_numeric(series: pd.Series) -> pd.Series:
    """Parse a feed column as float; unparsable or infinite cells become NaN."""
    values = pd.to_numeric(series.map(_numeric_cell), errors="coerce")
    return values.replace([np.inf, -np.inf], np.nan).astype(float)


def coerce_numeric(series: pd.Series) -> pd.Series:
    """Parse a feed column as float; unparsable cells become 0."""
    return parse_numeric(series).fillna(0.0)


def parse(
    rows: Sequence[Sequence[Any]],
    severity_level=SeverityLevel.low,
    rng: Optional[RandomSource] = None,
) -> Dict[str, Category]:
    """
    Turn raw feed rows into a catalog keyed by sanitized category id.

    Row layout: [category, item, per_1000, min, reorder, max].
    Rows without a category or item name are skipped; categories keep
    the order in which they first appear, items keep feed order.
    Threshold ordering is passed through as given.
    """
    rng = rng if rng is not None else default_random_source()

    df = feed_frame(rows)
    if df.empty:
        return {}

    for col in NUMERIC_FEED_COLUMNS:
        df[col] = coerce_numeric(df[col])

    catalog: Dict[str, Category] = {}

    for row_no, row in df.iterrows():
        if is_blank(row["category"]) or is_blank(row["item"]):
            logger.debug("Skipping feed row %s: missing category or item", row_no)
            continue

        title = str(row["category"]).strip()
        name = str(row["item"]).strip()
        key = category_key(title)

        category = catalog.get(key)
        if category is None:
            category = Category(key=key, title=title, icon=category_icon(title))
            catalog[key] = category

        if any(existing.name == name for existing in category.items):
            logger.debug("Skipping feed row %s: duplicate item %r in %s", row_no, name, key)
            continue

        category.items.append(
            CatalogItem(
                name=name,
                per_1000=row["per_1000"],
                min_stock=row["min_stock"],
                reorder_point=row["reorder_point"],
                max_stock=row["max_stock"],
                depletion_rate=depletion_rate(severity_level, rng),
            )
        )

    logger.debug(
        "Parsed %d categories, %d items",
        len(catalog),
        sum(len(c.items) for c in catalog.values()),
    )
    return catalog
