# relief_inventory/agents/feed_quality_agent.py

from relief_inventory.allocation.sheet_parser import feed_frame, is_blank, parse_numeric
from relief_inventory.data_contracts.specs import NUMERIC_FEED_COLUMNS


class FeedQualityAgent:
    """
    Reports problems in a raw inventory feed without fixing them.
    Threshold violations are passed through to the catalog as-is.
    """

    def assess(self, rows) -> dict:
        df = feed_frame(rows)

        if df.empty:
            return {
                "score": 0,
                "issues": ["No data rows in feed"],
                "data_rows": 0,
                "skipped_rows": [],
                "coerced_cells": [],
                "threshold_violations": [],
            }

        issues = []
        score = 100

        # --- Rows the parser will skip
        named = ~(df["category"].map(is_blank) | df["item"].map(is_blank))
        skipped = [int(i) for i in df.index[(~named).to_numpy()]]
        if skipped:
            issues.append(f"{len(skipped)} row(s) missing category or item name")
            score -= 10

        valid = df[named].copy()

        # --- Numeric cells that fail closed to 0
        coerced = []
        for col in NUMERIC_FEED_COLUMNS:
            raw = valid[col]
            parsed = parse_numeric(raw)
            bad = parsed.isna()
            for row_no in valid.index[bad.to_numpy()]:
                coerced.append({
                    "row": int(row_no),
                    "column": col,
                    "value": None if is_blank(raw[row_no]) else str(raw[row_no]),
                })
            valid[col] = parsed.fillna(0.0)

        if coerced:
            issues.append(f"{len(coerced)} numeric cell(s) unparsable, read as 0")
            score -= 15

        # --- min <= reorder <= max
        violations = valid[
            (valid["min_stock"] > valid["reorder_point"])
            | (valid["reorder_point"] > valid["max_stock"])
        ]
        threshold_violations = [
            {
                "row": int(row_no),
                "item": str(r["item"]).strip(),
                "min_stock": float(r["min_stock"]),
                "reorder_point": float(r["reorder_point"]),
                "max_stock": float(r["max_stock"]),
            }
            for row_no, r in violations.iterrows()
        ]
        if threshold_violations:
            issues.append(
                f"{len(threshold_violations)} item(s) violate min <= reorder <= max"
            )
            score -= 25

        return {
            "score": max(score, 0),
            "issues": issues,
            "data_rows": int(len(df)),
            "skipped_rows": skipped,
            "coerced_cells": coerced,
            "threshold_violations": threshold_violations,
        }
