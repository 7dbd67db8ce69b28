# =============================================================================
# tests/unit/test_feed_quality_agent.py
# Unit Tests for the feed quality report
# =============================================================================

from relief_inventory.agents.feed_quality_agent import FeedQualityAgent


class TestFeedQualityAgent:
    """Problems are reported, never fixed"""

    def test_clean_feed(self, sample_rows):
        report = FeedQualityAgent().assess(sample_rows)

        assert report["score"] == 100
        assert report["issues"] == []
        assert report["data_rows"] == 4

    def test_empty_feed(self, header_row):
        report = FeedQualityAgent().assess([header_row])

        assert report["score"] == 0
        assert report["data_rows"] == 0
        assert report["issues"] == ["No data rows in feed"]

    def test_skipped_rows_report_source_position(self, header_row):
        rows = [
            header_row,
            ["Water", "Jerry Cans", "1", "2", "3", "4"],
            ["", "Orphan", "1", "2", "3", "4"],
            ["Water", None],
        ]
        report = FeedQualityAgent().assess(rows)

        assert report["skipped_rows"] == [2, 3]
        assert report["score"] == 90

    def test_coerced_cells(self, header_row):
        rows = [header_row, ["Water", "Jerry Cans", "n/a", "2", "", "4"]]
        report = FeedQualityAgent().assess(rows)

        cells = {(c["row"], c["column"]): c["value"] for c in report["coerced_cells"]}
        assert cells == {(1, "per_1000"): "n/a", (1, "reorder_point"): None}

    def test_integer_too_large_for_float_is_coerced(self, header_row):
        rows = [header_row, ["Water", "Jerry Cans", "1", 10**400, "300", "1000"]]
        report = FeedQualityAgent().assess(rows)

        assert [(c["row"], c["column"]) for c in report["coerced_cells"]] == [(1, "min_stock")]
        assert report["threshold_violations"] == []
        assert report["score"] == 85

    def test_threshold_violations(self, header_row):
        rows = [
            header_row,
            ["Water", "Inverted", "0", "500", "100", "50"],
            ["Water", "Fine", "0", "10", "20", "30"],
        ]
        report = FeedQualityAgent().assess(rows)

        assert [v["item"] for v in report["threshold_violations"]] == ["Inverted"]
        assert report["threshold_violations"][0]["row"] == 1
        assert report["score"] == 75
