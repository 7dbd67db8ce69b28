import pandas as pd

from relief_inventory.data_contracts.models import SeverityLevel


class AllocationNarrativeAgent:
    """
    Rule-based summary of a prioritized allocation list,
    for the operations lead of a relief site.
    """

    def summarize(
        self,
        recommendations,
        category_title: str,
        severity_level=SeverityLevel.low,
    ) -> str:

        severity = SeverityLevel.coerce(severity_level)
        rec_df = pd.DataFrame([r.model_dump(mode="json") for r in recommendations])

        total = len(rec_df)
        if total == 0:
            return (
                f"### Allocation Summary: {category_title}\n\n"
                f"**Disaster Severity:** {severity.label}\n\n"
                "No items to allocate."
            )

        # -----------------------------
        # Priority distribution
        # -----------------------------
        priority_counts = rec_df["priority"].value_counts().to_dict()
        high = priority_counts.get("high", 0)
        medium = priority_counts.get("medium", 0)
        low = priority_counts.get("low", 0)

        rec_df["shortfall"] = rec_df["recommended"] - rec_df["current"]
        total_units = rec_df["shortfall"].sum()
        unchanged = int((rec_df["shortfall"] <= 0).sum())

        # -----------------------------
        # Most exposed items
        # -----------------------------
        exposed = rec_df[rec_df["priority"] == "high"].sort_values(
            "days_until_critical", ascending=True, kind="stable"
        ).head(5)

        summary = f"""
### Allocation Summary: {category_title}

**Disaster Severity:** {severity.label} (level {int(severity)})
**Items Analyzed:** {total}

---

### Priority Snapshot
- 🔴 **High:** {high}
- 🟠 **Medium:** {medium}
- 🟢 **Low:** {low}

Restocking all recommendations moves **{total_units:,.0f} units**; {unchanged} item(s) need no change.
"""

        if not exposed.empty:
            summary += "\n---\n\n### Most Exposed Items\n"
            for _, r in exposed.iterrows():
                summary += (
                    f"- **{r['item']}** | Current: {r['current']:,.0f} | "
                    f"Recommended: {r['recommended']:,.0f} | "
                    f"Runway: {int(r['days_until_critical'])} days\n"
                )

        if severity >= SeverityLevel.severe:
            summary += (
                "\n---\n\n"
                "Severity is elevated: depletion is faster and recommended "
                "quantities are scaled up accordingly.\n"
            )

        return summary.strip()
