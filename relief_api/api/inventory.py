# relief_api/api/inventory.py

from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException

from relief_api.dependencies import get_controller, get_feed_source
from relief_api.schemas.requests import CategoryRequest, LoadFeedRequest, SeverityRequest
from relief_inventory.agents.inventory_controller import AppState, InventoryController
from relief_inventory.agents.narrative_agent import AllocationNarrativeAgent
from relief_inventory.allocation.level_synthesizer import levels_frame
from relief_inventory.allocation.recommender import recommend
from relief_inventory.repositories.base import FeedRepository

router = APIRouter(tags=["Inventory"])


def _severity(state: AppState) -> dict:
    return {"level": int(state.severity), "label": state.severity.label}


def _recommendations(recs) -> list:
    return [r.model_dump(mode="json") for r in recs]


def _overview(state: AppState) -> dict:
    return {
        "severity": _severity(state),
        "selected_category": state.selected_category,
        "categories": len(state.catalog),
        "items": sum(len(c.items) for c in state.catalog.values()),
        "recommendations": _recommendations(state.recommendations),
    }


def _require_category(state: AppState, category: Optional[str]) -> str:
    category = category or state.selected_category
    if not category or category not in state.catalog:
        raise HTTPException(
            status_code=404,
            detail={"error": "Unknown category", "category": category},
        )
    return category


@router.post("/feed")
def load_feed(
    request: LoadFeedRequest,
    controller: InventoryController = Depends(get_controller),
    feed_source: Callable[[], FeedRepository] = Depends(get_feed_source),
):
    """
    Load the inventory feed and rebuild catalog, levels and recommendations.
    Rows come from the request body or, when absent, the configured source.
    """
    rows = request.rows if request.rows is not None else feed_source().fetch_rows()
    state = controller.load_feed(rows)

    return {
        "status": "ok",
        **_overview(state),
        "feed_quality": state.feed_quality,
    }


@router.get("/catalog")
def get_catalog(controller: InventoryController = Depends(get_controller)):
    state = controller.state
    return {
        key: category.model_dump(mode="json")
        for key, category in state.catalog.items()
    }


@router.get("/levels")
def get_levels(controller: InventoryController = Depends(get_controller)):
    state = controller.state
    return {
        key: {name: level.model_dump(mode="json") for name, level in levels.items()}
        for key, levels in state.current_levels.items()
    }


@router.get("/levels/chart")
def get_level_chart(
    category: Optional[str] = None,
    controller: InventoryController = Depends(get_controller),
):
    state = controller.state
    category = _require_category(state, category)
    df = levels_frame(state.catalog, state.current_levels, category)
    return {
        "category": category,
        "series": df.to_dict(orient="records"),
    }


@router.get("/recommendations")
def get_recommendations(
    category: Optional[str] = None,
    controller: InventoryController = Depends(get_controller),
):
    """
    Prioritized recommendations. Without a category the selected one is
    used; asking for another category does not change the selection.
    """
    state = controller.state

    if category is None or category == state.selected_category:
        return {
            "category": state.selected_category,
            "recommendations": _recommendations(state.recommendations),
        }

    return {
        "category": category,
        "recommendations": _recommendations(
            recommend(state.catalog, state.current_levels, category, state.severity)
        ),
    }


@router.get("/quality")
def get_feed_quality(controller: InventoryController = Depends(get_controller)):
    state = controller.state
    if state.feed_quality is None:
        return controller.quality_agent.assess([])
    return state.feed_quality


@router.get("/summary")
def get_summary(controller: InventoryController = Depends(get_controller)):
    state = controller.state
    category = _require_category(state, None)

    agent = AllocationNarrativeAgent()
    summary = agent.summarize(
        state.recommendations,
        category_title=state.catalog[category].title,
        severity_level=state.severity,
    )
    return {"status": "success", "summary": summary}


@router.put("/severity")
def set_severity(
    request: SeverityRequest,
    controller: InventoryController = Depends(get_controller),
):
    return _overview(controller.set_severity(request.severity))


@router.put("/category")
def select_category(
    request: CategoryRequest,
    controller: InventoryController = Depends(get_controller),
):
    _require_category(controller.state, request.category)
    return _overview(controller.select_category(request.category))


@router.post("/refresh")
def refresh_levels(controller: InventoryController = Depends(get_controller)):
    return _overview(controller.refresh_levels())


@router.post("/allocate")
def allocate(controller: InventoryController = Depends(get_controller)):
    state = controller.state
    if not state.selected_category:
        raise HTTPException(status_code=400, detail="No category selected")

    state = controller.allocate()
    return {
        "status": "allocated",
        **_overview(state),
        "levels": {
            name: level.model_dump(mode="json")
            for name, level in state.current_levels.get(state.selected_category, {}).items()
        },
    }
