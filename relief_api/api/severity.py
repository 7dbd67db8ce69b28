# relief_api/api/severity.py

from fastapi import APIRouter, Depends

from relief_api.dependencies import get_controller, get_earthquake_feed
from relief_api.schemas.requests import EarthquakeFeaturesRequest, LocationRequest
from relief_inventory.agents.inventory_controller import InventoryController
from relief_inventory.data_contracts.models import EarthquakeFeatures
from relief_inventory.repositories.usgs_repo import UsgsEarthquakeFeed, magnitude_breakdown

router = APIRouter(tags=["Severity"])


def _severity_payload(state) -> dict:
    return {
        "level": int(state.severity),
        "label": state.severity.label,
        "selected_category": state.selected_category,
    }


@router.post("/predict")
def predict_severity(
    request: EarthquakeFeaturesRequest,
    controller: InventoryController = Depends(get_controller),
):
    """Ask the oracle for a severity level and apply it to the inventory."""
    features = EarthquakeFeatures(**request.model_dump())
    state = controller.update_severity_from_oracle(features)
    return {"status": "ok", "severity": _severity_payload(state)}


@router.post("/latest-earthquake")
def severity_from_latest_earthquake(
    request: LocationRequest,
    controller: InventoryController = Depends(get_controller),
    feed: UsgsEarthquakeFeed = Depends(get_earthquake_feed),
):
    """
    Newest earthquake near a location drives the severity level.
    With no recent event the current severity is kept.
    """
    events = feed.events(request.latitude, request.longitude)

    if not events:
        return {
            "status": "no_event",
            "earthquake": None,
            "magnitude_breakdown": magnitude_breakdown(events),
            "severity": _severity_payload(controller.state),
        }

    latest = events[0]
    state = controller.update_severity_from_oracle(latest)
    return {
        "status": "ok",
        "earthquake": latest.model_dump(mode="json"),
        "magnitude_breakdown": magnitude_breakdown(events),
        "severity": _severity_payload(state),
    }
