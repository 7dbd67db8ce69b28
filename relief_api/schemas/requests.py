# relief_api/schemas/requests.py

from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional


class LoadFeedRequest(BaseModel):
    # Raw feed rows, header first. Omit to read the configured feed source.
    rows: Optional[List[List[Any]]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "rows": [
                    ["Category", "Item", "Per 1000", "Min", "Reorder", "Max"],
                    ["Medical Supplies", "Bandages", "50", "100", "300", "1000"],
                    ["Water", "Bottled Water (L)", "3000", "500", "1500", "6000"],
                ]
            }
        }
    )


class SeverityRequest(BaseModel):
    # Label ("Severe") or level (3); anything unrecognized, null included, is Low
    severity: Any


class CategoryRequest(BaseModel):
    category: str


class EarthquakeFeaturesRequest(BaseModel):
    magnitude: float
    depth: float
    latitude: float
    longitude: float


class LocationRequest(BaseModel):
    latitude: float
    longitude: float
