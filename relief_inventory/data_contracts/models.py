from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from enum import Enum, IntEnum
import numbers


# =========================
# ENUMS (shared, canonical)
# =========================

class SeverityLevel(IntEnum):
    low = 1
    moderate = 2
    severe = 3
    catastrophic = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def coerce(cls, value) -> "SeverityLevel":
        """
        Total mapping onto a severity level.
        Accepts a level, its integer, or a label such as "Severe";
        anything else is Low.
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, bool):
            return cls.low

        if isinstance(value, numbers.Real):
            try:
                return cls(int(value)) if float(value).is_integer() else cls.low
            except ValueError:
                return cls.low

        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.coerce(int(text))
            return cls.__members__.get(text.lower(), cls.low)

        return cls.low


class StockStatus(str, Enum):
    critical = "critical"
    warning = "warning"
    optimal = "optimal"


class Priority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


PRIORITY_WEIGHTS = {
    Priority.high: 3,
    Priority.medium: 2,
    Priority.low: 1,
}


# =========================
# CATALOG
# =========================

class CatalogItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    per_1000: float = 0.0
    min_stock: float = 0.0
    reorder_point: float = 0.0
    max_stock: float = 0.0
    depletion_rate: Optional[float] = None


class Category(BaseModel):
    key: str
    title: str
    icon: str
    items: List[CatalogItem] = Field(default_factory=list)


# =========================
# LEVELS & RECOMMENDATIONS
# =========================

class CurrentLevel(BaseModel):
    current: float
    percentage: int
    status: StockStatus
    depletion_rate: float


class AllocationRecommendation(BaseModel):
    item: str
    current: float
    recommended: float
    reason: str
    priority: Priority
    days_until_critical: int = 0


# =========================
# SEVERITY ORACLE INPUT
# =========================

class EarthquakeFeatures(BaseModel):
    magnitude: float
    depth: float
    latitude: float
    longitude: float
    location: Optional[str] = None
    time: Optional[str] = None
