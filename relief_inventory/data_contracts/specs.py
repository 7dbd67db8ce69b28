from typing import Dict, List

# Positional layout of one inventory feed row (header row ignored).
FEED_COLUMNS: List[str] = [
    "category",
    "item",
    "per_1000",
    "min_stock",
    "reorder_point",
    "max_stock",
]

NUMERIC_FEED_COLUMNS: List[str] = FEED_COLUMNS[2:]

CATEGORY_ICONS: Dict[str, str] = {
    "Medical Supplies": "🏥",
    "Food Supplies": "🍲",
    "Food": "🍲",
    "Water": "💧",
    "Water & Sanitation": "💧",
    "Shelter": "⛺",
    "Shelter & Bedding": "⛺",
    "Hygiene": "🧼",
    "Hygiene Kits": "🧼",
    "Clothing": "👕",
    "Power & Lighting": "🔦",
    "Communication": "📡",
    "Tools": "🛠️",
    "Rescue Equipment": "🛟",
}

DEFAULT_CATEGORY_ICON = "📦"
