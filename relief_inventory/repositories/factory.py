from relief_inventory.config import Settings, get_settings
from relief_inventory.errors import FeedConfigurationError
from relief_inventory.repositories.base import FeedRepository
from relief_inventory.repositories.csv_repo import CSVFeedRepository


def get_feed_repository(settings: Settings = None) -> FeedRepository:
    settings = settings or get_settings()

    if settings.FEED_BACKEND == "csv":
        return CSVFeedRepository(settings.FEED_CSV_PATH)

    if settings.FEED_BACKEND == "sheets":
        # imported lazily: the Google client stack is only needed for this backend
        from relief_inventory.repositories.sheets_repo import GoogleSheetsFeedRepository
        return GoogleSheetsFeedRepository(settings)

    raise FeedConfigurationError(
        f"Unknown feed backend: {settings.FEED_BACKEND}",
        details={"supported": ["csv", "sheets"]},
    )
