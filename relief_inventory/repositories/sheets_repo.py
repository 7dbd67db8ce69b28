# relief_inventory/repositories/sheets_repo.py

import logging
from typing import Any, List

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from relief_inventory.config import Settings
from relief_inventory.errors import FeedConfigurationError, FeedFetchError
from relief_inventory.repositories.base import FeedRepository

logger = logging.getLogger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

REQUIRED_SETTINGS = ("GOOGLE_CLIENT_EMAIL", "GOOGLE_PRIVATE_KEY", "SPREADSHEET_ID")


class GoogleSheetsFeedRepository(FeedRepository):
    """
    Reads the feed from a Google Sheet with a service account
    (readonly scope, Sheets v4 values API).
    """

    def __init__(self, settings: Settings):
        missing = [name for name in REQUIRED_SETTINGS if not getattr(settings, name)]
        if missing:
            raise FeedConfigurationError(
                f"Missing environment variables: {', '.join(missing)}",
                details={"missing": missing},
            )

        self.spreadsheet_id = settings.SPREADSHEET_ID
        self.range = settings.SHEET_RANGE
        self.client_email = settings.GOOGLE_CLIENT_EMAIL
        # keys pasted into .env keep their newlines escaped
        self.private_key = settings.GOOGLE_PRIVATE_KEY.replace("\\n", "\n")

    def _credentials(self):
        info = {
            "type": "service_account",
            "client_email": self.client_email,
            "private_key": self.private_key,
            "token_uri": "https://oauth2.googleapis.com/token",
        }
        return service_account.Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)

    def _service(self):
        return build("sheets", "v4", credentials=self._credentials(), cache_discovery=False)

    def fetch_rows(self) -> List[List[Any]]:
        logger.info("Fetching feed from spreadsheet %s (%s)", self.spreadsheet_id, self.range)

        try:
            response = (
                self._service()
                .spreadsheets()
                .values()
                .get(spreadsheetId=self.spreadsheet_id, range=self.range)
                .execute()
            )
        except (HttpError, GoogleAuthError, OSError, ValueError) as e:
            raise FeedFetchError(
                "Failed to fetch sheet data",
                details={"spreadsheet_id": self.spreadsheet_id, "error": str(e)},
            ) from e

        values = response.get("values")
        if not values:
            logger.warning("No data found in sheet")
            return []

        return values
