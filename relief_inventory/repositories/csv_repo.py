import logging
from pathlib import Path
from typing import Any, List

import pandas as pd

from relief_inventory.errors import FeedFetchError
from relief_inventory.repositories.base import FeedRepository

logger = logging.getLogger(__name__)


class CSVFeedRepository(FeedRepository):
    """
    Reads the feed from a CSV export of the inventory sheet.
    Cells are kept as raw strings; the parser does the numeric coercion.
    """

    def __init__(self, path):
        self.path = Path(path)

    def fetch_rows(self) -> List[List[Any]]:
        if not self.path.exists():
            raise FeedFetchError(
                "Inventory feed file not found",
                details={"path": str(self.path)},
            )

        try:
            df = pd.read_csv(
                self.path,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=False,
            )
        except pd.errors.EmptyDataError:
            logger.warning("Inventory feed %s is empty", self.path)
            return []
        except (OSError, pd.errors.ParserError) as e:
            raise FeedFetchError(
                "Failed to read inventory feed",
                details={"path": str(self.path), "error": str(e)},
            ) from e

        rows = df.values.tolist()
        logger.info("Read %d rows from %s", len(rows), self.path)
        return rows
