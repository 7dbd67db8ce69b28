from abc import ABC, abstractmethod
from typing import Any, List


class FeedRepository(ABC):
    """
    Source of the raw inventory feed: a list of rows, header first,
    each row [category, item, per_1000, min, reorder, max].
    """

    @abstractmethod
    def fetch_rows(self) -> List[List[Any]]:
        pass
