"""
Database-backed collaborators for the review prompter.
"""

import logging
from typing import Any

from ...domain.collaborators import ContentTypeCounter, EntryCounter, SettingsStore
from .database import Database, PostStatus

logger = logging.getLogger(__name__)


class OptionStore(SettingsStore):
    """Options table as a key-value settings store."""

    def __init__(self, db: Database):
        self._db = db

    def get(self, key: str, default: Any = None) -> Any:
        return self._db.get_option(key, default)

    def set(self, key: str, value: Any) -> None:
        self._db.update_option(key, value)
        logger.debug(f"Option '{key}' updated")


class EntryRepository(EntryCounter):

    def __init__(self, db: Database):
        self._db = db

    def count(self, limit: int = 0, total_only: bool = True) -> int:
        """
        Total number of stored entries when `total_only` is set,
        otherwise the size of the latest page of at most `limit` entries.
        """
        if total_only:
            return self._db.count_entries()
        return len(self._db.get_entry_ids(limit=limit))


class PostCounter(ContentTypeCounter):

    def __init__(self, db: Database):
        self._db = db

    def count_published(self, type_id: str) -> int:
        return self._db.count_posts(type_id, PostStatus.PUBLISH.value)
