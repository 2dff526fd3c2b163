from __future__ import annotations

import json
import logging

from pydantic import TypeAdapter

from ..models.srs import SchedulingRecord
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

SRS_STORAGE_KEY = "@quizzy_srs_data"

_document = TypeAdapter(dict[str, SchedulingRecord])


class SchedulingStore:
    """Whole-document persistence of question_id -> SchedulingRecord.

    Reads fail open (an unreadable document is treated as empty) and writes
    are best effort: failures are logged, never raised and never retried.
    """

    def __init__(self, kv: KeyValueStore, storage_key: str = SRS_STORAGE_KEY) -> None:
        self.kv = kv
        self.storage_key = storage_key

    async def load(self) -> dict[str, SchedulingRecord]:
        try:
            stored = await self.kv.get(self.storage_key)
        except Exception:
            logger.exception("Failed to read SRS data from %s", self.storage_key)
            return {}
        if not stored:
            return {}
        try:
            return _document.validate_python(json.loads(stored))
        except Exception:
            logger.exception("Discarding unreadable SRS data under %s", self.storage_key)
            return {}

    async def save(self, records: dict[str, SchedulingRecord]) -> bool:
        try:
            payload = _document.dump_json(records, by_alias=True).decode("utf-8")
            await self.kv.set(self.storage_key, payload)
        except Exception:
            logger.exception("Failed to save SRS data (%d records)", len(records))
            return False
        logger.debug("Saved %d SRS records", len(records))
        return True
