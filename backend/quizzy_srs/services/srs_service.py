from __future__ import annotations

import logging

from ..models.quiz import Quiz
from ..models.srs import ReviewQuestion, SchedulingRecord, SRSStats
from .due_set import build_due_set
from .srs_engine import SRSEngine, now_ms
from .srs_stats import compute_stats
from .srs_store import SchedulingStore

logger = logging.getLogger(__name__)


class SRSService:
    """Review-session entry point: due sets, answer recording and stats.

    The scheduling document is loaded once on first use and kept in memory;
    each recorded answer writes the whole document back through the store.
    """

    def __init__(self, store: SchedulingStore) -> None:
        self.store = store
        self._records: dict[str, SchedulingRecord] | None = None

    async def _ensure_loaded(self) -> dict[str, SchedulingRecord]:
        if self._records is None:
            self._records = await self.store.load()
            logger.info("Loaded %d SRS records", len(self._records))
        return self._records

    async def reload(self) -> None:
        self._records = None
        await self._ensure_loaded()

    async def get_due_questions(
        self, quizzes: list[Quiz], max_questions: int = 10, now: int | None = None
    ) -> list[ReviewQuestion]:
        records = await self._ensure_loaded()
        return build_due_set(records, quizzes, max_questions, now_ms() if now is None else now)

    async def record_answer(
        self, quiz_name: str, question_text: str, was_correct: bool, now: int | None = None
    ) -> None:
        if now is None:
            now = now_ms()
        records = await self._ensure_loaded()
        current = SRSEngine.get_or_default(records, quiz_name, question_text, now)
        updated = SRSEngine.compute_next_review(current, SRSEngine.quality_for(was_correct), now)
        records[updated.question_id] = updated

        if not await self.store.save(records):
            logger.warning("Answer for %s kept in memory only; persistence failed", updated.question_id)

    async def answer_question(
        self, review_question: ReviewQuestion, selected_answer: str, now: int | None = None
    ) -> bool:
        correct = review_question.is_correct(selected_answer)
        await self.record_answer(review_question.quiz_name, review_question.question, correct, now)
        return correct

    async def get_stats(self, now: int | None = None) -> SRSStats:
        records = await self._ensure_loaded()
        return compute_stats(records, now_ms() if now is None else now)

    async def get_record(self, question_id: str) -> SchedulingRecord | None:
        records = await self._ensure_loaded()
        return records.get(question_id)
