"""Spaced-repetition models. Field names are camelCase on the wire and in storage."""

from __future__ import annotations

from .quiz import Answer, CamelModel


class SchedulingRecord(CamelModel):
    """Per-question SM-2 state, keyed by question_id."""

    question_id: str
    quiz_name: str = ""
    next_review_due_at: int  # epoch milliseconds
    interval_days: int = 0
    ease_factor: float = 2.5
    repetitions: int = 0


class ReviewQuestion(CamelModel):
    question_id: str
    quiz_name: str
    question: str
    answers: list[Answer] = []
    correct_answer: str
    explanation: str = ""
    srs_data: SchedulingRecord

    def is_correct(self, selected: str) -> bool:
        return selected == self.correct_answer


class SRSStats(CamelModel):
    total_tracked: int = 0
    due_today: int = 0
    mastered_count: int = 0
