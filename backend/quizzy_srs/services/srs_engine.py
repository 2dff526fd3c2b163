"""SM-2 spaced repetition for quiz questions."""

from __future__ import annotations

import math
import time

from ..models.srs import SchedulingRecord

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3

MINUTE_MS = 60 * 1000
DAY_MS = 24 * 60 * MINUTE_MS
RELEARN_DELAY_MS = 10 * MINUTE_MS

# Intervals of three weeks or more count as mastered
MASTERED_INTERVAL_DAYS = 21

# The review UI only reports right/wrong, never a graded difficulty
QUALITY_CORRECT = 4
QUALITY_INCORRECT = 1

_FNV64_OFFSET = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def now_ms() -> int:
    return int(time.time() * 1000)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class SRSEngine:
    """SuperMemo SM-2 scheduling over SchedulingRecord."""

    @staticmethod
    def derive_question_id(quiz_name: str, question_text: str) -> str:
        """Stable identity for a question: 64-bit FNV-1a of quiz name and full text."""
        h = _FNV64_OFFSET
        for byte in f"{quiz_name}::{question_text}".encode("utf-8", "surrogatepass"):
            h ^= byte
            h = (h * _FNV64_PRIME) & 0xFFFFFFFFFFFFFFFF
        return f"q_{_to_base36(h)}"

    @staticmethod
    def new_record(quiz_name: str, question_text: str, now: int | None = None) -> SchedulingRecord:
        """A never-reviewed question is due immediately."""
        return SchedulingRecord(
            question_id=SRSEngine.derive_question_id(quiz_name, question_text),
            quiz_name=quiz_name,
            next_review_due_at=now_ms() if now is None else now,
            interval_days=0,
            ease_factor=DEFAULT_EASE_FACTOR,
            repetitions=0,
        )

    @staticmethod
    def get_or_default(
        records: dict[str, SchedulingRecord],
        quiz_name: str,
        question_text: str,
        now: int | None = None,
    ) -> SchedulingRecord:
        """Stored record for the question, or a fresh default. Never writes to ``records``."""
        existing = records.get(SRSEngine.derive_question_id(quiz_name, question_text))
        if existing is not None:
            return existing
        return SRSEngine.new_record(quiz_name, question_text, now)

    @staticmethod
    def quality_for(was_correct: bool) -> int:
        return QUALITY_CORRECT if was_correct else QUALITY_INCORRECT

    @staticmethod
    def compute_next_review(record: SchedulingRecord, quality: int, now: int | None = None) -> SchedulingRecord:
        """
        Compute the next scheduling state. The input record is left untouched.

        quality: 0-5
            0 = complete blackout
            1 = incorrect, recognised the answer afterwards
            2 = incorrect, answer seemed easy once shown
            3 = correct with serious difficulty
            4 = correct after hesitation
            5 = perfect recall
        """
        if now is None:
            now = now_ms()
        quality = max(0, min(5, int(quality)))

        interval = record.interval_days
        repetitions = record.repetitions

        if quality < 3:
            repetitions = 0
            interval = 0
            next_due = now + RELEARN_DELAY_MS
        else:
            if repetitions == 0:
                interval = 1
            elif repetitions == 1:
                interval = 6
            else:
                interval = _round_half_up(interval * record.ease_factor)
            repetitions += 1
            next_due = now + interval * DAY_MS

        ease_factor = max(
            MIN_EASE_FACTOR,
            record.ease_factor + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02)),
        )

        return record.model_copy(
            update={
                "interval_days": interval,
                "ease_factor": ease_factor,
                "repetitions": repetitions,
                "next_review_due_at": next_due,
            }
        )
